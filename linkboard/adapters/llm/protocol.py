"""Protocol for the external link-description capability.

The transport (Gemini, OpenAI-compatible endpoints, ...) lives outside this
package. Anything that can turn a link title and URL into a short description
can be plugged into bulk generation by implementing this protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from linkboard.config import AIProviderConfig


@runtime_checkable
class DescriptionGenerator(Protocol):
    """Interface for AI description providers."""

    async def generate_description(self, title: str, url: str, config: AIProviderConfig) -> str:
        """Write a short description for one link.

        Args:
            title: Link title; may be empty.
            url: Link URL.
            config: Provider, model, credentials and optional base URL to use.

        Returns:
            The generated description text.

        Raises:
            Exception: Any failure (invalid credentials, quota, network, malformed
                response). Failures must be raised, not signalled with an empty
                string.
        """
        ...
