"""Domain-specific exceptions.

Precondition errors (``NothingToDoError``, ``MisconfiguredError``,
``RunInProgressError``) are raised to the caller before a run starts.
``ItemGenerationError`` and ``EncodingError`` are recorded and logged by the
core and never propagate past it.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NothingToDoError(DomainException):
    """Raised when no link is missing a description."""


class MisconfiguredError(DomainException):
    """Raised when the AI provider has no usable credentials."""


class RunInProgressError(DomainException):
    """Raised when a bulk run is started while another one is still active."""


class ItemGenerationError(DomainException):
    """One item's description could not be generated."""

    def __init__(
        self,
        item_id: str,
        *,
        title: str = "",
        url: str = "",
        cause: BaseException | None = None,
        message: str | None = None,
    ) -> None:
        reason = message or (str(cause) if cause is not None else "generation failed")
        super().__init__(
            f"Failed to generate description for {title or url}: {reason}",
            details={"item_id": item_id, "url": url},
        )
        self.item_id = item_id
        self.title = title
        self.url = url
        self.cause = cause
        self.reason = reason

    @property
    def error_type(self) -> str:
        if self.cause is None:
            return "empty_result"
        return type(self.cause).__name__.lower()


class EncodingError(DomainException):
    """Raised internally when an icon cannot be serialized to a data URI."""
