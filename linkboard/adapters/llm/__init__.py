"""External AI capability boundary."""

from linkboard.adapters.llm.protocol import DescriptionGenerator

__all__ = ["DescriptionGenerator"]
