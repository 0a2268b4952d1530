"""WorkItem domain model.

A work item is one dashboard link that may need an AI-written description.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class WorkItem:
    """A link as seen by the bulk description runner.

    ``description`` being ``None`` or empty marks the link as eligible for
    generation; any other value means it is already satisfied.
    """

    id: str
    url: str
    title: str = ""
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError(f"Work item {self.id!r} requires a non-empty url")

    @property
    def needs_description(self) -> bool:
        return not self.description

    def with_description(self, description: str) -> WorkItem:
        """Return a copy of this item carrying *description*."""
        return replace(self, description=description)


def eligible_items(items: Iterable[WorkItem]) -> list[WorkItem]:
    """Items lacking a description, in input order."""
    return [item for item in items if item.needs_description]


def count_missing(items: Iterable[WorkItem]) -> int:
    return sum(1 for item in items if item.needs_description)
