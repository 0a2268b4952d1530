"""Result models for bulk description runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkboard.domain.exceptions import ItemGenerationError
    from linkboard.domain.models.work_item import WorkItem


class RunStatus(str, Enum):
    """Lifecycle of a single bulk run: IDLE -> RUNNING -> FINISHED | CANCELLED."""

    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.FINISHED, RunStatus.CANCELLED)


@dataclass(frozen=True, slots=True)
class RunProgress:
    """Snapshot of a run's progress counters."""

    current: int
    total: int

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.current / self.total * 100

    @property
    def label(self) -> str:
        return f"{self.current}/{self.total}"


@dataclass(frozen=True, slots=True)
class FailedItemDetail:
    """Detailed information about a link whose description could not be generated.

    Attributes:
        item_id: Identifier of the failed work item
        title: Link title at the time of the run
        url: Link URL
        error_type: Short error classification (exception class name, or "empty_result")
        error_message: Human-readable error message
    """

    item_id: str
    title: str
    url: str
    error_type: str
    error_message: str

    @classmethod
    def from_error(cls, error: ItemGenerationError) -> FailedItemDetail:
        return cls(
            item_id=error.item_id,
            title=error.title,
            url=error.url,
            error_type=error.error_type,
            error_message=error.reason,
        )


@dataclass(slots=True)
class BatchRunResult:
    """Final outcome of a run, available once the run is terminal.

    Attributes:
        status: FINISHED or CANCELLED
        completed: Number of items attempted (success or failure)
        total: Number of eligible items at run start
        items: The full collection with every successful description applied
        succeeded: IDs of items that received a description
        failures: Details for every item whose generation failed
    """

    status: RunStatus
    completed: int
    total: int
    items: list[WorkItem] = field(default_factory=list)
    succeeded: list[str] = field(default_factory=list)
    failures: list[FailedItemDetail] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def remaining(self) -> int:
        """Items still lacking a description after this run."""
        return self.total - len(self.succeeded)
