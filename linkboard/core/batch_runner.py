"""Sequential, cooperatively cancellable bulk description runner.

The runner walks the links that lack a description one at a time, awaiting
the caller's ``generate(title, url)`` capability for each. Successful
descriptions are merged into a running copy of the full collection and
published through ``on_update`` immediately; every attempt, failed or not,
advances ``on_progress``.

Cancellation is cooperative: :meth:`RunHandle.cancel` flips a run-scoped
token that is polled once at the top of each iteration, so an in-flight
``generate`` call always settles before the run stops.

Example:
    ```python
    runner = BatchDescriptionRunner()
    handle = runner.start(links, generate, on_progress, on_update)
    ...
    handle.cancel()
    result = await handle.wait()
    ```
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from linkboard.core.cancellation import CancellationToken
from linkboard.core.logging_utils import generate_correlation_id, truncate_log_content
from linkboard.domain.exceptions import ItemGenerationError
from linkboard.domain.models.work_item import WorkItem, eligible_items
from linkboard.models.batch_processing import (
    BatchRunResult,
    FailedItemDetail,
    RunProgress,
    RunStatus,
)

logger = logging.getLogger(__name__)

GenerateFn = Callable[[str, str], Awaitable[str]]
ProgressCallback = Callable[[int, int], Any]
UpdateCallback = Callable[[list[WorkItem]], Any]
FailureCallback = Callable[[FailedItemDetail], Any]


def normalize_description(text: Any) -> str:
    """Keep a generated description as returned; blank or non-string results become ``""``."""
    if not isinstance(text, str) or not text.strip():
        return ""
    return text


class RunHandle:
    """Caller-facing view of one bulk run.

    The handle owns the run state: the fixed queue of eligible items, the
    cancellation token, the progress counters and the running copy of the
    full collection.
    """

    def __init__(self, items: Sequence[WorkItem], *, run_id: str | None = None) -> None:
        self.run_id = run_id or generate_correlation_id()
        self._collection: list[WorkItem] = list(items)
        self._queue: tuple[WorkItem, ...] = tuple(eligible_items(self._collection))
        self._positions = {item.id: index for index, item in enumerate(self._collection)}
        self._token = CancellationToken()
        self._status = RunStatus.IDLE
        self._cursor = 0
        self._completed = 0
        self._succeeded: list[str] = []
        self._failures: list[FailedItemDetail] = []
        self._task: asyncio.Task[None] | None = None

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def done(self) -> bool:
        return self._status.is_terminal

    @property
    def total(self) -> int:
        return len(self._queue)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def progress(self) -> RunProgress:
        return RunProgress(current=self._completed, total=self.total)

    @property
    def cancel_requested(self) -> bool:
        return self._token.is_cancelled

    @property
    def items(self) -> list[WorkItem]:
        """Latest full collection, with every description generated so far."""
        return list(self._collection)

    @property
    def failures(self) -> list[FailedItemDetail]:
        return list(self._failures)

    def cancel(self) -> bool:
        """Request a cooperative stop.

        The item currently being generated is allowed to finish; no new item is
        started afterwards. Returns ``True`` when the request was recorded and
        ``False`` if it was redundant or the run is already over.
        """
        if self.done:
            return False
        recorded = self._token.cancel()
        if recorded:
            logger.info(
                "bulk_description_cancel_requested",
                extra={
                    "run_id": self.run_id,
                    "completed": self._completed,
                    "total": self.total,
                },
            )
        return recorded

    async def wait(self) -> BatchRunResult:
        """Wait for the run to reach a terminal state and return its result."""
        if self._task is not None:
            await self._task
        return self.result()

    def result(self) -> BatchRunResult:
        if not self.done:
            msg = f"Run {self.run_id} has not finished yet (status={self._status.value})"
            raise RuntimeError(msg)
        return BatchRunResult(
            status=self._status,
            completed=self._completed,
            total=self.total,
            items=self.items,
            succeeded=list(self._succeeded),
            failures=self.failures,
        )

    def __repr__(self) -> str:
        return (
            f"RunHandle(run_id={self.run_id!r}, status={self._status.value}, "
            f"progress={self.progress.label})"
        )


class BatchDescriptionRunner:
    """Drive ``generate`` across all links that lack a description, one at a time."""

    def start(
        self,
        items: Sequence[WorkItem],
        generate: GenerateFn,
        on_progress: ProgressCallback | None = None,
        on_update: UpdateCallback | None = None,
        *,
        on_failure: FailureCallback | None = None,
        run_id: str | None = None,
    ) -> RunHandle:
        """Schedule a run on the current event loop and return its handle.

        The eligible subset and the collection snapshot are taken here, once;
        later changes to *items* are not observed by the run.
        """
        loop = asyncio.get_running_loop()
        handle = RunHandle(items, run_id=run_id)
        handle._task = loop.create_task(
            self._run(handle, generate, on_progress, on_update, on_failure),
            name=f"bulk-descriptions-{handle.run_id}",
        )
        return handle

    async def run(
        self,
        items: Sequence[WorkItem],
        generate: GenerateFn,
        on_progress: ProgressCallback | None = None,
        on_update: UpdateCallback | None = None,
        *,
        on_failure: FailureCallback | None = None,
    ) -> BatchRunResult:
        """Start a run and wait for it to finish."""
        handle = self.start(items, generate, on_progress, on_update, on_failure=on_failure)
        return await handle.wait()

    async def _run(
        self,
        handle: RunHandle,
        generate: GenerateFn,
        on_progress: ProgressCallback | None,
        on_update: UpdateCallback | None,
        on_failure: FailureCallback | None,
    ) -> None:
        handle._status = RunStatus.RUNNING
        started_at = time.perf_counter()
        logger.info(
            "bulk_description_run_started",
            extra={"run_id": handle.run_id, "total": handle.total},
        )

        try:
            for item in handle._queue:
                # Single checkpoint per iteration.
                if handle._token.is_cancelled:
                    break

                error = await self._attempt(handle, item, generate)
                if error is None:
                    self._notify(handle, "on_update", on_update, handle.items)
                else:
                    detail = FailedItemDetail.from_error(error)
                    handle._failures.append(detail)
                    self._notify(handle, "on_failure", on_failure, detail)

                handle._cursor += 1
                handle._completed += 1
                self._notify(handle, "on_progress", on_progress, handle._completed, handle.total)
        except asyncio.CancelledError:
            handle._status = RunStatus.CANCELLED
            logger.warning(
                "bulk_description_run_task_cancelled",
                extra={"run_id": handle.run_id, "completed": handle._completed},
            )
            raise

        exhausted = handle._cursor >= handle.total
        handle._status = RunStatus.FINISHED if exhausted else RunStatus.CANCELLED
        logger.info(
            "bulk_description_run_ended",
            extra={
                "run_id": handle.run_id,
                "status": handle._status.value,
                "completed": handle._completed,
                "total": handle.total,
                "succeeded": len(handle._succeeded),
                "failed": len(handle._failures),
                "duration_ms": round((time.perf_counter() - started_at) * 1000, 2),
            },
        )

    async def _attempt(
        self, handle: RunHandle, item: WorkItem, generate: GenerateFn
    ) -> ItemGenerationError | None:
        """Generate one description; return the failure instead of raising it."""
        started_at = time.perf_counter()
        try:
            description = normalize_description(await generate(item.title, item.url))
        except ItemGenerationError as exc:
            error = exc
        except Exception as exc:
            error = ItemGenerationError(item.id, title=item.title, url=item.url, cause=exc)
        else:
            if description:
                index = handle._positions[item.id]
                handle._collection[index] = item.with_description(description)
                handle._succeeded.append(item.id)
                logger.debug(
                    "description_generated",
                    extra={
                        "run_id": handle.run_id,
                        "item_id": item.id,
                        "description": truncate_log_content(description),
                        "latency_ms": round((time.perf_counter() - started_at) * 1000, 2),
                    },
                )
                return None
            error = ItemGenerationError(
                item.id, title=item.title, url=item.url, message="empty description returned"
            )

        logger.warning(
            "description_generation_failed",
            extra={
                "run_id": handle.run_id,
                "item_id": item.id,
                "url": item.url,
                "title": truncate_log_content(item.title),
                "error_type": error.error_type,
                "error": error.reason,
            },
        )
        return error

    @staticmethod
    def _notify(
        handle: RunHandle, name: str, callback: Callable[..., Any] | None, *args: Any
    ) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as exc:
            logger.warning(
                "batch_callback_failed",
                extra={
                    "run_id": handle.run_id,
                    "callback": name,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
