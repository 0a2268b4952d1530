"""Bulk "fill missing descriptions" entry point for the settings surface.

Checks the preconditions the runner relies on (credentials present, at least
one link missing a description, no other run active), binds the configured
provider into a ``generate(title, url)`` capability and starts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from linkboard.core.batch_runner import (
    BatchDescriptionRunner,
    FailureCallback,
    GenerateFn,
    ProgressCallback,
    RunHandle,
    UpdateCallback,
)
from linkboard.domain.exceptions import MisconfiguredError, NothingToDoError, RunInProgressError
from linkboard.domain.models.work_item import WorkItem, count_missing

if TYPE_CHECKING:
    from linkboard.adapters.llm.protocol import DescriptionGenerator
    from linkboard.config import AIProviderConfig

logger = logging.getLogger(__name__)


def bind_generator(generator: DescriptionGenerator, config: AIProviderConfig) -> GenerateFn:
    """Close over *config* so the runner only has to pass title and url."""

    async def generate(title: str, url: str) -> str:
        return await generator.generate_description(title, url, config)

    return generate


class DescriptionService:
    """Owns at most one active bulk run for a link collection."""

    def __init__(
        self,
        generator: DescriptionGenerator,
        config: AIProviderConfig,
        *,
        runner: BatchDescriptionRunner | None = None,
    ) -> None:
        self._generator = generator
        self._config = config
        self._runner = runner or BatchDescriptionRunner()
        self._active: RunHandle | None = None

    @property
    def config(self) -> AIProviderConfig:
        return self._config

    @property
    def active_run(self) -> RunHandle | None:
        return self._active

    @property
    def is_running(self) -> bool:
        return self._active is not None and not self._active.done

    def update_config(self, config: AIProviderConfig) -> None:
        """Swap provider settings; takes effect for the next run."""
        self._config = config

    @staticmethod
    def count_missing(items: Sequence[WorkItem]) -> int:
        return count_missing(items)

    def start_bulk_generation(
        self,
        items: Sequence[WorkItem],
        *,
        on_progress: ProgressCallback | None = None,
        on_update: UpdateCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> RunHandle:
        """Start filling in missing descriptions.

        Raises:
            MisconfiguredError: No API key is configured.
            NothingToDoError: Every link already has a description.
            RunInProgressError: A previous run has not finished yet.
        """
        if self.is_running:
            raise RunInProgressError(
                "A description run is already in progress",
                details={"run_id": self._active.run_id if self._active else None},
            )
        if not self._config.has_credentials:
            raise MisconfiguredError(
                "Configure and save an API key before generating descriptions",
                details={"provider": self._config.provider},
            )
        missing = count_missing(items)
        if missing == 0:
            raise NothingToDoError("All links already have a description")

        self._active = self._runner.start(
            items,
            bind_generator(self._generator, self._config),
            on_progress,
            on_update,
            on_failure=on_failure,
        )
        logger.info(
            "bulk_description_requested",
            extra={
                "run_id": self._active.run_id,
                "total": missing,
                "provider": self._config.provider,
                "model": self._config.model,
            },
        )
        return self._active

    def cancel(self) -> bool:
        """Cooperatively stop the active run, if any."""
        if self._active is None:
            return False
        return self._active.cancel()
