"""Tests for the bulk description entry point and its preconditions."""

from __future__ import annotations

import asyncio
import unittest

from linkboard.adapters.llm.protocol import DescriptionGenerator
from linkboard.config import AIProviderConfig
from linkboard.domain.exceptions import (
    MisconfiguredError,
    NothingToDoError,
    RunInProgressError,
)
from linkboard.domain.models.work_item import WorkItem
from linkboard.models.batch_processing import RunStatus
from linkboard.services.description_service import DescriptionService, bind_generator


class FakeGenerator:
    def __init__(self, *, gate: asyncio.Event | None = None) -> None:
        self.gate = gate
        self.calls: list[tuple[str, str, AIProviderConfig]] = []

    async def generate_description(self, title: str, url: str, config: AIProviderConfig) -> str:
        self.calls.append((title, url, config))
        if self.gate is not None:
            await self.gate.wait()
        return f"{config.model}: {title}"


def _links() -> list[WorkItem]:
    return [
        WorkItem(id="1", url="https://docs.python.org", title="Python Docs"),
        WorkItem(id="2", url="https://pypi.org", title="PyPI", description="Package index"),
        WorkItem(id="3", url="https://github.com", title="GitHub"),
    ]


class TestDescriptionService(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.config = AIProviderConfig(provider="gemini", api_key="test-key")

    async def test_fake_generator_satisfies_protocol(self) -> None:
        assert isinstance(FakeGenerator(), DescriptionGenerator)

    async def test_missing_api_key_is_misconfigured(self) -> None:
        service = DescriptionService(FakeGenerator(), AIProviderConfig(provider="gemini"))

        with self.assertRaises(MisconfiguredError) as ctx:
            service.start_bulk_generation(_links())

        assert ctx.exception.details == {"provider": "gemini"}
        assert service.active_run is None

    async def test_nothing_to_do_when_all_described(self) -> None:
        service = DescriptionService(FakeGenerator(), self.config)
        links = [WorkItem(id="1", url="https://a.example", description="done")]

        with self.assertRaises(NothingToDoError):
            service.start_bulk_generation(links)

    async def test_runs_with_bound_provider_config(self) -> None:
        generator = FakeGenerator()
        service = DescriptionService(generator, self.config)
        updates: list[list[WorkItem]] = []

        handle = service.start_bulk_generation(_links(), on_update=updates.append)
        result = await handle.wait()

        assert result.status == RunStatus.FINISHED
        called_urls = [call[1] for call in generator.calls]
        assert called_urls == ["https://docs.python.org", "https://github.com"]
        assert all(call[2] is self.config for call in generator.calls)
        assert result.items[0].description == "gemini-2.5-flash: Python Docs"
        assert result.items[1].description == "Package index"
        assert len(updates) == 2
        assert not service.is_running

    async def test_refuses_second_run_while_active(self) -> None:
        gate = asyncio.Event()
        service = DescriptionService(FakeGenerator(gate=gate), self.config)

        handle = service.start_bulk_generation(_links())
        assert service.is_running
        with self.assertRaises(RunInProgressError):
            service.start_bulk_generation(_links())

        gate.set()
        await handle.wait()

        # Finished runs no longer block a new one.
        second = service.start_bulk_generation(_links())
        await second.wait()
        assert second is not handle

    async def test_cancel_forwards_to_active_run(self) -> None:
        gate = asyncio.Event()
        generator = FakeGenerator(gate=gate)
        service = DescriptionService(generator, self.config)

        assert service.cancel() is False

        handle = service.start_bulk_generation(_links())
        await asyncio.sleep(0)
        assert service.cancel() is True
        gate.set()
        result = await handle.wait()

        assert result.status == RunStatus.CANCELLED
        assert len(generator.calls) == 1

    async def test_update_config_applies_to_next_run(self) -> None:
        generator = FakeGenerator()
        service = DescriptionService(generator, AIProviderConfig())
        service.update_config(AIProviderConfig(provider="openai", api_key="sk-test"))

        await service.start_bulk_generation(_links()).wait()

        assert generator.calls[0][2].model == "gpt-3.5-turbo"

    async def test_bind_generator_passes_title_and_url(self) -> None:
        generator = FakeGenerator()
        generate = bind_generator(generator, self.config)

        text = await generate("Title", "https://example.com")

        assert text == "gemini-2.5-flash: Title"
        assert generator.calls == [("Title", "https://example.com", self.config)]

    async def test_count_missing(self) -> None:
        assert DescriptionService.count_missing(_links()) == 2


if __name__ == "__main__":
    unittest.main()
