"""Tests for structured logging helpers."""

from __future__ import annotations

import io
import json
import logging
import unittest

from linkboard.core.logging_utils import (
    EnhancedJsonFormatter,
    generate_correlation_id,
    setup_json_logging,
    truncate_log_content,
)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="linkboard.core.batch_runner",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="description_generation_failed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestEnhancedJsonFormatter(unittest.TestCase):
    def test_groups_run_and_performance_fields(self) -> None:
        formatter = EnhancedJsonFormatter(include_location=False)
        payload = json.loads(
            formatter.format(
                _record(run_id="abc123", item_id="7", latency_ms=12.5, url="https://x.example")
            )
        )

        assert payload["message"] == "description_generation_failed"
        assert payload["level"] == "WARNING"
        assert payload["run"] == {"run_id": "abc123", "item_id": "7"}
        assert payload["performance"] == {"latency_ms": 12.5}
        assert payload["extra"] == {"url": "https://x.example"}
        assert "module" not in payload

    def test_non_ascii_and_unserializable_values(self) -> None:
        formatter = EnhancedJsonFormatter()

        class Opaque:
            pass

        line = formatter.format(_record(title="导航", thing=Opaque()))
        payload = json.loads(line)

        assert "导航" in line
        assert payload["extra"]["thing"] == "<Opaque>"
        assert payload["line"] == 10

    def test_correlation_id_surfaces(self) -> None:
        payload = json.loads(EnhancedJsonFormatter().format(_record(correlation_id="cid-1")))
        assert payload["correlation_id"] == "cid-1"


class TestHelpers(unittest.TestCase):
    def test_correlation_id_shape(self) -> None:
        cid = generate_correlation_id()
        assert len(cid) == 12
        int(cid, 16)
        assert cid != generate_correlation_id()

    def test_truncate_log_content(self) -> None:
        assert truncate_log_content(None) is None
        assert truncate_log_content("short") == "short"
        truncated = truncate_log_content("x" * 300, max_length=50)
        assert truncated == "x" * 50 + "... [truncated]"


class TestSetupJsonLogging(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))
        self.addCleanup(self._restore)

    def _restore(self) -> None:
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers[:] = self._saved[1]

    def test_stdlib_backend_writes_to_given_stream(self) -> None:
        stream = io.StringIO()

        setup_json_logging("WARNING", use_loguru=False, stream=stream)
        logging.getLogger("linkboard.test").info("hidden_event")
        logging.getLogger("linkboard.test").warning("visible_event", extra={"run_id": "r1"})

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert [line["message"] for line in lines] == ["visible_event"]
        assert lines[0]["run"] == {"run_id": "r1"}


if __name__ == "__main__":
    unittest.main()
