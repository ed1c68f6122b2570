"""Unit tests for structlog configuration and the operator session id."""

import asyncio
import json
import logging
import os
import re
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog

from scrapdesk.infrastructure.observability import (
    configure_structlog,
    generate_operator_session_id,
    get_operator_session_id,
    operator_session_processor,
    set_operator_session_id,
)
from scrapdesk.infrastructure.observability.logging import _get_log_level


@pytest.fixture(autouse=True)
def restore_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    set_operator_session_id("")


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_structlog(environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_session_processor_installed(self) -> None:
        configure_structlog()
        assert operator_session_processor in structlog.get_config()["processors"]

    def test_log_level_from_environment(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "warning"}):
            assert _get_log_level() == logging.WARNING
        with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}):
            assert _get_log_level() == logging.INFO

    def test_json_output_carries_session_id(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_structlog(environment="production")
        set_operator_session_id("desk-session-1")

        structlog.get_logger().info("notification_enqueued", priority="HIGH")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "notification_enqueued"
        assert entry["level"] == "info"
        assert entry["operator_session_id"] == "desk-session-1"
        assert entry["priority"] == "HIGH"
        assert "timestamp" in entry


class TestOperatorSessionId:
    """Tests for operator session id context management."""

    def test_generate_is_uuid4(self) -> None:
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
        )
        assert uuid_pattern.match(generate_operator_session_id())

    def test_unset_is_empty(self) -> None:
        set_operator_session_id("")
        assert get_operator_session_id() == ""

    async def test_isolated_between_tasks(self) -> None:
        results: dict[str, str] = {}

        async def visit(name: str) -> None:
            set_operator_session_id(name)
            await asyncio.sleep(0.01)
            results[name] = get_operator_session_id()

        await asyncio.gather(visit("desk-a"), visit("desk-b"))

        assert results == {"desk-a": "desk-a", "desk-b": "desk-b"}

    def test_processor_adds_id(self) -> None:
        set_operator_session_id("desk-session-2")
        result = operator_session_processor(None, "info", {"event": "x"})
        assert result["operator_session_id"] == "desk-session-2"

    def test_processor_keeps_explicit_id(self) -> None:
        set_operator_session_id("ambient")
        result = operator_session_processor(
            None, "info", {"event": "x", "operator_session_id": "bound"}
        )
        assert result["operator_session_id"] == "bound"

    def test_processor_skips_when_unset(self) -> None:
        set_operator_session_id("")
        assert "operator_session_id" not in operator_session_processor(
            None, "info", {"event": "x"}
        )
