"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import structlog

from filetrack.config.models import LoggingConfig, LogOutputConfig
from filetrack.core.logging import (
    clear_pass_id,
    configure_logging,
    get_logger,
    get_pass_id,
    set_pass_id,
)


def _json_lines(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


class TestPassIdCorrelation:
    """Pass ID context variable tests."""

    def setup_method(self) -> None:
        clear_pass_id()

    def test_given_pass_id_when_set_then_can_retrieve(self) -> None:
        """Pass ID can be set and retrieved."""
        result = set_pass_id("pass-123")

        assert result == "pass-123"
        assert get_pass_id() == "pass-123"

    def test_given_no_id_when_set_then_generates_short_uuid(self) -> None:
        """Set generates a 12 character id when none provided."""
        pid = set_pass_id()
        assert len(pid) == 12

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        set_pass_id("to-clear")
        clear_pass_id()
        assert get_pass_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_pass_id()

    def teardown_method(self) -> None:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers.clear()
        structlog.reset_defaults()
        clear_pass_id()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        """JSON format produces valid JSON with required fields."""
        log_file = tmp_path / "filetrack.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        get_logger("test").info("file_changed", path="index.html")

        data = _json_lines(log_file)[-1]
        assert data["event"] == "file_changed"
        assert data["path"] == "index.html"
        assert data["level"] == "info"
        assert data["logger"] == "test"
        assert "timestamp" in data

    def test_given_pass_id_when_log_then_included(self, tmp_path: Path) -> None:
        """Events logged inside a pass carry its id."""
        log_file = tmp_path / "filetrack.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        set_pass_id("abc123")
        get_logger().debug("reconcile_finished")

        assert _json_lines(log_file)[-1]["pass_id"] == "abc123"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_levels_respected(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_watchfiles_logger_capped_at_warning(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("watchfiles.main").level == logging.WARNING
