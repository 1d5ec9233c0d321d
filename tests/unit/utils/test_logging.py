"""Unit tests for logging utilities."""

from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from gitstate.utils import create_cli_logger, create_service_logger
from gitstate.utils._logging import (
    _create_logger,
    _log_level_from_string,
    get_default_log_file,
)


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert '"event": "test_event"' in log_content
        assert '"key": "value"' in log_content
        assert '"level": "info"' in log_content

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_format="text")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_filters_below_level(self, fs: FakeFilesystem) -> None:
        import logging

        logger = _create_logger("/logs/test.log", log_level=logging.WARNING)

        logger.info("hidden")
        logger.warning("shown")

        log_content = Path("/logs/test.log").read_text()
        assert "hidden" not in log_content
        assert "shown" in log_content


class TestLogLevel:
    def test_known_levels(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import logging

        monkeypatch.delenv("GITSTATE_DEBUG", raising=False)

        assert _log_level_from_string("debug") == logging.DEBUG
        assert _log_level_from_string("WARNING") == logging.WARNING

    def test_unknown_level_defaults_to_info(self) -> None:
        import logging

        assert _log_level_from_string("chatty") == logging.INFO

    def test_debug_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import logging

        monkeypatch.setenv("GITSTATE_DEBUG", "1")

        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG
        assert _log_level_from_string("error") == logging.ERROR


class TestServiceLogger:
    def test_binds_repository(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GITSTATE_DEBUG", raising=False)
        logger = create_service_logger(
            "info", log_file="/logs/service.log", repository="/work/repo"
        )

        logger.info("status_unavailable")

        assert '"repository": "/work/repo"' in Path("/logs/service.log").read_text()

    def test_respects_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GITSTATE_DEBUG", raising=False)
        logger = create_service_logger("error", log_file="/logs/service.log")

        logger.info("dropped")
        logger.error("kept")

        content = Path("/logs/service.log").read_text()
        assert "dropped" not in content
        assert "kept" in content


class TestCliLogger:
    def test_binds_command(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GITSTATE_DEBUG", raising=False)
        logger = create_cli_logger(log_file="/logs/cli.log", command="status")

        logger.info("command_started")

        assert '"command": "status"' in Path("/logs/cli.log").read_text()

    def test_default_file_is_in_user_log_dir(self) -> None:
        assert get_default_log_file().name == "gitstate.log"
        assert "gitstate" in get_default_log_file().parent.parts
