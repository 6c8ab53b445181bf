"""Unit tests for feed logger setup."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from bakeboard.feeds.utils.logger import (
    clear_logger_cache,
    dated_log_path,
    resolve_level,
    resolve_log_dir,
    setup_logger,
)
from bakeboard.settings import settings


@pytest.fixture(autouse=True)
def fresh_loggers() -> Iterator[None]:
    """Start and end every test without configured loggers."""
    clear_logger_cache()
    yield
    clear_logger_cache()


class TestSetupLogger:
    @staticmethod
    def test_returns_named_logger() -> None:
        logger = setup_logger("test.feeds.named")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.feeds.named"

    @staticmethod
    def test_console_handler_only_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings.logging, "to_file", False)
        logger = setup_logger("test.feeds.console")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.FileHandler)

    @staticmethod
    def test_level_name_accepted() -> None:
        logger = setup_logger("test.feeds.level", level="debug")
        assert logger.level == logging.DEBUG

    @staticmethod
    def test_cached_per_name() -> None:
        first = setup_logger("test.feeds.cached", level=logging.WARNING)
        second = setup_logger("test.feeds.cached", level=logging.DEBUG)
        assert first is second
        assert second.level == logging.WARNING

    @staticmethod
    def test_propagate_disabled() -> None:
        assert setup_logger("test.feeds.propagate").propagate is False

    @staticmethod
    def test_file_handler_with_log_dir(tmp_path: Path) -> None:
        logger = setup_logger("test.feeds.file", log_dir=tmp_path)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        logger.info("written")
        file_handlers[0].flush()
        assert "written" in dated_log_path("test.feeds.file", tmp_path).read_text(encoding="utf-8")

    @staticmethod
    def test_clear_cache_closes_handlers() -> None:
        logger = setup_logger("test.feeds.clear")
        clear_logger_cache()

        assert logger.handlers == []
        assert setup_logger("test.feeds.clear").handlers != []


class TestResolution:
    @staticmethod
    def test_resolve_level(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings.logging, "level", "INFO")
        assert resolve_level(logging.ERROR) == logging.ERROR
        assert resolve_level("warning") == logging.WARNING
        assert resolve_level(None) == logging.INFO

    @staticmethod
    def test_resolve_log_dir_follows_setting(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings.logging, "to_file", False)
        assert resolve_log_dir(tmp_path) == tmp_path
        assert resolve_log_dir(None) is None

        monkeypatch.setattr(settings.logging, "to_file", True)
        monkeypatch.setattr(settings.logging, "log_dir", str(tmp_path / "logs"))
        assert resolve_log_dir(None) == tmp_path / "logs"

    @staticmethod
    def test_dated_log_path(tmp_path: Path) -> None:
        path = dated_log_path("feeds.games", tmp_path / "logs")
        assert path.parent.is_dir()
        assert path.name.startswith("feeds_games_")
        assert path.suffix == ".log"
