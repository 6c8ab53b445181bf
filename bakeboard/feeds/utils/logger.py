"""Feed loggers: a stderr handler each, plus a dated file when LOG_TO_FILE is on.

Feed output (JSON) goes to stdout, so log lines never share it.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from bakeboard.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def resolve_level(level: int | str | None) -> int:
    """Numeric level from a number, a level name, or LOG_LEVEL when None."""
    if level is None:
        level = settings.logging.level
    if isinstance(level, str):
        return logging.getLevelNamesMapping()[level.upper()]
    return level


def resolve_log_dir(log_dir: Path | None) -> Path | None:
    """Explicit directory, else LOG_DIR when file logging is enabled."""
    if log_dir is not None:
        return log_dir
    if settings.logging.to_file:
        return Path(settings.logging.log_dir)
    return None


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the logger for a feed component, configuring it on first use.

    Later calls with the same name return the cached logger unchanged.

    Args:
        name: Logger name (e.g., 'feeds.games').
        level: Level number or name (default from LOG_LEVEL).
        log_dir: Directory for a dated log file. When None, a file is only
            written if LOG_TO_FILE is enabled, under LOG_DIR.

    Returns:
        Configured logger.
    """
    cached = _LOGGERS_CACHE.get(name)
    if cached is not None:
        return cached

    numeric_level = resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.propagate = False
    logger.handlers = [_create_console_handler(formatter, numeric_level)]

    directory = resolve_log_dir(log_dir)
    if directory is not None:
        file_handler = _create_file_handler(name, formatter, numeric_level, directory)
        if file_handler is not None:
            logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def clear_logger_cache() -> None:
    """Close every handler of the configured loggers and forget them."""
    for logger in _LOGGERS_CACHE.values():
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
    _LOGGERS_CACHE.clear()


def dated_log_path(name: str, log_dir: Path) -> Path:
    """`<log_dir>/<name>_<YYYYMMDD>.log`, creating the directory."""
    log_dir.mkdir(parents=True, exist_ok=True)
    safe_name = name.replace(".", "_").replace("/", "_")
    return log_dir / f"{safe_name}_{datetime.now():%Y%m%d}.log"


def _create_console_handler(formatter: logging.Formatter, level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path,
) -> logging.FileHandler | None:
    """File handler on the dated log path, None when it cannot be opened."""
    try:
        handler = logging.FileHandler(dated_log_path(name, log_dir), encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler
