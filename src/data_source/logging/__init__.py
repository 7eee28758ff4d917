from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import List, Optional

from data_source.config.models import FileLoggingSettings, LoggingSettings

LOG_FORMAT = "[%(asctime)s][%(levelname)s][%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str) -> int:
    level = logging.getLevelNamesMapping().get(name.strip().upper())
    if level is None:
        raise ValueError(f"Invalid logging level: {name}")
    return level


def _daily_file_handler(file_settings: FileLoggingSettings) -> Optional[logging.Handler]:
    """
    Open the rotated log file, or return None when no path is configured.

    Rotation happens at midnight and rotated files get a date suffix.
    """
    raw_path = file_settings.path.strip()
    if not raw_path:
        return None

    path = Path(raw_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        interval=1,
        backupCount=file_settings.rotation.backup_count,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    return handler


def init_logging(settings: LoggingSettings, *, level_override: Optional[str] = None) -> None:
    """Reset the root logger to console output plus an optional daily rotated file."""

    level = resolve_level(level_override or settings.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for old_handler in list(root_logger.handlers):
        root_logger.removeHandler(old_handler)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    file_error: Optional[OSError] = None
    try:
        file_handler = _daily_file_handler(settings.file)
    except OSError as e:
        file_error = e
    else:
        if file_handler is not None:
            handlers.append(file_handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Reported only once the console handler is attached.
    if file_error is not None:
        root_logger.error(
            "File logging handler failed to initialize. path=%s error=%s",
            settings.file.path,
            file_error,
        )


__all__ = ["init_logging", "resolve_level"]
