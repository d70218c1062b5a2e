"""
Logging setup for chatdesk.

Loggers accept structured keyword fields:

    logger = get_logger(__name__)
    logger.info("User created", user_id=user.id)

Keyword fields land in the record's ``extra`` dict, so they are emitted as
JSON keys when ``log_format == "json"`` and appended to the line otherwise.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _root_logger


TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level> | {extra}"
)

_root_logger.configure(extra={"logger_name": "chatdesk"})


def setup_logger(
    log_level: str = "INFO",
    log_format: str = "json",
    file_path: Optional[str] = None,
    max_bytes: int = 10485760,
    backup_count: int = 5,
) -> None:
    """
    Replace the default sinks with a console sink and an optional rotating file.

    Args:
        log_level: minimum level name (DEBUG, INFO, ...)
        log_format: "json" for serialized records, anything else for text
        file_path: log file path; empty/None keeps console only
        max_bytes: rotate the file once it reaches this size
        backup_count: number of rotated files to keep
    """
    level = (log_level or "INFO").upper()
    serialize = (log_format or "").lower() == "json"

    _root_logger.remove()
    _root_logger.add(
        sys.stderr,
        level=level,
        serialize=serialize,
        format=TEXT_FORMAT,
        backtrace=False,
        diagnose=False,
    )

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        _root_logger.add(
            str(path),
            level=level,
            serialize=serialize,
            format=TEXT_FORMAT,
            rotation=max_bytes,
            retention=backup_count,
            encoding="utf-8",
            backtrace=False,
            diagnose=False,
        )


def get_logger(name: str):
    """Return a logger bound to the given module name"""
    return _root_logger.bind(logger_name=name)
