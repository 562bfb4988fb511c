"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared logging setup and small filesystem helpers for the test suites and
`run_tests.py`.

Exports:
    - init_logger: Configure loguru sinks once per process
    - ensure_directory: mkdir -p helper
    - slugify_title: Test title -> file-name-safe fragment

Usage:
    from autotest_tools.common import init_logger

    init_logger()

================================================================================
"""

import os
import re
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


# Must match testsuites.ui_testing.framework.step_logger.STEP_CHANNEL
STEP_CHANNEL = "steps"

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_WARNING_NO = 30


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False


def _is_step(record) -> bool:
    return record["extra"].get("channel") == STEP_CHANNEL


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Step lines (already fully rendered by StepLogger) go to stdout, or to
    stderr for WARN/ERROR. Everything else uses the framework format on stderr.

    Args:
        level: Log level for framework messages. Defaults to LOGGING_LEVEL or INFO.
        format_string: Framework log format string.
        log_file: Optional file that receives both framework and step output.
        force: Re-initialize even if already configured.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    logger.remove()

    level = (level or os.getenv("LOGGING_LEVEL", "INFO")).upper()
    format_string = format_string or DEFAULT_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
        filter=lambda record: not _is_step(record),
    )

    # Step output: levels below WARNING to stdout, the rest to stderr
    logger.add(
        sys.stdout,
        format="{message}",
        level="DEBUG",
        colorize=False,
        filter=lambda record: _is_step(record) and record["level"].no < _WARNING_NO,
    )
    logger.add(
        sys.stderr,
        format="{message}",
        level="DEBUG",
        colorize=False,
        filter=lambda record: _is_step(record) and record["level"].no >= _WARNING_NO,
    )

    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Returns:
        The path (for chaining)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def slugify_title(title: str) -> str:
    """
    Replace whitespace runs with dashes and drop characters that are not
    valid in file names.

    >>> slugify_title("should clear search input")
    'should-clear-search-input'
    """
    slug = re.sub(r"\s+", "-", title.strip())
    return re.sub(r'[\\/:*?"<>|\[\]]', "_", slug)


__all__ = [
    "init_logger",
    "ensure_directory",
    "slugify_title",
]
