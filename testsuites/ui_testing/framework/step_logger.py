"""
================================================================================
Step Logger
================================================================================

Structured, test-scoped console logging for UI scenarios.

Every line carries an emoji, a level tag, an ISO-8601 timestamp and the test
name when one is set:

    👉 [STEP] 2024-05-01T10:15:30.123Z [test_search] - Step 1: Search "Batman"
       ↳ Expected: results grid reloads

Each test gets its own StepLogger instance (see the `step_logger` fixture), so
the test name and step counter are never shared between tests running in the
same process.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

from loguru import logger


STEP_CHANNEL = "steps"

# Level tag -> (emoji, loguru level)
LEVELS: Dict[str, tuple] = {
    "INFO": ("ℹ️ ", "INFO"),
    "DEBUG": ("🔍", "DEBUG"),
    "WARN": ("⚠️ ", "WARNING"),
    "ERROR": ("❌", "ERROR"),
    "SUCCESS": ("✅", "SUCCESS"),
    "STEP": ("👉", "STEP"),
}

TEST_STATUSES = ("passed", "failed", "skipped")


def _ensure_step_level() -> None:
    try:
        logger.level("STEP")
    except ValueError:
        logger.level("STEP", no=22, icon="👉")


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp with millisecond precision and a trailing Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_line(
    level: str,
    message: str,
    test_name: str = "",
    now: Optional[datetime] = None,
) -> str:
    """
    Render one log line.

    Args:
        level: One of LEVELS
        message: Log message
        test_name: Current test name; omitted from the line when empty
        now: Timestamp override (tests)
    """
    emoji, _ = LEVELS[level]
    prefix = f"[{test_name}] " if test_name else ""
    return f"{emoji} [{level}] {iso_timestamp(now)} {prefix}- {message}"


class StepLogger:
    """
    Per-test step/assertion logger.

    Usage:
        log = StepLogger()
        log.set_test_context("test_search_for_batman")
        log.step("Fill search with 'Batman'", "Input shows 'Batman'")
        log.assertion("search value equals 'Batman'", value == "Batman")
        log.test_result("test_search_for_batman", "passed", 1532)
        log.clear_test_context()
    """

    def __init__(self, test_name: str = ""):
        _ensure_step_level()
        self.test_name = test_name
        self.step_counter = 0

    @property
    def _log(self):
        return logger.bind(channel=STEP_CHANNEL, test_name=self.test_name)

    def _emit(self, level: str, message: str) -> None:
        _, loguru_level = LEVELS[level]
        self._log.log(loguru_level, format_line(level, message, self.test_name))

    def _raw(self, level: str, text: str) -> None:
        _, loguru_level = LEVELS[level]
        self._log.log(loguru_level, text)

    # =========================================================================
    # Test Context
    # =========================================================================

    def set_test_context(self, test_name: str) -> None:
        """Set current test name and reset the step counter."""
        self.test_name = test_name
        self.step_counter = 0
        self.info(f"Starting test: {test_name}")

    def clear_test_context(self) -> None:
        self.test_name = ""
        self.step_counter = 0

    # =========================================================================
    # Leveled Output
    # =========================================================================

    def info(self, message: str) -> None:
        self._emit("INFO", message)

    def debug(self, message: str) -> None:
        self._emit("DEBUG", message)

    def warn(self, message: str) -> None:
        self._emit("WARN", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)

    def success(self, message: str) -> None:
        self._emit("SUCCESS", message)

    def browser_api(self, api: str, params: Optional[str] = None) -> None:
        """Log a browser API call at debug level."""
        param_str = f" with {params}" if params else ""
        self._emit("DEBUG", f"Browser API: {api}{param_str}")

    # =========================================================================
    # Steps, Assertions, Results
    # =========================================================================

    def step(self, action: str, expected: Optional[str] = None) -> int:
        """
        Log a numbered test step.

        Returns:
            The step number that was logged
        """
        self.step_counter += 1
        self._emit("STEP", f"Step {self.step_counter}: {action}")
        if expected:
            self._raw("STEP", f"   ↳ Expected: {expected}")
        return self.step_counter

    def assertion(self, description: str, passed: bool) -> None:
        """Log the outcome of a check. Does not assert."""
        if passed:
            self._emit("SUCCESS", f"Assertion PASSED: {description}")
        else:
            self._emit("ERROR", f"Assertion FAILED: {description}")

    def test_result(
        self,
        test_name: str,
        status: str,
        duration_ms: Optional[int] = None,
    ) -> None:
        """
        Log a one-line test summary.

        Args:
            test_name: Test display name
            status: "passed", "failed" or "skipped"
            duration_ms: Optional duration, omitted from the line when falsy
        """
        duration_str = f" ({duration_ms}ms)" if duration_ms else ""
        if status == "passed":
            self._emit("SUCCESS", f"Test PASSED: {test_name}{duration_str}")
        elif status == "failed":
            self._emit("ERROR", f"Test FAILED: {test_name}{duration_str}")
        else:
            self._emit("WARN", f"Test SKIPPED: {test_name}")

    def divider(self, title: Optional[str] = None) -> None:
        if title:
            self._raw("INFO", f"\n{'═' * 20} {title} {'═' * 20}\n")
        else:
            self._raw("INFO", "─" * 50)


__all__ = [
    "StepLogger",
    "STEP_CHANNEL",
    "format_line",
    "iso_timestamp",
]
