"""
================================================================================
Test Outcome Helpers
================================================================================

Read the outcome of a test from fixture teardown, and name the screenshot
saved for a test that did not pass.

`pytest_runtest_makereport` stores the phase reports on the item as
`rep_setup`, `rep_call` and `rep_teardown`. The UI conftest re-exports it
so pytest registers it there.

================================================================================
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Union

import pytest

from autotest_tools.common import slugify_title


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store each phase report on the item (rep_setup, rep_call, rep_teardown)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def final_status(item) -> str:
    """
    Final status of a test as seen from fixture teardown.

    A failed or skipped setup wins over the call phase. A missing call
    report (setup raised before the test body ran) counts as failed.

    Returns:
        "passed", "failed" or "skipped"
    """
    setup = getattr(item, "rep_setup", None)
    if setup is not None and setup.failed:
        return "failed"
    if setup is not None and setup.skipped:
        return "skipped"

    call = getattr(item, "rep_call", None)
    if call is None:
        return "failed"
    if call.skipped:
        return "skipped"
    return "passed" if call.passed else "failed"


def failure_screenshot_path(
    directory: Union[str, Path],
    title: str,
    epoch_ms: Optional[int] = None,
) -> Path:
    """
    `<directory>/failure-<title-with-dashes>-<epoch-ms>.png`

    >>> failure_screenshot_path("screenshots", "clear search", 1700000000000).name
    'failure-clear-search-1700000000000.png'
    """
    if epoch_ms is None:
        epoch_ms = int(time.time() * 1000)
    return Path(directory) / f"failure-{slugify_title(title)}-{epoch_ms}.png"


__all__ = [
    "pytest_runtest_makereport",
    "final_status",
    "failure_screenshot_path",
]
