"""
Repository-level pytest configuration.

Why this exists:
  - Command-line options must be registered from the root conftest
  - Configure loguru once, before any test module logs

The suite targets the public TMDB Discover deployment by default. Point it at
another deployment with UI_BASE_URL.
"""

from __future__ import annotations

from autotest_tools.common import init_logger
from testsuites.ui_testing.framework.config_loader import ConfigLoader

pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    """Browser selection for UI tests."""
    group = parser.getgroup("ui", "UI test options")
    group.addoption(
        "--browser",
        action="store",
        default=None,
        choices=["chromium", "firefox", "webkit"],
        help="Browser for UI tests (default: browser.name from config)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Run the browser in headed mode (visible)",
    )


def pytest_configure(config):
    # LOGGING_LEVEL wins over logging.level
    init_logger(level=ConfigLoader().get("logging.level", "INFO"))
