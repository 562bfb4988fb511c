"""
================================================================================
Environment & Run Configuration
================================================================================

Resolves the application under test and the run-level settings shared by the
fixtures and `run_tests.py`.

    - get_environment(): base URL of the TMDB Discover deployment
    - get_run_config(): timeouts, CI-dependent retries/workers, viewport,
      report locations

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from .config_loader import ConfigLoader, ConfigurationError


@dataclass(frozen=True)
class Environment:
    """Application under test."""
    base_url: str


ENVIRONMENTS: Dict[str, Environment] = {
    "tmdb": Environment(base_url="https://tmdb-discover.surge.sh"),
}

DEFAULT_ENVIRONMENT = "tmdb"


def get_environment(name: Optional[str] = None) -> Environment:
    """
    Return the environment to test against.

    `ui.base_url` (or the UI_BASE_URL variable) wins over the built-in URL
    of the named environment.

    Args:
        name: Environment name. Defaults to `ui.environment` from config.

    Raises:
        ConfigurationError: Unknown environment name
    """
    config = ConfigLoader()
    name = name or config.get("ui.environment", DEFAULT_ENVIRONMENT)

    if name not in ENVIRONMENTS:
        raise ConfigurationError(
            f"Unknown environment '{name}'. Known: {', '.join(sorted(ENVIRONMENTS))}"
        )

    base_url = config.get("ui.base_url") or ENVIRONMENTS[name].base_url
    return Environment(base_url=base_url.rstrip("/"))


def is_ci() -> bool:
    """True when running under CI (any non-empty CI variable except 0/false)."""
    value = os.getenv("CI", "")
    return value.strip().lower() not in ("", "0", "false", "no")


@dataclass
class RunConfig:
    """
    Run-level settings.

    Timeouts are milliseconds. `workers=None` means "let the runner decide".
    """
    base_url: str
    browser: str = "chromium"
    headless: bool = True
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1280, "height": 720})
    test_timeout: int = 30000
    expect_timeout: int = 10000
    action_timeout: int = 10000
    navigation_timeout: int = 30000
    content_image_timeout: int = 15000
    scroll_pause: int = 500
    filter_settle: int = 500
    retries: int = 0
    workers: Optional[int] = None
    api_marker: str = "themoviedb.org"
    html_report_dir: str = "playwright-report"
    json_report_file: str = "test-results/results.json"
    junit_report_file: str = "test-results/junit.xml"
    allure_results_dir: str = "test-results/allure-results"
    screenshot_dir: str = "screenshots"

    @property
    def test_timeout_seconds(self) -> int:
        """Per-test timeout for pytest-timeout, which counts in seconds."""
        return max(1, self.test_timeout // 1000)


def get_run_config() -> RunConfig:
    """Build the RunConfig from config.yaml, environment variables and the CI flag."""
    config = ConfigLoader()
    ci = is_ci()

    return RunConfig(
        base_url=get_environment().base_url,
        browser=config.get("browser.name", "chromium"),
        headless=config.get("browser.headless", True),
        viewport={
            "width": config.get("browser.viewport.width", 1280),
            "height": config.get("browser.viewport.height", 720),
        },
        test_timeout=config.get("timeouts.test", 30000),
        expect_timeout=config.get("timeouts.expect", 10000),
        action_timeout=config.get("timeouts.action", 10000),
        navigation_timeout=config.get("timeouts.navigation", 30000),
        content_image_timeout=config.get("timeouts.content_image", 15000),
        scroll_pause=config.get("timeouts.scroll_pause", 500),
        filter_settle=config.get("timeouts.filter_settle", 500),
        retries=config.get("ci.retries", 2) if ci else 0,
        workers=config.get("ci.workers", 2) if ci else None,
        api_marker=config.get("ui.api_marker", "themoviedb.org"),
        html_report_dir=config.get("reporters.html", "playwright-report"),
        json_report_file=config.get("reporters.json", "test-results/results.json"),
        junit_report_file=config.get("reporters.junit", "test-results/junit.xml"),
        allure_results_dir=config.get("reporters.allure_results", "test-results/allure-results"),
        screenshot_dir=config.get("screenshots.dir", "screenshots"),
    )


__all__ = [
    "Environment",
    "ENVIRONMENTS",
    "RunConfig",
    "get_environment",
    "get_run_config",
    "is_ci",
]
