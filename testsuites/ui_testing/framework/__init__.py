"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for TMDB Discover.

Components:
    - config_loader: YAML + environment configuration
    - environment: Application base URL and run configuration
    - smart_locator: Named, lazily resolved locators with fallback strategies
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management
    - step_logger: Per-test structured step/assertion logging
    - outcome: Final test status and failure screenshot naming

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .environment import Environment, RunConfig, get_environment, get_run_config
from .smart_locator import SmartLocator, ElementNotFoundError
from .page_base import BasePage
from .browser_manager import BrowserManager
from .step_logger import StepLogger
from .outcome import failure_screenshot_path, final_status

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "Environment",
    "RunConfig",
    "get_environment",
    "get_run_config",
    "SmartLocator",
    "ElementNotFoundError",
    "BasePage",
    "BrowserManager",
    "StepLogger",
    "final_status",
    "failure_screenshot_path",
]
