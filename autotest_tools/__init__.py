"""
================================================================================
Autotest Tools
================================================================================

Infrastructure helpers shared by the TMDB Discover test suites.

Modules:
    - common: Logging setup and filesystem helpers
    - report_tools: Allure result processing and JSON summaries

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import AllureReportProcessor

    init_logger()
    processor = AllureReportProcessor(Path("test-results/allure-results"))
    processor.write_summary(Path("test-results/results.json"))

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
