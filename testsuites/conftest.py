"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against the live application"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework itself"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "navigation: Section navigation (Popular, Trend, Newest, Top Rated)"
    )
    config.addinivalue_line(
        "markers", "search: Search box behavior"
    )
    config.addinivalue_line(
        "markers", "filters: Type, genre, year and rating filters"
    )
    config.addinivalue_line(
        "markers", "pagination: Result paging"
    )


def pytest_collection_modifyitems(config, items):
    """
    Add markers based on test location.

    ui_testing/ -> ui + e2e, unit/ -> unit
    """
    for item in items:
        parts = item.path.parts
        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "TMDB Discover UI Automation",
        "=" * 60,
        "",
    ]
