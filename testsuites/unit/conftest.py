"""Fixtures for offline framework tests (no browser)."""

import pytest

from testsuites.ui_testing.framework.environment import RunConfig


@pytest.fixture
def run_config():
    """Run settings with the waits shrunk to nothing."""
    return RunConfig(
        base_url="https://tmdb-discover.surge.sh",
        action_timeout=10,
        content_image_timeout=10,
        scroll_pause=0,
        filter_settle=0,
    )
