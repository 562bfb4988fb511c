"""
Test suites package.

    - ui_testing: Playwright page objects, fixtures and live scenarios for TMDB Discover
    - unit: offline tests of the framework against an in-memory page
    - config: config.yaml with run settings (timeouts, reporters, CI values)
"""
