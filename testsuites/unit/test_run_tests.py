from run_tests import TestRunner
from testsuites.ui_testing.framework.environment import RunConfig


def make_runner(**kwargs):
    config = kwargs.pop("run_config", None) or RunConfig(base_url="https://tmdb-discover.surge.sh")
    return TestRunner(run_config=config, **kwargs)


def test_local_command_has_no_reruns_or_workers():
    cmd = make_runner(suite="ui")._build_pytest_command()

    assert "testsuites/ui_testing/tests" in cmd
    assert "--reruns" not in cmd
    assert "-n" not in cmd
    assert cmd[cmd.index("--timeout") + 1] == "30"
    assert "--browser=chromium" in cmd
    assert "--headed" not in cmd
    assert any(part.startswith("--junitxml=") and part.endswith("junit.xml") for part in cmd)


def test_ci_settings_add_reruns_and_workers():
    config = RunConfig(base_url="https://tmdb-discover.surge.sh", retries=2, workers=2)

    cmd = make_runner(suite="ui", run_config=config)._build_pytest_command()

    assert cmd[cmd.index("--reruns") + 1] == "2"
    assert cmd[cmd.index("-n") + 1] == "2"


def test_tags_headed_and_browser():
    runner = make_runner(suite="ui", tags=["P0", "smoke"], browser="firefox", headless=False)

    cmd = runner._build_pytest_command()

    assert cmd[cmd.index("-m") + 1] == "P0 or smoke"
    assert "--browser=firefox" in cmd
    assert "--headed" in cmd


def test_unit_suite_skips_browser_options():
    cmd = make_runner(suite="unit", allure_report=False)._build_pytest_command()

    assert "testsuites/unit" in cmd
    assert "--alluredir" not in cmd
    assert not any(part.startswith("--browser") for part in cmd)


def test_plain_pytest_run_has_timeout_and_junit(pytestconfig):
    assert float(pytestconfig.getini("timeout")) == 30
    assert "--junitxml=test-results/junit.xml" in pytestconfig.getini("addopts")
