"""Shared test fixtures."""

import textwrap

import pytest


def write_files(root, files: dict) -> None:
    """Write {relative path: text} under root, creating parent dirs."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content))


@pytest.fixture
def make_project(tmp_path):
    def _make(files: dict):
        write_files(tmp_path, files)
        return tmp_path

    return _make


@pytest.fixture
def sample_project(make_project):
    """Project with unit + acceptance suites and staging/production envs."""
    return make_project(
        {
            "codeception.yml": """\
                paths:
                  tests: tests
                  log: tests/_output
                  data: tests/_data
                  support: tests/_support
                  envs: tests/_envs
                settings:
                  colors: true
                modules:
                  config:
                    Db:
                      dsn: "sqlite:tests/_data/db.sqlite"
                params:
                  - host: localhost
                  - params.yml
                extensions:
                  enabled: [RunFailed]
            """,
            "params.yml": """\
                parameters:
                  url: http://%host%.test
                  port: "8080"
            """,
            "tests/unit.suite.yml": """\
                class_name: UnitTester
                modules:
                  enabled: [Asserts]
            """,
            "tests/acceptance.suite.dist.yml": """\
                class_name: AcceptanceTester
                modules:
                  enabled: [Db]
                  config:
                    WebDriver:
                      url: "%url%"
            """,
            "tests/acceptance.suite.yml": """\
                modules:
                  enabled: [Db, WebDriver]
            """,
            "tests/_envs/staging.dist.yml": """\
                url: a
                modules:
                  config:
                    WebDriver:
                      browser: firefox
            """,
            "tests/_envs/staging.yml": """\
                url: b
            """,
            "tests/_envs/ci/production.yml": """\
                url: https://prod.example.com:%port%
            """,
            "tests/_data/.gitkeep": "",
            "tests/_support/.gitkeep": "",
        }
    )


@pytest.fixture
def reset_config_cache():
    import suiteconf.config.environments as environments
    import suiteconf.config.settings as settings

    settings._config = None
    settings._lock = False
    environments.clear_cache()
    yield
    settings._config = None
    settings._lock = False
    environments.clear_cache()
