"""Project config loading with layered overrides.

Priority chain: bundled defaults < codeception.dist.yml < codeception.yml
Suite chain: suite defaults < global settings < <suite>.suite.dist.yml
    < <suite>.suite.yml < environment overlays (staged under ``env``)
Deep merge: dicts merge recursively, lists/scalars replace.
"""

import contextlib
import importlib.resources
import os
import re
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from suiteconf.config.environments import clear_cache as clear_env_cache
from suiteconf.config.environments import load_env_configs
from suiteconf.config.errors import ConfigurationError
from suiteconf.config.includes import expand_includes
from suiteconf.config.params import prepare_params
from suiteconf.config.utils import deep_merge, load_conf, lookup

CONFIG_FILE = "codeception.yml"
CONFIG_DIST_FILE = "codeception.dist.yml"

# Global keys copied into every suite's settings
GLOBAL_SUITE_KEYS = ("modules", "coverage", "namespace", "groups", "env", "gherkin")

_SUITE_RE = re.compile(r"^(.*?)(\.suite|\.suite\.dist)\.yml$")

_config: Optional["Configuration"] = None
_lock = False


def _load_defaults(name: str) -> dict:
    """Load a bundled defaults file (config.yaml or suite.yaml)."""
    try:
        files = importlib.resources.files("suiteconf")
        content = (files / "defaults" / name).read_text()
        return yaml.safe_load(content)
    except (FileNotFoundError, TypeError):
        dev_path = Path(__file__).parent.parent / "defaults" / name
        if dev_path.exists():
            with open(dev_path) as f:
                return yaml.safe_load(f)
        raise FileNotFoundError(f"Could not find defaults/{name}")


def default_config() -> dict:
    return _load_defaults("config.yaml")


def default_suite_settings() -> dict:
    return _load_defaults("suite.yaml")


def discover_suites(tests_dir: Path) -> list[str]:
    """Suite names from *.suite.yml / *.suite.dist.yml directly in tests_dir."""
    if not tests_dir.is_dir():
        raise ConfigurationError(f"Tests directory {tests_dir} does not exist")
    suites = set()
    for entry in tests_dir.iterdir():
        if not entry.is_file():
            continue
        match = _SUITE_RE.match(entry.name)
        if match:
            suites.add(match.group(1))
    return sorted(suites)


class Configuration:
    """Resolved project configuration rooted at the directory of codeception.yml."""

    def __init__(
        self,
        config: dict,
        project_dir: Path,
        params: Optional[dict] = None,
        suites: Optional[list[str]] = None,
        loaded_sources: Optional[list[str]] = None,
    ):
        self.config = config
        self.dir = project_dir
        self.params = params or {}
        self.suites = suites or []
        self.loaded_sources = loaded_sources or []

        paths = config.get("paths") or {}
        self._log_dir: Optional[str] = paths.get("log")
        self._tests_dir: Optional[str] = paths.get("tests")
        self._data_dir: Optional[str] = paths.get("data")
        self._support_dir: Optional[str] = paths.get("support")
        self._envs_dir: Optional[str] = paths.get("envs")

    @classmethod
    def load(
        cls,
        config_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Configuration":
        """Load codeception.dist.yml + codeception.yml and validate required paths.

        Args:
            config_file: Config file or the directory holding it. Defaults to
                codeception.yml in the working directory.
            environ: Environment snapshot for ``env`` param sources (os.environ if None).
        """
        if config_file is None:
            config_file = Path.cwd() / CONFIG_FILE
        config_file = Path(config_file)
        if config_file.is_dir():
            config_file = config_file / CONFIG_FILE

        project_dir = config_file.parent.resolve()
        config_file = project_dir / config_file.name
        dist_file = project_dir / CONFIG_DIST_FILE

        if not (dist_file.exists() or config_file.exists()):
            raise ConfigurationError(
                "Configuration file could not be found.\n"
                "Create codeception.yml in the project root."
            )

        defaults = default_config()
        loaded_sources = ["defaults"]
        config = defaults
        for path in (dist_file, config_file):
            if path.exists():
                config = deep_merge(config, load_conf(path))
                loaded_sources.append(str(path))

        if config == defaults:
            raise ConfigurationError("Configuration file is invalid")

        if lookup(config, "paths.log", None) is None:
            raise ConfigurationError('Log path is not defined by key "paths: log"')

        config["include"] = expand_includes(config.get("include") or [], project_dir)

        # config without tests, for inclusion of other configs
        if config["include"] and lookup(config, "paths.tests", None) is None:
            return cls(config, project_dir, loaded_sources=loaded_sources)

        if lookup(config, "paths.tests", None) is None:
            raise ConfigurationError(
                'Tests directory is not defined in config by key "paths: tests:"'
            )

        if lookup(config, "paths.data", None) is None:
            raise ConfigurationError('Data path is not defined in config by key "paths: data"')

        # compatibility with 1.x, 2.0
        paths = config["paths"]
        if paths.get("support") is None and paths.get("helpers") is not None:
            paths["support"] = paths["helpers"]

        if paths.get("support") is None:
            raise ConfigurationError('Helpers path is not defined by key "paths: support"')

        params = prepare_params(config.get("params") or [], project_dir, environ)
        suites = discover_suites(project_dir / paths["tests"])
        return cls(config, project_dir, params, suites, loaded_sources)

    # Directories

    @property
    def project_dir(self) -> Path:
        return self.dir

    @property
    def tests_dir(self) -> Path:
        return self.dir / (self._tests_dir or "")

    @property
    def data_dir(self) -> Path:
        """Fixtures, sql dumps and other files the tests need."""
        return self.dir / (self._data_dir or "")

    @property
    def support_dir(self) -> Path:
        """Actors, helpers, page objects."""
        return self.dir / (self._support_dir or "")

    @property
    def envs_dir(self) -> Optional[Path]:
        if not self._envs_dir:
            return None
        return self.dir / self._envs_dir

    def output_dir(self) -> Path:
        """Output dir, created on demand. Raises if it can't be made writable."""
        if not self._log_dir:
            raise ConfigurationError(
                "Path for output not specified. Please, set output path in global config"
            )

        out = Path(self._log_dir)
        if not out.is_absolute():
            out = self.dir / out

        if not os.access(out, os.W_OK):
            with contextlib.suppress(OSError):
                out.mkdir(parents=True, exist_ok=True)
                out.chmod(0o777)

        if not os.access(out, os.W_OK):
            raise ConfigurationError(
                "Path for output is not writable. "
                "Please, set appropriate access mode for output path."
            )
        return out

    def log_dir(self) -> Path:
        """Alias for output_dir()."""
        return self.output_dir()

    def is_empty(self) -> bool:
        """True for aggregator configs that only point to included configs."""
        return not self._tests_dir

    # Suites

    def suite_settings(self, suite: str) -> dict:
        """Resolve settings for one suite, with environments staged under ``env``."""
        namespace = self.config.get("namespace") or ""
        if suite != namespace and suite.startswith(namespace):
            suite = suite[len(namespace):]

        if suite not in self.suites:
            raise ConfigurationError(f"Suite {suite} was not loaded")

        global_conf = deepcopy(self.config.get("settings") or {})
        for key in GLOBAL_SUITE_KEYS:
            if self.config.get(key) is not None:
                global_conf[key] = self.config[key]
        settings = deep_merge(default_suite_settings(), global_conf)

        settings = self._load_suite_config(suite, settings)

        if self.envs_dir is not None:
            settings = deep_merge(settings, load_env_configs(self.envs_dir, self.params))

        settings["path"] = os.path.join(str(self.tests_dir), suite, "")
        return settings

    def _load_suite_config(self, suite: str, settings: dict) -> dict:
        dist_conf = load_conf(self.tests_dir / f"{suite}.suite.dist.yml", params=self.params)
        suite_conf = load_conf(self.tests_dir / f"{suite}.suite.yml", params=self.params)
        settings = deep_merge(settings, dist_conf)
        return deep_merge(settings, suite_conf)

    def suite_environments(self, suite: str) -> dict[str, dict]:
        """All environment variants of a suite, tagged with ``current_environment``."""
        settings = self.suite_settings(suite)
        envs = settings.get("env")
        if not isinstance(envs, dict):
            return {}

        environments = {}
        for env, env_config in envs.items():
            merged = deep_merge(settings, env_config) if env_config else deepcopy(settings)
            merged["current_environment"] = env
            environments[env] = merged
        return environments

    @staticmethod
    def modules(settings: dict) -> list[str]:
        """Enabled module names minus ``modules.disabled``."""
        modules = settings.get("modules") or {}
        disabled = modules.get("disabled") or []
        names = []
        for module in modules.get("enabled") or []:
            name = next(iter(module)) if isinstance(module, dict) else module
            if name not in disabled:
                names.append(name)
        return names

    def is_extension_enabled(self, extension: str) -> bool:
        extensions = self.config.get("extensions") or {}
        return extension in (extensions.get("enabled") or [])

    def append(self, fragment: Optional[dict] = None) -> dict:
        """Merge extra settings into the loaded config."""
        self.config = deep_merge(self.config, fragment or {})
        return self.config


def get_config(config_file: Optional[Path] = None) -> Configuration:
    """Get cached config (loads on first access).

    A new config_file reloads unless the cache is locked.
    """
    global _config
    if _config is not None and (config_file is None or _lock):
        return _config
    _config = Configuration.load(config_file)
    return _config


def reload_config(config_file: Optional[Path] = None) -> Configuration:
    """Force reload config. Cached env overlays are dropped too."""
    global _config
    clear_env_cache()
    _config = Configuration.load(config_file)
    return _config


def set_lock(locked: bool = True) -> None:
    """While locked, get_config() keeps returning the cached config."""
    global _lock
    _lock = locked


def get_config_loaded_sources() -> list[str]:
    """Return list of config sources that were loaded (for logging)."""
    return _config.loaded_sources if _config is not None else []
