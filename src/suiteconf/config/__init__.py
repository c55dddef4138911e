"""Layered project, suite and environment configuration."""

from suiteconf.config.errors import ConfigurationError
from suiteconf.config.includes import expand_includes
from suiteconf.config.params import prepare_params
from suiteconf.config.settings import (
    Configuration,
    get_config,
    get_config_loaded_sources,
    reload_config,
    set_lock,
)
from suiteconf.config.template import Template, render
from suiteconf.config.utils import deep_merge, load_conf, lookup

__all__ = [
    "Configuration",
    "ConfigurationError",
    "get_config",
    "reload_config",
    "set_lock",
    "get_config_loaded_sources",
    "deep_merge",
    "load_conf",
    "lookup",
    "render",
    "Template",
    "prepare_params",
    "expand_includes",
]
