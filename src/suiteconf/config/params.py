"""Parameter sources for %param% substitution.

Each entry of the ``params`` config list is one of:

- an inline mapping
- ``env`` / ``environment`` for the process environment
- a YAML file (Symfony-style ``parameters:`` root is unwrapped)
- an INI or ``.env`` file

Sources are flat-merged in order, later entries win.
"""

import configparser
import os
import re
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import yaml
from dotenv import dotenv_values

from suiteconf.config.errors import ConfigurationError

ENV_TOKENS = ("env", "environment")

_YAML_RE = re.compile(r"\.yml$")
_INI_RE = re.compile(r"(\.ini$|\.env(\.|$))")


def _load_yaml_params(path: Path) -> dict:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if isinstance(data, dict) and "parameters" in data:
        data = data["parameters"]
    return dict(data or {})


def _load_ini_params(path: Path) -> dict:
    """Flatten key=value pairs, ignoring INI section headers."""
    if not path.name.endswith(".ini"):
        return {k: v for k, v in dotenv_values(path).items() if v is not None}

    parser = configparser.ConfigParser(
        interpolation=None, strict=False, inline_comment_prefixes=(";",)
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_string("[__root__]\n" + path.read_text(encoding="utf-8"))
    params: dict[str, str] = {}
    for section in parser.sections():
        for key, value in parser.items(section):
            params[key] = value.strip('"')
    return params


def prepare_params(
    sources: Iterable[Any],
    project_dir: Path,
    environ: Optional[Mapping[str, str]] = None,
) -> dict:
    """Resolve param sources into one flat mapping."""
    params: dict[str, Any] = {}

    for source in sources or []:
        if isinstance(source, dict):
            params.update(source)
            continue

        if source in ENV_TOKENS:
            params.update(os.environ if environ is None else environ)
            continue

        source = str(source)
        params_file = (project_dir / source).resolve()
        if not params_file.exists():
            raise ConfigurationError(f"Params file {params_file} not found")

        if _YAML_RE.search(source):
            params.update(_load_yaml_params(params_file))
            continue

        if _INI_RE.search(source):
            params.update(_load_ini_params(params_file))
            continue

        raise ConfigurationError(f"Params can't be loaded from `{source}`.")

    return params
