"""Shared utilities for config loading."""

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from suiteconf.config.errors import ConfigurationError
from suiteconf.config.template import render

# Sentinel so callers can ask for None (or []) when a file is missing
_EMPTY = object()


def deep_merge(base: Any, override: Any) -> Any:
    """Recursively merge override into base. Dicts merge, lists/scalars replace.

    If either side is not a dict, override is returned as-is.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        return override
    merged = deepcopy(base)
    for key, val in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = deep_merge(merged[key], val)
        else:
            merged[key] = deepcopy(val)
    return merged


def lookup(tree: Any, dotted_key: str, default: Any = _EMPTY) -> Any:
    """Read ``a.b.c`` from a nested config tree.

    Raises ConfigurationError when a path segment isn't a mapping, or when the
    key is missing and no default was given.
    """
    node = tree
    walked: list[str] = []
    for part in dotted_key.split("."):
        if not isinstance(node, dict):
            where = ".".join(walked) or "<root>"
            raise ConfigurationError(
                f'Expected a mapping at "{where}", got {type(node).__name__}'
            )
        if part not in node or node[part] is None:
            if default is _EMPTY:
                raise ConfigurationError(f'Key "{dotted_key}" is not defined')
            return default
        node = node[part]
        walked.append(part)
    return node


def load_conf(
    path: Path,
    fallback: Any = _EMPTY,
    params: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Load YAML file after %param% substitution, return fallback if missing.

    Fallback defaults to an empty dict. An empty file loads as an empty dict.
    YAML errors propagate.
    """
    if not path.exists():
        return {} if fallback is _EMPTY else fallback
    text = render(path.read_text(encoding="utf-8"), params)
    data = yaml.safe_load(text)
    return {} if data is None else data
