"""Wildcard expansion for the ``include`` list of an aggregator config."""

import glob
import os
from pathlib import Path

from suiteconf.config.errors import ConfigurationError

CONFIG_NAMES = ("codeception.yml", "codeception.dist.yml")
WILDCARD_CHARS = "?.*"


def is_wildcard(include: str) -> bool:
    return any(ch in include for ch in WILDCARD_CHARS)


def expand_wildcards_for(include: str, project_dir: Path) -> list[str]:
    """Return dirs under a wildcard include that hold a codeception config.

    Non-wildcard includes are returned unchanged.
    """
    if not is_wildcard(include):
        return [include]

    pattern = os.path.join(str(project_dir), include)
    roots = sorted(p for p in glob.glob(pattern) if os.path.isdir(p))
    if not roots:
        raise ConfigurationError(f'Configuration file(s) could not be found in "{include}".')

    paths: list[str] = []
    for root in roots:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            if not any(name in filenames for name in CONFIG_NAMES):
                continue
            rel = os.path.relpath(dirpath, str(project_dir))
            if rel not in paths:
                paths.append(rel)
    return paths


def expand_includes(includes: list[str], project_dir: Path) -> list[str]:
    """Replace wildcard entries with the config dirs they match, keep order."""
    expanded: list[str] = []
    for include in includes or []:
        expanded.extend(expand_wildcards_for(include, project_dir))
    return expanded
