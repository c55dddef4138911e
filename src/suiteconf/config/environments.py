"""Environment overlays loaded from the ``paths.envs`` directory.

Each ``<name>.yml`` / ``<name>.dist.yml`` (up to one subdirectory deep)
contributes a fragment staged under ``env.<name>``; the ``.dist`` file is
merged first so the plain file wins.
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from suiteconf.config.utils import deep_merge, load_conf

ENV_SUFFIXES = (".dist.yml", ".yml")
MAX_DEPTH = 2

_env_config: dict[str, dict] = {}


def env_name(filename: str) -> str:
    """Strip .dist.yml / .yml from an environment file name."""
    for suffix in ENV_SUFFIXES:
        filename = filename.replace(suffix, "")
    return filename


def _find_env_files(path: Path) -> list[Path]:
    """All *.yml files below path, depth < 2, sorted by relative path."""
    found = []
    for dirpath, dirnames, filenames in os.walk(path):
        depth = len(Path(dirpath).relative_to(path).parts)
        if depth + 1 >= MAX_DEPTH:
            dirnames[:] = []
        for name in filenames:
            if name.endswith(".yml"):
                found.append(Path(dirpath) / name)
    return sorted(found, key=lambda p: p.relative_to(path).as_posix())


def load_env_configs(path: Path, params: Optional[Mapping[str, Any]] = None) -> dict:
    """Return ``{"env": {name: fragment}}`` for an envs directory (cached per path)."""
    key = str(path)
    if key in _env_config:
        return _env_config[key]
    if not path.is_dir():
        _env_config[key] = {}
        return _env_config[key]

    env_config: dict[str, Any] = {}
    for env_file in _find_env_files(path):
        env = env_name(env_file.name)
        env_config[env] = {}
        for suffix in ENV_SUFFIXES:
            env_conf = load_conf(env_file.parent / f"{env}{suffix}", None, params)
            if env_conf is None:
                continue
            env_config[env] = deep_merge(env_config[env], env_conf)

    _env_config[key] = {"env": env_config}
    return _env_config[key]


def clear_cache() -> None:
    _env_config.clear()
