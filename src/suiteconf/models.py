"""Run options bundled together."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class RunConfig:
    """CLI arguments bundled together."""

    config_file: Optional[Path] = None
    suite: Optional[str] = None
    env: Optional[str] = None
    list_suites: bool = False
    debug: bool = False
