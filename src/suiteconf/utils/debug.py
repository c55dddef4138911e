"""Debug log of resolved settings trees."""

import json
import time
from pathlib import Path
from typing import Any

from suiteconf.models import RunConfig
from suiteconf.ui.output import GRAY, MAGENTA, NC, tagged

DEBUG_LOG = Path(".suiteconf/debug.log")


def format_entry(label: str, data: Any) -> str:
    """One log block: ruled header with timestamp, then the payload.

    Non-string payloads are dumped as JSON; paths and other objects fall back to str().
    """
    rule = "=" * 60
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    body = data if isinstance(data, str) else json.dumps(data, indent=2, default=str)
    return f"\n{rule}\n[{timestamp}] {label}\n{rule}\n{body}\n"


def debug_log(config_or_debug: RunConfig | bool, label: str, data: Any) -> None:
    """Append an entry to DEBUG_LOG when debugging is on."""
    if isinstance(config_or_debug, RunConfig):
        config_or_debug = config_or_debug.debug
    if not config_or_debug:
        return

    DEBUG_LOG.parent.mkdir(parents=True, exist_ok=True)
    with DEBUG_LOG.open("a", encoding="utf-8") as f:
        f.write(format_entry(label, data))
    print(tagged(MAGENTA, f"{label}  {GRAY}-> {DEBUG_LOG}{NC}", tag="debug"))
