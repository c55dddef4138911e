"""UI components for terminal output."""

from suiteconf.ui.output import (
    BLUE,
    GRAY,
    GREEN,
    MAGENTA,
    NC,
    RED,
    YELLOW,
    error,
    log,
    success,
    tagged,
    warn,
)

__all__ = [
    # Colors
    "RED",
    "GREEN",
    "YELLOW",
    "BLUE",
    "GRAY",
    "MAGENTA",
    "NC",
    # Functions
    "log",
    "success",
    "warn",
    "error",
    "tagged",
]
