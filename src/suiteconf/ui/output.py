"""Colored, tagged status lines for the terminal."""

# Colors
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
GRAY = "\033[90m"
MAGENTA = "\033[0;35m"
NC = "\033[0m"

TAG = "suiteconf"

# Clears the current terminal line before printing
_CLEAR = "\r\033[K"


def tagged(color: str, msg: str, tag: str = TAG) -> str:
    return f"{_CLEAR}{color}[{tag}]{NC} {msg}"


def log(msg: str) -> None:
    print(tagged(BLUE, msg))


def success(msg: str) -> None:
    print(tagged(GREEN, msg))


def warn(msg: str) -> None:
    print(tagged(YELLOW, msg))


def error(msg: str) -> None:
    print(tagged(RED, msg))
