"""Placeholder substitution for raw config text.

Placeholders look like ``%name%`` by default. Unknown names are left as-is
and substituted values are never re-scanned.
"""

import re
from typing import Any, Mapping, Optional


class Template:
    """Text with ``<open>name<close>`` placeholders."""

    def __init__(self, text: str, open_delimiter: str = "%", close_delimiter: str = "%"):
        self.text = text
        self.open_delimiter = open_delimiter
        self.close_delimiter = close_delimiter
        self.vars: dict[str, Any] = {}

    def set_vars(self, variables: Mapping[str, Any]) -> "Template":
        self.vars = dict(variables)
        return self

    def place(self, name: str, value: Any) -> "Template":
        self.vars[name] = value
        return self

    def produce(self) -> str:
        pattern = re.compile(
            re.escape(self.open_delimiter) + r"(\S+?)" + re.escape(self.close_delimiter)
        )

        def _replace(match: re.Match) -> str:
            name = match.group(1)
            if name not in self.vars:
                return match.group(0)
            return str(self.vars[name])

        return pattern.sub(_replace, self.text)


def render(text: str, variables: Optional[Mapping[str, Any]], delimiter: str = "%") -> str:
    """Substitute ``<delimiter>name<delimiter>`` placeholders in a single pass."""
    if not variables:
        return text
    return Template(text, delimiter, delimiter).set_vars(variables).produce()
