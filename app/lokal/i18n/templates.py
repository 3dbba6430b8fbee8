"""Placeholder substitution for message templates.

Supports ``{{.Name}}`` and ``{{Name}}`` placeholders; single braces are
literal text. Dotted names walk nested mappings and attributes
(``{{.User.Name}}``). Messages may declare their own delimiters, in which
case only those are recognized.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional

NO_VALUE = "<no value>"

_NAME = r"\s*\.?(?P<name>\w+(?:\.\w+)*)\s*"
_DEFAULT_PATTERN = re.compile(r"\{\{" + _NAME + r"\}\}")

_MISSING = object()


@dataclass(frozen=True)
class RenderedTemplate:
    """Rendered text plus the placeholders that had no value."""

    text: str
    missing: tuple[str, ...] = ()


@lru_cache(maxsize=64)
def _pattern(left_delim: Optional[str], right_delim: Optional[str]) -> re.Pattern:
    if left_delim is None and right_delim is None:
        return _DEFAULT_PATTERN
    left = re.escape(left_delim or "{{")
    right = re.escape(right_delim or "}}")
    return re.compile(left + _NAME + right)


def _lookup(data: Mapping[str, Any], name: str) -> Any:
    value: Any = data
    for part in name.split("."):
        if isinstance(value, Mapping):
            value = value.get(part, _MISSING)
        else:
            value = getattr(value, part, _MISSING)
        if value is _MISSING:
            return _MISSING
    return value


def placeholders(
    template: str,
    left_delim: Optional[str] = None,
    right_delim: Optional[str] = None,
) -> list[str]:
    """List placeholder names in a template, in order of first use."""
    names: list[str] = []
    for match in _pattern(left_delim, right_delim).finditer(template):
        name = match.group("name")
        if name not in names:
            names.append(name)
    return names


def render(
    template: str,
    data: Optional[Mapping[str, Any]] = None,
    left_delim: Optional[str] = None,
    right_delim: Optional[str] = None,
) -> RenderedTemplate:
    """Substitute placeholders with values from data.

    Values are stringified; placeholders without a value render as
    ``<no value>`` and are reported in ``missing``.

    Args:
        template: Template text.
        data: Placeholder values by name.
        left_delim: Custom opening delimiter.
        right_delim: Custom closing delimiter.

    Returns:
        RenderedTemplate with text and missing placeholder names.

    Example:
        >>> render("hello {{.Name}}", {"Name": "Nick"}).text
        'hello Nick'
        >>> render("hello {{.Name}}").text
        'hello <no value>'
    """
    data = data or {}
    missing: list[str] = []

    def substitute(match: re.Match) -> str:
        name = match.group("name")
        value = _lookup(data, name)
        if value is _MISSING:
            if name not in missing:
                missing.append(name)
            return NO_VALUE
        return str(value)

    text = _pattern(left_delim, right_delim).sub(substitute, template)
    return RenderedTemplate(text=text, missing=tuple(missing))
