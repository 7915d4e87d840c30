"""Find and replace over schema text, plus small text-editing helpers."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

# `$$`, `${name}` or `$name` in a replacement template.
_GROUP_REF = re.compile(r"\$(?:(\$)|\{([^}]*)\}|([0-9A-Za-z_]+))")


class SchemaFormat(Enum):
    """Text formats the schema editor can show a deck in."""

    JSON = "json"
    TOML = "toml"
    YAML = "yaml"
    XML = "xml"


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def build_regex(query: str, case_sensitive: bool) -> re.Pattern[str] | None:
    """Compile ``query`` as a regular expression, or None if it is not valid."""
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(query, flags)
    except re.error:
        return None


def find_matches(
    text: str, query: str, case_sensitive: bool = False, use_regex: bool = False
) -> list[tuple[int, int]]:
    """Start and end offsets of every match of ``query`` in ``text``.

    Plain searches are non-overlapping and, when not case sensitive, fold
    only ASCII letters. An invalid regular expression matches nothing.
    """
    if not query:
        return []
    if use_regex:
        pattern = build_regex(query, case_sensitive)
        if pattern is None:
            return []
        return [match.span() for match in pattern.finditer(text)]

    haystack = text if case_sensitive else _ascii_lower(text)
    needle = query if case_sensitive else _ascii_lower(query)
    matches = []
    start = haystack.find(needle)
    while start != -1:
        end = start + len(needle)
        matches.append((start, end))
        start = haystack.find(needle, end)
    return matches


def replace_all_case_insensitive_ascii(text: str, find: str, replace: str) -> str:
    """Replace every occurrence of ``find``, ignoring ASCII letter case."""
    if not find:
        return text
    pieces = []
    last = 0
    for start, end in find_matches(text, find, case_sensitive=False):
        pieces.append(text[last:start])
        pieces.append(replace)
        last = end
    pieces.append(text[last:])
    return "".join(pieces)


def _expand(template: str, match: re.Match[str]) -> str:
    """Expand ``$1``, ``$name``, ``${name}`` and ``$$`` in a replacement template."""

    def group_text(ref: re.Match[str]) -> str:
        if ref.group(1) is not None:
            return "$"
        name = ref.group(2) if ref.group(2) is not None else ref.group(3)
        key: int | str = int(name) if name.isascii() and name.isdigit() else name
        try:
            return match.group(key) or ""
        except IndexError:
            return ""

    return _GROUP_REF.sub(group_text, template)


def _regex_replace(
    pattern: re.Pattern[str], text: str, replacement: str, count: int = 0
) -> str:
    return pattern.sub(lambda m: _expand(replacement, m), text, count=count)


@dataclass
class FindState:
    """The find bar: query, options, current matches and the selected match."""

    query: str = ""
    case_sensitive: bool = False
    use_regex: bool = False
    matches: list[tuple[int, int]] = field(default_factory=list)
    current: int = 0

    def update(self, text: str) -> None:
        """Recompute the matches in ``text`` and keep the selection in range."""
        self.matches = find_matches(text, self.query, self.case_sensitive, self.use_regex)
        if not self.matches:
            self.current = 0
        elif self.current >= len(self.matches):
            self.current = len(self.matches) - 1

    def next(self) -> None:
        """Select the following match, wrapping round at the end."""
        if self.matches:
            self.current = (self.current + 1) % len(self.matches)

    def previous(self) -> None:
        """Select the preceding match, wrapping round at the start."""
        if self.matches:
            self.current = (self.current - 1) % len(self.matches)

    def status(self) -> str:
        """Text for the find bar: position, invalid pattern, or no results."""
        if self.matches:
            return f"{self.current + 1} of {len(self.matches)}"
        if self.use_regex and self.query and build_regex(self.query, self.case_sensitive) is None:
            return "Invalid regex"
        return "No results"

    def replace_current(self, text: str, replacement: str) -> str:
        """Replace the selected match and return the new text."""
        if not self.matches:
            return text
        start, end = self.matches[self.current]
        if self.use_regex:
            pattern = build_regex(self.query, self.case_sensitive)
            if pattern is None:
                return text
            new_segment = _regex_replace(pattern, text[start:end], replacement, count=1)
        else:
            new_segment = replacement
        result = text[:start] + new_segment + text[end:]
        self.update(result)
        return result

    def replace_all(self, text: str, replacement: str) -> str:
        """Replace every match and return the new text."""
        if not self.query:
            return text
        if self.use_regex:
            pattern = build_regex(self.query, self.case_sensitive)
            result = text if pattern is None else _regex_replace(pattern, text, replacement)
        elif self.case_sensitive:
            result = text.replace(self.query, replacement)
        else:
            result = replace_all_case_insensitive_ascii(text, self.query, replacement)
        self.update(result)
        return result


def format_json(text: str) -> str:
    """Pretty-print JSON text; raises ValueError if it does not parse."""
    value = json.loads(text)
    return json.dumps(value, indent=2, ensure_ascii=False)


def line_count(text: str) -> int:
    """Number of lines shown in the editor gutter, never less than one."""
    return text.count("\n") + 1


def _check_range(text: str, start: int, end: int) -> tuple[int, int]:
    if start < 0 or end < start:
        raise ValueError(f"invalid range {start}..{end}")
    return min(start, len(text)), min(end, len(text))


def cut_range(text: str, start: int, end: int) -> str:
    """Remove the characters from ``start`` up to ``end``."""
    start, end = _check_range(text, start, end)
    return text[:start] + text[end:]


def insert_text(text: str, insertion: str, start: int, end: int | None = None) -> str:
    """Put ``insertion`` in place of ``start``..``end``, or at ``start`` if no end is given."""
    start, end = _check_range(text, start, start if end is None else end)
    return text[:start] + insertion + text[end:]