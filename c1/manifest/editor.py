"""Line-oriented edits of project.toml that leave unrelated text untouched."""

from __future__ import annotations

import re
import tomllib
from typing import List, Optional

from ..errors import ParseError
from ..models import DependencySpec
from .codec import MANIFEST_FILENAME, format_dependency

DEPENDENCIES_SECTION = "dependencies"

_HEADER_RE = re.compile(r"^\s*\[\[?\s*(?P<name>[^\[\]#]+?)\s*\]\]?\s*(#.*)?$")
_KEY_RE = re.compile(r"""^\s*(?P<key>"(?:[^"\\]|\\.)*"|'[^']*'|[A-Za-z0-9_-]+)\s*=""")


def upsert_dependency(text: str, name: str, spec: DependencySpec) -> str:
    """Insert or replace the ``[dependencies]`` entry for ``name``.

    An existing entry is rewritten on its own line, keeping any comment that
    follows it. A new entry goes after the last entry of the section, or after
    the comment block directly beneath the header when the section has no
    entries yet. A dependency declared as a ``[dependencies.<name>]`` table is
    rejected with ParseError. When the section is missing it
    is appended at the end of the file after a blank line.
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    entry = format_dependency(name, spec)
    lines = text.splitlines(keepends=True)
    _reject_subtable(lines, name)

    header = _find_section(lines, DEPENDENCIES_SECTION)
    if header is None:
        return _append_section(text, entry, newline)

    insert_after = header
    seen_entry = False
    in_header_comments = True
    for index in range(header + 1, len(lines)):
        line = lines[index]
        stripped = line.strip()
        if _section_name(line) is not None:
            break
        if not stripped:
            in_header_comments = False
            continue
        if stripped.startswith("#"):
            if in_header_comments and not seen_entry:
                insert_after = index
            continue
        in_header_comments = False
        if entry_key(line) == name:
            ending = _line_ending(line)
            comment = trailing_comment(line[: len(line) - len(ending)])
            lines[index] = entry + comment + ending
            return "".join(lines)
        seen_entry = True
        insert_after = index

    if not lines[insert_after].endswith(("\n", "\r")):
        lines[insert_after] += newline
    lines.insert(insert_after + 1, entry + newline)
    return "".join(lines)


def entry_key(line: str) -> Optional[str]:
    """Return the decoded key of a ``key = value`` line, or None."""
    match = _KEY_RE.match(line)
    if match is None:
        return None
    raw = match.group("key")
    if raw[0] not in "\"'":
        return raw
    try:
        decoded = tomllib.loads(f"{raw} = 0")
    except tomllib.TOMLDecodeError:
        return None
    return next(iter(decoded))

def trailing_comment(line: str) -> str:
    """Return the ``# ...`` tail of a TOML line with the spacing before it.

    ``#`` characters inside basic or literal strings are not comments.
    """
    quote: Optional[str] = None
    escaped = False
    for index, char in enumerate(line):
        if quote == '"':
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                quote = None
        elif quote == "'":
            if char == "'":
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "#":
            start = len(line[:index].rstrip())
            return line[start:]
    return ""


def _table_path(header: str) -> Optional[tuple[str, ...]]:
    try:
        table = tomllib.loads(f"[{header}]")
    except tomllib.TOMLDecodeError:
        return None
    path: List[str] = []
    while isinstance(table, dict) and len(table) == 1:
        key = next(iter(table))
        path.append(key)
        table = table[key]
    return tuple(path)


def _reject_subtable(lines: List[str], name: str) -> None:
    for line in lines:
        header = _section_name(line)
        if header is None or not header.startswith(("dependencies", '"dependencies"')):
            continue
        if _table_path(header) == (DEPENDENCIES_SECTION, name):
            raise ParseError(
                f"{MANIFEST_FILENAME}: dependency '{name}' is declared as a "
                f"[{header}] table; rewrite it as an inline table "
                f'({name} = {{ git = "..." }}) before updating it'
            )



def _section_name(line: str) -> Optional[str]:
    match = _HEADER_RE.match(line)
    return match.group("name") if match else None


def _find_section(lines: List[str], name: str) -> Optional[int]:
    for index, line in enumerate(lines):
        if _section_name(line) == name:
            return index
    return None


def _append_section(text: str, entry: str, newline: str) -> str:
    prefix = text
    if prefix and not prefix.endswith("\n"):
        prefix += newline
    if prefix.strip() and not prefix.endswith(newline * 2):
        prefix += newline
    return f"{prefix}[{DEPENDENCIES_SECTION}]{newline}{entry}{newline}"


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


__all__ = ["DEPENDENCIES_SECTION", "entry_key", "trailing_comment", "upsert_dependency"]
