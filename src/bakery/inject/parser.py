"""Locate and validate ``BAKERY:INJECT``/``BAKERY:END`` marker regions.

A marker is a whole comment line in one of four dialects::

    // BAKERY:INJECT:routes          (js)
    # BAKERY:INJECT:routes           (python)
    <!-- BAKERY:INJECT:routes -->    (html)
    /* BAKERY:INJECT:routes */       (css)

with a matching ``BAKERY:END:<name>`` line closing the region. Every line is
tested against every dialect, so the dialect is a property of the marker line
and not of the file it lives in.
"""

from __future__ import annotations

import os
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Pattern

from ..errors import DuplicateMarkerError, MalformedMarkerError
from .types import CommentStyle, MarkerRegion

__all__ = [
    "detect_comment_style",
    "extract_indent",
    "get_marker_names",
    "get_marker_patterns",
    "parse_markers",
    "validate_marker_pairs",
]


def _patterns(opening: str, closing: str) -> tuple[Pattern[str], Pattern[str]]:
    name = r"([a-z0-9-]+)"
    return (
        re.compile(rf"^(\s*){opening}\s*BAKERY:INJECT:{name}\s*{closing}\s*$"),
        re.compile(rf"^(\s*){opening}\s*BAKERY:END:{name}\s*{closing}\s*$"),
    )


_MARKER_PATTERNS: dict[CommentStyle, tuple[Pattern[str], Pattern[str]]] = {
    CommentStyle.JS: _patterns(r"//", ""),
    CommentStyle.PYTHON: _patterns(r"#", ""),
    CommentStyle.HTML: _patterns(r"<!--", r"-->"),
    CommentStyle.CSS: _patterns(r"/\*", r"\*/"),
}

_EXTENSION_STYLES: dict[str, CommentStyle] = {
    **dict.fromkeys((".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".json"), CommentStyle.JS),
    **dict.fromkeys(
        (".py", ".yml", ".yaml", ".sh", ".bash", ".zsh", ".toml", ".ini", ".conf"),
        CommentStyle.PYTHON,
    ),
    **dict.fromkeys((".html", ".htm", ".xml", ".svg", ".md"), CommentStyle.HTML),
    **dict.fromkeys((".css", ".scss", ".sass", ".less"), CommentStyle.CSS),
}

_LEADING_WHITESPACE = re.compile(r"^\s*")


def detect_comment_style(file_path: str | os.PathLike[str]) -> CommentStyle:
    """Return the default comment dialect for ``file_path``'s extension.

    Unknown extensions fall back to :attr:`CommentStyle.JS`. The parser does
    not use this; it is a hint for tooling that writes new markers.
    """

    _, extension = os.path.splitext(os.fspath(file_path))
    return _EXTENSION_STYLES.get(extension.lower(), CommentStyle.JS)


def get_marker_patterns(style: CommentStyle) -> tuple[Pattern[str], Pattern[str]]:
    """Return the compiled ``(start, end)`` patterns for ``style``."""

    return _MARKER_PATTERNS[CommentStyle(style)]


def extract_indent(line: str) -> str:
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


@dataclass(slots=True, frozen=True)
class _Marker:
    is_start: bool
    name: str
    indent: str
    line_number: int
    line_start: int
    line_end: int
    style: CommentStyle


def _find_markers(content: str) -> list[_Marker]:
    markers: list[_Marker] = []
    offset = 0
    for line_number, line in enumerate(content.split("\n")):
        line_end = offset + len(line)
        for style, (start_pattern, end_pattern) in _MARKER_PATTERNS.items():
            match = start_pattern.match(line)
            is_start = match is not None
            if match is None:
                match = end_pattern.match(line)
            if match is None:
                continue
            markers.append(
                _Marker(
                    is_start=is_start,
                    name=match.group(2),
                    indent=match.group(1),
                    line_number=line_number,
                    line_start=offset,
                    line_end=line_end,
                    style=style,
                )
            )
            break
        offset = line_end + 1
    return markers


def parse_markers(content: str, file_path: str) -> dict[str, MarkerRegion]:
    """Return every marker region in ``content`` keyed by name.

    Raises
    ------
    DuplicateMarkerError
        Two INJECT markers share a name. Checked before pairing, so duplicates
        are reported even when they would otherwise nest.
    MalformedMarkerError
        An END has no open INJECT, closes a different name than the innermost
        open INJECT, or an INJECT is never closed.
    """

    markers = _find_markers(content)

    starts_by_name: dict[str, list[_Marker]] = defaultdict(list)
    for marker in markers:
        if marker.is_start:
            starts_by_name[marker.name].append(marker)
    for name, starts in starts_by_name.items():
        if len(starts) > 1:
            raise DuplicateMarkerError(file_path, name, [start.line_number + 1 for start in starts])

    regions: dict[str, MarkerRegion] = {}
    open_stack: list[_Marker] = []
    for marker in markers:
        if marker.is_start:
            open_stack.append(marker)
            continue

        if not open_stack:
            raise MalformedMarkerError(
                file_path,
                marker.name,
                f"END marker without matching INJECT at line {marker.line_number + 1}",
            )

        opened = open_stack.pop()
        if opened.name != marker.name:
            raise MalformedMarkerError(
                file_path,
                marker.name,
                f"Mismatched markers: INJECT:{opened.name} at line {opened.line_number + 1} "
                f"closed by END:{marker.name} at line {marker.line_number + 1}",
            )

        regions[marker.name] = MarkerRegion(
            name=marker.name,
            start_line=opened.line_number,
            end_line=marker.line_number,
            content_start_index=opened.line_end + 1,
            content_end_index=marker.line_start,
            indent=opened.indent,
            comment_style=opened.style,
        )

    if open_stack:
        unclosed = open_stack[0]
        raise MalformedMarkerError(
            file_path,
            unclosed.name,
            f"INJECT marker without matching END at line {unclosed.line_number + 1}",
        )

    return regions


def validate_marker_pairs(content: str, file_path: str) -> None:
    """Raise :class:`MalformedMarkerError` if ``content`` has any structural fault."""

    try:
        parse_markers(content, file_path)
    except DuplicateMarkerError as exc:
        raise MalformedMarkerError(file_path, exc.marker, exc.detail) from exc


def get_marker_names(content: str) -> set[str]:
    """Return the name of every INJECT or END marker line, paired or not."""

    return {marker.name for marker in _find_markers(content)}
