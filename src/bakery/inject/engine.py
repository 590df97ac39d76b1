"""Splice text and JSON fragments into generated files.

Every function here is pure: it takes file content as a string and returns new
content, raising an :class:`~bakery.errors.InjectionError` subclass instead of
returning partially modified text.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..errors import JsonInjectionError, MarkerNotFoundError, MarkerSpoofingError
from .parser import get_marker_names, parse_markers
from .types import InjectContentOptions, InjectionPosition

__all__ = [
    "deep_merge_json",
    "inject_content",
    "inject_json",
    "validate_no_new_markers",
]


def _apply_indent(text: str, indent: str) -> str:
    if not indent:
        return text
    lines = text.split("\n")
    last = len(lines) - 1
    # an empty final line only exists because the text ended with a newline
    return "\n".join(
        indent + line if line or index < last else line for index, line in enumerate(lines)
    )


def inject_content(
    file_content: str,
    marker: str,
    injection: str,
    options: InjectContentOptions | None = None,
    file_path: str = "",
) -> str:
    """Return ``file_content`` with ``injection`` spliced into region ``marker``.

    ``options.position`` chooses whether the text goes before or after what the
    region already holds; repeated ``END`` injections therefore accumulate in
    call order. Parse errors propagate unchanged and a missing region raises
    :class:`MarkerNotFoundError`.
    """

    options = options or InjectContentOptions()
    regions = parse_markers(file_content, file_path)
    region = regions.get(marker)
    if region is None:
        raise MarkerNotFoundError(file_path, marker)

    text = injection
    if options.indent and region.indent:
        text = _apply_indent(text, region.indent)
    if options.newline and not text.endswith("\n"):
        text += "\n"

    before = file_content[: region.content_start_index]
    existing = file_content[region.content_start_index : region.content_end_index]
    after = file_content[region.content_end_index :]

    if InjectionPosition(options.position) is InjectionPosition.START:
        return before + text + existing + after
    return before + existing + text + after


def _dedupe(items: list[Any]) -> list[Any]:
    seen: set[str] = set()
    unique: list[Any] = []
    for item in items:
        key = json.dumps(item, separators=(",", ":"))
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def deep_merge_json(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``source`` into a copy of ``target``.

    Nested objects merge recursively, two lists are concatenated and
    deduplicated by their JSON form keeping the first occurrence, and any
    other pair is resolved in favour of ``source``. Neither argument is
    modified.
    """

    merged = dict(target)
    for key, source_value in source.items():
        target_value = merged.get(key)
        if isinstance(source_value, Mapping) and isinstance(target_value, Mapping):
            merged[key] = deep_merge_json(target_value, source_value)
        elif isinstance(source_value, list) and isinstance(target_value, list):
            merged[key] = _dedupe([*target_value, *source_value])
        else:
            merged[key] = source_value
    return merged


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _split_json_path(json_path: str) -> list[str]:
    if not json_path.startswith("$."):
        return [json_path]
    return json_path[2:].split(".")


def _get_nested(document: Mapping[str, Any], keys: list[str]) -> Any:
    current: Any = document
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _set_nested(document: Mapping[str, Any], keys: list[str], value: Any) -> dict[str, Any]:
    updated = dict(document)
    first, *rest = keys
    if not first:
        return updated
    if not rest:
        updated[first] = value
        return updated
    existing = updated.get(first)
    updated[first] = _set_nested(existing if isinstance(existing, Mapping) else {}, rest, value)
    return updated


def inject_json(
    file_content: str,
    json_path: str | None,
    fragment: Mapping[str, Any],
    file_path: str = "",
) -> str:
    """Deep merge ``fragment`` into the JSON document ``file_content``.

    Without ``json_path`` the fragment merges at the root. ``"$.a.b"`` targets
    a nested object, creating missing intermediate objects; a path without the
    ``$.`` prefix names a single top-level key. A non-object value at the
    target is replaced by the fragment and an empty path segment leaves the
    document as it is. ``NaN`` and ``Infinity`` are rejected. The result is
    serialised with two space indentation and a trailing newline.
    """

    try:
        document = json.loads(file_content, parse_constant=_reject_constant)
    except ValueError as exc:
        raise JsonInjectionError(file_path, f"Failed to parse JSON in {file_path}: {exc}") from exc
    if not isinstance(document, dict):
        raise JsonInjectionError(file_path, f"Expected a JSON object in {file_path}")

    if json_path:
        keys = _split_json_path(json_path)
        existing = _get_nested(document, keys)
        if isinstance(existing, Mapping):
            value: Any = deep_merge_json(existing, fragment)
        else:
            value = dict(fragment)
        document = _set_nested(document, keys, value)
    else:
        document = deep_merge_json(document, fragment)

    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def validate_no_new_markers(before: str, after: str, file_path: str, current_marker: str) -> None:
    """Raise :class:`MarkerSpoofingError` if ``after`` names markers ``before`` lacks."""

    known = get_marker_names(before)
    introduced = sorted(get_marker_names(after) - known)
    if introduced:
        raise MarkerSpoofingError(file_path, current_marker, introduced)
