"""Marker-based code injection into generated files."""

from .engine import deep_merge_json, inject_content, inject_json, validate_no_new_markers
from .parser import (
    detect_comment_style,
    extract_indent,
    get_marker_names,
    get_marker_patterns,
    parse_markers,
    validate_marker_pairs,
)
from .processor import InjectionProcessor, process_injections
from .types import (
    CommentStyle,
    InjectContentOptions,
    InjectionDefinition,
    InjectionPosition,
    InjectionResult,
    MarkerRegion,
    ProcessInjectionsOptions,
    load_injections,
)

__all__ = [
    "CommentStyle",
    "InjectContentOptions",
    "InjectionDefinition",
    "InjectionPosition",
    "InjectionProcessor",
    "InjectionResult",
    "MarkerRegion",
    "ProcessInjectionsOptions",
    "deep_merge_json",
    "detect_comment_style",
    "extract_indent",
    "get_marker_names",
    "get_marker_patterns",
    "inject_content",
    "inject_json",
    "load_injections",
    "parse_markers",
    "process_injections",
    "validate_marker_pairs",
    "validate_no_new_markers",
]
