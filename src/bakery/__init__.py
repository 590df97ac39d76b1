"""Marker-based code injection for generated projects.

Generated files carry paired ``BAKERY:INJECT:<name>`` / ``BAKERY:END:<name>``
comment markers. Addons contribute injection definitions that splice text
into those regions, or deep merge JSON fragments into files such as
``package.json``, without touching anything outside the designated regions.
"""

from __future__ import annotations

from .config import ProjectContext
from .errors import (
    BakeryError,
    DuplicateMarkerError,
    InjectionError,
    JsonInjectionError,
    MalformedMarkerError,
    MarkerNotFoundError,
    MarkerSpoofingError,
)
from .inject import (
    InjectionDefinition,
    InjectionProcessor,
    InjectionResult,
    ProcessInjectionsOptions,
    inject_content,
    inject_json,
    load_injections,
    parse_markers,
    process_injections,
)
from .template import TemplateRenderer, TemplateRenderingError

__all__ = [
    "BakeryError",
    "DuplicateMarkerError",
    "InjectionDefinition",
    "InjectionError",
    "InjectionProcessor",
    "InjectionResult",
    "JsonInjectionError",
    "MalformedMarkerError",
    "MarkerNotFoundError",
    "MarkerSpoofingError",
    "ProcessInjectionsOptions",
    "ProjectContext",
    "TemplateRenderer",
    "TemplateRenderingError",
    "inject_content",
    "inject_json",
    "load_injections",
    "parse_markers",
    "process_injections",
]

__version__ = "0.1.0"
