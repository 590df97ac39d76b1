"""Exception types raised by the injection core."""

from __future__ import annotations

from typing import Iterable

__all__ = [
    "BakeryError",
    "DuplicateMarkerError",
    "InjectionError",
    "JsonInjectionError",
    "MalformedMarkerError",
    "ManifestError",
    "MarkerNotFoundError",
    "MarkerSpoofingError",
]


class BakeryError(RuntimeError):
    """Base class for every error raised by bakery."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InjectionError(BakeryError):
    """Raised when content cannot be injected into ``file`` at ``marker``."""

    def __init__(self, file: str, marker: str, message: str) -> None:
        self.file = file
        self.marker = marker
        self.detail = message
        super().__init__(f"Injection failed: {message} (file: {file}, marker: {marker})")


class MarkerNotFoundError(InjectionError):
    """The file parses cleanly but does not define the requested marker."""

    def __init__(self, file: str, marker: str) -> None:
        super().__init__(file, marker, f"Marker '{marker}' not found")


class MalformedMarkerError(InjectionError):
    """INJECT/END markers are unmatched or close the wrong region."""

    def __init__(self, file: str, marker: str, detail: str) -> None:
        super().__init__(file, marker, f"Malformed marker: {detail}")


class DuplicateMarkerError(InjectionError):
    """Two INJECT markers share the same name within one file."""

    def __init__(self, file: str, marker: str, lines: Iterable[int]) -> None:
        self.lines = tuple(lines)
        joined = ", ".join(str(line) for line in self.lines)
        super().__init__(file, marker, f"Duplicate marker found at lines {joined}")


class MarkerSpoofingError(InjectionError):
    """Injected content would introduce marker comments of its own."""

    def __init__(self, file: str, marker: str, new_markers: Iterable[str]) -> None:
        self.new_markers = tuple(new_markers)
        joined = ", ".join(self.new_markers)
        super().__init__(file, marker, f"Injection attempted to create new markers: {joined}")


class JsonInjectionError(InjectionError):
    """The target of a JSON injection is not a JSON object."""

    def __init__(self, file: str, detail: str) -> None:
        super().__init__(file, "json", detail)


class ManifestError(BakeryError):
    """Raised when ``.bakery/manifest.json`` cannot be read or validated."""
