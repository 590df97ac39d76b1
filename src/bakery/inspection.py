"""Read-only discovery of injection points in a generated project."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable

from .errors import InjectionError
from .inject.parser import parse_markers
from .manifest import Manifest

__all__ = [
    "InjectionPoint",
    "SCANNABLE_EXTENSIONS",
    "SKIP_DIRS",
    "enrich_with_manifest",
    "scan_directory",
    "scan_file",
]


LOGGER = logging.getLogger(__name__)

SKIP_DIRS = frozenset({"node_modules", ".git", "dist", "build", ".bakery"})

SCANNABLE_EXTENSIONS = frozenset(
    {
        ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".py", ".html", ".htm", ".css",
        ".scss", ".vue", ".svelte", ".yml", ".yaml", ".json", ".md", ".xml", ".svg", ".ejs",
    }
)


@dataclass(slots=True)
class InjectionPoint:
    """A marker region found while scanning."""

    file: str
    marker: str
    line: int
    indent: str
    has_content: bool
    injected_by: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def scan_file(path: str | Path, *, relative_to: str | Path | None = None) -> list[InjectionPoint]:
    """Return the injection points of one file.

    Files that cannot be decoded or whose markers are malformed yield no
    points.
    """

    path = Path(path)
    label = path.relative_to(relative_to).as_posix() if relative_to is not None else str(path)
    try:
        content = path.read_text(encoding="utf-8")
        regions = parse_markers(content, label)
    except (OSError, UnicodeDecodeError, InjectionError) as exc:
        LOGGER.debug("skipping %s: %s", label, exc)
        return []

    return [
        InjectionPoint(
            file=label,
            marker=name,
            line=region.start_line + 1,
            indent=region.indent,
            has_content=bool(content[region.content_start_index : region.content_end_index].strip()),
        )
        for name, region in regions.items()
    ]


def scan_directory(root: str | Path) -> list[InjectionPoint]:
    """Return the injection points of every scannable file below ``root``."""

    root = Path(root)
    points: list[InjectionPoint] = []

    def walk(directory: Path) -> None:
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            LOGGER.debug("cannot list %s: %s", directory, exc)
            return
        for entry in entries:
            if entry.name in SKIP_DIRS:
                continue
            if entry.is_dir():
                walk(entry)
            elif entry.is_file() and entry.suffix.lower() in SCANNABLE_EXTENSIONS:
                points.extend(scan_file(entry, relative_to=root))

    walk(root)
    return points


def enrich_with_manifest(points: Iterable[InjectionPoint], manifest: Manifest) -> None:
    """Fill ``injected_by`` from the manifest's injection records."""

    for point in points:
        entry = manifest.files.get(point.file)
        if entry is None:
            continue
        for injection in entry.injections:
            if injection.marker == point.marker:
                point.injected_by = injection.addon
