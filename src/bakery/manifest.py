"""Project manifest recording file hashes and which addon injected where."""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ManifestError
from .inject.types import InjectionResult

__all__ = [
    "FileEntry",
    "InjectionManifestEntry",
    "MANIFEST_PATH",
    "Manifest",
    "hash_content",
    "load_manifest",
    "manifest_path",
    "record_injections",
    "save_manifest",
]

MANIFEST_PATH = Path(".bakery") / "manifest.json"


def hash_content(content: str | bytes) -> str:
    """Return the SHA-256 hex digest of ``content`` (UTF-8 for text)."""

    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


class InjectionManifestEntry(BaseModel):
    """One successful injection into a tracked file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    marker: str = Field(..., description="Marker injected into, or 'json'.")
    addon: str = Field(..., description="Addon that supplied the injection.")
    hash: str = Field(..., description="SHA-256 of the file right after the injection.")


class FileEntry(BaseModel):
    """Hash and ownership of a generated file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hash: str = Field(..., description="SHA-256 of the file contents.")
    managed: bool = Field(False, description="Whether bakery owns the whole file.")
    injections: List[InjectionManifestEntry] = Field(default_factory=list)


class Manifest(BaseModel):
    """Contents of ``.bakery/manifest.json``."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    bakery_version: str = Field(..., alias="bakeryVersion")
    archetype: str = Field(...)
    addons: List[str] = Field(default_factory=list)
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc),
        alias="generatedAt",
    )
    files: Dict[str, FileEntry] = Field(default_factory=dict)


def manifest_path(project_dir: str | Path) -> Path:
    return Path(project_dir) / MANIFEST_PATH


def load_manifest(project_dir: str | Path) -> Manifest | None:
    """Return the project's manifest, or ``None`` when it has none."""

    path = manifest_path(project_dir)
    if not path.is_file():
        return None
    try:
        return Manifest.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise ManifestError(f"invalid manifest {path}: {exc}") from exc


def save_manifest(project_dir: str | Path, manifest: Manifest) -> Path:
    path = manifest_path(project_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = manifest.model_dump(mode="json", by_alias=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path


def record_injections(
    manifest: Manifest,
    project_dir: str | Path,
    results: Iterable[InjectionResult],
) -> Manifest:
    """Return ``manifest`` updated with the successful ``results``.

    The hash of every injected file is refreshed from disk and an
    :class:`InjectionManifestEntry` attributing the change is appended.
    """

    project_dir = Path(project_dir)
    files = dict(manifest.files)
    for result in results:
        if not result.success:
            continue
        digest = hash_content((project_dir / result.file).read_bytes())
        previous = files.get(result.file)
        entry = InjectionManifestEntry(marker=result.marker, addon=result.addon, hash=digest)
        files[result.file] = FileEntry(
            hash=digest,
            managed=previous.managed if previous else False,
            injections=[*(previous.injections if previous else []), entry],
        )
    return manifest.model_copy(update={"files": files})
