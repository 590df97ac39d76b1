from __future__ import annotations

import json
from pathlib import Path

import pytest

from bakery.errors import ManifestError
from bakery.inject.types import InjectionResult
from bakery.manifest import (
    FileEntry,
    Manifest,
    hash_content,
    load_manifest,
    manifest_path,
    record_injections,
    save_manifest,
)


def test_hash_content_matches_for_text_and_bytes():
    assert hash_content("abc") == hash_content(b"abc")
    assert hash_content("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_load_manifest_returns_none_when_absent(tmp_path: Path):
    assert load_manifest(tmp_path) is None


def test_save_and_load_round_trip_uses_camel_case_keys(tmp_path: Path):
    manifest = Manifest(
        bakery_version="0.1.0",
        archetype="cli",
        addons=["auth"],
        files={"package.json": FileEntry(hash="abc", managed=False)},
    )
    path = save_manifest(tmp_path, manifest)

    assert path == manifest_path(tmp_path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["bakeryVersion"] == "0.1.0"
    assert "generatedAt" in raw
    assert path.read_text(encoding="utf-8").endswith("}\n")
    assert load_manifest(tmp_path) == manifest


def test_invalid_manifest_raises(tmp_path: Path):
    path = manifest_path(tmp_path)
    path.parent.mkdir(parents=True)
    path.write_text('{"archetype": 3}', encoding="utf-8")

    with pytest.raises(ManifestError):
        load_manifest(tmp_path)


def test_record_injections_tracks_successes_only(tmp_path: Path):
    (tmp_path / "app.ts").write_text("updated", encoding="utf-8")
    manifest = Manifest(
        bakery_version="0.1.0",
        archetype="cli",
        files={"app.ts": FileEntry(hash="old", managed=True)},
    )
    results = [
        InjectionResult(file="app.ts", marker="routes", addon="auth", success=True, lines_added=1),
        InjectionResult(file="missing.ts", marker="routes", addon="auth", success=False, error="nope"),
    ]

    updated = record_injections(manifest, tmp_path, results)

    entry = updated.files["app.ts"]
    assert entry.hash == hash_content("updated")
    assert entry.managed is True
    assert [(i.marker, i.addon, i.hash) for i in entry.injections] == [("routes", "auth", hash_content("updated"))]
    assert "missing.ts" not in updated.files
    assert manifest.files["app.ts"].hash == "old"
