from __future__ import annotations

from pathlib import Path

from bakery.inspection import enrich_with_manifest, scan_directory, scan_file
from bakery.manifest import FileEntry, InjectionManifestEntry, Manifest


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_scan_file_reports_points(tmp_path: Path):
    target = tmp_path / "app.ts"
    _write(
        target,
        "const app = 1\n"
        "  // BAKERY:INJECT:routes\n"
        "  home()\n"
        "  // BAKERY:END:routes\n"
        "// BAKERY:INJECT:imports\n"
        "\n"
        "// BAKERY:END:imports\n",
    )
    points = {point.marker: point for point in scan_file(target, relative_to=tmp_path)}

    assert points["routes"].file == "app.ts"
    assert points["routes"].line == 2
    assert points["routes"].indent == "  "
    assert points["routes"].has_content
    assert not points["imports"].has_content


def test_scan_file_skips_malformed_files(tmp_path: Path):
    target = tmp_path / "bad.ts"
    _write(target, "// BAKERY:INJECT:routes\n")
    assert scan_file(target) == []


def test_scan_directory_walks_scannable_files(tmp_path: Path):
    _write(tmp_path / "src" / "main.py", "# BAKERY:INJECT:deps\n# BAKERY:END:deps\n")
    _write(tmp_path / "index.html", "<!-- BAKERY:INJECT:head -->\n<!-- BAKERY:END:head -->\n")
    _write(tmp_path / "notes.txt", "// BAKERY:INJECT:ignored\n// BAKERY:END:ignored\n")
    _write(tmp_path / "node_modules" / "x.js", "// BAKERY:INJECT:vendored\n// BAKERY:END:vendored\n")
    (tmp_path / "logo.svg").write_bytes(b"\xff\xfe\x00")

    points = scan_directory(tmp_path)

    assert [(point.file, point.marker) for point in points] == [
        ("index.html", "head"),
        ("src/main.py", "deps"),
    ]


def test_enrich_with_manifest(tmp_path: Path):
    _write(tmp_path / "app.ts", "// BAKERY:INJECT:routes\nx\n// BAKERY:END:routes\n")
    points = scan_directory(tmp_path)
    manifest = Manifest(
        bakery_version="0.1.0",
        archetype="cli",
        files={
            "app.ts": FileEntry(
                hash="h",
                injections=[InjectionManifestEntry(marker="routes", addon="auth", hash="h")],
            )
        },
    )

    enrich_with_manifest(points, manifest)

    assert points[0].injected_by == "auth"
