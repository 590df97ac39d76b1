from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bakery.io import FileSystem  # noqa: E402


class MemoryFileSystem(FileSystem):
    """In-memory files keyed by path, with switchable write failures."""

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files = dict(files or {})
        self.fail_writes = False
        self.writes: list[Path] = []

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def read_text(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError as exc:
            raise FileNotFoundError(path) from exc

    def write_text(self, path: Path, content: str) -> None:
        if self.fail_writes:
            raise PermissionError(f"read-only: {path}")
        self.writes.append(Path(path))
        self.files[Path(path)] = content


@pytest.fixture()
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()
