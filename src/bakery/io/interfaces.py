"""Abstract filesystem interface consumed by the injection processor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Minimal text-file access used to read and rewrite generated files."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return whether ``path`` names an existing regular file."""

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Return the decoded contents of ``path``."""

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Replace the contents of the existing file at ``path``."""


__all__ = ["FileSystem"]
