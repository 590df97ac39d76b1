"""Local disk implementation of :class:`~bakery.io.interfaces.FileSystem`."""

from __future__ import annotations

from pathlib import Path

from .interfaces import FileSystem


class LocalFileSystem(FileSystem):
    """Read and write UTF-8 text files on the local disk.

    Content is written back exactly as given. Newlines are neither translated
    on read nor on write, so a file's line endings survive an injection.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_text(self, path: Path) -> str:
        with Path(path).open("r", encoding=self._encoding, newline="") as handle:
            return handle.read()

    def write_text(self, path: Path, content: str) -> None:
        data = content.encode(self._encoding)
        with Path(path).open("wb") as handle:
            handle.write(data)


__all__ = ["LocalFileSystem"]
