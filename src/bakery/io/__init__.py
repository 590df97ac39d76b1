"""Filesystem access for the injection processor."""

from .interfaces import FileSystem
from .local import LocalFileSystem

__all__ = [
    "FileSystem",
    "LocalFileSystem",
]
