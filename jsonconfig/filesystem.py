"""File access used by the configuration store."""

import os
from dataclasses import dataclass
from typing import Protocol


class FileSystemCapability(Protocol):
    """Protocol for whole-file reads and writes addressed by a path string."""

    def exists(self, path: str) -> bool:
        """Return True if a file exists at path."""

    def read_text(self, path: str) -> str:
        """Return the full text of the file at path."""

    def write_text(self, path: str, text: str) -> None:
        """Replace the content of the file at path with text."""


def ensure_parent_dir(filepath: str) -> None:
    """Create parent directory of filepath if needed."""
    parent = os.path.dirname(filepath) or "."
    os.makedirs(parent, exist_ok=True)


@dataclass(frozen=True)
class LocalFileSystem:
    """Read and write files on local disk.

    Relative paths resolve against the current working directory at call time.
    """

    encoding: str = "utf-8"
    create_parent_dirs: bool = True

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, path: str) -> str:
        with open(path, encoding=self.encoding) as f:
            return f.read()

    def write_text(self, path: str, text: str) -> None:
        if self.create_parent_dirs:
            ensure_parent_dir(path)
        with open(path, "w", encoding=self.encoding) as f:
            f.write(text)
