"""Pytest configuration and fixtures."""

from typing import Dict

import pytest

from jsonconfig.options import get_global_options, set_global_options


class MemoryFileSystem:
    """In-memory stand-in for LocalFileSystem."""

    def __init__(self, files: Dict[str, str] = None):
        self.files = dict(files or {})

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_text(self, path: str, text: str) -> None:
        self.files[path] = text


@pytest.fixture(autouse=True)
def restore_global_options():
    """Keep changes to the global default options local to one test."""
    saved = get_global_options()
    yield
    set_global_options(saved)


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    """Run the test with a temporary directory as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def memory_fs():
    """Provide an empty in-memory file system."""
    return MemoryFileSystem()
