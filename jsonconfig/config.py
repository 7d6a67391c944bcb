"""Base class for configuration objects persisted as JSON files."""

from __future__ import annotations

import os
from typing import Optional, Type, TypeVar

from jsonconfig.options import JsonConfigOptions
from jsonconfig.store import (
    LoadResult,
    PathLike,
    config_to_text,
    load_config,
    save_config,
    try_load_config,
    try_save_config,
)


C = TypeVar("C", bound="JsonConfig")


class JsonConfig:
    """Base class giving a configuration dataclass load/save behaviour.

    Subclasses are usually dataclasses whose fields form the JSON payload.
    ``path`` and ``options`` are bookkeeping kept outside the dataclass fields,
    so they never reach the file and take no part in equality.

    Example:
        @dataclass
        class AppSettings(JsonConfig):
            theme: str = "dark"
            retries: int = 3

        settings = AppSettings.load()      # reads AppSettings.json
        settings.retries = 5
        settings.save()

    Subclasses must not declare fields named ``path`` or ``options``.
    """

    _path = None
    _options = None

    @property
    def path(self) -> Optional[str]:
        """File this instance was loaded from or created for."""
        return self._path

    @path.setter
    def path(self, value: Optional[PathLike]) -> None:
        object.__setattr__(self, "_path", None if value is None else os.fspath(value))

    @property
    def options(self) -> Optional[JsonConfigOptions]:
        """Options bound to this instance; None defers to type and global defaults."""
        return self._options

    @options.setter
    def options(self, value: Optional[JsonConfigOptions]) -> None:
        object.__setattr__(self, "_options", value)

    @classmethod
    def default_path(cls) -> str:
        """Path used when none is given. Override to relocate the file."""
        return f"{cls.__name__}.json"

    @classmethod
    def default_options(cls) -> Optional[JsonConfigOptions]:
        """Options used when none are given or bound. None means global defaults."""
        return None

    @classmethod
    def load(
        cls: Type[C],
        path: Optional[PathLike] = None,
        options: Optional[JsonConfigOptions] = None,
    ) -> Optional[C]:
        """Load an instance; see ``jsonconfig.store.load_config``."""
        return load_config(cls, path, options)

    @classmethod
    def try_load(
        cls,
        path: Optional[PathLike] = None,
        options: Optional[JsonConfigOptions] = None,
    ) -> LoadResult:
        """Load an instance, returning ``(success, config)`` instead of raising."""
        return try_load_config(cls, path, options)

    def save(
        self,
        path: Optional[PathLike] = None,
        options: Optional[JsonConfigOptions] = None,
    ) -> None:
        """Write this instance; see ``jsonconfig.store.save_config``."""
        save_config(self, path, options)

    def try_save(
        self,
        path: Optional[PathLike] = None,
        options: Optional[JsonConfigOptions] = None,
    ) -> bool:
        """Write this instance, returning False instead of raising."""
        return try_save_config(self, path, options)

    def to_json(self, options: Optional[JsonConfigOptions] = None) -> str:
        """Return the current document text without saving."""
        return config_to_text(self, options)

    def __str__(self) -> str:
        return self.to_json()

    # Lifecycle hooks. Return values are ignored.

    def on_loaded(self) -> None:
        """Called after the file has been read and decoded into this instance."""

    def on_created(self) -> None:
        """Called after this instance was built because its file was missing."""

    def on_load_complete(self) -> None:
        """Called last during load, after on_loaded or on_created."""

    def on_saving(self, path: str) -> None:
        """Called before this instance is encoded for saving to path."""

    def on_saved(self, path: str) -> None:
        """Called after this instance has been written to path."""
