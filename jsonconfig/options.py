"""Options controlling how configuration objects are loaded and saved.

The process-wide default returned by ``get_global_options()`` applies whenever
neither the call, the instance nor the configuration type supplies options. It
is looked up on every operation, so replacing it changes the behaviour of
later calls. It is a plain module-level value: replacing it from several
threads at once is left to the caller to coordinate.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from jsonconfig.codec import SerializerSettings
from jsonconfig.filesystem import FileSystemCapability, LocalFileSystem
from jsonconfig.serializer import JsonSerializer, SerializerCapability


@dataclass(frozen=True)
class JsonConfigOptions:
    """Immutable bundle of serializer settings and missing-file policy.

    Attributes:
        serializer_settings: Settings passed through to the serializer
        create_new: Build a default instance when the file is missing
        save_new: Save a newly built default instance right away
        serializer: Encoder/decoder for the document text
        filesystem: File access used for reads and writes
    """

    serializer_settings: SerializerSettings = field(default_factory=SerializerSettings)
    create_new: bool = True
    save_new: bool = False
    serializer: SerializerCapability = field(default_factory=JsonSerializer)
    filesystem: FileSystemCapability = field(default_factory=LocalFileSystem)

    def with_changes(self, **changes: Any) -> JsonConfigOptions:
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)


_global_options = JsonConfigOptions()


def get_global_options() -> JsonConfigOptions:
    """Return the process-wide default options."""
    return _global_options


def set_global_options(options: JsonConfigOptions) -> None:
    """Replace the process-wide default options.

    Raises:
        TypeError: options is not a JsonConfigOptions instance.
    """
    global _global_options
    if not isinstance(options, JsonConfigOptions):
        raise TypeError(
            f"Global options must be JsonConfigOptions, got {type(options).__name__}"
        )
    _global_options = options


def reset_global_options() -> JsonConfigOptions:
    """Restore and return factory-default global options."""
    global _global_options
    _global_options = JsonConfigOptions()
    return _global_options


def resolve_options(*candidates: Optional[JsonConfigOptions]) -> JsonConfigOptions:
    """Return the first candidate that is not None, else the global default."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return _global_options
