"""Load and save application configuration objects as JSON files.

Provides:
- config (JsonConfig base class with lifecycle hooks)
- store (load_config, try_load_config, save_config, try_save_config, config_to_text)
- options (JsonConfigOptions, global default options)
- serializer (JsonSerializer, YamlSerializer)
- filesystem (LocalFileSystem)
- codec (SerializerSettings, naming policies)
"""

from jsonconfig.codec import (
    METADATA_IGNORE,
    METADATA_NAME,
    NAMING_CAMEL,
    NAMING_KEBAB,
    NAMING_PASCAL,
    NAMING_POLICIES,
    NAMING_SNAKE,
    SerializerSettings,
    apply_naming,
)
from jsonconfig.config import JsonConfig
from jsonconfig.errors import ConfigDecodeError, JsonConfigError
from jsonconfig.filesystem import FileSystemCapability, LocalFileSystem
from jsonconfig.options import (
    JsonConfigOptions,
    get_global_options,
    reset_global_options,
    set_global_options,
)
from jsonconfig.serializer import JsonSerializer, SerializerCapability, YamlSerializer
from jsonconfig.store import (
    LoadResult,
    config_to_text,
    load_config,
    save_config,
    try_load_config,
    try_save_config,
)

__version__ = "1.0"

__all__ = [
    # Base class
    "JsonConfig",
    # Store
    "LoadResult",
    "load_config",
    "try_load_config",
    "save_config",
    "try_save_config",
    "config_to_text",
    # Options
    "JsonConfigOptions",
    "get_global_options",
    "set_global_options",
    "reset_global_options",
    # Serializers
    "SerializerCapability",
    "JsonSerializer",
    "YamlSerializer",
    "SerializerSettings",
    "apply_naming",
    "NAMING_CAMEL",
    "NAMING_PASCAL",
    "NAMING_SNAKE",
    "NAMING_KEBAB",
    "NAMING_POLICIES",
    "METADATA_IGNORE",
    "METADATA_NAME",
    # File access
    "FileSystemCapability",
    "LocalFileSystem",
    # Errors
    "JsonConfigError",
    "ConfigDecodeError",
]
