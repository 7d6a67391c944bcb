"""Load and save configuration objects as files.

These functions work with any default-constructible type; ``JsonConfig`` wraps
them as class and instance methods. Path and options are resolved on every
call, never cached::

    path:    argument -> instance path (save) -> type default path
    options: argument -> instance options (save) -> type default options
             -> global default options

A type supplies its defaults through ``default_path()`` and
``default_options()``; without them the path is ``"<TypeName>.json"`` in the
current working directory.

Lifecycle hooks are looked up by name on the configuration object and skipped
when it does not define them. Load fires ``on_loaded`` (file decoded) or
``on_created`` (default built), then ``on_load_complete``; save fires
``on_saving(path)`` before encoding and ``on_saved(path)`` after writing.
Hooks are notifications only: an exception raised by a hook is logged and does
not stop the load or save.
"""

from __future__ import annotations

import logging
import os
from typing import Any, NamedTuple, Optional, Type, TypeVar, Union

from jsonconfig.options import JsonConfigOptions, resolve_options


LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
PathLike = Union[str, "os.PathLike[str]"]


class LoadResult(NamedTuple):
    """Outcome of try_load_config.

    ``success`` is False only when loading failed; a missing file without
    create_new gives ``LoadResult(True, None)``.
    """

    success: bool
    config: Optional[Any]


def default_path_for(config_type: type) -> str:
    """Return the path used when none is given for config_type."""
    hook = getattr(config_type, "default_path", None)
    if callable(hook):
        return os.fspath(hook())
    if isinstance(hook, (str, os.PathLike)):
        return os.fspath(hook)
    return f"{config_type.__name__}.json"


def default_options_for(config_type: type) -> Optional[JsonConfigOptions]:
    """Return the per-type default options of config_type, if it defines any."""
    hook = getattr(config_type, "default_options", None)
    if callable(hook):
        return hook()
    return None


def _bind(config: Any, path: str, options: Optional[JsonConfigOptions]) -> None:
    # object.__setattr__ so frozen dataclasses can be bound as well
    object.__setattr__(config, "_path", path)
    object.__setattr__(config, "_options", options)


def _notify(config: Any, hook_name: str, *args: Any) -> None:
    hook = getattr(config, hook_name, None)
    if not callable(hook):
        return
    try:
        hook(*args)
    except Exception as exc:
        LOGGER.warning(
            "%s.%s hook failed: %s", type(config).__name__, hook_name, exc, exc_info=True
        )


def _save_target(config: Any, path: Optional[PathLike]) -> str:
    if path is None:
        path = getattr(config, "_path", None)
    if path is None:
        path = default_path_for(type(config))
    return os.fspath(path)


def _save_options(config: Any, options: Optional[JsonConfigOptions]) -> JsonConfigOptions:
    return resolve_options(
        options,
        getattr(config, "_options", None),
        default_options_for(type(config)),
    )


def load_config(
    config_type: Type[T],
    path: Optional[PathLike] = None,
    options: Optional[JsonConfigOptions] = None,
) -> Optional[T]:
    """Load a configuration object of config_type from a file.

    Args:
        config_type: Type to decode into; must be constructible without arguments
        path: File to read (default: the type's default path)
        options: Options for this call (default: type default, then global)

    Returns:
        The decoded instance, a newly created default instance when the file is
        missing and create_new is set, or None when the file is missing without
        create_new or contains a null document.

    Raises:
        OSError: the file could not be read (or written, for save_new).
        ValueError: the document is malformed (json.JSONDecodeError) or does
            not fit config_type (ConfigDecodeError).
    """
    path = os.fspath(path) if path is not None else default_path_for(config_type)
    bound_options = options if options is not None else default_options_for(config_type)
    effective = resolve_options(bound_options)

    if effective.filesystem.exists(path):
        text = effective.filesystem.read_text(path)
        config = effective.serializer.decode(
            text, config_type, effective.serializer_settings
        )
        if config is None:
            LOGGER.debug("%s holds no value for %s", path, config_type.__name__)
            return None
        _bind(config, path, bound_options)
        LOGGER.debug("Loaded %s from %s", config_type.__name__, path)
        _notify(config, "on_loaded")
    elif effective.create_new:
        config = config_type()
        _bind(config, path, bound_options)
        LOGGER.debug("Created default %s for missing %s", config_type.__name__, path)
        _notify(config, "on_created")
        if effective.save_new:
            save_config(config, path, bound_options)
    else:
        LOGGER.debug("No %s file at %s", config_type.__name__, path)
        return None

    _notify(config, "on_load_complete")
    return config


def try_load_config(
    config_type: Type[T],
    path: Optional[PathLike] = None,
    options: Optional[JsonConfigOptions] = None,
) -> LoadResult:
    """Like load_config, but report failures as ``LoadResult(False, None)``."""
    try:
        return LoadResult(True, load_config(config_type, path, options))
    except Exception as exc:
        LOGGER.warning("Failed to load %s: %s", config_type.__name__, exc)
        return LoadResult(False, None)


def save_config(
    config: Any,
    path: Optional[PathLike] = None,
    options: Optional[JsonConfigOptions] = None,
) -> None:
    """Write config to a file, replacing any existing content.

    The instance's bound path and options are left unchanged, so saving to an
    alternate path does not move the instance's home.

    Args:
        config: Configuration object to save
        path: Target file (default: bound path, then the type's default path)
        options: Options for this call (default: bound, type default, global)

    Raises:
        OSError: the file could not be written.
        TypeError: a member value has no JSON representation.
    """
    path = _save_target(config, path)
    effective = _save_options(config, options)

    _notify(config, "on_saving", path)
    text = effective.serializer.encode(config, effective.serializer_settings)
    effective.filesystem.write_text(path, text)
    LOGGER.debug("Saved %s to %s", type(config).__name__, path)
    _notify(config, "on_saved", path)


def try_save_config(
    config: Any,
    path: Optional[PathLike] = None,
    options: Optional[JsonConfigOptions] = None,
) -> bool:
    """Like save_config, but return False instead of raising."""
    try:
        save_config(config, path, options)
        return True
    except Exception as exc:
        LOGGER.warning("Failed to save %s: %s", type(config).__name__, exc)
        return False


def config_to_text(config: Any, options: Optional[JsonConfigOptions] = None) -> str:
    """Return the current document text of config without writing it."""
    effective = _save_options(config, options)
    return effective.serializer.encode(config, effective.serializer_settings)
