"""Conversion between configuration objects and JSON-compatible payloads.

Serializers call ``to_payload`` before writing text and ``from_payload`` after
parsing it, so naming policies and ignored members behave the same for every
text format.

Members of a dataclass are its ``dataclasses.fields()``; members of a plain
object are the entries of ``vars(obj)`` that do not start with an underscore.
Two field metadata keys are honoured::

    token: str = field(default="", metadata={"json_ignore": True})
    api_url: str = field(default="", metadata={"json_name": "apiURL"})
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import re
import types
import typing
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from jsonconfig.errors import ConfigDecodeError


LOGGER = logging.getLogger(__name__)

# Naming policies
NAMING_CAMEL = "camelCase"
NAMING_PASCAL = "PascalCase"
NAMING_SNAKE = "snake_case"
NAMING_KEBAB = "kebab-case"
NAMING_POLICIES = [
    NAMING_CAMEL,
    NAMING_PASCAL,
    NAMING_SNAKE,
    NAMING_KEBAB,
]

# Field metadata keys
METADATA_IGNORE = "json_ignore"
METADATA_NAME = "json_name"

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[_\-\s]+")


@dataclass(frozen=True)
class SerializerSettings:
    """Settings passed through to a serializer.

    Attributes:
        naming: Naming policy applied to member names (None keeps them as-is)
        indent: Indentation width; None writes a compact document
        ignored_fields: Attribute names left out of the payload
        skip_none: Omit members whose value is None
        case_insensitive: Match payload keys case-insensitively when decoding
        sort_keys: Sort object keys in the written document
        ensure_ascii: Escape non-ASCII characters in the written document
    """

    naming: Optional[str] = None
    indent: Optional[int] = 2
    ignored_fields: FrozenSet[str] = frozenset()
    skip_none: bool = False
    case_insensitive: bool = False
    sort_keys: bool = False
    ensure_ascii: bool = False

    def __post_init__(self) -> None:
        if self.naming is not None and self.naming not in NAMING_POLICIES:
            raise ValueError(
                f"Unknown naming policy {self.naming!r}; expected one of {NAMING_POLICIES}"
            )
        object.__setattr__(self, "ignored_fields", frozenset(self.ignored_fields))


def apply_naming(name: str, naming: Optional[str]) -> str:
    """Return ``name`` rewritten according to a naming policy."""
    if naming is None:
        return name
    words = [w for w in _WORD_BOUNDARY.split(name) if w]
    if not words:
        return name
    if naming == NAMING_CAMEL:
        return words[0].lower() + "".join(w.capitalize() for w in words[1:])
    if naming == NAMING_PASCAL:
        return "".join(w.capitalize() for w in words)
    if naming == NAMING_SNAKE:
        return "_".join(w.lower() for w in words)
    if naming == NAMING_KEBAB:
        return "-".join(w.lower() for w in words)
    raise ValueError(f"Unknown naming policy {naming!r}")


def _dataclass_members(cls: type, settings: SerializerSettings) -> List[Tuple[str, str]]:
    members = []
    for f in dataclasses.fields(cls):
        if f.metadata.get(METADATA_IGNORE) or f.name in settings.ignored_fields:
            continue
        key = f.metadata.get(METADATA_NAME) or apply_naming(f.name, settings.naming)
        members.append((f.name, key))
    return members


def _plain_members(instance: Any, settings: SerializerSettings) -> List[Tuple[str, str]]:
    return [
        (name, apply_naming(name, settings.naming))
        for name in vars(instance)
        if not name.startswith("_") and name not in settings.ignored_fields
    ]


def _encode_members(
    value: Any, members: List[Tuple[str, str]], settings: SerializerSettings
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for attr, key in members:
        item = getattr(value, attr)
        if item is None and settings.skip_none:
            continue
        payload[key] = to_payload(item, settings)
    return payload


def _payload_key(key: Any) -> str:
    """Return the string form of a dict key, as JSON object keys must be strings."""
    if isinstance(key, enum.Enum):
        key = key.value
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return str(key)
    if isinstance(key, (datetime, date, time)):
        return key.isoformat()
    if isinstance(key, PurePath):
        return str(key)
    raise TypeError(f"Dict key of type {type(key).__name__} is not serializable")


def to_payload(value: Any, settings: SerializerSettings) -> Any:
    """Convert a value into JSON-compatible data (dicts, lists, scalars).

    Raises:
        TypeError: value (or a member of it) has no payload representation.
    """
    if isinstance(value, enum.Enum):
        return to_payload(value.value, settings)
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, dict):
        return {_payload_key(key): to_payload(item, settings) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_payload(item, settings) for item in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _encode_members(value, _dataclass_members(type(value), settings), settings)
    if hasattr(value, "__dict__"):
        return _encode_members(value, _plain_members(value, settings), settings)
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


def from_payload(config_type: type, payload: Any, settings: SerializerSettings) -> Any:
    """Build an instance of ``config_type`` from decoded JSON data.

    Args:
        config_type: Dataclass or default-constructible class to build
        payload: Parsed document; must be a dict
        settings: Serializer settings used when the document was written

    Returns:
        New instance of config_type

    Raises:
        ConfigDecodeError: payload shape or member types do not fit config_type.
    """
    if not isinstance(payload, dict):
        raise ConfigDecodeError(
            f"Expected a JSON object for {config_type.__name__}, got {type(payload).__name__}"
        )
    return _decode_object(config_type, payload, settings)


def _match_keys(
    payload: Dict[str, Any], members: List[Tuple[str, str]], settings: SerializerSettings
) -> Dict[str, Any]:
    if settings.case_insensitive:
        lookup = {str(key).lower(): item for key, item in payload.items()}
        return {attr: lookup[key.lower()] for attr, key in members if key.lower() in lookup}
    return {attr: payload[key] for attr, key in members if key in payload}


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        LOGGER.warning(
            "Could not resolve type hints for %s (%s); string annotations decode untyped",
            cls.__name__,
            exc,
        )
    if dataclasses.is_dataclass(cls):
        return {f.name: f.type for f in dataclasses.fields(cls) if not isinstance(f.type, str)}
    return {
        name: hint
        for name, hint in getattr(cls, "__annotations__", {}).items()
        if not isinstance(hint, str)
    }


def _decode_object(cls: type, payload: Dict[str, Any], settings: SerializerSettings) -> Any:
    hints = _type_hints(cls)
    if dataclasses.is_dataclass(cls):
        members = _dataclass_members(cls, settings)
        init_fields = {f.name for f in dataclasses.fields(cls) if f.init}
        kwargs: Dict[str, Any] = {}
        late: Dict[str, Any] = {}
        for attr, raw in _match_keys(payload, members, settings).items():
            converted = _convert(raw, hints.get(attr, Any), settings, attr)
            if attr in init_fields:
                kwargs[attr] = converted
            else:
                late[attr] = converted
        try:
            instance = cls(**kwargs)
        except TypeError as exc:
            raise ConfigDecodeError(f"Cannot construct {cls.__name__}: {exc}") from exc
        for attr, converted in late.items():
            object.__setattr__(instance, attr, converted)
        return instance

    try:
        instance = cls()
    except TypeError as exc:
        raise ConfigDecodeError(f"Cannot construct {cls.__name__}: {exc}") from exc
    members = _plain_members(instance, settings)
    for attr, raw in _match_keys(payload, members, settings).items():
        setattr(instance, attr, _convert(raw, hints.get(attr, Any), settings, attr))
    return instance


def _mismatch(name: str, hint: Any, value: Any) -> ConfigDecodeError:
    expected = getattr(hint, "__name__", str(hint))
    return ConfigDecodeError(
        f"Field '{name}' expects {expected}, got {type(value).__name__}"
    )


def _convert(value: Any, hint: Any, settings: SerializerSettings, name: str) -> Any:
    """Coerce one decoded value to its annotated type."""
    if value is None or hint is Any:
        return value

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin is typing.Union or origin is types.UnionType:
        candidates = [arg for arg in args if arg is not type(None)]
        if len(candidates) == 1:
            return _convert(value, candidates[0], settings, name)
        return value
    if origin in (list, set, frozenset):
        if not isinstance(value, list):
            raise _mismatch(name, origin, value)
        item_hint = args[0] if args else Any
        return origin(_convert(item, item_hint, settings, name) for item in value)
    if origin is tuple:
        if not isinstance(value, list):
            raise _mismatch(name, tuple, value)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_convert(item, args[0], settings, name) for item in value)
        if args:
            if len(args) != len(value):
                raise ConfigDecodeError(
                    f"Field '{name}' expects {len(args)} items, got {len(value)}"
                )
            return tuple(_convert(item, arg, settings, name) for item, arg in zip(value, args))
        return tuple(value)
    if origin is dict:
        if not isinstance(value, dict):
            raise _mismatch(name, dict, value)
        key_hint, value_hint = args if len(args) == 2 else (Any, Any)
        return {
            _convert_key(key, key_hint, settings, name): _convert(item, value_hint, settings, name)
            for key, item in value.items()
        }
    if origin is not None or not isinstance(hint, type):
        return value

    if dataclasses.is_dataclass(hint):
        if not isinstance(value, dict):
            raise _mismatch(name, hint, value)
        return _decode_object(hint, value, settings)
    if issubclass(hint, enum.Enum):
        try:
            return hint(value)
        except ValueError as exc:
            raise ConfigDecodeError(f"Field '{name}': {exc}") from exc
    if issubclass(hint, (datetime, date, time)):
        if not isinstance(value, str):
            raise _mismatch(name, hint, value)
        try:
            return hint.fromisoformat(value)
        except ValueError as exc:
            raise ConfigDecodeError(f"Field '{name}': {exc}") from exc
    if issubclass(hint, PurePath):
        if not isinstance(value, str):
            raise _mismatch(name, hint, value)
        return hint(value)
    if hint is bool:
        if not isinstance(value, bool):
            raise _mismatch(name, hint, value)
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(name, hint, value)
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _mismatch(name, hint, value)
        return float(value)
    if hint is str:
        if not isinstance(value, str):
            raise _mismatch(name, hint, value)
        return value
    if hint in (list, tuple, set, frozenset):
        if not isinstance(value, list):
            raise _mismatch(name, hint, value)
        return hint(value)
    if issubclass(hint, dict):
        if not isinstance(value, dict):
            raise _mismatch(name, hint, value)
        return value
    # Plain classes are encoded through vars(), so rebuild them the same way.
    if isinstance(value, dict) and hint.__module__ != "builtins":
        return _decode_object(hint, value, settings)
    return value


def _convert_key(key: Any, hint: Any, settings: SerializerSettings, name: str) -> Any:
    """Coerce a dict key, which JSON always stores as a string, to its annotated type."""
    if not isinstance(key, str) or hint is Any or not isinstance(hint, type):
        return _convert(key, hint, settings, name)
    if issubclass(hint, enum.Enum):
        for member in hint:
            if _payload_key(member) == key:
                return member
        raise ConfigDecodeError(f"Field '{name}': {key!r} is not a valid {hint.__name__} key")
    if hint is bool:
        if key not in ("true", "false"):
            raise _mismatch(name, hint, key)
        return key == "true"
    if hint in (int, float):
        try:
            return hint(key)
        except ValueError as exc:
            raise ConfigDecodeError(
                f"Field '{name}': key {key!r} is not a valid {hint.__name__}"
            ) from exc
    return _convert(key, hint, settings, name)
