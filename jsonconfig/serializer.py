"""Text serializers for configuration objects.

A serializer turns a configuration object into document text and back. Both
built-in serializers share the payload model in ``jsonconfig.codec``; they
differ only in the text format.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Type, TypeVar

import yaml

from jsonconfig.codec import SerializerSettings, from_payload, to_payload


T = TypeVar("T")


class SerializerCapability(Protocol):
    """Protocol for pluggable configuration serializers."""

    def encode(self, value: Any, settings: SerializerSettings) -> str:
        """Return the document text for ``value``."""

    def decode(
        self, text: str, config_type: Type[T], settings: SerializerSettings
    ) -> Optional[T]:
        """Parse ``text`` into a config_type instance, or None for a null document."""


@dataclass(frozen=True)
class JsonSerializer:
    """Serialize configuration objects as JSON using the standard json module."""

    def encode(self, value: Any, settings: SerializerSettings) -> str:
        return json.dumps(
            to_payload(value, settings),
            indent=settings.indent,
            sort_keys=settings.sort_keys,
            ensure_ascii=settings.ensure_ascii,
        )

    def decode(
        self, text: str, config_type: Type[T], settings: SerializerSettings
    ) -> Optional[T]:
        payload = json.loads(text)
        if payload is None:
            return None
        return from_payload(config_type, payload, settings)


@dataclass(frozen=True)
class YamlSerializer:
    """Serialize configuration objects as YAML using PyYAML.

    YAML is a superset of JSON, so existing JSON documents decode as well.
    """

    def encode(self, value: Any, settings: SerializerSettings) -> str:
        return yaml.safe_dump(
            to_payload(value, settings),
            default_flow_style=False,
            sort_keys=settings.sort_keys,
            allow_unicode=not settings.ensure_ascii,
            indent=settings.indent,
        )

    def decode(
        self, text: str, config_type: Type[T], settings: SerializerSettings
    ) -> Optional[T]:
        payload = yaml.safe_load(text)
        if payload is None:
            return None
        return from_payload(config_type, payload, settings)
