"""Custom exceptions for jsonconfig.

Missing files are not errors (load returns None); I/O failures surface as the
built-in OSError family and malformed JSON as json.JSONDecodeError. This module
covers the failures that belong to jsonconfig itself.
"""


class JsonConfigError(Exception):
    """Base exception for all jsonconfig errors."""

    pass


class ConfigDecodeError(JsonConfigError, ValueError):
    """Raised when a decoded document does not fit the configuration type."""

    pass
