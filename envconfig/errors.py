"""
Exceptions for envconfig binding.

Every failure raised while binding a record derives from EnvConfigError, so
callers can catch one type at process startup. Messages carry the
``envconfig: `` prefix.
"""

from typing import Iterable, List, Optional


class EnvConfigError(Exception):
    """Base exception for all binding errors."""

    def __init__(self, message: str):
        super().__init__(f"envconfig: {message}")


class NotAPointerError(EnvConfigError):
    """Root target is not a mutable record reference."""

    def __init__(self, message: str = "value is not a mutable record reference"):
        super().__init__(message)


class InvalidValueKindError(EnvConfigError):
    """Root target is a collection or a non-record type."""

    def __init__(self, message: str = "invalid value kind, only records are supported"):
        super().__init__(message)


class UnexportedFieldError(EnvConfigError):
    """A private field is present and was not skipped."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"field {field} is not exported")


class UnsupportedKindError(EnvConfigError):
    """A field's type has no conversion rule."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"kind {kind} not supported")


class KeysNotFoundError(EnvConfigError):
    """No candidate key holds a value for a required field."""

    def __init__(self, keys: Iterable[str]):
        self.keys: List[str] = list(keys)
        super().__init__(f"keys {', '.join(self.keys)} not found")


class ConversionError(EnvConfigError):
    """A value was found but could not be parsed into the field's type."""

    def __init__(self, field: str, value: str, reason: Optional[str] = None):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"unable to convert {value!r} for field {field}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidDirectiveError(EnvConfigError):
    """A field annotation cannot be applied."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"invalid directive on field {field}: {reason}")
