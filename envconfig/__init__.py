"""
envconfig: typed configuration records from environment variables

Provides:
- Depth-first binding of dataclass and pydantic records
- Key derivation from field paths (LOG_PATH, log_path) with prefixes
- Conversion to bool, int, float, str, bytes, timedelta, enums, lists,
  nested records and Optional references
- Per-field directives: skip, optional, default and custom key names
- User-defined parsers via the Unmarshaler capability
"""

from .binder import Binder, bind, bind_with_options, bind_with_prefix
from .directives import Directives, parse_directives
from .errors import (
    ConversionError,
    EnvConfigError,
    InvalidDirectiveError,
    InvalidValueKindError,
    KeysNotFoundError,
    NotAPointerError,
    UnexportedFieldError,
    UnsupportedKindError,
)
from .keys import resolve_keys
from .lookup import environ_lookup, mapping_lookup
from .options import BindOptions
from .schema import describe_record
from .types import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Tag,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Unmarshaler,
    env_field,
)

__all__ = [
    "Binder",
    "bind",
    "bind_with_options",
    "bind_with_prefix",
    "BindOptions",
    "Directives",
    "parse_directives",
    "resolve_keys",
    "describe_record",
    "environ_lookup",
    "mapping_lookup",
    "EnvConfigError",
    "NotAPointerError",
    "InvalidValueKindError",
    "UnexportedFieldError",
    "UnsupportedKindError",
    "KeysNotFoundError",
    "ConversionError",
    "InvalidDirectiveError",
    "Tag",
    "env_field",
    "Unmarshaler",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
]

__version__ = "1.0.0"
