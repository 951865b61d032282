"""
Record binder for envconfig.

Walks a record's fields depth-first in declaration order, resolves each leaf
against the lookup namespace and writes the converted value back:

    @dataclass
    class Log:
        path: str

    @dataclass
    class Config:
        name: str
        log: Log
        timeout: timedelta = env_field("default=30s")

    config = bind(Config)  # NAME, LOG_PATH, TIMEOUT

Binding stops at the first error. Fields that were not visited yet keep
whatever value they had.
"""

import logging
from typing import Any, Optional, Sequence, Tuple

from . import convert
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
from .lookup import LookupSource, as_lookup
from .options import BindOptions
from .schema import (
    FieldDescriptor,
    Kind,
    RecordDescriptor,
    TypeDescriptor,
    describe_record,
    is_record_type,
    new_record,
)

logger = logging.getLogger(__name__)

Path = Tuple[str, ...]


class Binder:
    """
    Binds records from a lookup namespace.

    A Binder holds the options and the lookup; it keeps no state between
    calls, so one instance can bind any number of records.
    """

    def __init__(
        self,
        options: Optional[BindOptions] = None,
        lookup: Optional[LookupSource] = None,
    ):
        """
        Initialize binder.

        Args:
            options: Binding options (defaults to BindOptions())
            lookup: Lookup function or mapping (defaults to os.environ)
        """
        self.options = options or BindOptions()
        self.lookup = as_lookup(lookup)

    def bind(self, target: Any) -> Any:
        """
        Bind a record.

        Args:
            target: Record instance (bound in place) or record class
                (a zero valued instance is allocated)

        Returns:
            The bound record instance

        Raises:
            EnvConfigError: On the first field that cannot be bound
        """
        instance = self._resolve_root(target)
        record = describe_record(type(instance))
        self._bind_record(instance, record, (), self.options.all_optional)
        return instance

    def _resolve_root(self, target: Any) -> Any:
        if isinstance(target, type):
            if not is_record_type(target):
                raise InvalidValueKindError()
            if describe_record(target).frozen:
                raise NotAPointerError(f"record {target.__name__} is frozen")
            return new_record(target)

        if is_record_type(type(target)):
            if describe_record(type(target)).frozen:
                raise NotAPointerError(f"record {type(target).__name__} is frozen")
            return target

        if isinstance(target, (list, dict, set, bytearray)):
            raise InvalidValueKindError()
        raise NotAPointerError()

    def _bind_record(
        self,
        instance: Any,
        record: RecordDescriptor,
        path: Path,
        optional: bool,
    ) -> bool:
        """Bind every field of a record; True if any value was written."""
        wrote = False
        for fd in record.fields:
            if self._bind_field(instance, fd, path + (fd.name,), optional):
                wrote = True
        return wrote

    def _bind_field(
        self,
        instance: Any,
        fd: FieldDescriptor,
        path: Path,
        inherited_optional: bool,
    ) -> bool:
        field_path = ".".join(path)
        directives = fd.directives

        if not fd.exported:
            if directives.skip or self.options.allow_unexported:
                logger.debug(f"Ignoring unexported field {field_path}")
                return False
            raise UnexportedFieldError(field_path)

        if directives.skip:
            logger.debug(f"Skipping field {field_path}")
            return False

        unsupported = fd.type.unsupported_kind()
        if unsupported is not None:
            raise UnsupportedKindError(unsupported)

        optional = directives.optional or inherited_optional

        if fd.type.target().kind is Kind.RECORD:
            if directives.default is not None:
                raise InvalidDirectiveError(
                    field_path, "default is not supported on record fields"
                )
            if directives.custom_name is not None:
                raise InvalidDirectiveError(
                    field_path, "custom name is not supported on record fields"
                )
            return self._bind_nested(instance, fd, path, optional)

        keys = resolve_keys(path, directives.custom_name, self.options.prefix)
        value, key = self._lookup_first(keys)

        if value is None:
            if directives.optional:
                logger.debug(f"Optional field {field_path} not set")
                return False
            if directives.default is not None:
                logger.debug(f"Using default for {field_path}")
                value = directives.default
            elif optional:
                logger.debug(f"Optional field {field_path} not set")
                return False
            else:
                raise KeysNotFoundError(keys)
        else:
            logger.debug(f"Resolved {field_path} from {key}")

        setattr(instance, fd.name, self._convert(fd.type, value, field_path))
        return True

    def _bind_nested(
        self,
        instance: Any,
        fd: FieldDescriptor,
        path: Path,
        optional: bool,
    ) -> bool:
        """
        Recurse into a record-typed field.

        ``Optional[Record]`` fields are only assigned a fresh record when one
        of its descendants received a value.
        """
        target = fd.type.target()
        record = describe_record(target.py_type)
        if record.frozen:
            raise NotAPointerError(f"record {target.name} at {'.'.join(path)} is frozen")

        current = getattr(instance, fd.name, None)
        child = current if current is not None else new_record(target.py_type)

        wrote = self._bind_record(child, record, path, optional)

        if current is None and (wrote or fd.type.kind is not Kind.POINTER):
            setattr(instance, fd.name, child)
        return wrote

    def _lookup_first(self, keys: Sequence[str]) -> Tuple[Optional[str], Optional[str]]:
        """Return the first non-empty value and the key it came from."""
        for key in keys:
            value, found = self.lookup(key)
            if found and value != "":
                return value, key
        return None, None

    def _convert(self, desc: TypeDescriptor, raw: str, field_path: str) -> Any:
        """Convert a raw string according to a type descriptor."""
        kind = desc.kind

        if kind is Kind.POINTER:
            return self._convert(desc.elem, raw, field_path)

        if kind is Kind.LIST:
            records = desc.elem.target().kind is Kind.RECORD
            items = [
                self._convert(desc.elem, token, field_path)
                for token in convert.split_list(raw, records=records)
            ]
            return desc.py_type(items)

        if kind is Kind.RECORD:
            return self._convert_record(desc, raw, field_path)

        if kind is Kind.UNSUPPORTED:
            raise UnsupportedKindError(desc.name)

        try:
            if kind is Kind.PARSER:
                return desc.py_type.unmarshal(raw)
            if kind is Kind.BOOL:
                return convert.parse_bool(raw)
            if kind is Kind.INT:
                return convert.parse_int(raw, desc.int_bits)
            if kind is Kind.FLOAT:
                return convert.parse_float(raw, desc.float_bits)
            if kind is Kind.STRING:
                return raw
            if kind is Kind.BYTES:
                return convert.parse_bytes(raw)
            if kind is Kind.DURATION:
                return convert.parse_duration(raw)
            if kind is Kind.ENUM:
                return convert.parse_enum(raw, desc.py_type)
        except EnvConfigError:
            raise
        except Exception as e:
            raise ConversionError(field_path, raw, str(e) or type(e).__name__) from e

        raise UnsupportedKindError(desc.name)

    def _convert_record(self, desc: TypeDescriptor, raw: str, field_path: str) -> Any:
        """Build a list element record from positional comma separated values."""
        fields = describe_record(desc.py_type).positional_fields()
        try:
            tokens = convert.split_record(raw, len(fields))
        except ValueError as e:
            raise ConversionError(field_path, raw, str(e)) from e

        values = {
            fd.name: self._convert(fd.type, token, f"{field_path}.{fd.name}")
            for fd, token in zip(fields, tokens)
        }
        return new_record(desc.py_type, values)


def bind(
    target: Any,
    *,
    lookup: Optional[LookupSource] = None,
    options: Optional[BindOptions] = None,
) -> Any:
    """
    Bind a record from the environment.

    Args:
        target: Record instance or record class
        lookup: Lookup function or mapping (defaults to os.environ)
        options: Binding options

    Returns:
        The bound record instance

    Example:
        >>> config = bind(Config, lookup={"NAME": "foobar", "LOG_PATH": "/tmp"})
        >>> config.log.path
        '/tmp'
    """
    return Binder(options=options, lookup=lookup).bind(target)


def bind_with_prefix(
    target: Any,
    prefix: str,
    *,
    lookup: Optional[LookupSource] = None,
) -> Any:
    """Bind a record, prepending ``prefix + "_"`` to every lookup key."""
    return Binder(options=BindOptions(prefix=prefix), lookup=lookup).bind(target)


def bind_with_options(
    target: Any,
    options: BindOptions,
    *,
    lookup: Optional[LookupSource] = None,
) -> Any:
    """Bind a record with explicit options."""
    return Binder(options=options, lookup=lookup).bind(target)
