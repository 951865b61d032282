"""
Runtime type descriptors for envconfig records.

A record is a dataclass or a pydantic BaseModel. ``describe_record`` walks
its fields once and caches the result by class, so repeated binds of the same
shape skip introspection.
"""

import dataclasses
import types
import typing
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from .directives import Directives, parse_directives
from .types import TAG_KEY, FloatBits, IntBits, Tag, Unmarshaler


class Kind(str, Enum):
    """Conversion rule selected for a type."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    DURATION = "duration"
    ENUM = "enum"
    LIST = "list"
    RECORD = "record"
    POINTER = "pointer"
    PARSER = "parser"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class TypeDescriptor:
    """Kind of a type plus whatever the converter needs for it."""

    kind: Kind
    py_type: Any = None
    name: str = ""
    elem: Optional["TypeDescriptor"] = None
    int_bits: IntBits = IntBits()
    float_bits: FloatBits = FloatBits()

    def unsupported_kind(self) -> Optional[str]:
        """
        Name of the first unsupported kind along the list/pointer chain.

        Records reached through a list are converted positionally, so their
        fields are checked as well.
        """
        return _find_unsupported(self, False, set())

    def target(self) -> "TypeDescriptor":
        """Strip pointer wrappers."""
        desc = self
        while desc.kind is Kind.POINTER:
            desc = desc.elem
        return desc


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a record."""

    name: str
    type: TypeDescriptor
    directives: Directives
    exported: bool = True
    init: bool = True
    has_default: bool = False


@dataclass(frozen=True)
class RecordDescriptor:
    """Ordered field descriptors of a record class."""

    record_type: type
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    frozen: bool = False

    def positional_fields(self) -> Tuple[FieldDescriptor, ...]:
        """Fields filled from a list element, skipped and unexported ones left out."""
        return tuple(fd for fd in self.fields if fd.exported and not fd.directives.skip)


def _find_unsupported(desc: Optional[TypeDescriptor], in_list: bool, seen: set) -> Optional[str]:
    while desc is not None:
        if desc.kind is Kind.UNSUPPORTED:
            return desc.name
        if desc.kind is Kind.RECORD and in_list:
            if desc.py_type in seen:
                return None
            seen.add(desc.py_type)
            for fd in describe_record(desc.py_type).positional_fields():
                name = _find_unsupported(fd.type, True, seen)
                if name is not None:
                    return name
            return None
        if desc.kind not in (Kind.LIST, Kind.POINTER):
            return None
        if desc.kind is Kind.LIST:
            in_list = True
        desc = desc.elem
    return None


def is_record_type(tp: Any) -> bool:
    """True for dataclass and pydantic model classes."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_parser_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Unmarshaler)


_UNION_TYPES = (Union, types.UnionType)
_ANY = TypeDescriptor(kind=Kind.UNSUPPORTED, py_type=Any, name="interface")


def _kind_name(tp: Any) -> str:
    target = typing.get_origin(tp) or tp
    if target is dict:
        return "map"
    return getattr(target, "__name__", None) or str(tp)


def describe_type(tp: Any) -> TypeDescriptor:
    """
    Build a descriptor for an annotation.

    Annotated metadata supplies integer and float widths; Tag markers are
    ignored here and read by ``describe_record``.
    """
    int_bits = IntBits()
    float_bits = FloatBits()
    if typing.get_origin(tp) is Annotated:
        for meta in tp.__metadata__:
            if isinstance(meta, IntBits):
                int_bits = meta
            elif isinstance(meta, FloatBits):
                float_bits = meta
        tp = tp.__origin__

    if tp is Any or tp is object:
        return _ANY

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin in _UNION_TYPES:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(args) == 2:
            return TypeDescriptor(
                kind=Kind.POINTER,
                py_type=tp,
                name="pointer",
                elem=describe_type(members[0]),
            )
        return TypeDescriptor(kind=Kind.UNSUPPORTED, py_type=tp, name="union")

    if origin is list:
        elem = describe_type(args[0]) if args else _ANY
        return TypeDescriptor(kind=Kind.LIST, py_type=list, name="list", elem=elem)

    if origin is not None or not isinstance(tp, type):
        return TypeDescriptor(kind=Kind.UNSUPPORTED, py_type=tp, name=_kind_name(tp))

    # A parser takes precedence over every structural rule
    if is_parser_type(tp):
        return TypeDescriptor(kind=Kind.PARSER, py_type=tp, name=tp.__name__)

    if tp is bool:
        return TypeDescriptor(kind=Kind.BOOL, py_type=bool, name="bool")
    if issubclass(tp, Enum):
        return TypeDescriptor(kind=Kind.ENUM, py_type=tp, name=tp.__name__)
    if tp is int:
        return TypeDescriptor(kind=Kind.INT, py_type=int, name="int", int_bits=int_bits)
    if tp is float:
        return TypeDescriptor(kind=Kind.FLOAT, py_type=float, name="float", float_bits=float_bits)
    if tp is str:
        return TypeDescriptor(kind=Kind.STRING, py_type=str, name="string")
    if tp is bytes:
        return TypeDescriptor(kind=Kind.BYTES, py_type=bytes, name="bytes")
    if tp is timedelta:
        return TypeDescriptor(kind=Kind.DURATION, py_type=timedelta, name="duration")

    if issubclass(tp, list):
        return TypeDescriptor(
            kind=Kind.LIST, py_type=tp, name="list", elem=_list_subclass_element(tp)
        )

    if is_record_type(tp):
        return TypeDescriptor(kind=Kind.RECORD, py_type=tp, name=tp.__name__)

    return TypeDescriptor(kind=Kind.UNSUPPORTED, py_type=tp, name=_kind_name(tp))


def _list_subclass_element(tp: Any) -> TypeDescriptor:
    """Element descriptor for ``class Hosts(List[str])`` style subclasses."""
    for base in getattr(tp, "__orig_bases__", ()):
        if typing.get_origin(base) is list and typing.get_args(base):
            return describe_type(typing.get_args(base)[0])
    # A bare ``list`` has no declared element type
    return _ANY


def _dataclass_fields(cls: type) -> List[FieldDescriptor]:
    hints = typing.get_type_hints(cls, include_extras=True)
    result = []
    for f in dataclasses.fields(cls):
        annotation = hints.get(f.name, f.type)
        tag = _annotated_tag(annotation)
        if tag is None:
            tag = f.metadata.get(TAG_KEY)
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        result.append(FieldDescriptor(
            name=f.name,
            type=describe_type(annotation),
            directives=parse_directives(tag, f"{cls.__name__}.{f.name}"),
            exported=not f.name.startswith("_"),
            init=f.init,
            has_default=has_default,
        ))
    return result


def _model_fields(cls: type) -> List[FieldDescriptor]:
    result = []
    for name, info in cls.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        tag = _annotated_tag(annotation)
        if tag is None and isinstance(info.json_schema_extra, dict):
            tag = info.json_schema_extra.get(TAG_KEY)
        result.append(FieldDescriptor(
            name=name,
            type=describe_type(annotation),
            directives=parse_directives(tag, f"{cls.__name__}.{name}"),
            exported=not name.startswith("_"),
            has_default=not info.is_required(),
        ))
    return result


def _annotated_tag(annotation: Any) -> Optional[str]:
    if typing.get_origin(annotation) is not Annotated:
        return None
    for meta in annotation.__metadata__:
        if isinstance(meta, Tag):
            return meta.value
    return None


@lru_cache(maxsize=None)
def describe_record(cls: type) -> RecordDescriptor:
    """
    Describe a record class.

    Args:
        cls: Dataclass or pydantic model class

    Returns:
        Cached RecordDescriptor

    Raises:
        TypeError: If cls is not a record class
    """
    if dataclasses.is_dataclass(cls) and isinstance(cls, type):
        return RecordDescriptor(
            record_type=cls,
            fields=tuple(_dataclass_fields(cls)),
            frozen=cls.__dataclass_params__.frozen,
        )
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return RecordDescriptor(
            record_type=cls,
            fields=tuple(_model_fields(cls)),
            frozen=bool(cls.model_config.get("frozen")),
        )
    raise TypeError(f"{cls!r} is not a dataclass or pydantic model")


def zero_value(desc: TypeDescriptor) -> Any:
    """Zero value used for required fields of freshly allocated records."""
    if desc.kind is Kind.BOOL:
        return False
    if desc.kind is Kind.INT:
        return 0
    if desc.kind is Kind.FLOAT:
        return 0.0
    if desc.kind is Kind.STRING:
        return ""
    if desc.kind is Kind.BYTES:
        return b""
    if desc.kind is Kind.DURATION:
        return timedelta(0)
    if desc.kind is Kind.LIST:
        return desc.py_type()
    if desc.kind is Kind.RECORD:
        return new_record(desc.py_type)
    return None


def new_record(cls: type, values: Optional[Dict[str, Any]] = None) -> Any:
    """
    Allocate a record.

    Args:
        cls: Record class
        values: Field values to construct with; required fields missing from
            it get their type's zero value, other fields keep their declared
            defaults

    Returns:
        New record instance
    """
    record = describe_record(cls)
    values = dict(values or {})
    late = {}
    for fd in record.fields:
        if not fd.init:
            if fd.name in values:
                late[fd.name] = values.pop(fd.name)
        elif fd.name not in values and not fd.has_default:
            values[fd.name] = zero_value(fd.type)

    if issubclass(cls, BaseModel):
        instance = cls.model_construct(**values)
    else:
        instance = cls(**values)
    for name, value in late.items():
        setattr(instance, name, value)
    return instance
