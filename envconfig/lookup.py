"""
Namespace adapters.

The binder only ever calls ``lookup(key) -> (value, found)``. These helpers
adapt the process environment and plain mappings to that shape.
"""

import os
from typing import Callable, Mapping, Optional, Tuple, Union

Lookup = Callable[[str], Tuple[str, bool]]
LookupSource = Union[Lookup, Mapping[str, str]]


def environ_lookup(key: str) -> Tuple[str, bool]:
    """Look up a key in the process environment at call time."""
    value = os.environ.get(key)
    if value is None:
        return "", False
    return value, True


def mapping_lookup(mapping: Mapping[str, str]) -> Lookup:
    """
    Wrap a mapping as a lookup function.

    Example:
        >>> lookup = mapping_lookup({"NAME": "foobar"})
        >>> lookup("NAME")
        ('foobar', True)
    """

    def _lookup(key: str) -> Tuple[str, bool]:
        if key in mapping:
            return mapping[key], True
        return "", False

    return _lookup


def as_lookup(source: Optional[LookupSource]) -> Lookup:
    """Normalize a lookup argument; None means the process environment."""
    if source is None:
        return environ_lookup
    if isinstance(source, Mapping):
        return mapping_lookup(source)
    if callable(source):
        return source
    raise TypeError(
        f"lookup must be a callable or a mapping, got {type(source).__name__}"
    )
