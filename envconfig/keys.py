"""
Lookup key derivation.

A field at path ``("log", "path")`` is looked up as ``LOG_PATH`` and then
``log_path``. A prefix is prepended to both and replaces the unprefixed
forms. A custom name is used verbatim, with the prefix if there is one.
"""

from typing import List, Optional, Sequence

SEPARATOR = "_"


def normalize_prefix(prefix: Optional[str]) -> Optional[str]:
    """Strip whitespace and trailing separators; blank prefixes become None."""
    if prefix is None:
        return None
    prefix = prefix.strip().rstrip(SEPARATOR)
    return prefix or None


def resolve_keys(
    path: Sequence[str],
    custom_name: Optional[str] = None,
    prefix: Optional[str] = None,
) -> List[str]:
    """
    Compute candidate keys for a field, in priority order.

    Args:
        path: Field names from the root record down to the field
        custom_name: Verbatim key from a directive
        prefix: Global prefix

    Returns:
        Ordered candidate keys without duplicates
    """
    prefix = normalize_prefix(prefix)

    if custom_name:
        if prefix:
            return [f"{prefix}{SEPARATOR}{custom_name}"]
        return [custom_name]

    segments = list(path)
    if prefix:
        segments.insert(0, prefix)
    base = SEPARATOR.join(segments)

    keys: List[str] = []
    for key in (base.upper(), base.lower()):
        if key not in keys:
            keys.append(key)
    return keys
