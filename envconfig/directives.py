"""
Field directive parsing.

A directive string is a comma separated list of tokens:

- ``-``                 skip the field entirely
- ``optional``          a missing or empty value leaves the field untouched
- ``default=<literal>`` literal converted when no value is found
- anything else         custom key name, looked up verbatim
"""

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidDirectiveError

SKIP = "-"
OPTIONAL = "optional"
DEFAULT_PREFIX = "default="


@dataclass(frozen=True)
class Directives:
    """Parsed per-field binding policy."""

    skip: bool = False
    optional: bool = False
    default: Optional[str] = None
    custom_name: Optional[str] = None


NO_DIRECTIVES = Directives()


def parse_directives(tag: Optional[str], field: str = "") -> Directives:
    """
    Parse a directive string.

    Args:
        tag: Raw directive string, None or empty for no directives
        field: Field path used in error messages

    Returns:
        Directives instance

    Raises:
        InvalidDirectiveError: If more than one custom name is declared
    """
    if not tag:
        return NO_DIRECTIVES

    skip = False
    optional = False
    default = None
    custom_name = None

    for token in tag.split(","):
        token = token.strip()
        if not token:
            continue
        if token == SKIP:
            skip = True
        elif token == OPTIONAL:
            optional = True
        elif token.startswith(DEFAULT_PREFIX):
            default = token[len(DEFAULT_PREFIX):]
        elif custom_name is not None:
            raise InvalidDirectiveError(
                field, f"multiple custom names ({custom_name}, {token})"
            )
        else:
            custom_name = token

    return Directives(
        skip=skip,
        optional=optional,
        default=default,
        custom_name=custom_name,
    )
