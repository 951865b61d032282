"""
Binding options.

Uses Pydantic for validation, like the other configuration sections.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .keys import normalize_prefix


class BindOptions(BaseModel):
    """Options controlling a bind call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    prefix: Optional[str] = Field(
        default=None,
        description="Prefix prepended (with '_') to every lookup key"
    )

    all_optional: bool = Field(
        default=False,
        description="Treat every field as optional unless it declares a default"
    )

    allow_unexported: bool = Field(
        default=False,
        description="Ignore private (underscore) fields instead of failing"
    )

    @field_validator("prefix")
    @classmethod
    def normalize(cls, v):
        """Normalize blank prefixes and trailing separators."""
        return normalize_prefix(v)
