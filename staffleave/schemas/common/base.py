"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = [
    "BaseSchema",
    "FrozenSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Entity snapshots handed to the engine inherit from this so that
    validation and enum handling behave the same everywhere.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances to retain full type information;
        # callers can still access `.value` if needed.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class FrozenSchema(BaseSchema):
    """Immutable schema for snapshots that must never change once built."""

    model_config = ConfigDict(frozen=True)
