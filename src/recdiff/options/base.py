#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for comparison options.

This module defines the foundation shared by every options dataclass in
recdiff: immutability and cloning with updated values.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from recdiff.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the dataclass field names of this options class."""
        return tuple(f.name for f in fields(cls))  # type: ignore[arg-type]

    @classmethod
    def field_help(cls, name: str) -> str:
        """Return the ``help`` metadata of field ``name`` (empty if absent)."""
        for f in fields(cls):  # type: ignore[arg-type]
            if f.name == name:
                return str(f.metadata.get("help", ""))
        raise KeyError(name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build an instance from a mapping of field values.

        Keys may use ``snake_case`` or ``kebab-case``. Unknown keys raise
        ValidationError so typos in config files do not pass silently.
        """
        known = set(cls.field_names())
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown option '{key}' for {cls.__name__}",
                    parameter_name=key,
                    parameter_value=value,
                )
            kwargs[name] = value
        return cls(**kwargs)


def require_bool(owner: str, name: str, value: Any) -> None:
    """Raise ValidationError unless ``value`` is a real bool."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{owner}.{name} must be a bool, got {type(value).__name__}",
            parameter_name=name,
            parameter_value=value,
        )
