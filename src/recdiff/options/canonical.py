#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for line canonicalization.

These options drive the order-insensitive line comparison. The
order-sensitive sequence diff never applies them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from recdiff.constants import DEFAULT_CASE_SENSITIVE, DEFAULT_COLLAPSE_WHITESPACE, DEFAULT_TRIM
from recdiff.options.base import CloneFrozenMixin, require_bool


@dataclass(frozen=True)
class CanonicalizationOptions(CloneFrozenMixin):
    """Rules applied to each line before it is counted in a bag.

    Parameters
    ----------
    trim : bool, default True
        Remove trailing spaces and tabs. Leading whitespace is always kept.
    collapse_whitespace : bool, default False
        Collapse runs of interior spaces and tabs to a single space.
    case_sensitive : bool, default True
        When False, lower-case the whole line.

    """

    trim: bool = field(
        default=DEFAULT_TRIM,
        metadata={"help": "Remove trailing spaces/tabs (leading indentation is kept)", "importance": "core"},
    )
    collapse_whitespace: bool = field(
        default=DEFAULT_COLLAPSE_WHITESPACE,
        metadata={"help": "Collapse interior runs of spaces/tabs to one space", "importance": "core"},
    )
    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={"help": "Compare lines case-sensitively", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate field types."""
        for name in ("trim", "collapse_whitespace", "case_sensitive"):
            require_bool("CanonicalizationOptions", name, getattr(self, name))
