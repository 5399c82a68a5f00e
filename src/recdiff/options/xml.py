#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for XML record flattening."""

from __future__ import annotations

from dataclasses import dataclass, field

from recdiff.constants import (
    DEFAULT_COLLAPSE_INNER_WHITESPACE,
    DEFAULT_IGNORE_EMPTY_TEXT,
    DEFAULT_INCLUDE_ATTRIBUTES,
    DEFAULT_INCLUDE_TEXT,
    DEFAULT_RECORD_SELECTOR,
)
from recdiff.exceptions import ValidationError
from recdiff.options.base import CloneFrozenMixin, require_bool
from recdiff.selector import RecordSelector, parse_selector


@dataclass(frozen=True)
class XmlRecordOptions(CloneFrozenMixin):
    """Configuration options for turning XML records into canonical strings.

    Parameters
    ----------
    record_selector : str, default "Incident"
        Selector identifying the record elements (see :mod:`recdiff.selector`).
        An empty or blank selector means the default.
    include_text : bool, default True
        Emit ``/#text`` entries for text content.
    include_attributes : bool, default True
        Emit ``/@name`` entries for attributes. The record header always
        lists the record's own attributes.
    ignore_empty_text : bool, default True
        Skip text nodes that are empty or whitespace-only.
    collapse_inner_whitespace : bool, default True
        Collapse whitespace runs inside text to a single space.

    """

    record_selector: str = field(
        default=DEFAULT_RECORD_SELECTOR,
        metadata={"help": "Selector for record elements, e.g. 'Incident' or 'row.open'", "importance": "core"},
    )
    include_text: bool = field(
        default=DEFAULT_INCLUDE_TEXT,
        metadata={"help": "Include text content in record strings", "importance": "advanced"},
    )
    include_attributes: bool = field(
        default=DEFAULT_INCLUDE_ATTRIBUTES,
        metadata={"help": "Include attributes in record strings", "importance": "advanced"},
    )
    ignore_empty_text: bool = field(
        default=DEFAULT_IGNORE_EMPTY_TEXT,
        metadata={"help": "Skip whitespace-only text nodes", "importance": "advanced"},
    )
    collapse_inner_whitespace: bool = field(
        default=DEFAULT_COLLAPSE_INNER_WHITESPACE,
        metadata={"help": "Collapse whitespace runs inside text values", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field types and parse the record selector.

        Raises
        ------
        ValidationError
            If a flag is not a bool or the selector is not a string
        SelectorError
            If the selector cannot be parsed

        """
        if not isinstance(self.record_selector, str):
            raise ValidationError(
                f"XmlRecordOptions.record_selector must be a string, got {type(self.record_selector).__name__}",
                parameter_name="record_selector",
                parameter_value=self.record_selector,
            )
        if not self.record_selector.strip():
            object.__setattr__(self, "record_selector", DEFAULT_RECORD_SELECTOR)
        for name in ("include_text", "include_attributes", "ignore_empty_text", "collapse_inner_whitespace"):
            require_bool("XmlRecordOptions", name, getattr(self, name))
        object.__setattr__(self, "_selector", parse_selector(self.record_selector))

    @property
    def selector(self) -> RecordSelector:
        """Parsed form of ``record_selector``."""
        return self._selector  # type: ignore[attr-defined,no-any-return]
