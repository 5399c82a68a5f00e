#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Top-level options for a single comparison call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from recdiff.constants import DEFAULT_IGNORE_ORDER, DEFAULT_LABEL_A, DEFAULT_LABEL_B
from recdiff.exceptions import ValidationError
from recdiff.options.base import CloneFrozenMixin, require_bool
from recdiff.options.canonical import CanonicalizationOptions
from recdiff.options.xml import XmlRecordOptions


@dataclass(frozen=True)
class CompareOptions(CloneFrozenMixin):
    """Everything :func:`recdiff.compare.compare_texts` needs besides the texts.

    Parameters
    ----------
    ignore_order : bool, default False
        Compare as multisets (order-insensitive) instead of a sequence diff.
    line : CanonicalizationOptions
        Line canonicalization rules for order-insensitive comparison.
    xml : XmlRecordOptions
        Record flattening rules used when both inputs look like XML.
    label_a, label_b : str
        Names used in unified diff headers.

    Examples
    --------
    >>> opts = CompareOptions(ignore_order=True)
    >>> opts = opts.create_updated(line=opts.line.create_updated(case_sensitive=False))

    """

    ignore_order: bool = field(
        default=DEFAULT_IGNORE_ORDER,
        metadata={"help": "Compare as unordered multisets of lines or XML records", "importance": "core"},
    )
    line: CanonicalizationOptions = field(
        default_factory=CanonicalizationOptions,
        metadata={"help": "Line canonicalization options", "importance": "core"},
    )
    xml: XmlRecordOptions = field(
        default_factory=XmlRecordOptions,
        metadata={"help": "XML record flattening options", "importance": "core"},
    )
    label_a: str = field(default=DEFAULT_LABEL_A, metadata={"help": "Label for the first input"})
    label_b: str = field(default=DEFAULT_LABEL_B, metadata={"help": "Label for the second input"})

    def __post_init__(self) -> None:
        """Validate nested option types."""
        require_bool("CompareOptions", "ignore_order", self.ignore_order)
        if not isinstance(self.line, CanonicalizationOptions):
            raise ValidationError(
                "CompareOptions.line must be CanonicalizationOptions", parameter_name="line", parameter_value=self.line
            )
        if not isinstance(self.xml, XmlRecordOptions):
            raise ValidationError(
                "CompareOptions.xml must be XmlRecordOptions", parameter_name="xml", parameter_value=self.xml
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompareOptions":
        """Build options from a flat or nested configuration mapping.

        Nested ``line`` and ``xml`` tables are accepted, as are their fields
        at the top level (``trim``, ``record_selector`` ...). Nested values
        win over flat ones.

        Parameters
        ----------
        data : Mapping[str, Any]
            Configuration, typically loaded from a TOML/YAML/JSON file

        Returns
        -------
        CompareOptions
            Validated options

        Raises
        ------
        ValidationError
            If a key is unknown or a value has the wrong type

        """
        line_keys = set(CanonicalizationOptions.field_names())
        xml_keys = set(XmlRecordOptions.field_names())

        top: dict[str, Any] = {}
        line_data: dict[str, Any] = {}
        xml_data: dict[str, Any] = {}

        for key, value in data.items():
            name = key.replace("-", "_")
            if name in ("line", "xml"):
                if not isinstance(value, Mapping):
                    raise ValidationError(
                        f"'{key}' must be a table of options", parameter_name=key, parameter_value=value
                    )
                continue
            if name in line_keys:
                line_data[name] = value
            elif name in xml_keys:
                xml_data[name] = value
            else:
                top[key] = value

        line_data.update(data.get("line", {}))
        xml_data.update(data.get("xml", {}))

        base = cls.from_mapping(top)
        return base.create_updated(
            line=CanonicalizationOptions.from_mapping(line_data),
            xml=XmlRecordOptions.from_mapping(xml_data),
        )
