#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/records.py
"""Flatten XML records into canonical, order-insensitive strings.

Each element matched by the record selector becomes one string::

    <Incident id="7" kind="fire">|/Incident/@id="7"|/Incident/@kind="fire"|/Incident/Unit/#text="E12"

The header lists the record's tag and attributes sorted by name. It is
followed by every attribute and non-empty text value reachable under the
record as ``path=value`` entries, sorted lexicographically and joined with
``|``. Values are JSON-quoted so embedded delimiters or quotes cannot make
two different records collide. Because entries are sorted, reordering
attributes or sibling elements does not change the string, while any
change to the multiset of (path, value) pairs does.

Parsing goes through ``defusedxml`` so entity-expansion and external-entity
documents are rejected rather than expanded.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from recdiff.constants import RECORD_ATTRIBUTE_PREFIX, RECORD_FIELD_DELIMITER, RECORD_TEXT_STEP
from recdiff.exceptions import ParsingError, RecdiffError, XmlParseError
from recdiff.options.xml import XmlRecordOptions
from recdiff.selector import local_name
from recdiff.utils.decorators import debug_timer, requires_dependencies

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def _quote(value: object) -> str:
    return json.dumps("" if value is None else str(value), ensure_ascii=False)


@requires_dependencies("xml-records", [("defusedxml", "defusedxml.ElementTree", ">=0.7.0")])
def parse_xml(xml_text: str) -> Element:
    """Parse an XML document.

    Parameters
    ----------
    xml_text : str
        Document text. A leading byte-order mark is ignored.

    Returns
    -------
    Element
        Root element of the parsed tree

    Raises
    ------
    XmlParseError
        If the document is malformed or uses forbidden DTD/entity constructs.
        Text that expat cannot encode (lone surrogates) is reported the same way.
        The message is the parser diagnostic with whitespace collapsed.
    DependencyError
        If ``defusedxml`` is not installed

    """
    import defusedxml.ElementTree as ET
    from defusedxml import DefusedXmlException

    text = (xml_text or "").lstrip("\ufeff")
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        message = _WHITESPACE_RE.sub(" ", str(e)).strip() or "XML parse error"
        raise XmlParseError(message, original_error=e) from e
    except DefusedXmlException as e:
        message = _WHITESPACE_RE.sub(" ", str(e)).strip() or "Forbidden XML construct"
        raise XmlParseError(message, original_error=e) from e
    except ValueError as e:
        # expat cannot encode lone surrogates
        raise XmlParseError(f"Cannot encode document text: {e}", original_error=e) from e


def _emit_text(text: Optional[str], path: str, out: list[str], options: XmlRecordOptions) -> None:
    if not options.include_text or text is None:
        return
    if options.ignore_empty_text and not text.strip():
        return
    if options.collapse_inner_whitespace:
        text = _WHITESPACE_RE.sub(" ", text)
    text = text.strip()
    if options.ignore_empty_text and not text:
        return
    out.append(f"{path}/{RECORD_TEXT_STEP}={_quote(text)}")


def _flatten_node(node: Element, path: str, out: list[str], options: XmlRecordOptions) -> None:
    if options.include_attributes:
        for name, value in sorted((local_name(k), v) for k, v in node.attrib.items()):
            out.append(f"{path}/{RECORD_ATTRIBUTE_PREFIX}{name}={_quote(value)}")

    _emit_text(node.text, path, out, options)

    for child in node:
        # comments and processing instructions only contribute their tail
        if isinstance(child.tag, str):
            _flatten_node(child, f"{path}/{local_name(child.tag)}", out, options)
        _emit_text(child.tail, path, out, options)


def flatten_record(record: Element, options: Optional[XmlRecordOptions] = None) -> str:
    """Build the canonical string of a single record element.

    Parameters
    ----------
    record : Element
        The record element
    options : XmlRecordOptions, optional
        Flattening switches; defaults to ``XmlRecordOptions()``

    Returns
    -------
    str
        ``<Tag attrs>|entry|entry...``

    """
    opts = options or XmlRecordOptions()
    tag = local_name(record.tag)

    parts: list[str] = []
    _flatten_node(record, f"/{tag}", parts, opts)
    parts.sort()

    header_attrs = sorted(f"{local_name(k)}={_quote(v)}" for k, v in record.attrib.items())
    header = f"<{tag}{' ' + ' '.join(header_attrs) if header_attrs else ''}>"

    return header + RECORD_FIELD_DELIMITER + RECORD_FIELD_DELIMITER.join(parts)


def flatten_records(root: Element, options: Optional[XmlRecordOptions] = None) -> list[str]:
    """Flatten every record selected under ``root``, in document order.

    Records nested inside another selected record are not emitted on their
    own; their content is part of the enclosing record's string.
    """
    opts = options or XmlRecordOptions()
    return [flatten_record(record, opts) for record in opts.selector.select(root)]


def records_to_canonical_strings(xml_text: str, options: Optional[XmlRecordOptions] = None) -> list[str]:
    """Parse ``xml_text`` and flatten its records.

    Parameters
    ----------
    xml_text : str
        XML document
    options : XmlRecordOptions, optional
        Record selector and flattening switches

    Returns
    -------
    list of str
        One canonical string per record, in document order

    Raises
    ------
    XmlParseError
        If the document is malformed
    DependencyError
        If ``defusedxml`` is not installed
    ParsingError
        If the tree is too deeply nested to flatten

    """
    opts = options or XmlRecordOptions()
    root = parse_xml(xml_text)
    with debug_timer(logger, f"Flattening records ({opts.record_selector!r})"):
        try:
            records = flatten_records(root, opts)
        except RecursionError as e:
            raise ParsingError(
                "XML document is nested too deeply to flatten", parsing_stage="flattening", original_error=e
            ) from e
    logger.debug("Extracted %d record(s) matching %r", len(records), opts.record_selector)
    return records


@dataclass(frozen=True)
class RecordExtraction:
    """Fail-soft outcome of record extraction: records or the error."""

    records: Optional[list[str]] = None
    error: Optional[RecdiffError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def extract_records(xml_text: str, options: Optional[XmlRecordOptions] = None) -> RecordExtraction:
    """Like :func:`records_to_canonical_strings` but never raises library errors.

    Parse failures, a missing ``defusedxml`` and flattening failures are
    returned in ``RecordExtraction.error`` so the caller can fall back to
    line comparison.
    """
    try:
        return RecordExtraction(records=records_to_canonical_strings(xml_text, options))
    except RecdiffError as e:
        return RecordExtraction(error=e)
