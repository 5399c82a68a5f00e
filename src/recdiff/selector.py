#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/selector.py
"""Record selectors for picking comparison units out of an XML tree.

A record selector is a comma-separated group of simple selectors. Each
simple selector combines an optional tag name (or ``*``) with any number of
``.class``, ``#id``, ``[attr]`` and ``[attr=value]`` filters, for example
``Incident``, ``.record``, ``row[kind="open"]`` or ``Incident, Alarm``.
Descendant and child combinators are not supported.

Tag and attribute names are matched against local names, so a namespaced
``{urn:x}Incident`` element is selected by ``Incident``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator

from recdiff.exceptions import SelectorError

_TAG_RE = re.compile(r"\*|[A-Za-z_][\w\-:]*")
_CLASS_RE = re.compile(r"\.([\w\-]+)")
_ID_RE = re.compile(r"#([\w\-]+)")
_ATTR_RE = re.compile(
    r"""\[\s*([A-Za-z_][\w\-:]*)\s*(?:=\s*(?:"([^"]*)"|'([^']*)'|([^\]\s"']+))\s*)?\]"""
)


def local_name(name: str) -> str:
    """Strip a ``{namespace}`` prefix from an ElementTree tag or attribute name."""
    if name.startswith("{") and "}" in name:
        return name.split("}", 1)[1]
    return name


@dataclass(frozen=True)
class SimpleSelector:
    """One compound selector: tag plus class/id/attribute filters."""

    tag: str | None = None
    classes: tuple[str, ...] = ()
    element_id: str | None = None
    attributes: tuple[tuple[str, str | None], ...] = ()

    def matches(self, element: Any) -> bool:
        """Return True if ``element`` satisfies every filter of this selector."""
        if self.tag is not None and self.tag != "*" and local_name(element.tag) != self.tag:
            return False

        attrs = {local_name(key): value for key, value in element.attrib.items()}

        if self.classes:
            tokens = set(attrs.get("class", "").split())
            if not all(cls in tokens for cls in self.classes):
                return False

        if self.element_id is not None and attrs.get("id") != self.element_id:
            return False

        for name, expected in self.attributes:
            if name not in attrs:
                return False
            if expected is not None and attrs[name] != expected:
                return False

        return True


@dataclass(frozen=True)
class RecordSelector:
    """A parsed selector group; an element matches if any member matches."""

    source: str
    alternatives: tuple[SimpleSelector, ...] = field(default_factory=tuple)

    def matches(self, element: Any) -> bool:
        """Return True if any alternative matches ``element``."""
        return any(alt.matches(element) for alt in self.alternatives)

    def select(self, root: Any) -> Iterator[Any]:
        """Yield outermost matching elements under ``root`` in document order.

        ``root`` itself is a candidate. Matches nested inside another match
        are not yielded; they belong to the enclosing record.
        """
        if self.matches(root):
            yield root
            return
        for child in root:
            yield from self.select(child)


def _parse_simple(text: str, source: str) -> SimpleSelector:
    pos = 0
    tag = None
    classes: list[str] = []
    element_id = None
    attributes: list[tuple[str, str | None]] = []

    match = _TAG_RE.match(text, pos)
    if match:
        tag = match.group(0)
        pos = match.end()

    while pos < len(text):
        if match := _CLASS_RE.match(text, pos):
            classes.append(match.group(1))
        elif match := _ID_RE.match(text, pos):
            if element_id is not None:
                raise SelectorError(source, f"Record selector {source!r} has more than one #id")
            element_id = match.group(1)
        elif match := _ATTR_RE.match(text, pos):
            name, dq, sq, bare = match.groups()
            value = next((v for v in (dq, sq, bare) if v is not None), None)
            attributes.append((name, value))
        else:
            raise SelectorError(source, f"Unexpected {text[pos:]!r} in record selector {source!r}")
        pos = match.end()

    if tag is None and not (classes or element_id or attributes):
        raise SelectorError(source)

    return SimpleSelector(
        tag=tag,
        classes=tuple(classes),
        element_id=element_id,
        attributes=tuple(attributes),
    )


def parse_selector(selector: str) -> RecordSelector:
    """Parse a record selector string.

    Parameters
    ----------
    selector : str
        Selector text such as ``"Incident"`` or ``"row.open, row.closed"``

    Returns
    -------
    RecordSelector
        Parsed selector group

    Raises
    ------
    SelectorError
        If the selector is empty or contains unsupported syntax

    """
    parts = [part.strip() for part in selector.split(",")]
    if not parts or any(not part for part in parts):
        raise SelectorError(selector)
    return RecordSelector(source=selector, alternatives=tuple(_parse_simple(part, selector) for part in parts))
