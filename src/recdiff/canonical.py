#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/canonical.py
"""Line splitting and row canonicalization.

Canonicalization is applied in a fixed order:

1. normalize line terminators (``\\r\\n`` and ``\\r`` become ``\\n``)
2. strip trailing spaces/tabs (``trim``)
3. collapse interior runs of spaces/tabs (``collapse_whitespace``)
4. lower-case (``case_sensitive=False``)

Leading whitespace is never touched, so indentation stays significant.
"""

from __future__ import annotations

import re
from typing import Optional

from recdiff.options.canonical import CanonicalizationOptions

_NEWLINE_RE = re.compile(r"\r\n?")
_TRAILING_HSPACE_RE = re.compile(r"[ \t]+\Z")
_LEADING_HSPACE_RE = re.compile(r"[ \t]*")
_HSPACE_RUN_RE = re.compile(r"[ \t]+")


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` to ``\\n``."""
    return _NEWLINE_RE.sub("\n", text)


def split_lines(text: str) -> list[str]:
    """Split text on any newline variant.

    A single trailing empty element produced by a terminal newline is
    dropped, so ``"a\\nb\\n"`` and ``"a\\nb"`` yield the same lines and the
    empty string yields no lines at all.

    Parameters
    ----------
    text : str
        Raw input text

    Returns
    -------
    list of str
        Lines without terminators

    """
    lines = normalize_newlines(text).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def canonicalize(line: str, options: Optional[CanonicalizationOptions] = None) -> str:
    """Normalize a single line according to ``options``.

    Parameters
    ----------
    line : str
        Line to canonicalize
    options : CanonicalizationOptions, optional
        Rules to apply; defaults to ``CanonicalizationOptions()``

    Returns
    -------
    str
        Canonical form of the line. The function is idempotent.

    """
    opts = options or CanonicalizationOptions()

    result = normalize_newlines(line)

    if opts.trim:
        result = _TRAILING_HSPACE_RE.sub("", result)

    if opts.collapse_whitespace:
        leading = _LEADING_HSPACE_RE.match(result).group(0)  # type: ignore[union-attr]
        result = leading + _HSPACE_RUN_RE.sub(" ", result[len(leading) :])

    if not opts.case_sensitive:
        result = result.lower()

    return result
