#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/positional.py
"""Index-by-index line comparison.

This is the simplest comparison mode: line *n* of A is compared with line
*n* of B, with no alignment. Inserting a single line near the top of a file
therefore marks everything after it as changed, which is exactly what the
mode is for (spotting position shifts in fixed-layout records).
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import zip_longest
from typing import Sequence

from recdiff.constants import PositionalTag

_PREFIX: dict[str, str] = {"unchanged": "  ", "added": "+ ", "removed": "- "}


@dataclass(frozen=True, slots=True)
class PositionalLine:
    tag: PositionalTag
    text: str
    index: int

    def render(self) -> str:
        return f"{_PREFIX[self.tag]}{self.text}"


def positional_diff(a: Sequence[str], b: Sequence[str]) -> list[PositionalLine]:
    """Pair lines by index and tag the differences.

    Equal pairs are ``unchanged``. For an unequal pair, a non-empty A line is
    emitted as ``removed`` followed by a non-empty B line as ``added``;
    missing or empty lines on either side produce no entry.

    Parameters
    ----------
    a, b : sequence of str
        Lines to compare

    Returns
    -------
    list of PositionalLine
        Tagged lines; ``index`` is the 0-based position of the pair

    """
    result: list[PositionalLine] = []
    for index, (left, right) in enumerate(zip_longest(a, b, fillvalue="")):
        if left == right:
            result.append(PositionalLine("unchanged", left, index))
            continue
        if left:
            result.append(PositionalLine("removed", left, index))
        if right:
            result.append(PositionalLine("added", right, index))
    return result
