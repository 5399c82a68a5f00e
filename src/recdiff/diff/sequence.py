#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/sequence.py
"""Order-sensitive line diff based on the longest common subsequence.

The differ works on raw lines: only line terminators are normalized and a
terminal newline is ignored (see :func:`recdiff.canonical.split_lines`).
Canonicalization options such as trimming or case folding are deliberately
not applied here.

Output is a single hunk carrying the full context of both inputs; hunks are
never split around context windows. Both the LCS table and the walk are
O(n*m) in the line counts, which suits human-edited text, not large files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from recdiff.constants import DEFAULT_LABEL_A, DEFAULT_LABEL_B, DiffLineTag
from recdiff.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

_PREFIX: dict[str, str] = {"context": " ", "added": "+", "removed": "-"}
_END = object()


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A line of a hunk tagged as context, added or removed."""

    tag: DiffLineTag
    text: str

    def render(self) -> str:
        return f"{_PREFIX[self.tag]}{self.text}"


@dataclass(slots=True)
class Hunk:
    """Contiguous block of a unified diff.

    ``start_a`` and ``start_b`` are 1-based line numbers of the first hunk
    line in each input.
    """

    start_a: int
    start_b: int
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def count_a(self) -> int:
        """Lines of A covered by the hunk (everything but pure additions)."""
        return sum(1 for line in self.lines if line.tag != "added")

    @property
    def count_b(self) -> int:
        """Lines of B covered by the hunk (everything but pure removals)."""
        return sum(1 for line in self.lines if line.tag != "removed")

    @property
    def old_lines(self) -> list[str]:
        return [line.text for line in self.lines if line.tag != "added"]

    @property
    def new_lines(self) -> list[str]:
        return [line.text for line in self.lines if line.tag != "removed"]

    def header(self) -> str:
        """Format the ``@@ -a,n +b,m @@`` line; an empty side starts at 0."""
        count_a = self.count_a
        count_b = self.count_b
        start_a = self.start_a if count_a else 0
        start_b = self.start_b if count_b else 0
        return f"@@ -{start_a},{count_a} +{start_b},{count_b} @@"


@dataclass
class UnifiedDiff:
    """A unified diff: file header plus hunks."""

    label_a: str = DEFAULT_LABEL_A
    label_b: str = DEFAULT_LABEL_B
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def header(self) -> list[str]:
        return [f"--- {self.label_a}", f"+++ {self.label_b}"]

    @property
    def has_changes(self) -> bool:
        return any(line.tag != "context" for hunk in self.hunks for line in hunk.lines)

    def iter_lines(self) -> Iterator[str]:
        """Yield the textual unified diff, header first.

        Nothing is yielded when there are no hunks.
        """
        if not self.hunks:
            return
        yield from self.header
        for hunk in self.hunks:
            yield hunk.header()
            for line in hunk.lines:
                yield line.render()

    def to_text(self) -> str:
        return "\n".join(self.iter_lines())

    def statistics(self) -> dict[str, int]:
        """Count added, deleted and context lines across all hunks."""
        added = deleted = context = 0
        for hunk in self.hunks:
            for line in hunk.lines:
                if line.tag == "added":
                    added += 1
                elif line.tag == "removed":
                    deleted += 1
                else:
                    context += 1
        return {
            "lines_added": added,
            "lines_deleted": deleted,
            "lines_context": context,
            "total_changes": added + deleted,
        }


def compute_lcs(a: Sequence[str], b: Sequence[str]) -> list[str]:
    """Return a longest common subsequence of two line sequences.

    Classic dynamic programming over exact string equality. When several
    subsequences share the maximum length, the one favouring earlier lines
    of ``a`` is returned.

    Parameters
    ----------
    a, b : sequence of str
        Lines to align

    Returns
    -------
    list of str
        The common subsequence

    """
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return []

    with debug_timer(logger, f"LCS ({n}x{m} lines)"):
        # table[i][j] holds the LCS length of a[i:] and b[j:]
        table = [[0] * (m + 1) for _ in range(n + 1)]
        for i in range(n - 1, -1, -1):
            row, below = table[i], table[i + 1]
            ai = a[i]
            for j in range(m - 1, -1, -1):
                if ai == b[j]:
                    row[j] = below[j + 1] + 1
                else:
                    row[j] = max(below[j], row[j + 1])

        result: list[str] = []
        i = j = 0
        while i < n and j < m:
            if a[i] == b[j]:
                result.append(a[i])
                i += 1
                j += 1
            elif table[i + 1][j] >= table[i][j + 1]:
                i += 1
            else:
                j += 1

    return result


def build_unified_diff(
    a: Sequence[str],
    b: Sequence[str],
    label_a: str = DEFAULT_LABEL_A,
    label_b: str = DEFAULT_LABEL_B,
) -> UnifiedDiff:
    """Build a unified diff of two line sequences.

    The walk advances three cursors over ``a``, ``b`` and their LCS. Lines
    equal to the next common element are context. At a difference point,
    lines of ``b`` are emitted as additions until ``b`` reaches the next
    common element, then lines of ``a`` as removals until ``a`` does.

    Parameters
    ----------
    a, b : sequence of str
        Old and new lines
    label_a, label_b : str
        Names for the ``---``/``+++`` header

    Returns
    -------
    UnifiedDiff
        Zero hunks when the sequences are equal, otherwise one hunk
        spanning both inputs in full

    """
    lcs = compute_lcs(a, b)
    n, m = len(a), len(b)
    i = j = k = 0

    lines: list[DiffLine] = []
    opened = False

    while i < n or j < m:
        common = lcs[k] if k < len(lcs) else _END
        if i < n and j < m and a[i] == common and b[j] == common:
            lines.append(DiffLine("context", a[i]))
            i += 1
            j += 1
            k += 1
            continue

        opened = True
        while j < m and b[j] != common:
            lines.append(DiffLine("added", b[j]))
            j += 1
        while i < n and a[i] != common:
            lines.append(DiffLine("removed", a[i]))
            i += 1

    diff = UnifiedDiff(label_a=label_a, label_b=label_b)
    if opened:
        diff.hunks.append(Hunk(start_a=1, start_b=1, lines=lines))

    logger.debug("Sequence diff: %d vs %d lines, common=%d, changed=%s", n, m, len(lcs), opened)
    return diff
