#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/__init__.py
"""Ordered line differs.

- :mod:`recdiff.diff.sequence`: LCS-based unified diff
- :mod:`recdiff.diff.positional`: index-by-index comparison

Examples
--------
    >>> from recdiff.diff import build_unified_diff
    >>> print(build_unified_diff(["x", "y"], ["x", "z"]).to_text())
    --- A
    +++ B
    @@ -1,2 +1,2 @@
     x
    +z
    -y

"""

from recdiff.diff.positional import PositionalLine, positional_diff
from recdiff.diff.sequence import DiffLine, Hunk, UnifiedDiff, build_unified_diff, compute_lcs

__all__ = [
    "DiffLine",
    "Hunk",
    "PositionalLine",
    "UnifiedDiff",
    "build_unified_diff",
    "compute_lcs",
    "positional_diff",
]
