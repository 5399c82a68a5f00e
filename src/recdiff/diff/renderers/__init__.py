#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/renderers/__init__.py
"""Renderers for comparison reports.

Available Renderers
-------------------
- JsonDiffRenderer: Structured JSON output for programmatic access
- TextReportRenderer: Plain text output for every report type
- UnifiedDiffRenderer: Colorized unified diff output for terminal

Examples
--------
Render with colors for terminal:
    >>> from recdiff import compare_texts
    >>> from recdiff.diff.renderers import TextReportRenderer
    >>> report = compare_texts("x\\ny", "x\\nz")
    >>> print(TextReportRenderer(use_color=True).render(report))

"""

from recdiff.diff.renderers.json import JsonDiffRenderer
from recdiff.diff.renderers.text import TextReportRenderer
from recdiff.diff.renderers.unified import UnifiedDiffRenderer, colorize_diff

__all__ = [
    "JsonDiffRenderer",
    "TextReportRenderer",
    "UnifiedDiffRenderer",
    "colorize_diff",
]
