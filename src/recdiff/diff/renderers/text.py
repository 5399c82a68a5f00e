#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/renderers/text.py
"""Plain text renderer for comparison reports.

Multiset reports are printed as three sections followed by a summary::

    Only in A (1):
      x2  gamma
    Only in B (0):
    Count differences (1):
      A=1 B=2 (-1)  alpha
    A: 4 lines, 3 unique | B: 3 lines, 2 unique | identical: no

Unified and positional reports print their diff lines, colorized through
:class:`~recdiff.diff.renderers.unified.UnifiedDiffRenderer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from recdiff.diff.renderers.unified import RED, RESET, UnifiedDiffRenderer, colorize_diff

if TYPE_CHECKING:
    from recdiff.compare import ComparisonReport, MultisetDiffReport

NO_DIFFERENCES = "No differences."


class TextReportRenderer:
    """Render reports as human-readable text.

    Parameters
    ----------
    use_color : bool, default = False
        Add ANSI colors to diff lines and to the headings of non-empty
        multiset sections
    label_a, label_b : str
        Names of the two sides in multiset section headings

    """

    def __init__(self, use_color: bool = False, label_a: str = "A", label_b: str = "B"):
        self.use_color = use_color
        self.label_a = label_a
        self.label_b = label_b

    def _heading(self, text: str, count: int) -> str:
        heading = f"{text} ({count}):"
        if self.use_color and count:
            return f"{RED}{heading}{RESET}"
        return heading

    def render_multiset(self, report: MultisetDiffReport) -> Iterator[str]:
        if report.fallback_reason:
            yield f"Note: {report.fallback_reason}; compared lines instead."

        yield self._heading(f"Only in {self.label_a}", report.only_in_a_count)
        for entry in report.only_in_a:
            yield f"  x{entry.count}  {entry.value}"

        yield self._heading(f"Only in {self.label_b}", report.only_in_b_count)
        for entry in report.only_in_b:
            yield f"  x{entry.count}  {entry.value}"

        yield self._heading("Count differences", report.freq_delta_count)
        for delta in report.freq_delta:
            yield f"  {self.label_a}={delta.a} {self.label_b}={delta.b} ({delta.delta:+d})  {delta.value}"

        unit = "records" if report.source == "xml" else "lines"
        yield (
            f"{self.label_a}: {report.total_a} {unit}, {report.unique_a} unique | "
            f"{self.label_b}: {report.total_b} {unit}, {report.unique_b} unique | "
            f"identical: {'yes' if report.identical else 'no'}"
        )

    def iter_lines(self, report: ComparisonReport) -> Iterator[str]:
        """Yield the output lines of any report type."""
        from recdiff.compare import MultisetDiffReport, PositionalDiffReport, UnifiedDiffReport

        if isinstance(report, MultisetDiffReport):
            yield from self.render_multiset(report)
            return

        if report.identical:
            yield NO_DIFFERENCES
            return

        renderer = UnifiedDiffRenderer(use_color=self.use_color)
        if isinstance(report, UnifiedDiffReport):
            if report.diff is not None:
                yield from renderer.render_diff(report.diff)
            else:
                yield from colorize_diff(report.diff_text.splitlines(), use_color=self.use_color)
        elif isinstance(report, PositionalDiffReport):
            yield from renderer.render_positional(report.lines)

    def render(self, report: ComparisonReport) -> str:
        return "\n".join(self.iter_lines(report))
