#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/diff/renderers/json.py
"""JSON renderer for comparison reports.

Produces machine-readable output for programmatic processing. Multiset
reports keep their camelCase keys; unified diff reports gain the
line statistics of the structured diff.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from recdiff.compare import ComparisonReport


class JsonDiffRenderer:
    """Render a comparison report as structured JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)

    Examples
    --------
    Render a multiset report as JSON:
        >>> from recdiff import CompareOptions, compare_texts
        >>> from recdiff.diff.renderers import JsonDiffRenderer
        >>> report = compare_texts("a\\nb", "b\\nc", CompareOptions(ignore_order=True))
        >>> json_output = JsonDiffRenderer().render(report)

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent

    def to_data(self, report: ComparisonReport) -> Dict[str, Any]:
        """Build the JSON-serializable payload of ``report``."""
        # local import: recdiff.compare imports the diff package
        from recdiff.compare import MultisetDiffReport, PositionalDiffReport, UnifiedDiffReport

        data = report.to_dict()
        if isinstance(report, MultisetDiffReport):
            data["type"] = "multiset_diff"
        elif isinstance(report, UnifiedDiffReport):
            data["type"] = "unified_diff"
            if report.diff is not None:
                data["oldFile"] = report.diff.label_a
                data["newFile"] = report.diff.label_b
                data["statistics"] = report.diff.statistics()
        elif isinstance(report, PositionalDiffReport):
            data["type"] = "positional_diff"
            data["statistics"] = {
                "lines_added": sum(1 for line in report.lines if line.tag == "added"),
                "lines_deleted": sum(1 for line in report.lines if line.tag == "removed"),
                "lines_unchanged": sum(1 for line in report.lines if line.tag == "unchanged"),
            }
        return data

    def render(self, report: ComparisonReport) -> str:
        """Render a report to a JSON string.

        Parameters
        ----------
        report : MultisetDiffReport, UnifiedDiffReport or PositionalDiffReport
            Report returned by one of the comparison functions

        Returns
        -------
        str
            JSON-formatted report

        """
        data = self.to_data(report)
        if self.pretty_print:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)
