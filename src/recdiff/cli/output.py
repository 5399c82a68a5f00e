"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/recdiff/cli/output.py
from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING, Any, TextIO

from recdiff.exceptions import DependencyError
from recdiff.utils.decorators import is_dependency_available

if TYPE_CHECKING:
    from recdiff.compare import ComparisonReport, MultisetDiffReport


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    return is_dependency_available("rich")


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: TextIO | None = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when ``--rich`` is set, no ``--output`` file is
    given, the target stream is a TTY (or ``--color always`` forces it)
    and Rich is installed.

    """
    if not getattr(args, "rich", False) or getattr(args, "output", None):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                feature_name="rich-output",
                missing_packages=[("rich", "")],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install recdiff[rich]",
            )
        return False

    if getattr(args, "color", "auto") == "always":
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def _multiset_tables(report: MultisetDiffReport, label_a: str, label_b: str) -> list[Any]:
    from rich.markup import escape
    from rich.table import Table
    from rich.text import Text

    label_a, label_b = escape(label_a), escape(label_b)
    tables = []

    for title, entries, style in (
        (f"Only in {label_a}", report.only_in_a, "red"),
        (f"Only in {label_b}", report.only_in_b, "green"),
    ):
        table = Table(title=f"{title} ({len(entries)})")
        table.add_column("Count", style="yellow", justify="right")
        table.add_column("Value", style=style, overflow="fold")
        for entry in entries:
            table.add_row(str(entry.count), Text(entry.value))
        tables.append(table)

    delta_table = Table(title=f"Count differences ({report.freq_delta_count})")
    delta_table.add_column(label_a, style="red", justify="right")
    delta_table.add_column(label_b, style="green", justify="right")
    delta_table.add_column("Delta", style="magenta", justify="right")
    delta_table.add_column("Value", style="cyan", overflow="fold")
    for delta in report.freq_delta:
        delta_table.add_row(str(delta.a), str(delta.b), f"{delta.delta:+d}", Text(delta.value))
    tables.append(delta_table)

    return tables


def print_rich_report(
    report: ComparisonReport, label_a: str = "A", label_b: str = "B", file: TextIO | None = None
) -> None:
    """Print a report with Rich tables and styling.

    Multiset reports become three tables plus a summary line; diff reports
    are printed line by line with add/remove styling.
    """
    from rich.console import Console
    from rich.markup import escape
    from rich.text import Text

    from recdiff.compare import MultisetDiffReport
    from recdiff.diff.renderers.text import TextReportRenderer

    console = Console(file=file or sys.stdout)

    if isinstance(report, MultisetDiffReport):
        if report.fallback_reason:
            console.print(f"[yellow]Note:[/yellow] {escape(report.fallback_reason)}; compared lines instead.")
        for table in _multiset_tables(report, label_a, label_b):
            console.print(table)
        verdict = "[green]identical[/green]" if report.identical else "[red]different[/red]"
        unit = "records" if report.source == "xml" else "lines"
        console.print(
            f"{escape(label_a)}: {report.total_a} {unit} ({report.unique_a} unique), "
            f"{escape(label_b)}: {report.total_b} {unit} ({report.unique_b} unique): {verdict}"
        )
        return

    for line in TextReportRenderer(use_color=False).iter_lines(report):
        if line.startswith("---") or line.startswith("+++"):
            style = "bold"
        elif line.startswith("@@"):
            style = "cyan"
        elif line.startswith("+"):
            style = "green"
        elif line.startswith("-"):
            style = "red"
        else:
            style = ""
        console.print(Text(line, style=style))
