"""Command-line interface for the recdiff comparison engine.

Compare two text files (or XML documents) line by line, as unordered
multisets of lines, or as unordered collections of XML records.

Configuration File Support
--------------------------
Defaults are read from ``--config``, the ``RECDIFF_CONFIG`` environment
variable, or the first ``.recdiff.toml``/``.yaml``/``.yml``/``.json`` (or
``pyproject.toml`` with a ``[tool.recdiff]`` table) found walking up from
the current directory, then in the home directory. Command line flags
always override configuration values.

Examples
--------
Unified diff::

    $ recdiff old.txt new.txt

Order-insensitive comparison, ignoring case::

    $ recdiff old.txt new.txt --ignore-order --ignore-case

Compare ``<Event>`` records of two XML exports as JSON::

    $ recdiff a.xml b.xml --ignore-order --record-selector Event --format json

Read one side from stdin::

    $ generate-report | recdiff expected.txt -

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/recdiff/cli/__init__.py
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from recdiff import __version__
from recdiff.cli.config import CLI_KEYS, load_config_with_priority, merge_configs, split_config
from recdiff.cli.output import print_rich_report, should_use_rich_output
from recdiff.compare import ComparisonReport, compare_positional, compare_texts, read_text
from recdiff.constants import (
    CONFIG_ENV_VAR,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from recdiff.diff.renderers import JsonDiffRenderer, TextReportRenderer
from recdiff.exceptions import DependencyError, FileError, RecdiffError, ValidationError
from recdiff.logging_utils import LOG_LEVELS, configure_logging
from recdiff.options.compare import CompareOptions

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "get_exit_code_for_exception", "main"]

FORMAT_CHOICES = ("text", "json")
COLOR_CHOICES = ("auto", "always", "never")
STDIN_MARKER = "-"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Comparison flags default to ``None`` so that unset flags do not mask
    configuration file values.
    """
    parser = argparse.ArgumentParser(
        prog="recdiff",
        description="Compare two texts or XML documents as sequences or as unordered multisets",
    )

    parser.add_argument("file_a", help="First input (use '-' for stdin)")
    parser.add_argument("file_b", help="Second input (use '-' for stdin)")

    mode = parser.add_argument_group("comparison mode")
    mode.add_argument(
        "--ignore-order",
        dest="ignore_order",
        action="store_true",
        default=None,
        help="Compare as unordered multisets of lines (or XML records when both inputs look like XML)",
    )
    mode.add_argument(
        "--positional",
        action="store_true",
        default=None,
        help="Compare line N of A with line N of B, without alignment",
    )

    line = parser.add_argument_group("line canonicalization (order-insensitive mode)")
    line.add_argument(
        "--no-trim",
        dest="trim",
        action="store_false",
        default=None,
        help="Keep trailing spaces and tabs",
    )
    line.add_argument(
        "--collapse-whitespace",
        dest="collapse_whitespace",
        action="store_true",
        default=None,
        help="Collapse runs of interior spaces and tabs into one space",
    )
    line.add_argument(
        "--ignore-case",
        dest="ignore_case",
        action="store_true",
        default=None,
        help="Compare lines case-insensitively",
    )

    xml = parser.add_argument_group("XML records")
    xml.add_argument(
        "--record-selector",
        dest="record_selector",
        metavar="SELECTOR",
        help="Selector of record elements, e.g. 'Incident' or 'Event.open, Alarm[level]' (default: Incident)",
    )

    output = parser.add_argument_group("output")
    output.add_argument("--format", "-f", choices=FORMAT_CHOICES, help="Output format (default: text)")
    output.add_argument("--output", "-o", help="Write the report to a file (default: stdout)")
    output.add_argument(
        "--color",
        choices=COLOR_CHOICES,
        help="Colorize text output: auto (default, if terminal), always, never",
    )
    output.add_argument("--rich", action="store_true", default=None, help="Render text output with Rich tables")
    output.add_argument("--label-a", dest="label_a", help="Name of the first input in the report")
    output.add_argument("--label-b", dest="label_b", help="Name of the second input in the report")

    general = parser.add_argument_group("general")
    general.add_argument("--config", help="Configuration file (TOML, YAML, JSON or pyproject.toml)")
    general.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    general.add_argument("--log-file", dest="log_file", help="Also write log messages to this file")
    general.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    general.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, DependencyError):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def _build_options(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> tuple[CompareOptions, Dict[str, Any]]:
    """Merge configuration values and command line flags.

    Raises
    ------
    ValidationError
        If a configured or given value is invalid

    """
    overrides: Dict[str, Any] = {}
    line: Dict[str, Any] = {}
    if parsed_args.ignore_order is not None:
        overrides["ignore_order"] = parsed_args.ignore_order
    if parsed_args.trim is not None:
        line["trim"] = parsed_args.trim
    if parsed_args.collapse_whitespace is not None:
        line["collapse_whitespace"] = parsed_args.collapse_whitespace
    if parsed_args.ignore_case is not None:
        line["case_sensitive"] = not parsed_args.ignore_case
    if line:
        overrides["line"] = line
    if parsed_args.record_selector is not None:
        overrides["xml"] = {"record_selector": parsed_args.record_selector}
    for key in CLI_KEYS:
        value = getattr(parsed_args, key)
        if value is not None:
            overrides[key] = value

    # flags go into the nested tables, which win over flat config keys
    options, settings = split_config(merge_configs(config, overrides))

    output_format = settings.setdefault("format", "text")
    if output_format not in FORMAT_CHOICES:
        raise ValidationError(
            f"format must be one of {', '.join(FORMAT_CHOICES)}, got {output_format!r}",
            parameter_name="format",
            parameter_value=output_format,
        )
    color = settings.setdefault("color", "auto")
    if color not in COLOR_CHOICES:
        raise ValidationError(
            f"color must be one of {', '.join(COLOR_CHOICES)}, got {color!r}",
            parameter_name="color",
            parameter_value=color,
        )
    settings["positional"] = bool(settings.get("positional", False))
    settings["rich"] = bool(settings.get("rich", False))

    return options, settings


def _read_input(source: str) -> tuple[str, str]:
    """Read one side of the comparison and return ``(text, label)``."""
    if source == STDIN_MARKER:
        return sys.stdin.read(), "stdin"
    return read_text(source), source


def _render(
    report: ComparisonReport,
    parsed_args: argparse.Namespace,
    settings: Dict[str, Any],
    labels: tuple[str, str],
) -> Optional[str]:
    """Render the report, or print it directly and return None for Rich output."""
    if settings["format"] == "json":
        return JsonDiffRenderer().render(report)

    parsed_args.rich = settings["rich"]
    parsed_args.color = settings["color"]
    if should_use_rich_output(parsed_args, raise_on_missing=True):
        print_rich_report(report, label_a=labels[0], label_b=labels[1])
        return None

    use_color = False
    if settings["color"] == "always":
        use_color = True
    elif settings["color"] == "auto" and not parsed_args.output:
        use_color = sys.stdout.isatty()

    return TextReportRenderer(use_color=use_color, label_a=labels[0], label_b=labels[1]).render(report)


def _run(parsed_args: argparse.Namespace) -> int:
    if parsed_args.file_a == STDIN_MARKER and parsed_args.file_b == STDIN_MARKER:
        print("Error: Cannot read both inputs from stdin", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    options, settings = _build_options(parsed_args, config)

    text_a, source_label_a = _read_input(parsed_args.file_a)
    text_b, source_label_b = _read_input(parsed_args.file_b)
    label_a = parsed_args.label_a or source_label_a
    label_b = parsed_args.label_b or source_label_b
    options = options.create_updated(label_a=label_a, label_b=label_b)

    report: ComparisonReport
    if settings["positional"]:
        logger.debug("Positional comparison of %s and %s", label_a, label_b)
        report = compare_positional(text_a, text_b)
    else:
        report = compare_texts(text_a, text_b, options)

    rendered = _render(report, parsed_args, settings, (label_a, label_b))
    if rendered is None:
        return EXIT_SUCCESS

    if parsed_args.output:
        output_path = Path(parsed_args.output)
        try:
            output_path.write_text(rendered + "\n", encoding="utf-8")
        except OSError as e:
            raise FileError(
                f"Could not write output: {output_path}", file_path=str(output_path), original_error=e
            ) from e
        print(f"Report written to: {output_path}", file=sys.stderr)
    else:
        print(rendered)

    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the recdiff command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        return _run(parsed_args)
    except RecdiffError as e:
        logger.debug("Comparison failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
