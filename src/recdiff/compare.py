#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/compare.py
"""Comparison entry points.

:func:`compare_texts` picks the comparison mode from the options and the
shape of the inputs:

1. ``ignore_order`` and both inputs look like XML: flatten records and
   compare them as a multiset. If either side cannot be parsed (or
   ``defusedxml`` is missing) fall through to step 2 with a warning.
2. ``ignore_order``: compare canonicalized lines as a multiset.
3. Otherwise: LCS sequence diff rendered as a unified diff.

Every call is independent; nothing is cached between calls.

Examples
--------
Order-insensitive comparison:
    >>> from recdiff import CompareOptions, compare_texts
    >>> report = compare_texts("a\\nb\\nb", "b\\na\\na", CompareOptions(ignore_order=True))
    >>> [(d.value, d.delta) for d in report.freq_delta]
    [('a', -1), ('b', 1)]

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from recdiff.canonical import normalize_newlines, split_lines
from recdiff.constants import DEFAULT_LABEL_A, DEFAULT_LABEL_B, ComparisonSource
from recdiff.diff.positional import PositionalLine, positional_diff
from recdiff.diff.sequence import UnifiedDiff, build_unified_diff
from recdiff.exceptions import FileError, FileNotFoundError
from recdiff.multiset import Bag, BagEntry, FrequencyDelta, MultisetDiff, build_bag, diff_bags
from recdiff.options.compare import CompareOptions
from recdiff.records import RecordExtraction, extract_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultisetDiffReport:
    """Outcome of an order-insensitive comparison.

    ``total_*`` count lines (or records) including duplicates, ``unique_*``
    count distinct canonical values. ``source`` tells whether XML records or
    lines were compared; ``fallback_reason`` is set when XML extraction was
    attempted and failed.
    """

    total_a: int
    total_b: int
    unique_a: int
    unique_b: int
    diff: MultisetDiff
    source: ComparisonSource = "lines"
    fallback_reason: Optional[str] = None

    @property
    def identical(self) -> bool:
        return self.diff.identical

    @property
    def only_in_a(self) -> list[BagEntry]:
        return self.diff.only_in_a

    @property
    def only_in_b(self) -> list[BagEntry]:
        return self.diff.only_in_b

    @property
    def freq_delta(self) -> list[FrequencyDelta]:
        return self.diff.freq_delta

    @property
    def only_in_a_count(self) -> int:
        return len(self.diff.only_in_a)

    @property
    def only_in_b_count(self) -> int:
        return len(self.diff.only_in_b)

    @property
    def freq_delta_count(self) -> int:
        return len(self.diff.freq_delta)

    @classmethod
    def from_bags(
        cls,
        bag_a: Bag[str],
        bag_b: Bag[str],
        source: ComparisonSource = "lines",
        fallback_reason: Optional[str] = None,
    ) -> "MultisetDiffReport":
        return cls(
            total_a=sum(bag_a.values()),
            total_b=sum(bag_b.values()),
            unique_a=len(bag_a),
            unique_b=len(bag_b),
            diff=diff_bags(bag_a, bag_b),
            source=source,
            fallback_reason=fallback_reason,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by JSON consumers."""
        return {
            "totalA": self.total_a,
            "totalB": self.total_b,
            "uniqueA": self.unique_a,
            "uniqueB": self.unique_b,
            "onlyInACount": self.only_in_a_count,
            "onlyInBCount": self.only_in_b_count,
            "freqDeltaCount": self.freq_delta_count,
            "identical": self.identical,
            "onlyInA": [entry.to_dict() for entry in self.only_in_a],
            "onlyInB": [entry.to_dict() for entry in self.only_in_b],
            "freqDelta": [entry.to_dict() for entry in self.freq_delta],
            "source": self.source,
            "fallbackReason": self.fallback_reason,
        }


@dataclass(frozen=True)
class UnifiedDiffReport:
    """Outcome of an order-sensitive comparison."""

    identical: bool
    diff_text: str
    diff: Optional[UnifiedDiff] = None

    def to_dict(self) -> dict[str, Any]:
        hunks: list[dict[str, Any]] = []
        if self.diff is not None:
            for hunk in self.diff.hunks:
                hunks.append(
                    {
                        "header": hunk.header(),
                        "startA": hunk.start_a,
                        "countA": hunk.count_a,
                        "startB": hunk.start_b,
                        "countB": hunk.count_b,
                        "lines": [{"tag": line.tag, "text": line.text} for line in hunk.lines],
                    }
                )
        return {"identical": self.identical, "diffText": self.diff_text, "hunks": hunks}


@dataclass(frozen=True)
class PositionalDiffReport:
    """Outcome of an index-by-index comparison."""

    lines: list[PositionalLine] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return all(line.tag == "unchanged" for line in self.lines)

    @property
    def diff_text(self) -> str:
        return "\n".join(line.render() for line in self.lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "identical": self.identical,
            "lines": [{"tag": line.tag, "text": line.text, "index": line.index} for line in self.lines],
        }


ComparisonReport = Union[MultisetDiffReport, UnifiedDiffReport, PositionalDiffReport]


def looks_like_xml(text: str) -> bool:
    """Return True if the trimmed text starts with ``<`` and ends with ``>``."""
    stripped = text.lstrip("\ufeff").strip()
    return stripped.startswith("<") and stripped.endswith(">")


def _fallback_reason(side: str, extraction: RecordExtraction) -> str:
    return f"XML record extraction failed for {side}: {extraction.error}"


def _compare_multiset(text_a: str, text_b: str, options: CompareOptions) -> MultisetDiffReport:
    fallback_reason: Optional[str] = None

    if looks_like_xml(text_a) and looks_like_xml(text_b):
        logger.debug("Both inputs look like XML, extracting %r records", options.xml.record_selector)
        records_a = extract_records(text_a, options.xml)
        records_b = extract_records(text_b, options.xml) if records_a.ok else None

        if records_a.ok and records_b is not None and records_b.ok:
            return MultisetDiffReport.from_bags(
                build_bag(records_a.records or [], options.line),
                build_bag(records_b.records or [], options.line),
                source="xml",
            )

        if not records_a.ok:
            fallback_reason = _fallback_reason(options.label_a, records_a)
        else:
            fallback_reason = _fallback_reason(options.label_b, records_b)  # type: ignore[arg-type]
        logger.warning("%s; falling back to line comparison", fallback_reason)

    return MultisetDiffReport.from_bags(
        build_bag(split_lines(text_a), options.line),
        build_bag(split_lines(text_b), options.line),
        source="lines",
        fallback_reason=fallback_reason,
    )


def _compare_sequence(text_a: str, text_b: str, options: CompareOptions) -> UnifiedDiffReport:
    normalized_a = normalize_newlines(text_a)
    normalized_b = normalize_newlines(text_b)

    if normalized_a == normalized_b:
        logger.debug("Inputs are identical after newline normalization")
        return UnifiedDiffReport(
            identical=True, diff_text="", diff=UnifiedDiff(label_a=options.label_a, label_b=options.label_b)
        )

    diff = build_unified_diff(
        split_lines(normalized_a),
        split_lines(normalized_b),
        label_a=options.label_a,
        label_b=options.label_b,
    )
    return UnifiedDiffReport(identical=not diff.hunks, diff_text=diff.to_text(), diff=diff)


def compare_texts(
    text_a: str, text_b: str, options: Optional[CompareOptions] = None
) -> Union[MultisetDiffReport, UnifiedDiffReport]:
    """Compare two texts.

    Parameters
    ----------
    text_a, text_b : str
        Inputs; plain text or XML documents
    options : CompareOptions, optional
        Mode and canonicalization settings; defaults to ``CompareOptions()``

    Returns
    -------
    MultisetDiffReport or UnifiedDiffReport
        A multiset report when ``options.ignore_order`` is set, otherwise a
        unified diff report

    Notes
    -----
    XML parse failures never propagate: they are reported through
    ``MultisetDiffReport.fallback_reason``.

    """
    opts = options or CompareOptions()
    logger.debug(
        "Comparing %d and %d characters (ignore_order=%s)", len(text_a), len(text_b), opts.ignore_order
    )
    if opts.ignore_order:
        return _compare_multiset(text_a, text_b, opts)
    return _compare_sequence(text_a, text_b, opts)


def compare_positional(text_a: str, text_b: str) -> PositionalDiffReport:
    """Compare two texts line by line at equal indices.

    Lines are split as for every other mode but no canonicalization is
    applied.
    """
    return PositionalDiffReport(lines=positional_diff(split_lines(text_a), split_lines(text_b)))


def read_text(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file, tolerating a byte-order mark.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileError
        If the file cannot be read or is not valid UTF-8

    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(str(file_path))
    try:
        return file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileError(f"File is not valid UTF-8: {file_path}", file_path=str(file_path), original_error=e) from e
    except OSError as e:
        raise FileError(f"Could not read file: {file_path}", file_path=str(file_path), original_error=e) from e


def compare_files(
    path_a: Union[str, Path], path_b: Union[str, Path], options: Optional[CompareOptions] = None
) -> Union[MultisetDiffReport, UnifiedDiffReport]:
    """Compare two files with :func:`compare_texts`.

    Diff headers are labelled with the file paths unless the options carry
    explicit labels.
    """
    opts = options or CompareOptions()
    updates: dict[str, str] = {}
    if opts.label_a == DEFAULT_LABEL_A:
        updates["label_a"] = str(path_a)
    if opts.label_b == DEFAULT_LABEL_B:
        updates["label_b"] = str(path_b)
    if updates:
        opts = opts.create_updated(**updates)

    return compare_texts(read_text(path_a), read_text(path_b), opts)
