#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/__init__.py
"""recdiff - compare texts and XML documents as sequences or multisets.

Two comparison semantics are offered:

- order-sensitive: an LCS-based unified diff of the raw lines
- order-insensitive: a multiset ("bag") diff of canonicalized lines, or of
  canonical record strings when both inputs are XML documents

Examples
--------
Unified diff:
    >>> from recdiff import compare_texts
    >>> print(compare_texts("x\\ny", "x\\nz").diff_text)
    --- A
    +++ B
    @@ -1,2 +1,2 @@
     x
    +z
    -y

Order-insensitive comparison of XML records:
    >>> from recdiff import CompareOptions, XmlRecordOptions
    >>> options = CompareOptions(ignore_order=True, xml=XmlRecordOptions(record_selector="Event"))
    >>> report = compare_texts(xml_a, xml_b, options)  # doctest: +SKIP
    >>> report.source  # doctest: +SKIP
    'xml'

"""

from recdiff.canonical import canonicalize, normalize_newlines, split_lines
from recdiff.compare import (
    MultisetDiffReport,
    PositionalDiffReport,
    UnifiedDiffReport,
    compare_files,
    compare_positional,
    compare_texts,
    looks_like_xml,
)
from recdiff.diff.sequence import build_unified_diff, compute_lcs
from recdiff.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    RecdiffError,
    SelectorError,
    ValidationError,
    XmlParseError,
)
from recdiff.multiset import build_bag, diff_bags
from recdiff.options import CanonicalizationOptions, CompareOptions, XmlRecordOptions
from recdiff.records import extract_records, parse_xml, records_to_canonical_strings

__version__ = "1.0.0"

__all__ = [
    "CanonicalizationOptions",
    "CompareOptions",
    "DependencyError",
    "FileError",
    "MultisetDiffReport",
    "ParsingError",
    "PositionalDiffReport",
    "RecdiffError",
    "SelectorError",
    "UnifiedDiffReport",
    "ValidationError",
    "XmlParseError",
    "XmlRecordOptions",
    "__version__",
    "build_bag",
    "build_unified_diff",
    "canonicalize",
    "compare_files",
    "compare_positional",
    "compare_texts",
    "compute_lcs",
    "diff_bags",
    "extract_records",
    "looks_like_xml",
    "normalize_newlines",
    "parse_xml",
    "records_to_canonical_strings",
    "split_lines",
]
