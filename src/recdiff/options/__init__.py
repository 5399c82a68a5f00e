#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for recdiff comparisons.

Options are frozen dataclasses: build a modified copy with
``create_updated`` instead of mutating an instance.
"""

from __future__ import annotations

from recdiff.options.base import CloneFrozenMixin
from recdiff.options.canonical import CanonicalizationOptions
from recdiff.options.compare import CompareOptions
from recdiff.options.xml import XmlRecordOptions

__all__ = [
    "CanonicalizationOptions",
    "CloneFrozenMixin",
    "CompareOptions",
    "XmlRecordOptions",
]
