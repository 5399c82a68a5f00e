#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/multiset.py
"""Order-insensitive comparison of line or record collections.

A *bag* maps each canonical value to its number of occurrences. Two bags
are compared key by key over the union of their keys; every key lands in
exactly one of four buckets:

- only in A (count in B is zero)
- only in B (count in A is zero)
- present in both with different counts (``freq_delta``)
- identical counts (omitted from the result)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from recdiff.canonical import canonicalize
from recdiff.options.canonical import CanonicalizationOptions

Bag = Counter


@dataclass(frozen=True, slots=True)
class BagEntry:
    """A value present on one side only, with its count on that side."""

    value: str
    count: int

    def to_dict(self) -> dict[str, object]:
        return {"value": self.value, "count": self.count}


@dataclass(frozen=True, slots=True)
class FrequencyDelta:
    """A value present on both sides with different counts."""

    value: str
    a: int
    b: int

    @property
    def delta(self) -> int:
        return self.a - self.b

    def to_dict(self) -> dict[str, object]:
        return {"value": self.value, "a": self.a, "b": self.b, "delta": self.delta}


@dataclass(frozen=True)
class MultisetDiff:
    """Result of :func:`diff_bags`.

    ``only_in_a`` and ``only_in_b`` are sorted by value; ``freq_delta`` is
    sorted by descending absolute delta, ties broken by value.
    """

    only_in_a: list[BagEntry] = field(default_factory=list)
    only_in_b: list[BagEntry] = field(default_factory=list)
    freq_delta: list[FrequencyDelta] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not (self.only_in_a or self.only_in_b or self.freq_delta)


def build_bag(lines: Iterable[str], options: Optional[CanonicalizationOptions] = None) -> Bag[str]:
    """Count canonicalized lines.

    Parameters
    ----------
    lines : iterable of str
        Raw lines (or canonical record strings)
    options : CanonicalizationOptions, optional
        Canonicalization applied to every line before counting

    Returns
    -------
    Counter
        Mapping of canonical value to occurrence count

    """
    opts = options or CanonicalizationOptions()
    return Counter(canonicalize(line, opts) for line in lines)


def diff_bags(bag_a: Bag[str], bag_b: Bag[str]) -> MultisetDiff:
    """Compare two bags.

    Parameters
    ----------
    bag_a, bag_b : Counter
        Bags produced by :func:`build_bag`. Keys with a count of zero are
        treated as absent.

    Returns
    -------
    MultisetDiff
        Partition of the differing keys

    """
    only_in_a: list[BagEntry] = []
    only_in_b: list[BagEntry] = []
    freq_delta: list[FrequencyDelta] = []

    for key in bag_a.keys() | bag_b.keys():
        a = max(bag_a.get(key, 0), 0)
        b = max(bag_b.get(key, 0), 0)
        if a == b:
            continue
        if b == 0:
            only_in_a.append(BagEntry(key, a))
        elif a == 0:
            only_in_b.append(BagEntry(key, b))
        else:
            freq_delta.append(FrequencyDelta(key, a, b))

    only_in_a.sort(key=lambda entry: entry.value)
    only_in_b.sort(key=lambda entry: entry.value)
    freq_delta.sort(key=lambda entry: (-abs(entry.delta), entry.value))

    return MultisetDiff(only_in_a=only_in_a, only_in_b=only_in_b, freq_delta=freq_delta)
