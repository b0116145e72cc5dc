"""Maximal zero-sum partitioning.

Given integers that sum to zero, split them into as many disjoint groups as possible
such that every group also sums to zero::

    >>> max_zero_sum_partition([10, -10, 15, -15])
    [[10, -10], [15, -15]]
    >>> max_zero_sum_partition([10, 20, -15, -15])
    [[10, 20, -15, -15]]

Elements are addressed by index and subsets by bit masks over those indices, so a
population of ``n`` needs tables with ``2**n`` slots. Both tables are filled bottom-up
in mask order: every proper subset of a mask is numerically smaller than the mask.

For a zero-sum mask ``S`` the search pins the lowest element of ``S`` and only looks at
zero-sum parts ``T`` of ``S`` containing it, taking ``1 + best(S - T)``. Pinning that
element keeps the total work at ``O(3**n)``.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from debtor.logging import get_logger
from debtor.models import Intractable

MAX_ELEMENTS = 63


def elements(mask: int) -> Iterator[int]:
    """Indices of the set bits of ``mask``, lowest first."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


def subset_sums(values: Sequence[int]) -> list[int]:
    size = 1 << len(values)
    sums = [0] * size
    for mask in range(1, size):
        low = mask & -mask
        sums[mask] = sums[mask ^ low] + values[low.bit_length() - 1]
    return sums


def best_partitions(sums: Sequence[int]) -> tuple[list[int], list[int]]:
    """Part count and chosen first part for every zero-sum mask.

    Entries for masks that do not sum to zero stay at 0 and are never read.
    """
    size = len(sums)
    counts = [0] * size
    choices = [0] * size
    for mask in range(1, size):
        if sums[mask] != 0:
            continue
        low = mask & -mask
        rest = mask ^ low
        best, best_part = 0, mask
        sub = rest
        while True:
            part = sub | low
            if sums[part] == 0:
                # mask and part are both zero-sum, so the remainder is too
                candidate = counts[mask ^ part] + 1
                if candidate > best:
                    best, best_part = candidate, part
            if sub == 0:
                break
            sub = (sub - 1) & rest
        counts[mask] = best
        choices[mask] = best_part
    return counts, choices


class ZeroSumPartition:
    """A maximal zero-sum partition of ``values``, iterable as index bit masks."""

    def __init__(self, size: int, counts: list[int], choices: list[int]) -> None:
        self._size = size
        self._counts = counts
        self._choices = choices

    @classmethod
    def compute(cls, values: Sequence[int]) -> ZeroSumPartition:
        if len(values) > MAX_ELEMENTS:
            raise Intractable(
                f"exact mode supports at most {MAX_ELEMENTS} unsettled balances, got {len(values)}; "
                "use approximate mode instead"
            )
        assert sum(values) == 0, "values must be zero-sum"
        counts, choices = best_partitions(subset_sums(values))
        return cls(len(values), counts, choices)

    @property
    def full_mask(self) -> int:
        return (1 << self._size) - 1

    def __len__(self) -> int:
        return self._counts[self.full_mask]

    def __iter__(self) -> Iterator[int]:
        remainder = self.full_mask
        while remainder:
            part = self._choices[remainder]
            yield part
            remainder ^= part

    def parts(self) -> list[list[int]]:
        return [list(elements(mask)) for mask in self]


def max_zero_sum_partition(values: Sequence[int]) -> list[list[int]]:
    partition = ZeroSumPartition.compute(values)
    get_logger(__name__).debug("partition.computed", elements=len(values), parts=len(partition))
    return [[values[idx] for idx in part] for part in partition.parts()]
