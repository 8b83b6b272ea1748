"""In-place quicksort over a mutable sequence of unsigned integers.

The pivot is always the last element of the range being partitioned.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSequence, Optional


class SortError(Exception):
    """Base class for errors raised by the sort functions."""


class OutOfRangeError(SortError, IndexError):
    """A range bound does not address a valid index of the sequence."""

    def __init__(self, low: int, high: int, length: int, message: Optional[str] = None):
        self.low = low
        self.high = high
        self.length = length
        super().__init__(message or f"range [{low}, {high}] is out of bounds for length {length}")


class EmptySequenceError(OutOfRangeError):
    """Explicit bounds were given for a zero-length sequence."""

    def __init__(self, low: int, high: int):
        super().__init__(low, high, 0, f"cannot address range [{low}, {high}] of an empty sequence")


@dataclass
class SortStats:
    partitions: int = 0
    comparisons: int = 0
    swaps: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"partitions": self.partitions, "comparisons": self.comparisons, "swaps": self.swaps}


def partition(
    arr: MutableSequence[int], low: int, high: int, stats: Optional[SortStats] = None
) -> int:
    """Partition arr[low..high] around arr[high] and return the pivot's final index."""
    if not arr:
        raise EmptySequenceError(low, high)
    if low < 0 or high >= len(arr) or low > high:
        raise OutOfRangeError(low, high, len(arr))
    return _partition(arr, low, high, stats)


def sort(
    arr: MutableSequence[int],
    low: int = 0,
    high: Optional[int] = None,
    stats: Optional[SortStats] = None,
) -> None:
    """Sort arr[low..high] in place. ``high=None`` sorts to the end of arr."""
    if high is None:
        high = len(arr) - 1
    elif not arr:
        raise EmptySequenceError(low, high)
    elif high < 0 or high >= len(arr):
        raise OutOfRangeError(low, high, len(arr))
    if low < 0 or low > len(arr):
        raise OutOfRangeError(low, high, len(arr))

    _sort_range(arr, low, high, stats)


def _sort_range(arr, low, high, stats):
    # Recurse into the smaller side and loop on the larger one so the stack
    # stays O(log n) deep. The sub-ranges partitioned are the same as with
    # two recursive calls.
    while low < high:
        pivot_index = _partition(arr, low, high, stats)
        if pivot_index - low < high - pivot_index:
            if pivot_index > low:
                _sort_range(arr, low, pivot_index - 1, stats)
            low = pivot_index + 1
        else:
            _sort_range(arr, pivot_index + 1, high, stats)
            high = pivot_index - 1


def _partition(arr, low, high, stats):
    index = low

    # The pivot stays at arr[high] until the final swap.
    for i in range(low, high + 1):
        if arr[i] < arr[high]:
            arr[index], arr[i] = arr[i], arr[index]
            index += 1
            if stats is not None:
                stats.swaps += 1

    arr[index], arr[high] = arr[high], arr[index]

    if stats is not None:
        stats.partitions += 1
        stats.comparisons += high - low + 1
        stats.swaps += 1
    return index


if __name__ == "__main__":
    data = [9, 2, 20, 15, 65, 32, 11, 100, 43, 5, 2, 18]
    print(f"Unsorted: {data}")
    sort(data)
    print(f"Sorted:   {data}")
