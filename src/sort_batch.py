"""Sort every sequence of a named collection, timing each sort.

Each sequence lives in a :class:`SequenceHandle` that serialises access to
it, so a batch may be sorted one label after another or with one worker per
label.
"""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from quicksort import SortStats, sort

logger = logging.getLogger("quicksort_batch.sort_batch")


class SequenceHandle:
    """Owns one sequence and grants exclusive access to it."""

    def __init__(self, values: Iterable[int]):
        self._values: list[int] = list(values)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def sort(self, stats: Optional[SortStats] = None) -> None:
        with self._lock:
            sort(self._values, stats=stats)

    def snapshot(self) -> list[int]:
        with self._lock:
            return list(self._values)

    def take(self) -> list[int]:
        """Hand the sequence back to the caller and leave the handle empty."""
        with self._lock:
            values, self._values = self._values, []
            return values


@dataclass
class SortResult:
    label: str
    values: list[int]
    elapsed: float
    stats: SortStats = field(default_factory=SortStats)

    def as_dict(self) -> dict[str, object]:
        return {"values": self.values, "elapsed": self.elapsed, **self.stats.as_dict()}


def timed_sort(label: str, handle: SequenceHandle) -> SortResult:
    stats = SortStats()
    start = time.perf_counter()
    handle.sort(stats)
    elapsed = time.perf_counter() - start
    logger.info("Execution time for %s: %.6fs", label, elapsed)
    logger.debug("%s: %d partitions, %d comparisons, %d swaps",
                 label, stats.partitions, stats.comparisons, stats.swaps)
    return SortResult(label=label, values=handle.take(), elapsed=elapsed, stats=stats)


def sort_batch(named: Mapping[str, Iterable[int]], workers: int = 1) -> dict[str, SortResult]:
    """Sort each sequence in ``named`` independently and return results by label.

    The input sequences are copied and left untouched. With ``workers > 1``
    the labels are sorted concurrently; no two workers share a sequence.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    handles = {label: SequenceHandle(values) for label, values in named.items()}
    logger.debug("Sorting %d sequence(s) with %d worker(s)", len(handles), workers)

    if workers == 1 or len(handles) <= 1:
        return {label: timed_sort(label, handle) for label, handle in handles.items()}

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {label: executor.submit(timed_sort, label, handle) for label, handle in handles.items()}
    # The executor has joined every task; result() re-raises the first failure.
    return {label: future.result() for label, future in futures.items()}
