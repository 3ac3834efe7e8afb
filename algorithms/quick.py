"""
quick.py — Quick Sort (Lomuto)
===============================
Pivot is always the LAST element of the range.  Partition yields:
  1. Compare(j, high) for every j in [low, high-1]
  2. Swap(i, j) when a[j] <= pivot and i ≠ j
  3. Swap(i+1, high) to drop the pivot in place (skipped if already there)
  4. MarkFinal(i+1)

Ranges are processed left-then-right, depth first, exactly like the
recursive formulation, but with an explicit stack so a long run of
degenerate partitions can't hit Python's recursion limit.

No randomised pivot.  Sorted or reverse-sorted input degrades to
n(n-1)/2 comparisons; the visualizer keeps this on purpose so the
worst case can be watched.
"""

from typing import Generator, List, Tuple

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",                # 0
    "    if low < high:",                           # 1
    "        p ← partition(a, low, high)",          # 2
    "        quick_sort(a, low, p-1)",              # 3
    "        quick_sort(a, p+1, high)",             # 4
    "def partition(a, low, high):",                 # 5
    "    pivot ← a[high]; i ← low-1",               # 6
    "    for j in low .. high-1:",                  # 7
    "        if a[j] ≤ pivot:",                     # 8
    "            i ← i+1; swap a[i], a[j]",         # 9
    "    swap a[i+1], a[high]",                     # 10
    "    mark a[i+1] final; return i+1",            # 11
]

STEP_LINES = {"compare": 8, "swap": 9, "mark_final": 11}


def quick_sort(ds: Dataset) -> Generator[Step, None, None]:
    stack: List[Tuple[int, int]] = [(0, len(ds) - 1)]
    while stack:
        low, high = stack.pop()
        if low > high:
            continue
        if low == high:
            # single-element range: already in place
            yield ds.mark_final(low)
            continue

        pivot_idx = yield from _partition(ds, low, high)
        # right pushed first so the left range is handled first
        stack.append((pivot_idx + 1, high))
        stack.append((low, pivot_idx - 1))


def _partition(ds: Dataset, low: int, high: int) -> Generator[Step, None, int]:
    pivot = ds.get(high)
    i = low - 1
    for j in range(low, high):
        yield ds.compare(j, high)
        if ds.get(j) <= pivot:
            i += 1
            if i != j:
                yield ds.swap(i, j)

    if i + 1 != high:
        yield ds.swap(i + 1, high)
    yield ds.mark_final(i + 1)
    return i + 1
