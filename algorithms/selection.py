"""
selection.py — Selection Sort
==============================
For each position i, scan the unsorted tail for the minimum, then swap it
into place.  Position i is final the moment the swap (if any) is done,
so MarkFinal(i) is yielded before the scan moves to i+1.

A strictly smaller value is needed to replace the running minimum, so
the first of several equal minima wins and equal values are never swapped.
"""

from typing import Generator, List

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                       # 0
    "    for i in 0 .. n-1:",                       # 1
    "        min ← i",                              # 2
    "        for j in i+1 .. n-1:",                 # 3
    "            compare a[j], a[min]",             # 4
    "            if a[j] < a[min]: min ← j",        # 5
    "        if min ≠ i: swap a[i], a[min]",        # 6
    "        mark a[i] final",                      # 7
]

STEP_LINES = {"compare": 4, "swap": 6, "mark_final": 7}


def selection_sort(ds: Dataset) -> Generator[Step, None, None]:
    n = len(ds)
    for i in range(n):
        min_idx = i
        for j in range(i + 1, n):
            yield ds.compare(j, min_idx)
            if ds.get(j) < ds.get(min_idx):
                min_idx = j

        if min_idx != i:
            yield ds.swap(i, min_idx)

        yield ds.mark_final(i)
