"""
bubble.py — Bubble Sort
========================
Generator-based bubble sort.  Yields a Step at every event:
  1. Compare neighbours j, j+1
  2. Swap them when the left one is strictly larger
  3. After the last pass  →  MarkFinal every index, left to right

Finalisation is cosmetic: a bar is in place as soon as its pass ends,
but the cascade is only played once the outer loop is done.
"""

from typing import Generator, List

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                          # 0
    "    for i in 0 .. n-1:",                       # 1
    "        for j in 0 .. n-i-2:",                 # 2
    "            compare a[j], a[j+1]",             # 3
    "            if a[j] > a[j+1]:",                # 4
    "                swap a[j], a[j+1]",            # 5
    "    mark every bar final",                     # 6
]

STEP_LINES = {"compare": 3, "swap": 5, "mark_final": 6}


def bubble_sort(ds: Dataset) -> Generator[Step, None, None]:
    n = len(ds)
    for i in range(n):
        for j in range(n - i - 1):
            yield ds.compare(j, j + 1)
            if ds.get(j) > ds.get(j + 1):
                yield ds.swap(j, j + 1)

    for k in range(n):
        yield ds.mark_final(k)
