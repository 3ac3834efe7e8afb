"""
insertion.py — Insertion Sort
==============================
Shift-based insertion sort.  The element being inserted is held aside
and bigger neighbours slide one slot right with Overwrite steps (a shift
is NOT a swap: the hole moves left, nothing is exchanged).

Every loop test yields Compare(j, j+1): j is the neighbour being tested,
j+1 the hole the held value would drop into.  The test that stops the
walk is reported too, so a run over sorted input still shows its n-1
comparisons.

Nothing is final until the last insertion: a later, smaller value can
still shift any slot of the sorted prefix.  The MarkFinal cascade runs
after the outer loop.
"""

from typing import Generator, List

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                       # 0
    "    for i in 1 .. n-1:",                       # 1
    "        current ← a[i]; j ← i-1",              # 2
    "        while j ≥ 0 and a[j] > current:",      # 3
    "            a[j+1] ← a[j]",                    # 4
    "            j ← j-1",                          # 5
    "        a[j+1] ← current",                     # 6
    "    mark every bar final",                     # 7
]

STEP_LINES = {"compare": 3, "overwrite": 4, "mark_final": 7}


def insertion_sort(ds: Dataset) -> Generator[Step, None, None]:
    n = len(ds)
    for i in range(1, n):
        current = ds.get(i)
        j = i - 1
        while j >= 0:
            yield ds.compare(j, j + 1)
            if not ds.get(j) > current:
                break
            yield ds.set(j + 1, ds.get(j))
            j -= 1
        yield ds.set(j + 1, current)

    for k in range(n):
        yield ds.mark_final(k)
