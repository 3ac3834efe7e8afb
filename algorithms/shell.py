"""
shell.py — Shell Sort
======================
Gapped insertion sort with Shell's original sequence n//2, n//4, …, 1.
Each pass is insertion sort with stride `gap`: Compare(j-gap, j) before
each test, Overwrite shifts, then the held value drops into the hole.

Intermediate passes give no per-element finality, so the MarkFinal
cascade only runs after the gap-1 pass.
"""

from typing import Generator, List

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def shell_sort(a):",                           # 0
    "    gap ← n // 2",                             # 1
    "    while gap > 0:",                           # 2
    "        for i in gap .. n-1:",                 # 3
    "            temp ← a[i]; j ← i",               # 4
    "            while j ≥ gap and a[j-gap] > temp:", # 5
    "                a[j] ← a[j-gap]; j ← j-gap",   # 6
    "            a[j] ← temp",                      # 7
    "        gap ← gap // 2",                       # 8
    "    mark every bar final",                     # 9
]

STEP_LINES = {"compare": 5, "overwrite": 6, "mark_final": 9}


def shell_sort(ds: Dataset) -> Generator[Step, None, None]:
    n = len(ds)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            temp = ds.get(i)
            j = i
            while j >= gap:
                yield ds.compare(j - gap, j)
                if not ds.get(j - gap) > temp:
                    break
                yield ds.set(j, ds.get(j - gap))
                j -= gap
            yield ds.set(j, temp)
        gap //= 2

    for k in range(n):
        yield ds.mark_final(k)
