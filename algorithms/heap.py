"""
heap.py — Heap Sort
====================
In-place max-heap sort.

  Phase 1 – build: sift down every parent from n//2-1 to the root.
  Phase 2 – extract: swap the root with the last heap slot, MarkFinal
            that slot, shrink the heap, sift the new root down.
  The root is the last bar standing and is finalised at the very end.

Sift-down yields Compare(child, largest) for each child that exists
and swaps only when a child is STRICTLY larger, so equal keys never move.
"""

from typing import Generator, List

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                            # 0
    "    for i in n//2-1 down to 0:",               # 1
    "        heapify(a, n, i)",                     # 2
    "    for end in n-1 down to 1:",                # 3
    "        swap a[0], a[end]; mark a[end] final", # 4
    "        heapify(a, end, 0)",                   # 5
    "    mark a[0] final",                          # 6
    "def heapify(a, size, i):",                     # 7
    "    largest ← i",                              # 8
    "    for child in 2i+1, 2i+2 (if < size):",     # 9
    "        if a[child] > a[largest]: largest ← child", # 10
    "    if largest ≠ i:",                          # 11
    "        swap a[i], a[largest]",                # 12
    "        heapify(a, size, largest)",            # 13
]

STEP_LINES = {"compare": 10, "swap": 12, "mark_final": 4}


def heap_sort(ds: Dataset) -> Generator[Step, None, None]:
    n = len(ds)
    for i in range(n // 2 - 1, -1, -1):
        yield from _heapify(ds, n, i)

    for end in range(n - 1, 0, -1):
        yield ds.swap(0, end)
        yield ds.mark_final(end)
        yield from _heapify(ds, end, 0)

    if n:
        yield ds.mark_final(0)


def _heapify(ds: Dataset, size: int, i: int) -> Generator[Step, None, None]:
    """Sift a[i] down within the first `size` slots."""
    while True:
        largest = i
        for child in (2 * i + 1, 2 * i + 2):
            if child < size:
                yield ds.compare(child, largest)
                if ds.get(child) > ds.get(largest):
                    largest = child
        if largest == i:
            return
        yield ds.swap(i, largest)
        i = largest
