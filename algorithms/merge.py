"""
merge.py — Merge Sort
======================
Top-down merge sort.  Split [left, right] at mid = (left+right)//2,
sort both halves, then merge them through two temporary buffers.

During a merge:
  - Compare(left+i, mid+1+j) is yielded before each head-to-head
    placement; the indices are the slots the two buffer heads came from.
  - Every placement is Overwrite(k, v) followed IMMEDIATELY by
    MarkFinal(k), including the tail copies that need no comparison.

Known looseness: finalisation is eager.  Every recursive merge marks the
slots it writes, so an inner merge flags positions as final that an
outer merge will overwrite again.  MarkFinal here means "settled within
the current merge", and only the outermost merge makes it true for the
whole array.  Consumers rely on this sequence; keep it.
"""

from typing import Generator, List

from dataset import Dataset, Step


PSEUDOCODE: List[str] = [
    "def merge_sort(a, left, right):",              # 0
    "    if left < right:",                         # 1
    "        mid ← (left+right) // 2",              # 2
    "        merge_sort(a, left, mid)",             # 3
    "        merge_sort(a, mid+1, right)",          # 4
    "        merge(a, left, mid, right)",           # 5
    "def merge(a, left, mid, right):",              # 6
    "    L ← a[left..mid]; R ← a[mid+1..right]",    # 7
    "    while L and R remain:",                    # 8
    "        compare heads of L and R",             # 9
    "        a[k] ← smaller head (L on ties)",      # 10
    "        mark a[k] final",                      # 11
    "    copy what is left of L, then R",           # 12
]

STEP_LINES = {"compare": 9, "overwrite": 10, "mark_final": 11}


def merge_sort(ds: Dataset) -> Generator[Step, None, None]:
    n = len(ds)
    if n == 1:
        # nothing to merge, but the lone bar is still in place
        yield ds.mark_final(0)
        return
    yield from _sort_range(ds, 0, n - 1)


def _sort_range(ds: Dataset, left: int, right: int) -> Generator[Step, None, None]:
    if left < right:
        mid = (left + right) // 2
        yield from _sort_range(ds, left, mid)
        yield from _sort_range(ds, mid + 1, right)
        yield from _merge(ds, left, mid, right)


def _merge(ds: Dataset, left: int, mid: int, right: int) -> Generator[Step, None, None]:
    left_buf  = [ds.get(k) for k in range(left, mid + 1)]
    right_buf = [ds.get(k) for k in range(mid + 1, right + 1)]

    i = j = 0
    k = left
    while i < len(left_buf) and j < len(right_buf):
        yield ds.compare(left + i, mid + 1 + j)
        if left_buf[i] <= right_buf[j]:
            value = left_buf[i]
            i += 1
        else:
            value = right_buf[j]
            j += 1
        yield ds.set(k, value)
        yield ds.mark_final(k)
        k += 1

    for value in left_buf[i:] + right_buf[j:]:
        yield ds.set(k, value)
        yield ds.mark_final(k)
        k += 1
