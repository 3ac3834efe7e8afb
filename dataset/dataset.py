"""
dataset.py — The Array Under Sort
==================================
Single source of truth for the current order.  Algorithms talk ONLY to
this object; they never touch a raw list.

Responsibilities:
  1. Validate input on construction         (finite real numbers only)
  2. Bound-checked reads and writes          (get / set / swap)
  3. Hand back the Step describing each operation, so the algorithm can
     yield exactly what it just did         (compare / set / swap / mark_final)
  4. Snapshot / reset helpers                (testing, re-runs)

Design decisions:
  - Every mutator applies the mutation FIRST and then returns the Step.
    The trace can therefore never diverge from the array: a Swap step,
    replayed on a presentation copy, leaves that copy equal to `_values`
    at the same point of the run.
  - `swap` produces one Swap step, never two Overwrites.
  - Indices are checked against [0, N).  Python's negative indexing is
    deliberately NOT honoured; -1 is a bug in the caller, not "the last bar".
"""

import math
from numbers import Real
from typing import Iterable, Iterator, List

from dataset.errors import InvalidInput
from dataset.step import Compare, Swap, Overwrite, MarkFinal


def validate_values(values: Iterable) -> List[float]:
    """Return `values` as a list, or raise InvalidInput."""
    checked = []
    for pos, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, Real):
            raise InvalidInput(f"Value at index {pos} is not a number: {v!r}")
        try:
            finite = math.isfinite(v)
        except OverflowError:
            raise InvalidInput(f"Value at index {pos} is not representable as a float: {v!r}")
        if not finite:
            raise InvalidInput(f"Value at index {pos} is not finite: {v!r}")
        checked.append(v)
    return checked


class Dataset:
    """
    Attributes:
        _values  : The live array.  Mutated in place by one algorithm run.
        _initial : Copy of the constructor input, for reset().
    """

    def __init__(self, values: Iterable = ()):
        self._values:  List[float] = validate_values(values)
        self._initial: List[float] = list(self._values)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, i: int) -> float:
        self._check(i)
        return self._values[i]

    def length(self) -> int:
        return len(self._values)

    def snapshot(self) -> List[float]:
        """Read-only copy of the current order."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, i: int) -> float:
        return self.get(i)

    def __iter__(self) -> Iterator[float]:
        return iter(list(self._values))

    def __repr__(self) -> str:
        return f"Dataset({self._values!r})"

    # ------------------------------------------------------------------
    # Mutations (each returns the Step it performed)
    # ------------------------------------------------------------------
    def set(self, i: int, value: float) -> Overwrite:
        self._check(i)
        self._values[i] = value
        return Overwrite(i, value)

    def swap(self, i: int, j: int) -> Swap:
        self._check(i)
        self._check(j)
        self._values[i], self._values[j] = self._values[j], self._values[i]
        return Swap(i, j)

    # ------------------------------------------------------------------
    # Annotations (no mutation)
    # ------------------------------------------------------------------
    def compare(self, i: int, j: int) -> Compare:
        self._check(i)
        self._check(j)
        return Compare(i, j)

    def mark_final(self, i: int) -> MarkFinal:
        self._check(i)
        return MarkFinal(i)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Restore the values the dataset was created with."""
        self._values = list(self._initial)

    def is_sorted(self) -> bool:
        v = self._values
        return all(v[k] <= v[k + 1] for k in range(len(v) - 1))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check(self, i: int) -> None:
        if not 0 <= i < len(self._values):
            raise IndexError(f"Index {i} out of range for dataset of length {len(self._values)}")
