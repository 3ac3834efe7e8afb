"""
step.py — Sort Trace Steps
===========================
Every algorithm is a generator that yields Step objects.  A Step is ONE
atomic operation on the array, not a snapshot of it:

    • Compare(i, j)           – values at i and j are being compared
    • Swap(i, j)              – values at i and j are exchanged
    • Overwrite(index, value) – slot `index` receives `value`
    • MarkFinal(index)        – slot `index` is settled (annotation only)

Design decisions:
  - Steps are frozen dataclasses.  The algorithm generator is the only
    producer; the stepper / renderer are pure readers.
  - A Step is a DELTA.  Replaying a trace means applying every step in
    order to a fresh copy of the input (`apply`), so a trace is cheap to
    store and can be replayed any number of times.
  - `kind` is a class-level tag so a trace serialises to plain dicts
    (`to_dict`) and comes back with `step_from_dict`.
"""

from dataclasses import dataclass, asdict
from typing import Any, ClassVar, Dict, List, MutableSequence, Tuple


@dataclass(frozen=True)
class Step:
    kind: ClassVar[str] = ""

    def apply(self, values: MutableSequence[float]) -> None:
        """Apply this step to `values` in place.  Default: no mutation."""

    @property
    def indices(self) -> Tuple[int, ...]:
        """Positions this step touches (for highlighting)."""
        return ()

    @property
    def mutates(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind
        return data


@dataclass(frozen=True)
class Compare(Step):
    i: int
    j: int

    kind: ClassVar[str] = "compare"

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.i, self.j)


@dataclass(frozen=True)
class Swap(Step):
    i: int
    j: int

    kind: ClassVar[str] = "swap"

    def apply(self, values: MutableSequence[float]) -> None:
        values[self.i], values[self.j] = values[self.j], values[self.i]

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.i, self.j)

    @property
    def mutates(self) -> bool:
        return True


@dataclass(frozen=True)
class Overwrite(Step):
    index: int
    value: float

    kind: ClassVar[str] = "overwrite"

    def apply(self, values: MutableSequence[float]) -> None:
        values[self.index] = self.value

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.index,)

    @property
    def mutates(self) -> bool:
        return True


@dataclass(frozen=True)
class MarkFinal(Step):
    index: int

    kind: ClassVar[str] = "mark_final"

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.index,)


# ---------------------------------------------------------------------------
# (De)serialisation
# ---------------------------------------------------------------------------
STEP_TYPES: Dict[str, type] = {
    cls.kind: cls for cls in (Compare, Swap, Overwrite, MarkFinal)
}


def step_from_dict(data: Dict[str, Any]) -> Step:
    """Inverse of Step.to_dict()."""
    fields = dict(data)
    kind = fields.pop("kind", None)
    cls = STEP_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown step kind: {kind!r}")
    return cls(**fields)


def steps_to_dicts(steps: List[Step]) -> List[Dict[str, Any]]:
    return [s.to_dict() for s in steps]
