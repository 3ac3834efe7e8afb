"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows.

    from algorithms import REGISTRY, get_algorithm, run_sort

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, step_lines, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it,
so adding an algorithm is: write the generator, add one entry here.

`run_sort(name, values)` is the whole core in one call:
    sorted_values, steps = run_sort("quick", [5, 3, 8, 1])
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from dataset import Dataset, Step, UnknownAlgorithm

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc,    STEP_LINES as _bubble_sl
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc, STEP_LINES as _selection_sl
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc, STEP_LINES as _insertion_sl
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc,     STEP_LINES as _quick_sl
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc,     STEP_LINES as _merge_sl
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc,      STEP_LINES as _heap_sl
from algorithms.shell     import shell_sort     as _shell,     PSEUDOCODE as _shell_pc,     STEP_LINES as _shell_sl

from algorithms.emitter import StepEmitter, NullEmitter, ListEmitter, CallbackEmitter
from algorithms.runner  import run, iter_steps

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                     # registry key, e.g. "quick"
    label:            str                     # human label, e.g. "Quick Sort"
    fn:               Callable                # the generator function
    pseudocode:       List[str]               # lines for the side-panel
    step_lines:       Dict[str, int] = field(default_factory=dict)   # step kind → pseudocode line
    tags:             List[str] = field(default_factory=list)        # e.g. ["in-place", "stable"]
    stable:           bool      = False
    complexity_time:  str       = ""          # average case, e.g. "O(n log n)"
    complexity_worst: str       = ""
    complexity_space: str       = ""
    description:      str       = ""          # one-liner for the UI card

    def line_for(self, step: Optional[Step]) -> int:
        """Pseudocode line to highlight for `step` (-1 = none)."""
        if step is None:
            return -1
        return self.step_lines.get(step.kind, -1)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble,
        pseudocode=_bubble_pc, step_lines=_bubble_sl,
        tags=["in-place", "stable", "quadratic"], stable=True,
        complexity_time="O(n²)", complexity_worst="O(n²)", complexity_space="O(1)",
        description="Neighbours swap until the largest values bubble to the end.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection,
        pseudocode=_selection_pc, step_lines=_selection_sl,
        tags=["in-place", "quadratic"],
        complexity_time="O(n²)", complexity_worst="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the tail and swaps it into place. At most n-1 swaps.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion,
        pseudocode=_insertion_pc, step_lines=_insertion_sl,
        tags=["in-place", "stable", "quadratic", "adaptive", "shift-based"], stable=True,
        complexity_time="O(n²)", complexity_worst="O(n²)", complexity_space="O(1)",
        description="Shifts bigger values right to open a hole for each new value. Fast on nearly sorted input.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick,
        pseudocode=_quick_pc, step_lines=_quick_sl,
        tags=["in-place", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_worst="O(n²)", complexity_space="O(n)",
        description="Lomuto partition around the last element. Watch it degrade on sorted input!",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge,
        pseudocode=_merge_pc, step_lines=_merge_sl,
        tags=["stable", "divide-and-conquer"], stable=True,
        complexity_time="O(n log n)", complexity_worst="O(n log n)", complexity_space="O(n)",
        description="Sorts both halves, then merges them through temporary buffers.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap,
        pseudocode=_heap_pc, step_lines=_heap_sl,
        tags=["in-place"],
        complexity_time="O(n log n)", complexity_worst="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then repeatedly moves the root to the end.",
    ),

    "shell": AlgoInfo(
        key="shell", label="Shell Sort", fn=_shell,
        pseudocode=_shell_pc, step_lines=_shell_sl,
        tags=["in-place", "adaptive", "shift-based"],
        complexity_time="O(n^1.5)", complexity_worst="O(n²)", complexity_space="O(1)",
        description="Insertion sort over shrinking gaps n/2, n/4, …, 1.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    """Return AlgoInfo by key, or raise UnknownAlgorithm."""
    info = REGISTRY.get(key)
    if info is None:
        raise UnknownAlgorithm(key, REGISTRY)
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def run_sort(name: str, values: Iterable) -> Tuple[List[float], Tuple[Step, ...]]:
    """
    Sort `values` with algorithm `name`.

    Returns (sorted_values, steps).  The input is not modified; `steps`
    is an immutable tuple that can be replayed against any copy of the
    original input.

    Raises:
        UnknownAlgorithm : `name` is not in REGISTRY.
        InvalidInput     : a value is not a finite number.
    Both are raised before the first step is produced.
    """
    info = require_algorithm(name)
    ds = Dataset(values)
    emitter = ListEmitter()
    run(info.fn, ds, emitter)
    logger.info("run_sort %s: n=%d steps=%d", name, len(ds), len(emitter.steps))
    return ds.snapshot(), tuple(emitter.steps)


def iter_sort(name: str, values: Iterable) -> Iterator[Step]:
    """
    Lazy run_sort: yields steps one at a time.  Validation happens on
    the call itself, not on the first next().
    """
    info = require_algorithm(name)
    ds = Dataset(values)
    return iter_steps(info.fn, ds)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "run",
    "iter_steps",
    "run_sort",
    "iter_sort",
    "StepEmitter",
    "NullEmitter",
    "ListEmitter",
    "CallbackEmitter",
]
