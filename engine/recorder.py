"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete sort (every Step), then computes the analytics the
UI shows in the Analytics panel and Comparison Mode.

Usage:
    rec = Recorder()
    rec.start(algo_key="quick", values=[5, 3, 8, 1])
    rec.run_to_completion()          # exhausts the generator
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay
    stepper = rec.stepper()          # playback over the recorded trace

Comparison Mode:
    Two Recorders run on the SAME input, then compare(rec1, rec2)
    → ComparisonResult.
"""

import logging
import sys
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from dataset import Dataset, Step, Compare, Swap, Overwrite, MarkFinal, steps_to_dicts
from algorithms import AlgoInfo, ListEmitter, require_algorithm, run
from engine.stepper import Stepper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    size:          int   = 0          # number of bars
    comparisons:   int   = 0
    swaps:         int   = 0
    overwrites:    int   = 0
    writes:        int   = 0          # value-changing swaps + overwrites
    finals:        int   = 0          # MarkFinal steps
    total_steps:   int   = 0
    wall_time_ms:  float = 0.0        # wall-clock time to run to completion
    memory_bytes:  int   = 0          # approx size of the step buffer
    sorted_ok:     bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    same_input: bool = True
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_writes:      str = ""
    winner_steps:       str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        initial : The input the run started from.
        result  : The sorted output (available after run_to_completion).
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.steps:    List[Step]           = []
        self.initial:  List[float]          = []
        self.result:   List[float]          = []
        self.metrics:  Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo] = None
        self._dataset:   Optional[Dataset]  = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, values: Sequence[float]) -> None:
        """Validate the algorithm and input.  Raises before any step exists."""
        info = require_algorithm(algo_key)
        ds = Dataset(values)

        self._algo_info = info
        self._dataset   = ds
        self.initial    = ds.snapshot()
        self.steps      = []
        self.result     = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self._dataset is None or self._algo_info is None:
            raise RuntimeError("Call start() first.")

        emitter = ListEmitter()
        t0 = time.monotonic()
        run(self._algo_info.fn, self._dataset, emitter)
        wall_ms = (time.monotonic() - t0) * 1000

        self.steps   = emitter.steps
        self.result  = self._dataset.snapshot()
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "%s on %d bars: %d steps (%d comparisons, %d writes) in %.2f ms",
            self._algo_info.key, len(self.initial), len(self.steps),
            self.metrics.comparisons, self.metrics.writes, wall_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    def stepper(self, **kwargs) -> Stepper:
        """A Stepper loaded with this run's trace, positioned at the start."""
        s = Stepper(**kwargs)
        s.load(self.initial, self.steps)
        return s

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "initial":  list(self.initial),
            "result":   list(self.result),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    steps_to_dicts(self.steps),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        counts = {Compare: 0, Swap: 0, Overwrite: 0, MarkFinal: 0}
        writes = 0

        # replay once to tell real writes from self-assignments
        values = list(self.initial)
        for s in self.steps:
            counts[type(s)] += 1
            if s.mutates:
                before = [values[k] for k in s.indices]
                s.apply(values)
                if [values[k] for k in s.indices] != before:
                    writes += 1

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            size=len(self.initial),
            comparisons=counts[Compare],
            swaps=counts[Swap],
            overwrites=counts[Overwrite],
            writes=writes,
            finals=counts[MarkFinal],
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            sorted_ok=self._dataset.is_sorted() if self._dataset else False,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    same_input = left.initial == right.initial
    if not same_input:
        logger.warning("comparing %s and %s on different inputs", l.algo_key, r.algo_key)

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        same_input=same_input,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_writes     =winner(l.writes, r.writes, l.algo_label, r.algo_label),
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )
