"""
runner.py — Drive an Algorithm Generator
=========================================
An algorithm is a generator over a Dataset.  `run` pulls every Step out
of it and hands each one to the emitter, in order, as it is produced.

The generator boundary is the ONLY suspension point: by the time a Step
reaches the emitter its mutation is already applied to the Dataset, and
the algorithm has not started its next operation yet.  Stopping at any
boundary (see `iter_steps`) therefore leaves the Dataset consistent.
"""

import logging
from typing import Callable, Generator, Iterator, Optional

from dataset import Dataset, Step
from algorithms.emitter import StepEmitter, NullEmitter

logger = logging.getLogger(__name__)

SortFn = Callable[[Dataset], Generator[Step, None, None]]


def run(fn: SortFn, ds: Dataset, emitter: Optional[StepEmitter] = None) -> int:
    """
    Run `fn` on `ds` to completion, emitting every step.

    Returns the number of steps emitted.
    """
    if emitter is None:
        emitter = NullEmitter()
    count = 0
    for step in fn(ds):
        emitter.emit(step)
        count += 1
    logger.debug("%s finished: n=%d steps=%d", getattr(fn, "__name__", fn), len(ds), count)
    return count


def iter_steps(fn: SortFn, ds: Dataset) -> Iterator[Step]:
    """
    Incremental run.  The caller may stop consuming at any point;
    closing the iterator cancels the algorithm at that step boundary.
    """
    gen = fn(ds)
    try:
        yield from gen
    finally:
        gen.close()
