"""
emitter.py — Step Emitter
==========================
The reporting channel between a running algorithm and whoever watches it.

    emit(step) -> None

Contract:
  - Purely observational: an emitter never touches the Dataset.
  - Called once per step, in algorithm order.  No batching, no reordering.
  - Never fails.  A NullEmitter (drop everything) is a valid observer.
"""

from typing import Callable, List

from dataset.step import Step


class StepEmitter:
    def emit(self, step: Step) -> None:
        raise NotImplementedError


class NullEmitter(StepEmitter):
    """Discards every step.  For correctness runs with no consumer."""

    def emit(self, step: Step) -> None:
        pass


class ListEmitter(StepEmitter):
    """Collects the whole trace in `steps`."""

    def __init__(self):
        self.steps: List[Step] = []

    def emit(self, step: Step) -> None:
        self.steps.append(step)


class CallbackEmitter(StepEmitter):
    """Forwards every step to `fn` (live renderers, audio, …)."""

    def __init__(self, fn: Callable[[Step], None]):
        self.fn = fn

    def emit(self, step: Step) -> None:
        self.fn(step)
