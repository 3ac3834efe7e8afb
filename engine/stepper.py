"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the Playback Driver: the ONLY object the UI talks to
during a run.  It owns a presentation copy of the input, applies one
Step at a time to it, and exposes a play/pause/next/prev/speed API.

Steps are deltas, not snapshots, so:
  - forward  = apply the next step to the presentation copy
  - backward = rebuild from the original input up to the target index
The algorithm's own Dataset is never read during playback.

State machine:
    IDLE      →  start() / load()  →  PAUSED
    PAUSED    →  play()            →  PLAYING
    PLAYING   →  pause()           →  PAUSED
    PLAYING   →  (steps exhausted) →  FINISHED
    any       →  cancel()          →  CANCELLED
    any       →  reset()           →  IDLE

Thread safety:
  NOT thread-safe.  Drive next_step() / tick() from a single thread
  (or an event loop).
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from dataset import Step, Compare, Swap, Overwrite, MarkFinal

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE      = "idle"
    PAUSED    = "paused"
    PLAYING   = "playing"
    FINISHED  = "finished"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   0.5,    # teaching mode
    "medium": 0.1,
    "fast":   0.03,
    "turbo":  0.01,   # slider minimum
}

MIN_DELAY = 0.01
MAX_DELAY = 1.0


def clamp_delay(seconds: float) -> float:
    """Clamp a step delay to the slider range [MIN_DELAY, MAX_DELAY]."""
    return max(MIN_DELAY, min(MAX_DELAY, seconds))


# ---------------------------------------------------------------------------
# Frame — what the renderer draws for the current position
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        step_index : Index of the last applied step (-1 = untouched input).
        step       : That step, or None.
        values     : Presentation copy after the step.
        compared   : Indices highlighted as "being compared".
        swapped    : Indices just exchanged.
        written    : Index just overwritten (shift / merge write).
        finalized  : Every index marked final so far.
        is_last    : True when no further steps exist.
    """
    step_index: int                  = -1
    step:       Optional[Step]       = None
    values:     Tuple[float, ...]    = ()
    compared:   Tuple[int, ...]      = ()
    swapped:    Tuple[int, ...]      = ()
    written:    Tuple[int, ...]      = ()
    finalized:  Tuple[int, ...]      = ()
    is_last:    bool                 = False


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------
def replay(values: Iterable[float], steps: Iterable[Step]) -> List[float]:
    """Apply `steps` in order to a fresh copy of `values`."""
    out = list(values)
    for step in steps:
        step.apply(out)
    return out


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : Every Step pulled so far (buffer for rewind).
        current_idx : Index into `steps` of the last applied step (-1 = none).
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Frame) fired whenever the frame changes.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Frame], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._source:     Optional[Iterator[Step]] = None
        self._initial:    List[float]   = []
        self._values:     List[float]   = []
        self._finalized:  Set[int]      = set()
        self.steps:       List[Step]    = []
        self.current_idx: int           = -1
        self.state:       StepperState  = StepperState.IDLE
        self.speed:       float         = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Frame], None]] = on_step

        # for auto-play timing
        self._clock:      Callable[[], float] = clock
        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, values: Sequence[float], source: Iterable[Step]) -> None:
        """Attach a lazily produced step stream (e.g. a live generator)."""
        self._begin(values)
        self._source = iter(source)
        self._notify()

    def load(self, values: Sequence[float], steps: Sequence[Step]) -> None:
        """Attach a fully computed trace."""
        self._begin(values)
        self.steps = list(steps)
        self._notify()

    def reset(self) -> None:
        """Back to IDLE — caller must call start() / load() again."""
        self._close_source()
        self._initial    = []
        self._values     = []
        self._finalized  = set()
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    def cancel(self) -> None:
        """
        Stop consuming.  The presentation stays on the current step; a
        live generator is closed at that step boundary.
        """
        self._close_source()
        self.state = StepperState.CANCELLED
        logger.debug("playback cancelled at step %d", self.current_idx)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Apply one more step.  Returns False if already at the end."""
        if self.state in (StepperState.IDLE, StepperState.CANCELLED):
            return False
        target = self.current_idx + 1
        if target >= len(self.steps) and not self._fetch_next():
            self.state = StepperState.FINISHED
            return False
        self._apply(self.steps[target])
        self.current_idx = target
        self._notify()
        return True

    def prev_step(self) -> bool:
        """Undo one step.  Returns False if already at the start."""
        if self.current_idx < 0:
            return False
        self._rebuild(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        self._notify()
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump so that step `idx` is the last applied one (-1 = start)."""
        if idx < -1:
            return False
        while idx >= len(self.steps):
            if not self._fetch_next():
                return False
        if idx >= self.current_idx:
            for k in range(self.current_idx + 1, idx + 1):
                self._apply(self.steps[k])
            self.current_idx = idx
        else:
            self._rebuild(idx)
        self._notify()
        return True

    def rewind(self) -> None:
        """Back to the untouched input."""
        self.goto_step(-1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED

    def jump_to_end(self) -> None:
        """Exhaust the source and apply every step."""
        while self._fetch_next():
            pass
        self.goto_step(len(self.steps) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.IDLE, StepperState.FINISHED, StepperState.CANCELLED):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = self._clock()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Call periodically (e.g. every 10 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = self._clock()
        if now - self._last_tick >= self.speed:
            self._last_tick = now
            return self.next_step()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = clamp_delay(seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def values(self) -> List[float]:
        return list(self._values)

    @property
    def frame(self) -> Frame:
        step = self.current_step
        compared = swapped = written = ()
        if isinstance(step, Compare):
            compared = step.indices
        elif isinstance(step, Swap):
            swapped = step.indices
        elif isinstance(step, Overwrite):
            written = step.indices
        return Frame(
            step_index=self.current_idx,
            step=step,
            values=tuple(self._values),
            compared=compared,
            swapped=swapped,
            written=written,
            finalized=tuple(sorted(self._finalized)),
            is_last=self._source is None and self.current_idx == len(self.steps) - 1,
        )

    @property
    def total_steps_fetched(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _begin(self, values: Sequence[float]) -> None:
        self._close_source()
        self._initial    = list(values)
        self._values     = list(values)
        self._finalized  = set()
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.PAUSED

    def _fetch_next(self) -> bool:
        """Pull one Step from the source into the buffer."""
        if self._source is None:
            return False
        try:
            self.steps.append(next(self._source))
            return True
        except StopIteration:
            self._source = None
            return False

    def _close_source(self) -> None:
        close = getattr(self._source, "close", None)
        if close is not None:
            close()
        self._source = None

    def _apply(self, step: Step) -> None:
        step.apply(self._values)
        if isinstance(step, MarkFinal):
            self._finalized.add(step.index)

    def _rebuild(self, idx: int) -> None:
        self._values    = list(self._initial)
        self._finalized = set()
        for step in self.steps[: idx + 1]:
            self._apply(step)
        self.current_idx = idx

    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self.frame)
