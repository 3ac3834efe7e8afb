"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, compare, replay
"""

from engine.stepper  import (
    Stepper, StepperState, Frame, SPEED_PRESETS, MIN_DELAY, MAX_DELAY, clamp_delay, replay,
)
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Stepper",
    "StepperState",
    "Frame",
    "SPEED_PRESETS",
    "MIN_DELAY",
    "MAX_DELAY",
    "clamp_delay",
    "replay",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
