"""
generator.py — Bar Height Factory
==================================
Random input arrays for the visualizer, plus the responsive bar-count
table the browser UI uses to fit bars to the screen width.

Heights are integers drawn uniformly from [low, high): by default
10 %–80 % of a 400 px canvas, so even the shortest bar stays visible.
"""

import random
from typing import List, Optional

from dataset.errors import InvalidInput


MIN_BARS = 5
MAX_BARS = 100

# (max screen width, horizontal padding, px per bar incl. margin)
_BAR_WIDTH_TABLE = [
    (360, 40, 14),    # very small mobile
    (480, 40, 16),    # small mobile
    (768, 60, 18),    # tablet
]
_DESKTOP_MAX_WIDTH = 1200
_DESKTOP_PADDING   = 100
_DESKTOP_BAR_PX    = 22


def random_values(
    n: int,
    low: int = 40,
    high: int = 320,
    seed: Optional[int] = None,
) -> List[int]:
    """
    `n` random bar heights in [low, high).

    A fixed `seed` gives a reproducible array (handy for comparing two
    algorithms on the same input).
    """
    if n < 0:
        raise InvalidInput(f"Bar count must be non-negative, got {n}")
    if high <= low:
        raise InvalidInput(f"Empty height range [{low}, {high})")
    rng = random.Random(seed)
    return [rng.randrange(low, high) for _ in range(n)]


def clamp_bar_count(n: int) -> int:
    return max(MIN_BARS, min(MAX_BARS, n))


def optimal_bar_count(screen_width: int) -> int:
    """How many bars fit on a screen `screen_width` px wide, clamped to [5, 100]."""
    for max_width, padding, bar_px in _BAR_WIDTH_TABLE:
        if screen_width <= max_width:
            return clamp_bar_count((screen_width - padding) // bar_px)
    available = min(screen_width - _DESKTOP_PADDING, _DESKTOP_MAX_WIDTH)
    return clamp_bar_count(available // _DESKTOP_BAR_PX)
