"""
ui/
---
Presentation layer.  Stateless render functions only.

    from ui import render_bars, playback_controls, …
"""

from ui.canvas import render_bars, CanvasConfig
from ui.controls import (
    playback_controls,
    algorithm_selector,
    bar_generator,
    theme_picker,
    analytics_panel,
    comparison_picker,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    describe_step,
    held_value,
)

__all__ = [
    "render_bars",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "bar_generator",
    "theme_picker",
    "analytics_panel",
    "comparison_picker",
    "comparison_panel",
    "pseudocode_viewer",
    "explanation_panel",
    "describe_step",
    "held_value",
]
