"""
canvas.py — SVG Bar Renderer
=============================
Pure rendering function: Frame → SVG string.

The renderer consumes:
  • frame   – values plus highlight info for the current step
  • theme   – bar colours of the selected colour theme
  • config  – visual config (canvas size, highlight colours, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - Highlight precedence: swapped > written > compared > final > default,
    so the operation happening right now always wins over "sorted" green.
  - Heights are scaled to the value range of the frame.  Zero and
    negative values still get a sliver so every bar stays visible.
"""

from typing import Dict, Optional, Sequence

from config import Theme, get_theme, DEFAULT_THEME
from engine.stepper import Frame


# ---------------------------------------------------------------------------
# Visual Config — dimensions and highlight colours
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 400
    bg:     str = "rgba(0, 0, 0, 0.15)"
    padding: int = 16

    # bars
    bar_gap:       int = 2
    bar_min_px:    int = 4
    bar_radius:    int = 2
    label_color:   str = "#e6edf3"
    label_size:    int = 10
    max_labels:    int = 40      # value labels are dropped past this many bars

    # highlight colours (state → fill)
    state_colors: Dict[str, str] = {
        "compare":  "#ff6b6b",   # red glow
        "partner":  "#4ecdc4",   # teal, second operand of a comparison
        "swap":     "#ffd93d",   # yellow pulse
        "write":    "#f783ac",   # pink, shift / merge write
        "final":    "#51cf66",   # green, settled
    }


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    frame: Frame,
    theme: Optional[Theme] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        frame  : Current playback frame (values + highlights).
        theme  : Colour theme for un-highlighted bars.
        config : Visual config.
    """
    theme = theme or get_theme(DEFAULT_THEME)
    values = frame.values

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}" rx="12"/>',
    ]

    if values:
        states = _bar_states(frame)
        heights = _scale(values, config)
        usable_w = config.width - 2 * config.padding
        slot_w = usable_w / len(values)
        bar_w = max(1.0, slot_w - config.bar_gap)
        show_labels = len(values) <= config.max_labels

        for idx, (value, h) in enumerate(zip(values, heights)):
            x = config.padding + idx * slot_w
            y = config.height - config.padding - h
            fill = config.state_colors.get(states.get(idx, ""), theme.primary)
            svg_parts.append(
                f'<rect class="bar {states.get(idx, "")}" data-index="{idx}" '
                f'x="{x:.1f}" y="{y:.1f}" width="{bar_w:.1f}" height="{h:.1f}" '
                f'fill="{fill}" stroke="{theme.secondary}" stroke-width="1" rx="{config.bar_radius}"/>'
            )
            if show_labels:
                svg_parts.append(
                    f'<text x="{x + bar_w / 2:.1f}" y="{y - 4:.1f}" text-anchor="middle" '
                    f'font-size="{config.label_size}" fill="{config.label_color}">{fmt_value(value)}</text>'
                )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _bar_states(frame: Frame) -> Dict[int, str]:
    states: Dict[int, str] = {idx: "final" for idx in frame.finalized}
    if frame.compared:
        first, *rest = frame.compared
        for idx in rest:
            states[idx] = "partner"
        states[first] = "compare"
    for idx in frame.written:
        states[idx] = "write"
    for idx in frame.swapped:
        states[idx] = "swap"
    return states


def _scale(values: Sequence[float], config: CanvasConfig) -> Sequence[float]:
    lo = min(0, min(values))
    hi = max(values)
    span = hi - lo or 1
    # leave room above the tallest bar for its label
    usable = config.height - 2 * config.padding - config.label_size - 6
    return [max(config.bar_min_px, (v - lo) / span * usable) for v in values]


def fmt_value(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"
