"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – play/pause/next/prev/rewind/end/speed
  • algorithm_selector  – dropdown with complexity hints
  • bar_generator       – bar count + seed, "New Array" button
  • theme_picker        – the colour theme swatches
  • analytics_panel     – comparisons, writes, steps, time
  • comparison_picker   – the two algorithms to race
  • comparison_panel    – side-by-side metrics of two runs
  • pseudocode_viewer   – with live line highlighting
  • explanation_panel   – Learning Mode "what just happened"

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import Dict, List, Optional, Sequence

from algorithms import AlgoInfo
from config import Theme, Gradient, GRADIENT_DIRECTIONS
from dataset import Step, Compare, Swap, Overwrite, MarkFinal, MIN_BARS, MAX_BARS
from engine import RunMetrics, ComparisonResult, SPEED_PRESETS, MIN_DELAY, MAX_DELAY
from ui.canvas import fmt_value


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    current_step: int = 0,
    total_steps: int = 0,
    speed: str = "medium",
    is_finished: bool = False,
    delay_ms: Optional[int] = None,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"
    if delay_ms is None:
        delay_ms = int(SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"]) * 1000)

    options = []
    for name, seconds in SPEED_PRESETS.items():
        sel = 'selected' if name == speed else ''
        options.append(f'<option value="{name}" {sel}>{name.capitalize()} ({int(seconds * 1000)} ms)</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-rewind" title="Rewind to start">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Jump to end">⏭</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{current_step}</span> / <span id="total-steps">{total_steps}</span>
        {' <span class="finished-badge">SORTED</span>' if is_finished else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(options)}
        </select>
        <input id="speed-slider" type="range" min="{int(MIN_DELAY * 1000)}" max="{int(MAX_DELAY * 1000)}" step="10" value="{delay_ms}">
        <span id="speed-value">{delay_ms} ms</span>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "bubble") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
      <button id="btn-run" class="btn-primary">▶ Sort</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Bar Generator
# ---------------------------------------------------------------------------
def bar_generator(count: int = 30) -> str:
    return f"""
    <div class="panel bar-generator">
      <h3>📊 Array</h3>
      <label>Bars: <input id="bar-count" type="number" min="{MIN_BARS}" max="{MAX_BARS}" value="{count}"></label>
      <label>Seed: <input id="bar-seed" type="number" placeholder="random"></label>
      <button id="btn-generate" class="btn-secondary">New Array</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Theme Picker
# ---------------------------------------------------------------------------
def theme_picker(
    themes: Dict[str, Theme],
    selected_key: str = "default",
    gradient: Optional[Gradient] = None,
) -> str:
    swatches = []
    for theme in themes.values():
        active = 'active' if theme.key == selected_key and gradient is None else ''
        swatches.append(
            f'<button class="theme-option {active}" data-theme="{theme.key}" '
            f'style="background: {theme.background};" title="{theme.label}"></button>'
        )

    # custom gradient inputs start from the active background
    if gradient is None:
        base = themes.get(selected_key) or next(iter(themes.values()))
        gradient = Gradient(base.start, base.end)
    directions = ''.join(
        f'<option value="{d}" {"selected" if d == gradient.direction else ""}>{d}</option>'
        for d in GRADIENT_DIRECTIONS
    )
    return f"""
    <div class="panel theme-picker">
      <h3>🎨 Theme</h3>
      <div class="swatches">{''.join(swatches)}</div>
      <div class="custom-gradient">
        <label>Start: <input id="gradient-start" type="color" value="{gradient.start}"></label>
        <label>End: <input id="gradient-end" type="color" value="{gradient.end}"></label>
        <select id="gradient-direction">{directions}</select>
        <div id="gradient-preview" style="background: {gradient.css};"></div>
        <button id="btn-gradient" class="btn-secondary">Apply Gradient</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📈 Analytics</h3>
          <p class="placeholder">Sort an array to see metrics.</p>
        </div>
        """

    status = "✅ Sorted" if metrics.sorted_ok else "❌ Not sorted"

    return f"""
    <div class="panel analytics-panel">
      <h3>📈 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Bars:</td><td><strong>{metrics.size}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Overwrites:</td><td><strong>{metrics.overwrites}</strong></td></tr>
        <tr><td>Value Changes:</td><td><strong>{metrics.writes}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Memory:</td><td><strong>{metrics.memory_bytes // 1024} KB</strong></td></tr>
        <tr><td>Result:</td><td><strong>{status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison Mode</h3>
          <p class="placeholder">Pick two algorithms above and press <strong>Compare</strong> to race them on the current array.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    warning = "" if comp.same_input else '<p class="warning">⚠️ Runs used different arrays.</p>'

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {left.algo_label} vs {right.algo_label}</h3>
      {warning}
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{left.algo_label}</th>
            <th>{right.algo_label}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          <tr>
            <td>Comparisons</td>
            <td>{left.comparisons}</td>
            <td>{right.comparisons}</td>
            <td>{winner_badge(comp.winner_comparisons)}</td>
          </tr>
          <tr>
            <td>Value Changes</td>
            <td>{left.writes}</td>
            <td>{right.writes}</td>
            <td>{winner_badge(comp.winner_writes)}</td>
          </tr>
          <tr>
            <td>Total Steps</td>
            <td>{left.total_steps}</td>
            <td>{right.total_steps}</td>
            <td>{winner_badge(comp.winner_steps)}</td>
          </tr>
          <tr>
            <td>Wall Time</td>
            <td>{left.wall_time_ms:.2f} ms</td>
            <td>{right.wall_time_ms:.2f} ms</td>
            <td>—</td>
          </tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Picker
# ---------------------------------------------------------------------------
def comparison_picker(
    algorithms: List[AlgoInfo],
    left_key: str = "bubble",
    right_key: str = "quick",
) -> str:
    def options(selected):
        return ''.join(
            f'<option value="{a.key}" {"selected" if a.key == selected else ""}>{a.label}</option>'
            for a in algorithms
        )

    return f"""
    <div class="panel comparison-picker">
      <h3>🏁 Race</h3>
      <select id="compare-left">{options(left_key)}</select>
      <span>vs</span>
      <select id="compare-right">{options(right_key)}</select>
      <button id="btn-compare" class="btn-primary">Compare</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
    algo_label: str = "",
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block" title="{escape(algo_label)}">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel (Learning Mode)
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "", show: bool = True) -> str:
    if not show:
        return """<div class="explanation-text muted">Learning mode disabled</div>"""

    if not explanation:
        explanation = "▶ Click <strong>Sort</strong> to watch the algorithm one step at a time."

    return f"""<div class="explanation-text">{explanation}</div>"""


def describe_step(
    step: Optional[Step],
    values: Sequence[float],
    held: Optional[float] = None,
) -> str:
    """
    Plain-English text for Learning Mode.  `values` is the presentation
    array AFTER the step was applied.  `held` is the value a shift-based
    sort has lifted out of the array (see held_value); its Compare is
    against that value, not against the hole it will drop into.
    """
    if step is None:
        return "Unsorted input. Nothing has been compared yet."
    if isinstance(step, Compare):
        if held is not None:
            return (
                f"Compare position {step.i} (<strong>{fmt_value(values[step.i])}</strong>) "
                f"with the held value <strong>{fmt_value(held)}</strong>."
            )
        a, b = values[step.i], values[step.j]
        return (
            f"Compare position {step.i} (<strong>{fmt_value(a)}</strong>) "
            f"with position {step.j} (<strong>{fmt_value(b)}</strong>)."
        )
    if isinstance(step, Swap):
        return (
            f"Swap positions {step.i} and {step.j}: "
            f"they now hold <strong>{fmt_value(values[step.i])}</strong> and "
            f"<strong>{fmt_value(values[step.j])}</strong>."
        )
    if isinstance(step, Overwrite):
        return f"Write <strong>{fmt_value(step.value)}</strong> into position {step.index}."
    if isinstance(step, MarkFinal):
        return f"Position {step.index} is settled."
    return ""


def held_value(initial: Sequence[float], steps: Sequence[Step], upto: int) -> Optional[float]:
    """
    The value an insertion walk holds aside at step `upto`, or None.

    Only meaningful for shift-based sorts (insertion, shell).  A walk
    starts at a Compare with no walk open: the slot it compares against
    holds the value being inserted.  Every shift into the hole moves the
    hole to the compared neighbour; writing the held value back closes
    the walk.  Shifts only move values strictly greater than the held
    one, so the two kinds of write never look alike.
    """
    values = list(initial)
    held = hole = source = None
    for step in steps[: upto + 1]:
        if isinstance(step, Compare):
            if held is None:
                held, hole = values[step.j], step.j
            source = step.i
        elif isinstance(step, Overwrite) and held is not None and step.index == hole:
            if step.value == held:
                held = hole = None
            else:
                hole = source
        step.apply(values)
    return held
