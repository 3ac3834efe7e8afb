"""
main.py — Sorting Visualizer Flask App
=======================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/algorithms         – registry listing
  POST /api/bars/generate      – generate a new random array (count or screen_width)
  GET  /api/bars/optimal       – bar count that fits a screen width
  POST /api/run                – sort the current array, load playback
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N (-1 = unsorted input)
  POST /api/step/end           – jump to the last step
  POST /api/step/play          – toggle play/pause
  POST /api/config/algo        – select algorithm
  POST /api/config/speed       – select speed preset or slider delay (ms)
  POST /api/config/theme       – select colour theme
  POST /api/config/gradient    – custom background gradient
  POST /api/compare            – race two algorithms on the current array
  GET  /api/state              – current app state (for polling)

State management:
  Small per-user settings live in the Flask session cookie:
    • values          – the current input array
    • selected_algo / speed / delay_ms / theme / gradient
    • run_id          – key into RUNS
  The recorded trace of a run is far too large for a cookie, so each run
  (Recorder + Stepper) is kept in the process-local RUNS store.  One run
  per session; the oldest runs are evicted past MAX_RUNS.
"""

import logging
import math
import secrets
from collections import OrderedDict
from dataclasses import asdict, dataclass
from typing import Optional

from flask import Flask, render_template_string, request, jsonify, session

from config import AppConfig, Gradient, THEMES, DEFAULT_THEME, get_theme, custom_gradient
from dataset import (
    Compare, InvalidInput, random_values, clamp_bar_count, optimal_bar_count, steps_to_dicts,
)
from algorithms import get_algorithm, list_algorithms, require_algorithm, algorithms_by_tag
from engine import Recorder, Stepper, compare, clamp_delay, SPEED_PRESETS
from ui import (
    render_bars,
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

logger = logging.getLogger(__name__)

CONFIG = AppConfig.from_env()

app = Flask(__name__)
app.secret_key = CONFIG.secret_key


# ---------------------------------------------------------------------------
# Run store
# ---------------------------------------------------------------------------
@dataclass
class ActiveRun:
    recorder: Recorder
    stepper:  Stepper


MAX_RUNS = 256
RUNS: "OrderedDict[str, ActiveRun]" = OrderedDict()

# Compare steps of these sorts test a held value, not the slot they name
SHIFT_BASED = {a.key for a in algorithms_by_tag("shift-based")}


def store_run(run: ActiveRun) -> str:
    old = session.get("run_id")
    if old:
        RUNS.pop(old, None)
    run_id = secrets.token_hex(8)
    RUNS[run_id] = run
    while len(RUNS) > MAX_RUNS:
        evicted, _ = RUNS.popitem(last=False)
        logger.debug("evicted run %s", evicted)
    session["run_id"] = run_id
    return run_id


def get_run() -> Optional[ActiveRun]:
    run_id = session.get("run_id")
    return RUNS.get(run_id) if run_id else None


def drop_run() -> None:
    run_id = session.pop("run_id", None)
    if run_id:
        RUNS.pop(run_id, None)


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_values():
    """Current input array, or a fresh random one."""
    if "values" not in session:
        session["values"] = random_values(CONFIG.default_bars)
    return list(session["values"])


def get_state():
    """Return current app state as a dict."""
    run = get_run()
    return {
        "selected_algo": session.get("selected_algo", CONFIG.default_algo),
        "speed":         session.get("speed", CONFIG.default_speed),
        "delay_ms":      round(current_delay() * 1000),
        "theme":         session.get("theme", DEFAULT_THEME),
        "gradient":      session.get("gradient"),
        "bar_count":     len(get_values()),
        "current_step":  run.stepper.current_idx if run else -1,
        "total_steps":   len(run.stepper.steps) if run else 0,
        "is_playing":    run.stepper.is_playing if run else False,
        "is_finished":   run.stepper.is_finished if run else False,
    }


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def current_delay() -> float:
    """Seconds between auto-play steps: the slider value, else the preset."""
    if "delay_ms" in session:
        return session["delay_ms"] / 1000
    preset = session.get("speed", CONFIG.default_speed)
    return SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])


def current_gradient() -> Optional[Gradient]:
    data = session.get("gradient")
    return custom_gradient(**data) if data else None


def page_background() -> str:
    """The custom gradient wins over the preset theme's background."""
    gradient = current_gradient()
    if gradient is not None:
        return gradient.css
    return get_theme(session.get("theme", DEFAULT_THEME)).background


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def static_svg(values) -> str:
    s = Stepper()
    s.load(values, [])
    return render_bars(s.frame, get_theme(session.get("theme", DEFAULT_THEME)))


def frame_payload(run: ActiveRun) -> dict:
    """Everything the page needs to redraw after the frame changed."""
    stepper = run.stepper
    frame = stepper.frame
    info = run.recorder.algo_info
    held = None
    if info and info.key in SHIFT_BASED and isinstance(frame.step, Compare):
        held = held_value(run.recorder.initial, stepper.steps, stepper.current_idx)
    return {
        "svg": render_bars(frame, get_theme(session.get("theme", DEFAULT_THEME))),
        "pseudocode": pseudocode_viewer(
            pseudocode_lines=info.pseudocode if info else [],
            current_line=info.line_for(frame.step) if info else -1,
            algo_label=info.label if info else "",
        ),
        "explanation": explanation_panel(describe_step(frame.step, frame.values, held)),
        "current_step": stepper.current_idx,
        "total_steps": len(stepper.steps),
        "is_last": frame.is_last,
    }


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidInput)
def handle_invalid_input(err: InvalidInput):
    logger.warning("rejected request to %s: %s", request.path, err)
    return jsonify({"error": str(err)}), 400


def no_run_response():
    return jsonify({"error": "Run a sort first"}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    state = get_state()
    values = get_values()
    algo_info = get_algorithm(state["selected_algo"])
    theme = get_theme(state["theme"])

    html = render_template_string(INDEX_TEMPLATE,
        background=page_background(),
        svg=static_svg(values),
        playback=playback_controls(speed=state["speed"], delay_ms=state["delay_ms"]),
        algo_selector=algorithm_selector(list_algorithms(), state["selected_algo"]),
        bar_gen=bar_generator(len(values)),
        bar_count=len(values),
        themes=theme_picker(THEMES, state["theme"], current_gradient()),
        analytics=analytics_panel(),
        compare_picker=comparison_picker(list_algorithms()),
        comparison=comparison_panel(),
        pseudocode=pseudocode_viewer(
            pseudocode_lines=algo_info.pseudocode if algo_info else [],
            algo_label=algo_info.label if algo_info else "",
        ),
        explanation=explanation_panel(),
    )
    return html


@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([
        {
            "key": a.key,
            "label": a.label,
            "stable": a.stable,
            "tags": a.tags,
            "complexity_time": a.complexity_time,
            "complexity_worst": a.complexity_worst,
            "complexity_space": a.complexity_space,
            "description": a.description,
        }
        for a in list_algorithms()
    ])


# ---------------------------------------------------------------------------
# API: Array Generation
# ---------------------------------------------------------------------------
@app.route("/api/bars/generate", methods=["POST"])
def api_bars_generate():
    data = json_body()
    try:
        if "count" in data:
            count = int(data["count"])
        elif "screen_width" in data:
            count = optimal_bar_count(int(data["screen_width"]))
        else:
            count = CONFIG.default_bars
        seed = data.get("seed")
        seed = int(seed) if seed not in (None, "") else None
    except (TypeError, ValueError):
        raise InvalidInput("count, screen_width and seed must be integers")

    values = random_values(clamp_bar_count(count), seed=seed)
    set_state(values=values)
    drop_run()
    return jsonify({"svg": static_svg(values), "values": values})


@app.route("/api/bars/optimal")
def api_bars_optimal():
    """Bar count that fits a screen `screen_width` px wide."""
    width = request.args.get("screen_width", type=int)
    if width is None:
        raise InvalidInput("screen_width must be an integer")
    return jsonify({"screen_width": width, "count": optimal_bar_count(width)})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = json_body()
    algo_key = data.get("algo_key") or get_state()["selected_algo"]
    if "values" in data:
        values = data["values"]
        if not isinstance(values, list):
            raise InvalidInput("values must be a list of numbers")
    else:
        values = get_values()

    rec = Recorder()
    rec.start(algo_key, values)
    rec.run_to_completion()

    stepper = rec.stepper()
    stepper.set_speed_value(current_delay())
    run = ActiveRun(recorder=rec, stepper=stepper)
    store_run(run)
    set_state(selected_algo=algo_key, values=rec.initial)

    payload = frame_payload(run)
    payload["analytics"] = analytics_panel(rec.metrics)
    payload["metrics"] = asdict(rec.metrics)
    if data.get("include_steps"):
        payload["sorted"] = rec.result
        payload["steps"] = steps_to_dicts(rec.steps)
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    run = get_run()
    if run is None:
        return no_run_response()
    if not run.stepper.next_step():
        return jsonify({"error": "Already at last step", **frame_payload(run)}), 400
    return jsonify(frame_payload(run))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    run = get_run()
    if run is None:
        return no_run_response()
    if not run.stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    return jsonify(frame_payload(run))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    run = get_run()
    if run is None:
        return no_run_response()
    idx = json_body().get("index", -1)
    if isinstance(idx, bool) or not isinstance(idx, int) or not run.stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index"}), 400
    return jsonify(frame_payload(run))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    run = get_run()
    if run is None:
        return no_run_response()
    run.stepper.jump_to_end()
    return jsonify(frame_payload(run))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    run = get_run()
    if run is None:
        return no_run_response()
    run.stepper.toggle_play()
    return jsonify({
        "is_playing": run.stepper.is_playing,
        "delay_ms": int(run.stepper.speed * 1000),
    })


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    algo_key = json_body().get("algo_key", CONFIG.default_algo)
    info = require_algorithm(algo_key)
    set_state(selected_algo=algo_key)
    return jsonify({
        "algo_key": algo_key,
        "pseudocode": pseudocode_viewer(info.pseudocode, -1, info.label),
    })


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    """Either {"speed": preset} or {"delay_ms": n} from the slider."""
    data = json_body()
    run = get_run()

    if "delay_ms" in data:
        delay_ms = data["delay_ms"]
        if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)) \
                or not math.isfinite(delay_ms):
            raise InvalidInput(f"delay_ms must be a number of milliseconds, got {delay_ms!r}")
        delay = clamp_delay(delay_ms / 1000)
        set_state(delay_ms=round(delay * 1000))
        if run is not None:
            run.stepper.set_speed_value(delay)
        return jsonify({"speed": session.get("speed", CONFIG.default_speed),
                        "delay_ms": session["delay_ms"]})

    speed = data.get("speed", CONFIG.default_speed)
    if not isinstance(speed, str) or speed not in SPEED_PRESETS:
        raise InvalidInput(f"Unknown speed preset: {speed!r}")
    set_state(speed=speed)
    session.pop("delay_ms", None)
    if run is not None:
        run.stepper.set_speed(speed)
    return jsonify({"speed": speed, "delay_ms": round(SPEED_PRESETS[speed] * 1000)})


@app.route("/api/config/theme", methods=["POST"])
def api_config_theme():
    key = json_body().get("theme", DEFAULT_THEME)
    if not isinstance(key, str) or key not in THEMES:
        raise InvalidInput(f"Unknown theme: {key!r}")
    set_state(theme=key)
    session.pop("gradient", None)
    theme = THEMES[key]
    run = get_run()
    svg = render_bars(run.stepper.frame, theme) if run else static_svg(get_values())
    return jsonify({"theme": key, "background": theme.background, "svg": svg})


@app.route("/api/config/gradient", methods=["POST"])
def api_config_gradient():
    data = json_body()
    gradient = custom_gradient(data.get("start"), data.get("end"), data.get("direction", "135deg"))
    set_state(gradient=gradient.to_dict())
    return jsonify({"gradient": gradient.to_dict(), "background": gradient.css})


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = json_body()
    values = get_values()

    left, right = Recorder(), Recorder()
    left.start(data.get("left", "bubble"), values)
    right.start(data.get("right", "quick"), values)
    left.run_to_completion()
    right.run_to_completion()

    result = compare(left, right)
    return jsonify({
        "comparison": comparison_panel(result),
        "left": asdict(result.left),
        "right": asdict(result.right),
        "winner_comparisons": result.winner_comparisons,
        "winner_writes": result.winner_writes,
        "winner_steps": result.winner_steps,
    })


@app.route("/api/state")
def api_state():
    return jsonify(get_state())


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
      background: {{ background }};
      color: #e6edf3;
      min-height: 100vh;
      display: flex;
    }
    #sidebar { width: 320px; padding: 20px 14px; overflow-y: auto; background: rgba(1, 4, 9, 0.55); }
    #main { flex: 1; display: flex; flex-direction: column; padding: 20px; gap: 20px; }
    #canvas-container { display: flex; justify-content: center; }
    #canvas-container svg { max-width: 100%; height: auto; }
    #bottom-panel { display: grid; grid-template-columns: 1fr 1fr; gap: 20px; }
    .panel, .code-block, .explanation-text {
      background: rgba(22, 27, 34, 0.85);
      border: 1px solid #30363d;
      border-radius: 12px;
      padding: 14px;
      margin-bottom: 14px;
    }
    .panel h3 { font-size: 14px; margin-bottom: 10px; letter-spacing: 0.3px; }
    .button-row { display: flex; gap: 6px; margin-bottom: 8px; }
    button, select, input {
      background: #1c2128; color: #e6edf3; border: 1px solid #30363d;
      border-radius: 6px; padding: 6px 10px; font-size: 13px;
    }
    button:hover { border-color: #4a90e2; cursor: pointer; }
    .btn-primary { background: #4a90e2; border-color: #357abd; width: 100%; margin-top: 8px; }
    .swatches { display: flex; flex-wrap: wrap; gap: 8px; }
    .theme-option { width: 36px; height: 36px; border-radius: 50%; }
    .theme-option.active { outline: 2px solid #fff; }
    .custom-gradient { display: flex; flex-wrap: wrap; gap: 6px; margin-top: 10px; align-items: center; }
    #gradient-preview { width: 100%; height: 18px; border-radius: 6px; }
    #speed-slider { width: 100%; margin-top: 6px; }
    .code-line { font-family: 'JetBrains Mono', monospace; font-size: 13px; white-space: pre; padding: 1px 6px; }
    .code-line.highlight { background: rgba(74, 144, 226, 0.35); border-radius: 4px; }
    .placeholder, .muted { color: #7d8590; }
    .finished-badge { color: #51cf66; font-weight: 700; }
    table { width: 100%; font-size: 13px; }
    td, th { padding: 3px 4px; text-align: left; }
  </style>
</head>
<body>
  <div id="sidebar">
    {{ algo_selector|safe }}
    {{ playback|safe }}
    {{ bar_gen|safe }}
    {{ themes|safe }}
    <div id="analytics">{{ analytics|safe }}</div>
    {{ compare_picker|safe }}
    <div id="comparison">{{ comparison|safe }}</div>
  </div>
  <div id="main">
    <div id="canvas-container"><div id="canvas-svg">{{ svg|safe }}</div></div>
    <div id="bottom-panel">
      <div id="pseudocode">{{ pseudocode|safe }}</div>
      <div id="explanation">{{ explanation|safe }}</div>
    </div>
  </div>
  <script>
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function showFrame(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.current_step !== undefined) document.getElementById('current-step').textContent = data.current_step + 1;
      if (data.total_steps !== undefined) document.getElementById('total-steps').textContent = data.total_steps;
    }

    let timer = null;
    function stopTimer() { if (timer) { clearInterval(timer); timer = null; } }

    document.getElementById('btn-run').addEventListener('click', async () => {
      stopTimer();
      const data = await post('/api/run', {algo_key: document.getElementById('algo-selector').value});
      showFrame(data);
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
    });

    document.getElementById('btn-next').addEventListener('click', async () => showFrame(await post('/api/step/next')));
    document.getElementById('btn-prev').addEventListener('click', async () => showFrame(await post('/api/step/prev')));
    document.getElementById('btn-rewind').addEventListener('click', async () => showFrame(await post('/api/step/goto', {index: -1})));
    document.getElementById('btn-end').addEventListener('click', async () => { stopTimer(); showFrame(await post('/api/step/end')); });

    document.getElementById('btn-play').addEventListener('click', async () => {
      const data = await post('/api/step/play');
      stopTimer();
      if (data.is_playing) {
        timer = setInterval(async () => {
          const frame = await post('/api/step/next');
          showFrame(frame);
          if (frame.error || frame.is_last) { stopTimer(); await post('/api/step/play'); }
        }, data.delay_ms);
      }
    });

    document.getElementById('btn-generate').addEventListener('click', async () => {
      stopTimer();
      const data = await post('/api/bars/generate', {
        count: +document.getElementById('bar-count').value,
        seed: document.getElementById('bar-seed').value,
      });
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.values) barCount = data.values.length;
    });

    document.getElementById('algo-selector').addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
    });

    function showDelay(ms) {
      document.getElementById('speed-slider').value = ms;
      document.getElementById('speed-value').textContent = ms + ' ms';
    }

    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      const data = await post('/api/config/speed', {speed: e.target.value});
      if (data.delay_ms !== undefined) showDelay(data.delay_ms);
    });

    document.getElementById('speed-slider').addEventListener('input', (e) => {
      document.getElementById('speed-value').textContent = e.target.value + ' ms';
    });
    document.getElementById('speed-slider').addEventListener('change', async (e) => {
      const data = await post('/api/config/speed', {delay_ms: +e.target.value});
      if (data.delay_ms !== undefined) showDelay(data.delay_ms);
    });

    document.querySelectorAll('.theme-option').forEach(btn => {
      btn.addEventListener('click', async () => {
        const data = await post('/api/config/theme', {theme: btn.dataset.theme});
        if (data.background) document.body.style.background = data.background;
        if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
        document.querySelectorAll('.theme-option').forEach(b => b.classList.remove('active'));
        btn.classList.add('active');
      });
    });

    function gradientInputs() {
      return {
        start: document.getElementById('gradient-start').value,
        end: document.getElementById('gradient-end').value,
        direction: document.getElementById('gradient-direction').value,
      };
    }
    function previewGradient() {
      const g = gradientInputs();
      document.getElementById('gradient-preview').style.background =
        `linear-gradient(${g.direction}, ${g.start} 0%, ${g.end} 100%)`;
    }
    ['gradient-start', 'gradient-end', 'gradient-direction'].forEach(id =>
      document.getElementById(id).addEventListener('input', previewGradient));
    document.getElementById('btn-gradient').addEventListener('click', async () => {
      const data = await post('/api/config/gradient', gradientInputs());
      if (data.background) {
        document.body.style.background = data.background;
        document.querySelectorAll('.theme-option').forEach(b => b.classList.remove('active'));
      }
    });

    document.getElementById('btn-compare').addEventListener('click', async () => {
      const data = await post('/api/compare', {
        left: document.getElementById('compare-left').value,
        right: document.getElementById('compare-right').value,
      });
      if (data.comparison) document.getElementById('comparison').innerHTML = data.comparison;
    });

    // responsive bar count: regenerate when the fitting count drifts by more than 2
    let barCount = {{ bar_count }};
    async function fitBars() {
      const res = await fetch('/api/bars/optimal?screen_width=' + window.innerWidth);
      const data = await res.json();
      if (data.count === undefined) return;
      document.getElementById('bar-count').value = data.count;
      if (Math.abs(data.count - barCount) > 2) {
        stopTimer();
        const bars = await post('/api/bars/generate', {screen_width: window.innerWidth});
        if (bars.svg) document.getElementById('canvas-svg').innerHTML = bars.svg;
        if (bars.values) barCount = bars.values.length;
      }
    }
    let resizeTimer = null;
    window.addEventListener('resize', () => {
      clearTimeout(resizeTimer);
      resizeTimer = setTimeout(fitBars, 250);
    });
    fitBars();
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if CONFIG.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Sorting Visualizer on http://%s:%d", CONFIG.host, CONFIG.port)
    app.run(host=CONFIG.host, port=CONFIG.port, debug=CONFIG.debug)
