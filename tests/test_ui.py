"""
Tests for the stateless render functions in ui/.
"""

import pytest

from algorithms import REGISTRY, list_algorithms, algorithms_by_tag, run_sort
from config import THEMES, Gradient, get_theme
from dataset import Compare, Swap, Overwrite, MarkFinal
from engine import Frame, RunMetrics, ComparisonResult
from ui import (
    render_bars,
    CanvasConfig,
    playback_controls,
    algorithm_selector,
    bar_generator,
    theme_picker,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    comparison_picker,
    describe_step,
    held_value,
)


class TestRenderBars:
    def test_one_rect_per_bar(self):
        svg = render_bars(Frame(values=(3, 1, 2)))
        assert svg.startswith("<svg")
        assert svg.count('class="bar') == 3

    def test_empty_frame_is_just_the_background(self):
        svg = render_bars(Frame())
        assert 'class="bar' not in svg
        assert svg.endswith("</svg>")

    def test_highlight_colours(self):
        colors = CanvasConfig.state_colors
        frame = Frame(values=(3, 1, 2, 4), compared=(0, 1), finalized=(3,))
        svg = render_bars(frame)
        assert 'class="bar compare" data-index="0"' in svg
        assert 'class="bar partner" data-index="1"' in svg
        assert 'class="bar final" data-index="3"' in svg
        assert colors["compare"] in svg
        assert colors["final"] in svg

    def test_swap_beats_final(self):
        svg = render_bars(Frame(values=(1, 2), swapped=(0, 1), finalized=(0,)))
        assert 'class="bar swap" data-index="0"' in svg

    def test_theme_colour_for_plain_bars(self):
        theme = get_theme("forest")
        svg = render_bars(Frame(values=(1, 2)), theme)
        assert theme.primary in svg

    def test_labels_dropped_for_many_bars(self):
        few = render_bars(Frame(values=tuple(range(1, 11))))
        many = render_bars(Frame(values=tuple(range(1, 101))))
        assert "<text" in few
        assert "<text" not in many

    def test_float_labels(self):
        svg = render_bars(Frame(values=(1.5, 2.0)))
        assert ">1.50<" in svg
        assert ">2<" in svg


class TestPanels:
    def test_playback_controls_lists_speeds(self):
        html = playback_controls(speed="fast", total_steps=12)
        assert 'value="fast" selected' in html
        assert ">12<" in html

    def test_algorithm_selector_marks_selection(self):
        html = algorithm_selector(list_algorithms(), "heap")
        for key in REGISTRY:
            assert f'value="{key}"' in html
        assert 'value="heap" selected' in html

    def test_bar_generator_limits(self):
        html = bar_generator(25)
        assert 'value="25"' in html
        assert 'min="5"' in html and 'max="100"' in html

    def test_theme_picker(self):
        html = theme_picker(THEMES, "ocean")
        assert html.count("theme-option") == len(THEMES)
        assert 'theme-option active" data-theme="ocean"' in html

    def test_playback_controls_slider(self):
        html = playback_controls(speed="slow")
        assert 'id="speed-slider" type="range" min="10" max="1000"' in html
        assert 'value="500"' in html
        assert "250 ms" in playback_controls(delay_ms=250)

    def test_theme_picker_gradient_inputs_follow_theme(self):
        html = theme_picker(THEMES, "ocean")
        assert f'id="gradient-start" type="color" value="{THEMES["ocean"].start}"' in html
        assert f'id="gradient-end" type="color" value="{THEMES["ocean"].end}"' in html
        assert 'id="btn-gradient"' in html

    def test_theme_picker_with_custom_gradient(self):
        gradient = Gradient("#112233", "#445566", "to bottom")
        html = theme_picker(THEMES, "ocean", gradient)
        assert "theme-option active" not in html
        assert 'value="#112233"' in html
        assert 'value="to bottom" selected' in html
        assert gradient.css in html

    def test_comparison_picker(self):
        html = comparison_picker(list_algorithms(), "merge", "heap")
        assert html.count('value="bubble"') == 2
        assert 'value="merge" selected' in html
        assert 'value="heap" selected' in html
        assert 'id="btn-compare"' in html

    def test_analytics_panel(self):
        assert "placeholder" in analytics_panel()
        html = analytics_panel(RunMetrics(algo_label="Heap Sort", comparisons=17, sorted_ok=True))
        assert "Heap Sort" in html
        assert "<strong>17</strong>" in html

    def test_comparison_panel(self):
        assert "placeholder" in comparison_panel()
        comp = ComparisonResult(
            left=RunMetrics(algo_label="Bubble Sort"),
            right=RunMetrics(algo_label="Quick Sort"),
            same_input=False,
            winner_comparisons="Quick Sort",
            winner_writes="tie",
            winner_steps="Quick Sort",
        )
        html = comparison_panel(comp)
        assert "Bubble Sort vs Quick Sort" in html
        assert "👑 Quick Sort" in html
        assert "Tie" in html
        assert "different arrays" in html

    def test_pseudocode_viewer_highlights_and_escapes(self):
        info = REGISTRY["quick"]
        html = pseudocode_viewer(info.pseudocode, 2, info.label)
        assert html.count("code-line") == len(info.pseudocode)
        assert 'class="code-line highlight" data-line="2"' in html
        assert "<=" not in pseudocode_viewer(["if a <= b:"])

    def test_explanation_panel(self):
        assert "disabled" in explanation_panel("x", show=False)
        assert "Sort" in explanation_panel()
        assert "hello" in explanation_panel("hello")


class TestDescribeStep:
    def test_initial(self):
        assert "Unsorted" in describe_step(None, [1, 2])

    def test_compare(self):
        text = describe_step(Compare(0, 1), [5, 3])
        assert "position 0" in text and "<strong>5</strong>" in text

    def test_swap_reports_new_values(self):
        text = describe_step(Swap(0, 1), [3, 5])
        assert "<strong>3</strong> and <strong>5</strong>" in text

    def test_overwrite(self):
        assert "Write <strong>7</strong> into position 2" in describe_step(Overwrite(2, 7), [0, 0, 7])

    def test_mark_final(self):
        assert describe_step(MarkFinal(4), [0] * 5) == "Position 4 is settled."

    def test_compare_against_held_value(self):
        text = describe_step(Compare(0, 1), [1, 3, 3], held=2)
        assert "position 0 (<strong>1</strong>)" in text
        assert "held value <strong>2</strong>" in text
        assert "position 1" not in text


class TestHeldValue:
    @pytest.fixture
    def insertion_trace(self):
        values = [3, 1, 2]
        _, steps = run_sort("insertion", values)
        return values, steps

    @pytest.mark.parametrize("upto, expected", [
        (-1, None),    # nothing applied yet
        (0, 1),        # Compare(0, 1) lifts the 1
        (1, 1),        # 3 shifts into the hole
        (2, None),     # 1 dropped back: walk closed
        (3, 2),        # Compare(1, 2) lifts the 2
        (5, 2),        # Compare(0, 1) still tests the held 2
        (6, None),
    ])
    def test_insertion_walk(self, insertion_trace, upto, expected):
        values, steps = insertion_trace
        assert held_value(values, steps, upto) == expected

    def test_shell_walks_close(self):
        values = [5, 4, 3, 2, 1]
        _, steps = run_sort("shell", values)
        last_compare = max(k for k, s in enumerate(steps) if isinstance(s, Compare))
        assert held_value(values, steps, len(steps) - 1) is None
        assert held_value(values, steps, last_compare) is not None

    def test_shift_based_tag(self):
        assert {a.key for a in algorithms_by_tag("shift-based")} == {"insertion", "shell"}


class TestAlgoInfo:
    def test_every_step_kind_maps_to_a_pseudocode_line(self):
        for info in REGISTRY.values():
            for kind, line in info.step_lines.items():
                assert 0 <= line < len(info.pseudocode), (info.key, kind)
            assert info.line_for(None) == -1
            assert info.line_for(MarkFinal(0)) == info.step_lines["mark_final"]
