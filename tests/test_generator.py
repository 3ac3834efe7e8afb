"""
Tests for the bar factory (dataset.generator) and config.py.
"""

import pytest

from config import AppConfig, THEMES, DEFAULT_THEME, GRADIENT_DIRECTIONS, get_theme, custom_gradient
from dataset import InvalidInput, MIN_BARS, MAX_BARS
from dataset.generator import random_values, clamp_bar_count, optimal_bar_count


class TestRandomValues:
    def test_length_and_range(self):
        values = random_values(50, low=10, high=20, seed=3)
        assert len(values) == 50
        assert all(10 <= v < 20 for v in values)

    def test_seed_is_reproducible(self):
        assert random_values(30, seed=42) == random_values(30, seed=42)
        assert random_values(30, seed=42) != random_values(30, seed=43)

    def test_zero_bars(self):
        assert random_values(0) == []

    def test_rejects_negative_count(self):
        with pytest.raises(InvalidInput):
            random_values(-1)

    def test_rejects_empty_range(self):
        with pytest.raises(InvalidInput):
            random_values(5, low=10, high=10)


class TestBarCount:
    @pytest.mark.parametrize("n, expected", [(0, MIN_BARS), (5, 5), (42, 42), (100, 100), (500, MAX_BARS)])
    def test_clamp(self, n, expected):
        assert clamp_bar_count(n) == expected

    @pytest.mark.parametrize("width, expected", [
        (320, 20),       # (320 - 40) // 14
        (480, 27),       # (480 - 40) // 16
        (768, 39),       # (768 - 60) // 18
        (1024, 42),      # (1024 - 100) // 22
        (3840, 54),      # capped at 1200 px of bars
    ])
    def test_optimal_bar_count(self, width, expected):
        assert optimal_bar_count(width) == expected

    def test_tiny_screen_still_gets_minimum(self):
        assert optimal_bar_count(50) == MIN_BARS


class TestConfig:
    def test_defaults(self, monkeypatch):
        for name in ("SORTVIZ_HOST", "SORTVIZ_PORT", "SORTVIZ_DEBUG",
                     "SORTVIZ_SECRET_KEY", "SORTVIZ_DEFAULT_BARS"):
            monkeypatch.delenv(name, raising=False)
        cfg = AppConfig.from_env()
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 5000
        assert cfg.debug is False
        assert cfg.default_bars == 30
        assert len(cfg.secret_key) == 64

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SORTVIZ_PORT", "8080")
        monkeypatch.setenv("SORTVIZ_DEBUG", "true")
        monkeypatch.setenv("SORTVIZ_SECRET_KEY", "s3cret")
        monkeypatch.setenv("SORTVIZ_DEFAULT_BARS", "12")
        cfg = AppConfig.from_env()
        assert cfg.port == 8080
        assert cfg.debug is True
        assert cfg.secret_key == "s3cret"
        assert cfg.default_bars == 12

    def test_themes(self):
        assert DEFAULT_THEME in THEMES
        assert get_theme("ocean").key == "ocean"
        assert get_theme("no-such-theme").key == DEFAULT_THEME
        assert get_theme("sunset").background.startswith("linear-gradient(")

    def test_custom_gradient(self):
        g = custom_gradient("#112233", "#AABBCC", "45deg")
        assert g.css == "linear-gradient(45deg, #112233 0%, #AABBCC 100%)"
        assert g.to_dict() == {"start": "#112233", "end": "#AABBCC", "direction": "45deg"}
        assert custom_gradient("#000000", "#ffffff").direction == "135deg"

    @pytest.mark.parametrize("start, end, direction", [
        ("#123", "#ffffff", "135deg"),
        ("#ffffff", None, "135deg"),
        ("rgb(0,0,0)", "#ffffff", "135deg"),
        ("#000000", "#ffffff", "sideways"),
    ])
    def test_custom_gradient_rejects(self, start, end, direction):
        with pytest.raises(InvalidInput):
            custom_gradient(start, end, direction)

    def test_every_direction_accepted(self):
        for direction in GRADIENT_DIRECTIONS:
            assert direction in custom_gradient("#000000", "#ffffff", direction).css
