"""
config.py — Application Settings
=================================
Everything the web front end needs that is NOT part of the sorting core:
server settings, default bar count, the colour themes and the custom
background gradient.

    from config import AppConfig, THEMES
    cfg = AppConfig.from_env()

Environment variables (all optional):
    SORTVIZ_HOST          – bind address            (default 127.0.0.1)
    SORTVIZ_PORT          – port                    (default 5000)
    SORTVIZ_DEBUG         – "1" / "true" for debug   (default off)
    SORTVIZ_SECRET_KEY    – Flask session key        (default: random per process)
    SORTVIZ_DEFAULT_BARS  – bars on first page load  (default 30)
"""

import os
import re
import secrets
from dataclasses import dataclass, field
from typing import Dict

from dataset.errors import InvalidInput


@dataclass(frozen=True)
class Theme:
    """A page background gradient plus the bar colours drawn on it."""
    key:        str
    label:      str
    start:      str      # gradient start colour
    end:        str      # gradient end colour
    primary:    str      # bar fill
    secondary:  str      # bar stroke / shading

    @property
    def background(self) -> str:
        return f"linear-gradient(135deg, {self.start} 0%, {self.end} 100%)"


THEMES: Dict[str, Theme] = {
    t.key: t for t in (
        Theme("default",  "Default",  "#667eea", "#764ba2", "#4a90e2", "#357abd"),
        Theme("ocean",    "Ocean",    "#0c4a6e", "#0891b2", "#0891b2", "#0c4a6e"),
        Theme("sunset",   "Sunset",   "#dc2626", "#f59e0b", "#f59e0b", "#dc2626"),
        Theme("forest",   "Forest",   "#166534", "#22c55e", "#22c55e", "#166534"),
        Theme("midnight", "Midnight", "#1e1b4b", "#7c3aed", "#7c3aed", "#1e1b4b"),
        Theme("coral",    "Coral",    "#be185d", "#fb7185", "#fb7185", "#be185d"),
    )
}

DEFAULT_THEME = "default"

GRADIENT_DIRECTIONS = ("135deg", "45deg", "90deg", "180deg", "to right", "to bottom")

_HEX_COLOUR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class Gradient:
    """A user-picked page background that replaces the preset theme's."""
    start:      str
    end:        str
    direction:  str = "135deg"

    @property
    def css(self) -> str:
        return f"linear-gradient({self.direction}, {self.start} 0%, {self.end} 100%)"

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end, "direction": self.direction}


def custom_gradient(start: str, end: str, direction: str = "135deg") -> Gradient:
    """Validated Gradient.  Colours must be #rrggbb."""
    for name, colour in (("start", start), ("end", end)):
        if not isinstance(colour, str) or not _HEX_COLOUR.match(colour):
            raise InvalidInput(f"Gradient {name} colour must look like #rrggbb, got {colour!r}")
    if direction not in GRADIENT_DIRECTIONS:
        raise InvalidInput(
            f"Unknown gradient direction: {direction!r} (expected one of: {', '.join(GRADIENT_DIRECTIONS)})"
        )
    return Gradient(start, end, direction)


def get_theme(key: str) -> Theme:
    """Theme by key, falling back to the default theme."""
    return THEMES.get(key, THEMES[DEFAULT_THEME])


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppConfig:
    """
    Attributes:
        host         : Bind address for the development server.
        port         : Port for the development server.
        debug        : Flask debug mode.
        secret_key   : Signs the session cookie.
        default_bars : Bar count used before the user picks one.
        default_algo : Algorithm selected on first load.
        default_speed: Speed preset selected on first load.
    """
    host:          str  = "127.0.0.1"
    port:          int  = 5000
    debug:         bool = False
    secret_key:    str  = field(default_factory=lambda: secrets.token_hex(32))
    default_bars:  int  = 30
    default_algo:  str  = "bubble"
    default_speed: str  = "medium"

    @classmethod
    def from_env(cls) -> "AppConfig":
        kwargs = {
            "host":  os.environ.get("SORTVIZ_HOST", cls.host),
            "port":  int(os.environ.get("SORTVIZ_PORT", cls.port)),
            "debug": _env_bool("SORTVIZ_DEBUG"),
            "default_bars": int(os.environ.get("SORTVIZ_DEFAULT_BARS", cls.default_bars)),
        }
        if os.environ.get("SORTVIZ_SECRET_KEY"):
            kwargs["secret_key"] = os.environ["SORTVIZ_SECRET_KEY"]
        return cls(**kwargs)
