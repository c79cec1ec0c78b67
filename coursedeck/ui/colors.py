"""Theme colors and color utilities for the UI."""

from typing import Tuple


class DeckColors:
    """Light purple palette of the course page."""

    PAGE_BG = "#fafafa"
    NAV_BG = "#ffffff"

    PRIMARY = "#6b21a8"
    PRIMARY_LIGHT = "#9d5cd6"
    PRIMARY_SOFT = "#f3e8ff"

    CARD_BG = "#ffffff"
    CARD_BORDER = "#e9e3f5"
    LEVEL_CARD_BG = "#f8f5ff"
    LEVEL_CARD_ACTIVE_BG = "#f3e8ff"

    TEXT_PRIMARY = "#1f1235"
    TEXT_SECONDARY = "#666666"

    # Progress bar segments
    EASY = "#22c55e"
    MEDIUM = "#f59e0b"
    HARD = "#ef4444"
    TRACK = "#ede9f5"


def _rgb(value: str) -> Tuple[int, int, int]:
    value = value.strip()
    if not (value.startswith("#") and len(value) == 7):
        raise ValueError(f"not a #RRGGBB color: {value!r}")
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b. Invalid input returns a unchanged."""
    try:
        start = _rgb(a)
        end = _rgb(b)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    mixed = [int(s + (e - s) * t) for s, e in zip(start, end)]
    return "#{:02X}{:02X}{:02X}".format(*mixed)


def with_alpha(color: str, opacity: float) -> str:
    """Qt stylesheet ``rgba()`` form of a #RRGGBB color."""
    try:
        r, g, b = _rgb(color)
    except ValueError:
        return color
    alpha = max(0.0, min(1.0, float(opacity)))
    return f"rgba({r}, {g}, {b}, {alpha:.2f})"
