"""Opacity-aware color rewriting."""

from __future__ import annotations

import math
import re

TRANSPARENT = "transparent"

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def apply_opacity(color: str, opacity: float) -> str:
    """Return *color* with *opacity* baked into its alpha channel.

    rgb()/rgba() and 3/6/8 digit hex colors are rewritten as ``rgba(...)``;
    any other notation (named colors, ``var(...)`` references, hsl) is wrapped
    in a ``color-mix`` expression against transparent.
    """
    try:
        opacity = float(opacity)
    except (TypeError, ValueError):
        return color
    if math.isnan(opacity) or opacity >= 1:
        return color
    if opacity <= 0:
        return TRANSPARENT
    if not isinstance(color, str):
        return color

    value = color.strip()
    alpha = format_number(opacity)

    match = _RGB_RE.match(value)
    if match:
        r, g, b = match.groups()
        return f"rgba({int(r)}, {int(g)}, {int(b)}, {alpha})"

    if _HEX_RE.match(value):
        r, g, b = hex_to_rgb(value)
        return f"rgba({r}, {g}, {b}, {alpha})"

    percent = int(math.floor(opacity * 100 + 0.5))
    return f"color-mix(in srgb, {value} {percent}%, transparent)"


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    digits = value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def format_number(value: float) -> str:
    """Render a number the way it reads in a style value: ``2`` not ``2.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
