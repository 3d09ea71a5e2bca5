"""Tests for opacity-aware color rewriting."""

from __future__ import annotations

import pytest

from dashtheme.themes.color import apply_opacity, format_number, hex_to_rgb


@pytest.mark.parametrize(
    ("color", "expected"),
    [
        ("#ff0000", "rgba(255, 0, 0, 0.5)"),
        ("#f00", "rgba(255, 0, 0, 0.5)"),
        ("#FF000080", "rgba(255, 0, 0, 0.5)"),
        ("rgb(10, 20, 30)", "rgba(10, 20, 30, 0.5)"),
        ("rgba(10,20,30,0.9)", "rgba(10, 20, 30, 0.5)"),
    ],
)
def test_apply_opacity_rewrites_known_notations(color: str, expected: str) -> None:
    assert apply_opacity(color, 0.5) == expected


def test_apply_opacity_wraps_other_notations_in_color_mix() -> None:
    assert apply_opacity("red", 0.5) == "color-mix(in srgb, red 50%, transparent)"
    assert apply_opacity("var(--primary)", 0.125) == (
        "color-mix(in srgb, var(--primary) 13%, transparent)"
    )
    assert apply_opacity("hsl(120, 50%, 50%)", 0.3) == (
        "color-mix(in srgb, hsl(120, 50%, 50%) 30%, transparent)"
    )


def test_apply_opacity_treats_odd_hex_lengths_as_opaque_notation() -> None:
    assert apply_opacity("#ff00", 0.5) == "color-mix(in srgb, #ff00 50%, transparent)"


def test_apply_opacity_boundaries() -> None:
    assert apply_opacity("#123456", 1) == "#123456"
    assert apply_opacity("#123456", 1.5) == "#123456"
    assert apply_opacity("#123456", 0) == "transparent"
    assert apply_opacity("#123456", -0.2) == "transparent"


def test_apply_opacity_ignores_non_numeric_opacity() -> None:
    assert apply_opacity("#123456", "half") == "#123456"
    assert apply_opacity("#123456", None) == "#123456"
    assert apply_opacity("#123456", float("nan")) == "#123456"


def test_hex_to_rgb_expands_shorthand() -> None:
    assert hex_to_rgb("#abc") == (0xAA, 0xBB, 0xCC)
    assert hex_to_rgb("#00ff0080") == (0, 255, 0)


def test_format_number_drops_trailing_zero() -> None:
    assert format_number(2.0) == "2"
    assert format_number(12) == "12"
    assert format_number(0.5) == "0.5"
    assert format_number(-2.5) == "-2.5"
