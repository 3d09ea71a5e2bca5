"""Tests for custom style text parsing and serialization."""

from __future__ import annotations

from dashtheme.themes.custom_style import parse, serialize
from dashtheme.themes.models import ParsedDeclarationMap


class TestParse:
    def test_splits_properties_flags_and_variants(self) -> None:
        parsed = parse("color: red; matrix-rain: true; matrix-rain-speed: fast;")
        assert parsed.properties == {"color": "red"}
        assert parsed.flags == frozenset({"matrix-rain"})
        assert parsed.variants == {"matrix-rain-speed": "fast"}

    def test_strips_comments(self) -> None:
        parsed = parse("/* glow */ color: red; /* multi\nline */ padding: 4px")
        assert parsed.properties == {"color": "red", "padding": "4px"}

    def test_splits_on_first_colon_only(self) -> None:
        parsed = parse("background: url(https://example.com/a.png)")
        assert parsed.properties == {"background": "url(https://example.com/a.png)"}

    def test_skips_malformed_segments(self) -> None:
        parsed = parse("color red; : blue; width: ; ;;")
        assert parsed.is_empty()

    def test_non_true_flag_values_are_dropped(self) -> None:
        parsed = parse("snowfall: false; sparkle: yes;")
        assert parsed.is_empty()

    def test_later_duplicates_win(self) -> None:
        parsed = parse("color: red; color: blue; snowfall: true; snowfall: false")
        assert parsed.properties == {"color": "blue"}
        assert parsed.flags == frozenset()

    def test_property_names_are_case_sensitive(self) -> None:
        parsed = parse("Matrix-Rain: true")
        assert parsed.flags == frozenset()
        assert parsed.properties == {"Matrix-Rain": "true"}

    def test_variant_without_its_flag_is_dropped(self) -> None:
        parsed = parse("color: red; matrix-rain-speed: fast;")
        assert parsed.properties == {"color": "red"}
        assert parsed.variants == {}

    def test_variant_declared_before_its_flag_is_kept(self) -> None:
        parsed = parse("matrix-rain-speed: slow; matrix-rain: true;")
        assert parsed.variants == {"matrix-rain-speed": "slow"}

    def test_variant_dropped_when_its_flag_is_switched_off(self) -> None:
        parsed = parse("matrix-rain: true; matrix-rain-speed: fast; matrix-rain: false;")
        assert parsed.flags == frozenset()
        assert parsed.variants == {}

    def test_non_string_input_yields_empty_map(self) -> None:
        assert parse(None).is_empty()
        assert parse(42).is_empty()
        assert parse("").is_empty()


def test_serialize_orders_flags_and_variants_canonically() -> None:
    declarations = ParsedDeclarationMap(
        properties={"color": "red", "padding": "4px"},
        flags=frozenset({"snowfall", "matrix-rain"}),
        variants={"matrix-rain-speed": "slow"},
    )
    assert serialize(declarations) == (
        "color: red; padding: 4px; matrix-rain: true; snowfall: true; matrix-rain-speed: slow;"
    )


def test_serialize_empty_map() -> None:
    assert serialize(ParsedDeclarationMap()) == ""


def test_parse_serialize_round_trip() -> None:
    declarations = ParsedDeclarationMap(
        properties={"border": "1px solid #00ff00", "transform": "rotate(-1deg)"},
        flags=frozenset({"embers", "bubbles"}),
        variants={},
    )
    assert parse(serialize(declarations)) == declarations


def test_parse_serialize_round_trip_with_variant() -> None:
    declarations = ParsedDeclarationMap(
        properties={"color": "#00ff00"},
        flags=frozenset({"matrix-rain", "snowfall"}),
        variants={"matrix-rain-speed": "veryfast"},
    )
    assert parse(serialize(declarations)) == declarations
