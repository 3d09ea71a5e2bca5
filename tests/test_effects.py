"""Tests for effect composition and the preset catalog."""

from __future__ import annotations

from dashtheme.themes.custom_style import parse
from dashtheme.themes.effects import (
    apply_preset,
    is_effect_active,
    is_preset_active,
    merge,
    merge_text,
    remove,
    remove_preset,
    remove_text,
)
from dashtheme.themes.models import ParsedDeclarationMap
from dashtheme.themes.presets import EFFECT_PRESETS, get_preset, presets_in_category


class TestMerge:
    def test_incoming_properties_win_and_flags_union(self) -> None:
        merged = merge(parse("color: red; snowfall: true;"), parse("color: blue; matrix-rain: true;"))
        assert merged.properties == {"color": "blue"}
        assert merged.flags == frozenset({"snowfall", "matrix-rain"})

    def test_incoming_variant_replaces_existing(self) -> None:
        text = merge_text(
            "matrix-rain: true; matrix-rain-speed: slow;",
            "matrix-rain: true; matrix-rain-speed: fast;",
        )
        assert text == "matrix-rain: true; matrix-rain-speed: fast;"


class TestRemove:
    def test_properties_removed_by_name_regardless_of_value(self) -> None:
        result = remove(parse("border: 2px solid red; color: red;"), parse("border: none;"))
        assert result.properties == {"color": "red"}

    def test_removing_flag_removes_its_variant(self) -> None:
        result = remove(parse("matrix-rain: true; matrix-rain-speed: fast;"), parse("matrix-rain: true;"))
        assert result.is_empty()

    def test_variant_kept_while_flag_remains(self) -> None:
        current = parse("matrix-rain: true; matrix-rain-speed: fast; snowfall: true;")
        result = remove(current, parse("snowfall: true;"))
        assert result.flags == frozenset({"matrix-rain"})
        assert result.variants == {"matrix-rain-speed": "fast"}

    def test_variant_named_in_removal_is_dropped(self) -> None:
        current = parse("matrix-rain: true; matrix-rain-speed: fast;")
        result = remove(current, ParsedDeclarationMap(variants={"matrix-rain-speed": "slow"}))
        assert result.flags == frozenset({"matrix-rain"})
        assert result.variants == {}

    def test_remove_undoes_merge_for_disjoint_maps(self) -> None:
        current = parse("color: red; padding: 4px; snowfall: true;")
        effect = parse("matrix-rain: true; matrix-rain-speed: fast; border-radius: 9999px;")
        assert remove(merge(current, effect), effect) == current

    def test_remove_undoes_merge_when_current_carries_a_variant(self) -> None:
        current = parse("color: red; matrix-rain: true; matrix-rain-speed: slow;")
        effect = parse("snowfall: true; border-radius: 9999px;")
        assert remove(merge(current, effect), effect) == current

    def test_remove_undoes_merge_when_current_has_a_variant_without_its_flag(self) -> None:
        current = parse("color: red; matrix-rain-speed: slow;")
        effect = parse("matrix-rain: true; border-radius: 9999px;")
        assert current.variants == {}
        assert remove(merge(current, effect), effect) == current


def test_is_effect_active_for_flag_effects() -> None:
    current = parse("color: red; matrix-rain: true; matrix-rain-speed: fast;")
    assert is_effect_active(current, parse("matrix-rain: true; matrix-rain-speed: fast;"))
    assert not is_effect_active(current, parse("matrix-rain: true; matrix-rain-speed: slow;"))
    assert not is_effect_active(current, parse("snowfall: true;"))


def test_is_effect_active_for_property_effects() -> None:
    current = parse("border-radius: 9999px; color: red;")
    assert is_effect_active(current, parse("border-radius: 9999px;"))
    assert not is_effect_active(current, parse("border-radius: 4px;"))
    assert not is_effect_active(current, parse(""))


def test_apply_and_remove_preset() -> None:
    text = apply_preset("color: red;", "anim-snowfall")
    assert text == "color: red; snowfall: true;"
    assert is_preset_active(text, "anim-snowfall")
    assert remove_preset(text, "anim-snowfall") == "color: red;"


def test_switching_speed_presets_keeps_one_speed() -> None:
    text = apply_preset("", "anim-matrix-rain-slow")
    text = apply_preset(text, "anim-matrix-rain-fast")
    assert text == "matrix-rain: true; matrix-rain-speed: fast;"
    assert is_preset_active(text, "anim-matrix-rain-fast")
    assert not is_preset_active(text, "anim-matrix-rain-slow")


def test_unknown_preset_leaves_text_unchanged() -> None:
    assert apply_preset("color: red;", "no-such-preset") == "color: red;"
    assert remove_preset("color: red;", "no-such-preset") == "color: red;"
    assert is_preset_active("color: red;", "no-such-preset") is False


def test_remove_text_keeps_unrelated_declarations() -> None:
    assert remove_text("color: red; snowfall: true; sparkle: true;", "sparkle: true;") == (
        "color: red; snowfall: true;"
    )


def test_preset_catalog_lookup() -> None:
    ids = [preset.preset_id for preset in EFFECT_PRESETS]
    assert len(ids) == len(set(ids))
    assert get_preset("shape-pill").css == "border-radius: 9999px;"
    assert {preset.preset_id for preset in presets_in_category("particles")} >= {
        "anim-snowfall",
        "anim-matrix-rain-fast",
    }
