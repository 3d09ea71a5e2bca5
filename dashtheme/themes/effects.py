"""Compose and retract effect presets on parsed custom style."""

from __future__ import annotations

from dashtheme.themes.constants import EFFECT_VARIANTS
from dashtheme.themes.custom_style import parse, serialize
from dashtheme.themes.models import ParsedDeclarationMap
from dashtheme.themes.presets import get_preset


def merge(base: ParsedDeclarationMap, incoming: ParsedDeclarationMap) -> ParsedDeclarationMap:
    """Layer *incoming* over *base*.

    Literal properties and variants from *incoming* win on collision; flags
    are unioned so one preset never switches off another preset's flag.
    """
    return ParsedDeclarationMap(
        properties={**base.properties, **incoming.properties},
        flags=base.flags | incoming.flags,
        variants={**base.variants, **incoming.variants},
    )


def remove(current: ParsedDeclarationMap, to_remove: ParsedDeclarationMap) -> ParsedDeclarationMap:
    """Retract *to_remove* from *current*.

    Properties are matched by name, not value. A variant survives only while
    its owning flag is still present in the result.
    """
    properties = {
        prop: value for prop, value in current.properties.items() if prop not in to_remove.properties
    }
    flags = current.flags - to_remove.flags
    variants = {
        variant: value
        for variant, value in current.variants.items()
        if variant not in to_remove.variants and EFFECT_VARIANTS.get(variant) in flags
    }
    return ParsedDeclarationMap(properties=properties, flags=flags, variants=variants)


def is_effect_active(current: ParsedDeclarationMap, effect: ParsedDeclarationMap) -> bool:
    """Return True when *effect* is fully present in *current*."""
    if effect.flags:
        if not effect.flags <= current.flags:
            return False
        return all(current.variants.get(variant) == value for variant, value in effect.variants.items())
    if not effect.properties:
        return False
    return all(current.properties.get(prop) == value for prop, value in effect.properties.items())


def merge_text(existing: str, incoming: str) -> str:
    return serialize(merge(parse(existing), parse(incoming)))


def remove_text(existing: str, effect: str) -> str:
    return serialize(remove(parse(existing), parse(effect)))


def apply_preset(existing: str, preset_id: str) -> str:
    """Merge a catalog preset into custom style text."""
    preset = get_preset(preset_id)
    if preset is None:
        return existing
    return merge_text(existing, preset.css)


def remove_preset(existing: str, preset_id: str) -> str:
    """Retract a catalog preset from custom style text."""
    preset = get_preset(preset_id)
    if preset is None:
        return existing
    return remove_text(existing, preset.css)


def is_preset_active(existing: str, preset_id: str) -> bool:
    preset = get_preset(preset_id)
    if preset is None:
        return False
    return is_effect_active(parse(existing), parse(preset.css))
