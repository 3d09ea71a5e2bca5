"""Custom style text parsing and serialization.

Custom style text is a semicolon separated list of ``property: value``
declarations. A closed set of property names are effect flags
(``matrix-rain: true``) or flag-scoped variants (``matrix-rain-speed: fast``);
those are kept apart from the literal properties so nothing downstream can
mistake them for real style declarations.
"""

from __future__ import annotations

import re

from dashtheme.themes.constants import EFFECT_FLAGS, EFFECT_VARIANTS
from dashtheme.themes.models import ParsedDeclarationMap

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def parse(text: str | None) -> ParsedDeclarationMap:
    """Parse custom style text. Malformed declarations are skipped."""
    if not isinstance(text, str) or not text:
        return ParsedDeclarationMap()

    properties: dict[str, str] = {}
    flags: set[str] = set()
    variants: dict[str, str] = {}

    for segment in _COMMENT_RE.sub("", text).split(";"):
        if not segment.strip():
            continue
        prop, sep, value = segment.partition(":")
        if not sep:
            continue
        prop = prop.strip()
        value = value.strip()
        if not prop or not value:
            continue

        if prop in EFFECT_FLAGS:
            if value == "true":
                flags.add(prop)
            else:
                flags.discard(prop)
            continue
        if prop in EFFECT_VARIANTS:
            variants[prop] = value
            continue
        properties[prop] = value

    # a variant without its flag carries no meaning
    variants = {
        variant: value for variant, value in variants.items() if EFFECT_VARIANTS[variant] in flags
    }
    return ParsedDeclarationMap(
        properties=properties,
        flags=frozenset(flags),
        variants=variants,
    )


def serialize(declarations: ParsedDeclarationMap) -> str:
    """Render *declarations* back to custom style text.

    Literal properties keep their insertion order; flags and variants follow
    in canonical order so the output is stable.
    """
    parts = [f"{prop}: {value}" for prop, value in declarations.properties.items()]
    parts.extend(f"{flag}: true" for flag in EFFECT_FLAGS if flag in declarations.flags)
    parts.extend(
        f"{variant}: {declarations.variants[variant]}"
        for variant in EFFECT_VARIANTS
        if variant in declarations.variants
    )
    if not parts:
        return ""
    return "; ".join(parts) + ";"
