"""Map effect flags to animated-background class tokens."""

from __future__ import annotations

from dashtheme.themes.constants import (
    EFFECT_FLAGS,
    EFFECT_VARIANTS,
    ROUTE_BACKGROUND_ELEMENTS,
    VARIANT_LEVELS,
)
from dashtheme.themes.custom_style import parse
from dashtheme.themes.elements import route_background_element
from dashtheme.themes.models import ParsedDeclarationMap, ThemeConfiguration

_VARIANTS_BY_FLAG: dict[str, tuple[str, ...]] = {
    flag: tuple(variant for variant, owner in EFFECT_VARIANTS.items() if owner == flag)
    for flag in EFFECT_FLAGS
}


def classify(declarations: ParsedDeclarationMap) -> tuple[str, ...]:
    """Return class tokens for the flags in *declarations*, in canonical order."""
    tokens: list[str] = []
    for flag in EFFECT_FLAGS:
        if flag not in declarations.flags:
            continue
        tokens.append(f"{flag}-bg")
        for variant in _VARIANTS_BY_FLAG[flag]:
            level = declarations.variants.get(variant, "").strip().lower()
            if level in VARIANT_LEVELS:
                tokens.append(f"{flag}-{level}")
    return tuple(tokens)


def classify_text(text: str | None) -> tuple[str, ...]:
    return classify(parse(text))


def page_animation_classes(config: ThemeConfiguration | None, page: str) -> tuple[str, ...]:
    """Tokens for a page: its own background entry first, then the global one.

    *page* is either a route background element or a route such as
    ``/calendar``.
    """
    if config is None:
        return ()
    page_element = page if page in ROUTE_BACKGROUND_ELEMENTS else route_background_element(page)
    page_spec = config.element_styles.get(page_element) if page_element else None
    if page_spec is not None and page_spec.custom_css:
        tokens = classify_text(page_spec.custom_css)
        if tokens:
            return tokens
    global_spec = config.element_styles.get("page-background")
    if global_spec is not None and global_spec.custom_css:
        return classify_text(global_spec.custom_css)
    return ()


def sidebar_animation_classes(config: ThemeConfiguration | None) -> tuple[str, ...]:
    if config is None:
        return ()
    spec = config.element_styles.get("sidebar")
    if spec is None:
        return ()
    return classify_text(spec.custom_css)
