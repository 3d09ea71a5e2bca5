"""Resolve layered theme configuration into one effective style per element.

Layers, highest precedence first:

1. route override   - the route's background entry (page background only)
2. global override  - the element's own entry, then its generic parent
3. legacy block     - pre-map sidebar/header/page background, login and kiosk blocks
4. auto border      - translucent border on customized pages
5. palette          - light/dark palette defaults

The background group is won by the first layer carrying a background color,
gradient or image; an opacity or pattern set on a layer above the winner
still applies to it. Every other attribute group (text, border, shadow,
spacing, effects) is won by the first layer that sets any field of that
group. Custom style text of the first layer carrying some, at or above the
background winner, is applied last.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
from typing import Callable

from dashtheme.themes.animation import classify
from dashtheme.themes.color import apply_opacity, format_number
from dashtheme.themes.constants import (
    AUTO_BORDER_COLOR,
    DEFAULT_IMAGE_OPACITY,
    FONT_WEIGHTS,
    PALETTE_FALLBACKS,
    ROUTE_BACKGROUND_ELEMENTS,
    SHADOW_PRESETS,
)
from dashtheme.themes.custom_style import parse
from dashtheme.themes.elements import (
    is_themable,
    owning_page,
    parent_element,
    route_background_element,
)
from dashtheme.themes.models import (
    DEFAULT_PALETTE_DARK,
    DEFAULT_PALETTE_LIGHT,
    ElementStyleSpec,
    EffectiveStyle,
    Gradient,
    KioskStyle,
    LegacyPageBackground,
    LegacySection,
    LoginPageStyle,
    Palette,
    ParsedDeclarationMap,
    RenderContext,
    ThemeConfiguration,
)

logger = logging.getLogger(__name__)

GROUP_ORDER: tuple[str, ...] = ("background", "text", "border", "shadow", "spacing", "effects")

_LOGIN_GRADIENT = ("#3d4f5f", "#1a2530", "to bottom right")


@dataclass(frozen=True, slots=True)
class _Layer:
    label: str
    spec: ElementStyleSpec
    is_map_entry: bool
    image_opacity: float | None = None


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return float(value)


def _px(value: object) -> str | None:
    number = _number(value)
    return None if number is None else f"{format_number(number)}px"


def _deg(value: object) -> str | None:
    number = _number(value)
    return None if number is None else f"{format_number(number)}deg"


def _percent(value: object) -> str | None:
    number = _number(value)
    return None if number is None else f"{format_number(number)}%"


def _plain(value: object) -> str | None:
    number = _number(value)
    return None if number is None else format_number(number)


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _font_weight(value: object) -> str | None:
    text = _text(value)
    if text is None:
        return None
    if text.isdigit():
        return text
    return FONT_WEIGHTS.get(text, "400")


def _shadow(value: object) -> str | None:
    text = _text(value)
    if text is None:
        return None
    return SHADOW_PRESETS.get(text, text)


_Rule = tuple[str, str, Callable[[object], "str | None"]]

_GROUP_RULES: dict[str, tuple[_Rule, ...]] = {
    "text": (
        ("text_color", "color", _text),
        ("text_size", "font-size", _px),
        ("font_weight", "font-weight", _font_weight),
        ("font_family", "font-family", _text),
    ),
    "border": (
        ("border_color", "border-color", _text),
        ("border_width", "border-width", _px),
        ("border_style", "border-style", _text),
        ("border_radius", "border-radius", _px),
    ),
    "shadow": (
        ("box_shadow", "box-shadow", _shadow),
        ("glow_color", "glow-color", _text),
        ("glow_size", "glow-size", _px),
    ),
    "spacing": (
        ("padding", "padding", _text),
        ("margin", "margin", _text),
    ),
    "effects": (
        ("blur", "blur", _px),
        ("opacity", "opacity", _plain),
        ("scale", "scale", _plain),
        ("rotate", "rotate", _deg),
        ("skew_x", "skew-x", _deg),
        ("skew_y", "skew-y", _deg),
        ("saturation", "saturation", _percent),
        ("grayscale", "grayscale", _percent),
        ("hover_scale", "hover-scale", _plain),
        ("hover_opacity", "hover-opacity", _plain),
    ),
}


def resolve(
    config: ThemeConfiguration | None,
    element: str,
    context: RenderContext | None = None,
) -> EffectiveStyle:
    """Resolve the effective style of *element* for *context*.

    Never raises: an unknown element, or any failure while resolving, yields
    the palette fallback for the element.
    """
    context = context if isinstance(context, RenderContext) else RenderContext()
    if not isinstance(config, ThemeConfiguration):
        config = ThemeConfiguration()
    palette = _palette(config, context.mode)

    if not is_themable(element):
        logger.debug("unknown themable element %r; using palette fallback", element)
        return _fallback_style(str(element), palette)
    try:
        return _resolve(config, element, context, palette)
    except Exception:  # pragma: no cover
        logger.exception("style resolution failed for %s; using palette fallback", element)
        return _fallback_style(element, palette)


def _resolve(
    config: ThemeConfiguration,
    element: str,
    context: RenderContext,
    palette: Palette,
) -> EffectiveStyle:
    layers = _layers(config, element, context)
    background_key, text_key = PALETTE_FALLBACKS[_fallback_kind(element)]
    palette_background = getattr(palette, background_key)

    winner_index = next(
        (index for index, layer in enumerate(layers) if layer.spec.has_background()),
        None,
    )
    scope = layers if winner_index is None else layers[: winner_index + 1]

    properties: dict[str, str] = {}
    sources: dict[str, str] = {}

    winner = None if winner_index is None else layers[winner_index]
    properties.update(_background(winner, scope, palette_background, context))
    sources["background"] = "palette" if winner is None else winner.label
    opacity_layer = next((layer for layer in scope if _number(layer.spec.background_opacity) is not None), None)
    if opacity_layer is not None:
        sources["background-opacity"] = opacity_layer.label

    for group in GROUP_ORDER[1:]:
        layer = next((layer for layer in layers if layer.spec.defines(group)), None)
        if layer is None:
            continue
        sources[group] = layer.label
        properties.update(_apply_rules(layer.spec, _GROUP_RULES[group]))

    if "color" not in properties:
        properties["color"] = getattr(palette, text_key)
        sources.setdefault("text", "palette")
    if "border-color" not in properties:
        if _page_is_customized(config, element):
            properties["border-color"] = AUTO_BORDER_COLOR
            sources.setdefault("border", "auto")
        else:
            properties["border-color"] = palette.border
            sources.setdefault("border", "palette")

    custom = ParsedDeclarationMap()
    for layer in scope:
        if layer.spec.custom_css:
            custom = parse(layer.spec.custom_css)
            sources["custom"] = layer.label
            break
    properties.update(custom.properties)

    animation_classes: tuple[str, ...] = ()
    for layer in layers:
        if layer.is_map_entry and layer.spec.custom_css:
            animation_classes = classify(parse(layer.spec.custom_css))
            if animation_classes:
                break

    return EffectiveStyle(
        element=element,
        properties=_ordered(properties),
        custom=custom,
        animation_classes=animation_classes,
        sources=sources,
    )


def _ordered(properties: dict[str, str]) -> dict[str, str]:
    # background first so flattened tables read in a predictable order
    if "background" not in properties:
        return properties
    return {"background": properties["background"], **properties}


def _layers(config: ThemeConfiguration, element: str, context: RenderContext) -> list[_Layer]:
    styles = config.element_styles if isinstance(config.element_styles, dict) else {}
    chain: list[tuple[str, object]] = []

    if element == "page-background":
        route_element = route_background_element(context.route)
        route_spec = styles.get(route_element) if route_element else None
        if isinstance(route_spec, ElementStyleSpec) and (
            route_spec.has_background() or route_spec.custom_css
        ):
            chain.append(("route", route_spec))
        chain.append(("global", styles.get(element)))
    elif element in ROUTE_BACKGROUND_ELEMENTS:
        chain.append(("route", styles.get(element)))
        chain.append(("global", styles.get("page-background")))
    else:
        chain.append(("global", styles.get(element)))
        parent = parent_element(element)
        if parent is not None:
            chain.append(("parent", styles.get(parent)))

    layers = [
        _Layer(label, spec, True) for label, spec in chain if isinstance(spec, ElementStyleSpec)
    ]
    legacy_target = "page-background" if element in ROUTE_BACKGROUND_ELEMENTS else element
    legacy = _legacy_layer(config, legacy_target)
    if legacy is not None:
        layers.append(legacy)
    return layers


def legacy_spec(config: ThemeConfiguration, element: str) -> ElementStyleSpec | None:
    """Express a legacy block in the element map's shape."""
    layer = _legacy_layer(config, element)
    return None if layer is None else layer.spec


def _legacy_layer(config: ThemeConfiguration, element: str) -> _Layer | None:
    if element in ("sidebar", "header"):
        section = getattr(config, element, None)
        if isinstance(section, LegacySection):
            return _from_legacy_section(section)
    elif element == "page-background":
        page = config.page_background
        if isinstance(page, LegacyPageBackground):
            return _Layer("legacy", _from_legacy_page(page), False)
    elif element == "login-page":
        login = config.login_page
        if isinstance(login, LoginPageStyle):
            return _from_login_page(login)
    elif element == "kiosk":
        kiosk = config.kiosk_style
        if isinstance(kiosk, KioskStyle):
            return _Layer("legacy", _from_kiosk(kiosk), False)
    return None


def _from_legacy_section(section: LegacySection) -> _Layer:
    gradient = None
    image = None
    color = None
    image_opacity = None
    if section.background_type == "gradient" and section.gradient_from and section.gradient_to:
        gradient = Gradient(
            section.gradient_from,
            section.gradient_to,
            section.gradient_direction or "180deg",
        )
    elif section.background_type == "image" and section.image_url:
        image = section.image_url
        color = section.background_color
        percent = _number(section.image_opacity)
        image_opacity = (DEFAULT_IMAGE_OPACITY if percent is None else percent) / 100
    elif section.background_type == "solid":
        color = section.background_color
    spec = ElementStyleSpec(
        background_color=color,
        background_gradient=gradient,
        background_image=image,
        text_color=section.text_color,
        blur=section.blur,
    )
    return _Layer("legacy", spec, False, image_opacity)


def _from_legacy_page(page: LegacyPageBackground) -> ElementStyleSpec:
    gradient = None
    image = None
    color = None
    if page.type == "gradient" and page.gradient_from and page.gradient_to:
        gradient = Gradient(page.gradient_from, page.gradient_to, page.gradient_direction or "180deg")
    elif page.type == "image" and page.image_url:
        image = page.image_url
    elif page.type in ("solid", "pattern"):
        color = page.color
    pattern = page.pattern if page.pattern and page.pattern != "none" else None
    return ElementStyleSpec(
        background_color=color,
        background_gradient=gradient,
        background_image=image,
        background_pattern=pattern,
    )


def _from_login_page(login: LoginPageStyle) -> _Layer:
    # the card style is written over the block's own background
    spec = login.card_style if isinstance(login.card_style, ElementStyleSpec) else ElementStyleSpec()
    image_opacity = None
    if not spec.has_background():
        if login.background_type == "gradient":
            start, end, direction = _LOGIN_GRADIENT
            spec = replace(
                spec,
                background_gradient=Gradient(
                    login.gradient_from or start,
                    login.gradient_to or end,
                    login.gradient_direction or direction,
                ),
            )
        elif login.background_type == "image" and login.image_url:
            spec = replace(spec, background_image=login.image_url, background_color=login.background_color)
            percent = _number(login.image_opacity)
            if percent is not None:
                image_opacity = percent / 100
        elif login.background_type == "solid" and login.background_color:
            spec = replace(spec, background_color=login.background_color)
    return _Layer("legacy", spec, False, image_opacity)


def _from_kiosk(kiosk: KioskStyle) -> ElementStyleSpec:
    color = None
    gradient = None
    if kiosk.background_type == "solid" and kiosk.background_color:
        color = kiosk.background_color
    elif isinstance(kiosk.background_gradient, Gradient):
        gradient = kiosk.background_gradient
        if not gradient.direction:
            gradient = replace(gradient, direction="to bottom right")
    return ElementStyleSpec(
        background_color=color,
        background_gradient=gradient,
        background_image=kiosk.background_image,
        text_color=kiosk.text_color,
        border_width=kiosk.border_width,
        blur=kiosk.blur,
        custom_css=kiosk.custom_css,
    )


def _background(
    winner: _Layer | None,
    scope: list[_Layer],
    fallback: str,
    context: RenderContext,
) -> dict[str, str]:
    opacity = next(
        (value for value in (_number(layer.spec.background_opacity) for layer in scope) if value is not None),
        None,
    )
    pattern = next(
        (value for value in (_text(layer.spec.background_pattern) for layer in scope) if value is not None),
        None,
    )

    def fade(color: str) -> str:
        if opacity is None:
            return color
        return apply_opacity(color, opacity)

    spec = winner.spec if winner is not None else ElementStyleSpec()
    props: dict[str, str] = {}
    gradient = spec.background_gradient
    color = _text(spec.background_color)
    image = _text(spec.background_image)
    if isinstance(gradient, Gradient) and gradient.start and gradient.end:
        direction = gradient.direction or "to bottom"
        props["background"] = (
            f"linear-gradient({direction}, {fade(gradient.start)}, {fade(gradient.end)})"
        )
    elif image is not None:
        props["background-image"] = f"url({context.locate(image)})"
        props["background-color"] = fade(color or fallback)
        if winner is not None and winner.image_opacity is not None:
            props["background-image-opacity"] = format_number(winner.image_opacity)
    else:
        props["background"] = fade(color or fallback)

    if opacity is not None:
        props["background-opacity"] = format_number(opacity)
    if pattern is not None:
        props["background-pattern"] = pattern
    return props


def _apply_rules(spec: ElementStyleSpec, rules: tuple[_Rule, ...]) -> dict[str, str]:
    props: dict[str, str] = {}
    for field_name, prop, convert in rules:
        value = convert(getattr(spec, field_name))
        if value is not None:
            props[prop] = value
    return props


def _page_is_customized(config: ThemeConfiguration, element: str) -> bool:
    page = owning_page(element)
    if page is None:
        return False
    styles = config.element_styles if isinstance(config.element_styles, dict) else {}
    spec = styles.get(page)
    return isinstance(spec, ElementStyleSpec) and (spec.has_background() or bool(spec.custom_css))


def _fallback_kind(element: str) -> str:
    if element in PALETTE_FALLBACKS:
        return element
    parent = parent_element(element)
    if parent is not None:
        return parent
    return "page-background"


def _palette(config: ThemeConfiguration, mode: str) -> Palette:
    palette = config.colors_dark if mode == "dark" else config.colors_light
    if isinstance(palette, Palette):
        return palette
    return DEFAULT_PALETTE_DARK if mode == "dark" else DEFAULT_PALETTE_LIGHT


def _fallback_style(element: str, palette: Palette) -> EffectiveStyle:
    background_key, text_key = PALETTE_FALLBACKS[_fallback_kind(element)]
    return EffectiveStyle(
        element=element,
        properties={
            "background": getattr(palette, background_key),
            "color": getattr(palette, text_key),
            "border-color": palette.border,
        },
        sources={"background": "palette", "text": "palette", "border": "palette"},
    )
