"""Flatten effective styles into namespaced variable tables."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from dashtheme.themes.color import format_number, hex_to_rgb
from dashtheme.themes.constants import (
    DEFAULT_HEADER_HEIGHT,
    DEFAULT_SIDEBAR_WIDTH,
    FONT_WEIGHTS,
    LINE_HEIGHTS,
    PALETTE_NAMESPACE,
    RADIUS_SCALE,
    SHADOW_PRESETS,
)
from dashtheme.themes.custom_style import serialize
from dashtheme.themes.models import (
    EffectiveStyle,
    KioskStyle,
    LayoutSettings,
    LoginPageStyle,
    Palette,
    RenderContext,
    ThemeConfiguration,
    Typography,
    UiSettings,
)

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Structured attribute -> variable suffix. Attributes not listed keep their name.
STRUCTURED_SUFFIXES: dict[str, str] = {
    "background": "bg",
    "background-color": "bg-fallback",
    "background-image": "bg-image",
    "background-image-opacity": "bg-image-opacity",
    "background-opacity": "bg-opacity",
    "background-pattern": "bg-pattern",
    "color": "text",
    "font-size": "font-size",
    "font-weight": "font-weight",
    "font-family": "font-family",
    "border-color": "border",
    "border-width": "border-width",
    "border-style": "border-style",
    "border-radius": "radius",
    "box-shadow": "shadow",
    "glow-color": "glow-color",
    "glow-size": "glow-size",
    "padding": "padding",
    "margin": "margin",
    "blur": "blur",
    "opacity": "opacity",
    "scale": "scale",
    "rotate": "rotate",
    "skew-x": "skew-x",
    "skew-y": "skew-y",
    "saturation": "saturation",
    "grayscale": "grayscale",
    "hover-scale": "hover-scale",
    "hover-opacity": "hover-opacity",
}


def variable_name(namespace: str, suffix: str) -> str:
    return f"--{namespace}-{suffix}"


def flatten(namespace: str, style: EffectiveStyle) -> dict[str, str]:
    """Return ``--<namespace>-<suffix>`` keys for every attribute of *style*.

    Custom literal properties without a structured counterpart are exposed as
    ``css-<property>``; the serialized custom text goes to ``custom-css``.
    """
    table: dict[str, str] = {}
    for prop, value in style.properties.items():
        suffix = STRUCTURED_SUFFIXES.get(prop)
        if suffix is None:
            suffix = f"css-{prop}"
        table[variable_name(namespace, suffix)] = value
    custom_text = serialize(style.custom)
    if custom_text:
        table[variable_name(namespace, "custom-css")] = custom_text
    return table


def palette_variables(palette: Palette) -> dict[str, str]:
    return {
        variable_name(PALETTE_NAMESPACE, key.replace("_", "-")): value
        for key, value in palette.as_dict().items()
    }


def layout_variables(layout: LayoutSettings) -> dict[str, str]:
    width = layout.sidebar_width or DEFAULT_SIDEBAR_WIDTH
    height = layout.header_height or DEFAULT_HEADER_HEIGHT
    return {
        "--layout-type": layout.type,
        "--sidebar-width": f"{format_number(width)}px",
        "--header-height": f"{format_number(height)}px",
        "--nav-style": layout.nav_style,
    }


def typography_variables(typography: Typography) -> dict[str, str]:
    table = {"--font-family": typography.font_family}
    if typography.font_family_heading:
        table["--font-family-heading"] = typography.font_family_heading
    table["--font-size-base"] = f"{format_number(typography.base_font_size)}px"
    table["--line-height"] = LINE_HEIGHTS.get(typography.line_height, LINE_HEIGHTS["normal"])
    table["--font-weight"] = FONT_WEIGHTS.get(typography.font_weight or "normal", "400")
    return table


def ui_variables(ui: UiSettings) -> dict[str, str]:
    return {
        "--radius-base": RADIUS_SCALE.get(ui.border_radius, RADIUS_SCALE["medium"]),
        "--shadow-base": SHADOW_PRESETS.get(ui.shadow_intensity, "none"),
    }


def accent_variables(color: str) -> dict[str, str]:
    """``--accent-color`` plus its ``r, g, b`` triple when *color* is hex."""
    table = {"--accent-color": color}
    if _HEX_RE.match(color):
        table["--accent-color-rgb"] = ", ".join(str(channel) for channel in hex_to_rgb(color))
    return table


def login_page_variables(login: LoginPageStyle, context: RenderContext | None = None) -> dict[str, str]:
    """Branding keys of the login block. Its background and card style resolve as ``login-page``."""
    context = context or RenderContext()
    table: dict[str, str] = {}
    if login.logo_url:
        table["--login-logo"] = f"url({context.locate(login.logo_url)})"
    if login.logo_size:
        table["--login-logo-size"] = f"{format_number(login.logo_size)}px"
    if login.brand_color:
        table["--login-brand-color"] = login.brand_color
    return table


# KioskStyle field -> variable. Background, text and blur resolve as ``kiosk``.
_KIOSK_KEYS: dict[str, str] = {
    "text_muted_color": "--kiosk-text-muted",
    "button_bg_color": "--kiosk-button-bg",
    "button_hover_color": "--kiosk-button-hover",
    "button_active_color": "--kiosk-button-active",
    "button_text_color": "--kiosk-button-text",
    "accent_color": "--kiosk-accent",
    "error_bg_color": "--kiosk-error-bg",
    "error_text_color": "--kiosk-error-text",
}


def kiosk_variables(kiosk: KioskStyle) -> dict[str, str]:
    return {
        key: getattr(kiosk, field_name)
        for field_name, key in _KIOSK_KEYS.items()
        if getattr(kiosk, field_name)
    }


def theme_variables(
    config: ThemeConfiguration,
    palette: Palette,
    context: RenderContext | None = None,
) -> dict[str, str]:
    """Theme-wide keys: accent, layout, typography, UI scale and special blocks."""
    table = accent_variables(palette.accent)
    table.update(layout_variables(config.layout))
    table.update(typography_variables(config.typography))
    table.update(ui_variables(config.ui))
    if isinstance(config.login_page, LoginPageStyle):
        table.update(login_page_variables(config.login_page, context))
    if isinstance(config.kiosk_style, KioskStyle):
        table.update(kiosk_variables(config.kiosk_style))
    return table


def build_variable_table(
    tables: Iterable[tuple[str, EffectiveStyle]],
    palette: Palette | None = None,
    theme: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Union flattened element tables into one table.

    The palette and the theme-wide variables are written first. A key written
    twice keeps its first value.
    """
    result: dict[str, str] = {}
    sources: dict[str, str] = {}

    def _add(owner: str, entries: dict[str, str]) -> None:
        for key, value in entries.items():
            if key in result:
                logger.warning(
                    "variable %s from %s already written by %s; skipping",
                    key,
                    owner,
                    sources[key],
                )
                continue
            result[key] = value
            sources[key] = owner

    if palette is not None:
        _add("palette", palette_variables(palette))
    if theme:
        _add("theme", dict(theme))
    for namespace, style in tables:
        _add(style.element, flatten(namespace, style))
    return result
