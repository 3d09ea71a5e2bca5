"""Theme engine models."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Callable, Mapping

from dashtheme.themes.constants import (
    DEFAULT_BASE_FONT_SIZE,
    DEFAULT_COLORS_DARK,
    DEFAULT_COLORS_LIGHT,
    DEFAULT_FONT_FAMILY,
    PALETTE_KEYS,
)


class ThemeValidationError(ValueError):
    """Raised when a theme package or document fails validation."""


@dataclass(frozen=True, slots=True)
class Palette:
    """Semantic colors for one light/dark mode."""

    primary: str
    primary_foreground: str
    secondary: str
    secondary_foreground: str
    accent: str
    accent_foreground: str
    background: str
    foreground: str
    card: str
    card_foreground: str
    muted: str
    muted_foreground: str
    border: str
    destructive: str
    destructive_foreground: str
    success: str
    success_foreground: str
    warning: str
    warning_foreground: str

    @classmethod
    def from_mapping(cls, colors: Mapping[str, str]) -> Palette:
        return cls(**{key: colors[key] for key in PALETTE_KEYS})

    def as_dict(self) -> dict[str, str]:
        return {key: getattr(self, key) for key in PALETTE_KEYS}


DEFAULT_PALETTE_LIGHT = Palette.from_mapping(DEFAULT_COLORS_LIGHT)
DEFAULT_PALETTE_DARK = Palette.from_mapping(DEFAULT_COLORS_DARK)


@dataclass(frozen=True, slots=True)
class Gradient:
    start: str
    end: str
    direction: str | None = None


# Field names of ElementStyleSpec grouped by the attribute group they feed.
ATTRIBUTE_GROUPS: dict[str, tuple[str, ...]] = {
    "background": (
        "background_color",
        "background_gradient",
        "background_image",
        "background_opacity",
        "background_pattern",
    ),
    "text": ("text_color", "text_size", "font_weight", "font_family"),
    "border": ("border_color", "border_width", "border_style", "border_radius"),
    "shadow": ("box_shadow", "glow_color", "glow_size"),
    "spacing": ("padding", "margin"),
    "effects": (
        "blur",
        "opacity",
        "scale",
        "rotate",
        "skew_x",
        "skew_y",
        "saturation",
        "grayscale",
        "hover_scale",
        "hover_opacity",
    ),
}


@dataclass(frozen=True, slots=True)
class ElementStyleSpec:
    """Partial style intent for one themable element.

    Every field is optional. ``None`` means "inherit from the next layer".
    """

    background_color: str | None = None
    background_gradient: Gradient | None = None
    background_image: str | None = None
    background_opacity: float | None = None
    background_pattern: str | None = None
    text_color: str | None = None
    text_size: float | None = None
    font_weight: str | None = None
    font_family: str | None = None
    border_color: str | None = None
    border_width: float | None = None
    border_style: str | None = None
    border_radius: float | None = None
    box_shadow: str | None = None
    glow_color: str | None = None
    glow_size: float | None = None
    padding: str | None = None
    margin: str | None = None
    blur: float | None = None
    opacity: float | None = None
    scale: float | None = None
    rotate: float | None = None
    skew_x: float | None = None
    skew_y: float | None = None
    saturation: float | None = None
    grayscale: float | None = None
    hover_scale: float | None = None
    hover_opacity: float | None = None
    custom_css: str | None = None

    def defines(self, group: str) -> bool:
        """Return True when any field of *group* is set."""
        return any(getattr(self, name, None) is not None for name in ATTRIBUTE_GROUPS.get(group, ()))

    def has_background(self) -> bool:
        """Return True when a background-defining field is set."""
        return (
            bool(self.background_color)
            or self.background_gradient is not None
            or bool(self.background_image)
        )

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True, slots=True)
class LegacySection:
    """Pre-map sidebar/header block."""

    background_type: str = "solid"
    background_color: str | None = None
    gradient_from: str | None = None
    gradient_to: str | None = None
    gradient_direction: str | None = None
    image_url: str | None = None
    image_opacity: float | None = None
    blur: float | None = None
    text_color: str | None = None


@dataclass(frozen=True, slots=True)
class LegacyPageBackground:
    """Pre-map page background block."""

    type: str = "solid"
    color: str | None = None
    gradient_from: str | None = None
    gradient_to: str | None = None
    gradient_direction: str | None = None
    image_url: str | None = None
    pattern: str | None = None


@dataclass(frozen=True, slots=True)
class LayoutSettings:
    type: str = "sidebar-left"
    sidebar_width: float | None = None
    header_height: float | None = None
    nav_style: str = "icons-text"


@dataclass(frozen=True, slots=True)
class Typography:
    font_family: str = DEFAULT_FONT_FAMILY
    font_family_heading: str | None = None
    base_font_size: float = DEFAULT_BASE_FONT_SIZE
    line_height: str = "normal"
    font_weight: str | None = None


@dataclass(frozen=True, slots=True)
class UiSettings:
    border_radius: str = "large"
    shadow_intensity: str = "subtle"


@dataclass(frozen=True, slots=True)
class LoginPageStyle:
    """Login screen block: its own background, branding and card style."""

    background_type: str = "solid"
    background_color: str | None = None
    gradient_from: str | None = None
    gradient_to: str | None = None
    gradient_direction: str | None = None
    image_url: str | None = None
    image_opacity: float | None = None
    logo_url: str | None = None
    logo_size: float | None = None
    brand_name: str | None = None
    brand_color: str | None = None
    card_style: ElementStyleSpec | None = None


@dataclass(frozen=True, slots=True)
class KioskStyle:
    """Kiosk login screen block."""

    background_type: str | None = None
    background_gradient: Gradient | None = None
    background_color: str | None = None
    background_image: str | None = None
    text_color: str | None = None
    text_muted_color: str | None = None
    button_bg_color: str | None = None
    button_hover_color: str | None = None
    button_active_color: str | None = None
    button_text_color: str | None = None
    accent_color: str | None = None
    blur: float | None = None
    border_width: float | None = None
    error_bg_color: str | None = None
    error_text_color: str | None = None
    custom_css: str | None = None


@dataclass(frozen=True, slots=True)
class ThemeConfiguration:
    """Root theme document: palettes, element map, legacy blocks and theme-wide settings."""

    colors_light: Palette = DEFAULT_PALETTE_LIGHT
    colors_dark: Palette = DEFAULT_PALETTE_DARK
    element_styles: dict[str, ElementStyleSpec] = field(default_factory=dict)
    sidebar: LegacySection | None = None
    header: LegacySection | None = None
    page_background: LegacyPageBackground | None = None
    layout: LayoutSettings = LayoutSettings()
    typography: Typography = Typography()
    ui: UiSettings = UiSettings()
    login_page: LoginPageStyle | None = None
    kiosk_style: KioskStyle | None = None

    def palette(self, mode: str) -> Palette:
        return self.colors_dark if mode == "dark" else self.colors_light


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-request rendering context supplied by the host."""

    mode: str = "light"
    route: str | None = None
    locator: Callable[[str], str] | None = None

    def locate(self, reference: str) -> str:
        if self.locator is None:
            return reference
        return self.locator(reference)


@dataclass(frozen=True, slots=True)
class ParsedDeclarationMap:
    """Custom style text split into literal properties, flags and variants."""

    properties: dict[str, str] = field(default_factory=dict)
    flags: frozenset[str] = frozenset()
    variants: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.properties and not self.flags and not self.variants


@dataclass(frozen=True, slots=True)
class EffectiveStyle:
    """Fully resolved style record for one element."""

    element: str
    properties: dict[str, str] = field(default_factory=dict)
    custom: ParsedDeclarationMap = field(default_factory=ParsedDeclarationMap)
    animation_classes: tuple[str, ...] = ()
    sources: dict[str, str] = field(default_factory=dict)

    @property
    def background(self) -> str | None:
        return self.properties.get("background")

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.properties.get(name, default)


@dataclass(frozen=True, slots=True)
class ThemeManifest:
    """Theme metadata parsed from manifest.json."""

    schema_version: str
    theme_id: str
    name: str
    version: str
    author: str
    description: str


@dataclass(frozen=True, slots=True)
class ThemePackage:
    """A fully loaded theme package."""

    manifest: ThemeManifest
    config: ThemeConfiguration
    source_dir: Path
    is_builtin: bool
    preview_path: Path | None = None


@dataclass(frozen=True, slots=True)
class ThemeSummary:
    """Display-ready theme metadata."""

    theme_id: str
    name: str
    version: str
    author: str
    description: str
    is_builtin: bool
    source_dir: Path
    preview_path: Path | None = None
