"""Theme package and theme document parsing and validation."""

from __future__ import annotations

import json
import math
import re
from dataclasses import fields
from pathlib import Path
from typing import Mapping

from dashtheme.themes.constants import (
    BORDER_STYLES,
    FONT_WEIGHTS,
    LAYOUT_TYPES,
    LINE_HEIGHTS,
    NAV_STYLES,
    PALETTE_KEYS,
    RADIUS_SCALE,
    SHADOW_PRESETS,
    THEMABLE_ELEMENTS,
    THEME_SCHEMA_VERSION,
)
from dashtheme.themes.models import (
    DEFAULT_PALETTE_DARK,
    DEFAULT_PALETTE_LIGHT,
    ElementStyleSpec,
    Gradient,
    KioskStyle,
    LayoutSettings,
    LegacyPageBackground,
    LegacySection,
    LoginPageStyle,
    Palette,
    ThemeConfiguration,
    ThemeManifest,
    ThemePackage,
    ThemeValidationError,
    Typography,
    UiSettings,
)

_THEME_ID_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR_RE = re.compile(r"^(?:rgb|rgba|hsl|hsla)\([^)]+\)$", re.IGNORECASE)
_VAR_COLOR_RE = re.compile(r"^var\(--[A-Za-z0-9-]+\)$")
_NAMED_COLOR_RE = re.compile(r"^[a-zA-Z]{3,32}$")
_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(?:[-+][A-Za-z0-9.-]+)?$")
_BLOCKED_CUSTOM_RE = re.compile(r"(?:@import|expression\s*\()", re.IGNORECASE)

_MAX_MANIFEST_BYTES = 32 * 1024
_MAX_THEME_BYTES = 512 * 1024
_MAX_PREVIEW_BYTES = 8 * 1024 * 1024
_MAX_THEME_ID_LEN = 64
_MAX_SHORT_FIELD_LEN = 120
_MAX_DESC_LEN = 240
_MAX_COLOR_VALUE_LEN = 64
_MAX_TEXT_VALUE_LEN = 256
_MAX_IMAGE_REF_LEN = 2048
_MAX_CUSTOM_CSS_LEN = 4096

_DOCUMENT_KEYS = {
    "colorsLight",
    "colorsDark",
    "elementStyles",
    "sidebar",
    "header",
    "pageBackground",
    "layout",
    "typography",
    "ui",
    "loginPage",
    "kioskStyle",
}
_BACKGROUND_TYPES = {"solid", "gradient", "image"}
_PAGE_BACKGROUND_TYPES = {"solid", "gradient", "image", "pattern"}

# camelCase document key -> (ElementStyleSpec field, value kind)
_ELEMENT_FIELDS: dict[str, tuple[str, str]] = {
    "backgroundColor": ("background_color", "color"),
    "backgroundGradient": ("background_gradient", "gradient"),
    "backgroundImage": ("background_image", "image"),
    "backgroundOpacity": ("background_opacity", "unit"),
    "backgroundPattern": ("background_pattern", "text"),
    "textColor": ("text_color", "color"),
    "textSize": ("text_size", "number"),
    "fontWeight": ("font_weight", "text"),
    "fontFamily": ("font_family", "text"),
    "borderColor": ("border_color", "color"),
    "borderWidth": ("border_width", "number"),
    "borderStyle": ("border_style", "border_style"),
    "borderRadius": ("border_radius", "number"),
    "boxShadow": ("box_shadow", "text"),
    "glowColor": ("glow_color", "color"),
    "glowSize": ("glow_size", "number"),
    "padding": ("padding", "text"),
    "margin": ("margin", "text"),
    "blur": ("blur", "number"),
    "opacity": ("opacity", "unit"),
    "scale": ("scale", "number"),
    "rotate": ("rotate", "number"),
    "skewX": ("skew_x", "number"),
    "skewY": ("skew_y", "number"),
    "saturation": ("saturation", "number"),
    "grayscale": ("grayscale", "number"),
    "hoverScale": ("hover_scale", "number"),
    "hoverOpacity": ("hover_opacity", "unit"),
    "customCSS": ("custom_css", "css"),
}

# camelCase document key -> (LegacySection field, value kind)
_SECTION_FIELDS: dict[str, tuple[str, str]] = {
    "backgroundType": ("background_type", "text"),
    "backgroundColor": ("background_color", "color"),
    "gradientFrom": ("gradient_from", "color"),
    "gradientTo": ("gradient_to", "color"),
    "gradientDirection": ("gradient_direction", "text"),
    "imageUrl": ("image_url", "image"),
    "imageOpacity": ("image_opacity", "percent"),
    "blur": ("blur", "number"),
    "textColor": ("text_color", "color"),
}

_PAGE_FIELDS: dict[str, tuple[str, str]] = {
    "type": ("type", "text"),
    "color": ("color", "color"),
    "gradientFrom": ("gradient_from", "color"),
    "gradientTo": ("gradient_to", "color"),
    "gradientDirection": ("gradient_direction", "text"),
    "imageUrl": ("image_url", "image"),
    "pattern": ("pattern", "text"),
}

_LAYOUT_FIELDS: dict[str, tuple[str, str]] = {
    "type": ("type", "text"),
    "sidebarWidth": ("sidebar_width", "number"),
    "headerHeight": ("header_height", "number"),
    "navStyle": ("nav_style", "text"),
}

_TYPOGRAPHY_FIELDS: dict[str, tuple[str, str]] = {
    "fontFamily": ("font_family", "text"),
    "fontFamilyHeading": ("font_family_heading", "text"),
    "baseFontSize": ("base_font_size", "number"),
    "lineHeight": ("line_height", "text"),
    "fontWeight": ("font_weight", "text"),
}

_UI_FIELDS: dict[str, tuple[str, str]] = {
    "borderRadius": ("border_radius", "text"),
    "shadowIntensity": ("shadow_intensity", "text"),
}

_LOGIN_FIELDS: dict[str, tuple[str, str]] = {
    "backgroundType": ("background_type", "text"),
    "backgroundColor": ("background_color", "color"),
    "gradientFrom": ("gradient_from", "color"),
    "gradientTo": ("gradient_to", "color"),
    "gradientDirection": ("gradient_direction", "text"),
    "imageUrl": ("image_url", "image"),
    "imageOpacity": ("image_opacity", "percent"),
    "logoUrl": ("logo_url", "image"),
    "logoSize": ("logo_size", "number"),
    "brandName": ("brand_name", "text"),
    "brandColor": ("brand_color", "color"),
    "cardStyle": ("card_style", "element"),
}

_KIOSK_FIELDS: dict[str, tuple[str, str]] = {
    "backgroundType": ("background_type", "text"),
    "backgroundGradient": ("background_gradient", "gradient"),
    "backgroundColor": ("background_color", "color"),
    "backgroundImage": ("background_image", "image"),
    "textColor": ("text_color", "color"),
    "textMutedColor": ("text_muted_color", "color"),
    "buttonBgColor": ("button_bg_color", "color"),
    "buttonHoverColor": ("button_hover_color", "color"),
    "buttonActiveColor": ("button_active_color", "color"),
    "buttonTextColor": ("button_text_color", "color"),
    "accentColor": ("accent_color", "color"),
    "blur": ("blur", "number"),
    "borderWidth": ("border_width", "number"),
    "errorBgColor": ("error_bg_color", "color"),
    "errorTextColor": ("error_text_color", "color"),
    "customCSS": ("custom_css", "css"),
}


def load_theme_package(theme_dir: Path, *, is_builtin: bool = False) -> ThemePackage:
    """Load and validate a single theme package directory."""
    if not theme_dir.exists() or not theme_dir.is_dir():
        raise ThemeValidationError(f"Theme path is not a directory: {theme_dir}")
    if theme_dir.is_symlink():
        raise ThemeValidationError(f"Theme directory cannot be a symlink: {theme_dir}")

    manifest_data = _load_json(theme_dir / "manifest.json", max_bytes=_MAX_MANIFEST_BYTES)
    manifest = _parse_manifest(manifest_data, theme_dir)
    theme_data = _load_json(theme_dir / "theme.json", max_bytes=_MAX_THEME_BYTES)
    config = load_theme_document(theme_data, context=f"{theme_dir}/theme.json")

    return ThemePackage(
        manifest=manifest,
        config=config,
        source_dir=theme_dir,
        is_builtin=is_builtin,
        preview_path=_find_preview_path(theme_dir),
    )


def load_theme_document(data: Mapping[str, object], *, context: str = "theme") -> ThemeConfiguration:
    """Validate an imported theme document and build its configuration."""
    if not isinstance(data, Mapping):
        raise ThemeValidationError(f"{context}: expected a JSON object")
    _reject_unknown_keys(data, allowed=_DOCUMENT_KEYS, context=context)

    colors_light = DEFAULT_PALETTE_LIGHT
    if "colorsLight" in data:
        colors_light = _parse_palette(data["colorsLight"], f"{context}.colorsLight")
    colors_dark = DEFAULT_PALETTE_DARK
    if "colorsDark" in data:
        colors_dark = _parse_palette(data["colorsDark"], f"{context}.colorsDark")

    element_styles: dict[str, ElementStyleSpec] = {}
    raw_styles = data.get("elementStyles")
    if raw_styles is not None:
        if not isinstance(raw_styles, Mapping):
            raise ThemeValidationError(f"{context}.elementStyles: expected an object")
        for element, raw in raw_styles.items():
            if element not in THEMABLE_ELEMENTS:
                raise ThemeValidationError(f"{context}.elementStyles: unknown element {element!r}")
            element_styles[element] = _parse_element_style(raw, f"{context}.elementStyles.{element}")

    sidebar = None
    if data.get("sidebar") is not None:
        sidebar = _parse_section(data["sidebar"], f"{context}.sidebar")
    header = None
    if data.get("header") is not None:
        header = _parse_section(data["header"], f"{context}.header")
    page_background = None
    if data.get("pageBackground") is not None:
        page_background = _parse_page_background(data["pageBackground"], f"{context}.pageBackground")

    layout = LayoutSettings()
    if data.get("layout") is not None:
        layout = _parse_layout(data["layout"], f"{context}.layout")
    typography = Typography()
    if data.get("typography") is not None:
        typography = _parse_typography(data["typography"], f"{context}.typography")
    ui = UiSettings()
    if data.get("ui") is not None:
        ui = _parse_ui(data["ui"], f"{context}.ui")
    login_page = None
    if data.get("loginPage") is not None:
        login_page = _parse_login_page(data["loginPage"], f"{context}.loginPage")
    kiosk_style = None
    if data.get("kioskStyle") is not None:
        kiosk_style = _parse_kiosk(data["kioskStyle"], f"{context}.kioskStyle")

    return ThemeConfiguration(
        colors_light=colors_light,
        colors_dark=colors_dark,
        element_styles=element_styles,
        sidebar=sidebar,
        header=header,
        page_background=page_background,
        layout=layout,
        typography=typography,
        ui=ui,
        login_page=login_page,
        kiosk_style=kiosk_style,
    )


def dump_theme_document(config: ThemeConfiguration) -> dict[str, object]:
    """Export *config* in the document shape :func:`load_theme_document` accepts."""
    document: dict[str, object] = {
        "colorsLight": _dump_palette(config.colors_light),
        "colorsDark": _dump_palette(config.colors_dark),
    }
    if config.element_styles:
        document["elementStyles"] = {
            element: _dump_fields(spec, _ELEMENT_FIELDS)
            for element, spec in config.element_styles.items()
        }
    if config.sidebar is not None:
        document["sidebar"] = _dump_fields(config.sidebar, _SECTION_FIELDS)
    if config.header is not None:
        document["header"] = _dump_fields(config.header, _SECTION_FIELDS)
    if config.page_background is not None:
        document["pageBackground"] = _dump_fields(config.page_background, _PAGE_FIELDS)
    # theme-wide settings equal to their defaults are implied
    if config.layout != LayoutSettings():
        document["layout"] = _dump_fields(config.layout, _LAYOUT_FIELDS)
    if config.typography != Typography():
        document["typography"] = _dump_fields(config.typography, _TYPOGRAPHY_FIELDS)
    if config.ui != UiSettings():
        document["ui"] = _dump_fields(config.ui, _UI_FIELDS)
    if config.login_page is not None:
        document["loginPage"] = _dump_fields(config.login_page, _LOGIN_FIELDS)
    if config.kiosk_style is not None:
        document["kioskStyle"] = _dump_fields(config.kiosk_style, _KIOSK_FIELDS)
    return document


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _parse_palette(data: object, context: str) -> Palette:
    if not isinstance(data, Mapping):
        raise ThemeValidationError(f"{context}: expected an object")
    expected = {_camel(key): key for key in PALETTE_KEYS}
    _reject_unknown_keys(data, allowed=set(expected), context=context)
    missing = [key for key in expected if key not in data]
    if missing:
        joined = ", ".join(sorted(missing))
        raise ThemeValidationError(f"{context}: missing required color keys: {joined}")
    colors = {
        field_name: _color(data[key], f"{context}.{key}") for key, field_name in expected.items()
    }
    return Palette.from_mapping(colors)


def _dump_palette(palette: Palette) -> dict[str, str]:
    return {_camel(key): value for key, value in palette.as_dict().items()}


def _parse_element_style(data: object, context: str) -> ElementStyleSpec:
    values = _parse_fields(data, _ELEMENT_FIELDS, context)
    return ElementStyleSpec(**values)


def _parse_section(data: object, context: str) -> LegacySection:
    values = _parse_fields(data, _SECTION_FIELDS, context)
    background_type = values.pop("background_type", "solid")
    if background_type not in _BACKGROUND_TYPES:
        raise ThemeValidationError(f"{context}.backgroundType: unsupported value {background_type!r}")
    return LegacySection(background_type=background_type, **values)


def _parse_page_background(data: object, context: str) -> LegacyPageBackground:
    values = _parse_fields(data, _PAGE_FIELDS, context)
    page_type = values.pop("type", "solid")
    if page_type not in _PAGE_BACKGROUND_TYPES:
        raise ThemeValidationError(f"{context}.type: unsupported value {page_type!r}")
    return LegacyPageBackground(type=page_type, **values)


def _parse_layout(data: object, context: str) -> LayoutSettings:
    values = _parse_fields(data, _LAYOUT_FIELDS, context)
    _check_choice(values, "type", LAYOUT_TYPES, context)
    _check_choice(values, "nav_style", NAV_STYLES, context)
    for key in ("sidebar_width", "header_height"):
        if key in values and values[key] <= 0:
            raise ThemeValidationError(f"{context}.{_camel(key)}: must be positive")
    return LayoutSettings(**values)


def _parse_typography(data: object, context: str) -> Typography:
    values = _parse_fields(data, _TYPOGRAPHY_FIELDS, context)
    _check_choice(values, "line_height", LINE_HEIGHTS, context)
    _check_choice(values, "font_weight", FONT_WEIGHTS, context)
    if values.get("base_font_size", 1) <= 0:
        raise ThemeValidationError(f"{context}.baseFontSize: must be positive")
    return Typography(**values)


def _parse_ui(data: object, context: str) -> UiSettings:
    values = _parse_fields(data, _UI_FIELDS, context)
    _check_choice(values, "border_radius", RADIUS_SCALE, context)
    _check_choice(values, "shadow_intensity", SHADOW_PRESETS, context)
    return UiSettings(**values)


def _parse_login_page(data: object, context: str) -> LoginPageStyle:
    values = _parse_fields(data, _LOGIN_FIELDS, context)
    _check_choice(values, "background_type", _BACKGROUND_TYPES, context)
    return LoginPageStyle(**values)


def _parse_kiosk(data: object, context: str) -> KioskStyle:
    values = _parse_fields(data, _KIOSK_FIELDS, context)
    _check_choice(values, "background_type", _BACKGROUND_TYPES, context)
    return KioskStyle(**values)


def _check_choice(values: Mapping[str, object], name: str, choices, context: str) -> None:
    if name in values and values[name] not in choices:
        raise ThemeValidationError(f"{context}.{_camel(name)}: unsupported value {values[name]!r}")


def _parse_fields(
    data: object,
    schema: Mapping[str, tuple[str, str]],
    context: str,
) -> dict[str, object]:
    if not isinstance(data, Mapping):
        raise ThemeValidationError(f"{context}: expected an object")
    _reject_unknown_keys(data, allowed=set(schema), context=context)
    values: dict[str, object] = {}
    for key, raw in data.items():
        if raw is None:
            continue
        field_name, kind = schema[key]
        values[field_name] = _VALUE_PARSERS[kind](raw, f"{context}.{key}")
    return values


def _dump_fields(record: object, schema: Mapping[str, tuple[str, str]]) -> dict[str, object]:
    by_field = {field_name: key for key, (field_name, _kind) in schema.items()}
    result: dict[str, object] = {}
    for item in fields(record):
        value = getattr(record, item.name)
        if value is None:
            continue
        if isinstance(value, Gradient):
            gradient: dict[str, str] = {"from": value.start, "to": value.end}
            if value.direction is not None:
                gradient["direction"] = value.direction
            value = gradient
        elif isinstance(value, ElementStyleSpec):
            value = _dump_fields(value, _ELEMENT_FIELDS)
        result[by_field[item.name]] = value
    return result


def _color(value: object, context: str) -> str:
    cleaned = _single_line(value, context, max_len=_MAX_COLOR_VALUE_LEN)
    if not _is_valid_color(cleaned):
        raise ThemeValidationError(f"{context}: invalid color {cleaned!r}")
    return cleaned


def _number(value: object, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ThemeValidationError(f"{context}: expected a number")
    if not math.isfinite(value):
        raise ThemeValidationError(f"{context}: expected a finite number")
    return value


def _unit(value: object, context: str) -> float:
    number = _number(value, context)
    if not 0 <= number <= 1:
        raise ThemeValidationError(f"{context}: must be between 0 and 1, got {number!r}")
    return number


def _percent(value: object, context: str) -> float:
    number = _number(value, context)
    if not 0 <= number <= 100:
        raise ThemeValidationError(f"{context}: must be between 0 and 100, got {number!r}")
    return number


def _text(value: object, context: str) -> str:
    return _single_line(value, context, max_len=_MAX_TEXT_VALUE_LEN)


def _border_style(value: object, context: str) -> str:
    cleaned = _text(value, context)
    if cleaned not in BORDER_STYLES:
        raise ThemeValidationError(f"{context}: unsupported border style {cleaned!r}")
    return cleaned


def _image(value: object, context: str) -> str:
    cleaned = _single_line(value, context, max_len=_MAX_IMAGE_REF_LEN)
    if cleaned.lower().startswith("javascript:"):
        raise ThemeValidationError(f"{context}: unsupported image reference")
    return cleaned


def _custom_css(value: object, context: str) -> str:
    if not isinstance(value, str):
        raise ThemeValidationError(f"{context}: expected a string")
    if len(value) > _MAX_CUSTOM_CSS_LEN:
        raise ThemeValidationError(f"{context}: exceeds max length {_MAX_CUSTOM_CSS_LEN}")
    if _BLOCKED_CUSTOM_RE.search(value):
        raise ThemeValidationError(f"{context}: may not contain @import or expression(...)")
    return value


def _gradient(value: object, context: str) -> Gradient:
    if not isinstance(value, Mapping):
        raise ThemeValidationError(f"{context}: expected an object")
    _reject_unknown_keys(value, allowed={"from", "to", "direction"}, context=context)
    for key in ("from", "to"):
        if key not in value:
            raise ThemeValidationError(f"{context}: missing required key {key!r}")
    direction = value.get("direction")
    return Gradient(
        start=_color(value["from"], f"{context}.from"),
        end=_color(value["to"], f"{context}.to"),
        direction=None if direction is None else _text(direction, f"{context}.direction"),
    )


_VALUE_PARSERS = {
    "color": _color,
    "number": _number,
    "unit": _unit,
    "percent": _percent,
    "text": _text,
    "border_style": _border_style,
    "image": _image,
    "css": _custom_css,
    "gradient": _gradient,
    "element": _parse_element_style,
}


def _parse_manifest(data: Mapping[str, object], theme_dir: Path) -> ThemeManifest:
    _reject_unknown_keys(
        data,
        allowed={"schema_version", "theme_id", "name", "version", "author", "description"},
        context=f"{theme_dir}/manifest.json",
    )

    schema_version = _required_str(data, "schema_version", theme_dir, max_len=8)
    if schema_version != THEME_SCHEMA_VERSION:
        raise ThemeValidationError(
            f"{theme_dir}: unsupported schema_version {schema_version!r}; "
            f"expected {THEME_SCHEMA_VERSION!r}"
        )

    theme_id = _required_str(data, "theme_id", theme_dir, max_len=_MAX_THEME_ID_LEN)
    if not _THEME_ID_RE.match(theme_id):
        raise ThemeValidationError(
            f"{theme_dir}: theme_id must match pattern [a-z0-9-], got {theme_id!r}"
        )

    version = _required_str(data, "version", theme_dir, max_len=40)
    if not _SEMVER_RE.match(version):
        raise ThemeValidationError(f"{theme_dir}: manifest version must be semver-like, got {version!r}")

    return ThemeManifest(
        schema_version=schema_version,
        theme_id=theme_id,
        name=_required_str(data, "name", theme_dir, max_len=_MAX_SHORT_FIELD_LEN),
        version=version,
        author=_required_str(data, "author", theme_dir, max_len=_MAX_SHORT_FIELD_LEN),
        description=_required_str(data, "description", theme_dir, max_len=_MAX_DESC_LEN),
    )


def _load_json(path: Path, *, max_bytes: int) -> Mapping[str, object]:
    content = _read_text_limited(path, max_bytes=max_bytes)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeValidationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ThemeValidationError(f"Expected JSON object in {path}")
    return data


def _required_str(data: Mapping[str, object], key: str, theme_dir: Path, *, max_len: int) -> str:
    return _single_line(data.get(key), f"{theme_dir}: field {key!r}", max_len=max_len)


def _single_line(value: object, context: str, *, max_len: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ThemeValidationError(f"{context} must be a non-empty string")
    cleaned = value.strip()
    if len(cleaned) > max_len:
        raise ThemeValidationError(f"{context} exceeds max length {max_len}")
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise ThemeValidationError(f"{context} must be a single line string")
    return cleaned


def _is_valid_color(value: str) -> bool:
    return bool(
        _HEX_COLOR_RE.match(value)
        or _FUNC_COLOR_RE.match(value)
        or _VAR_COLOR_RE.match(value)
        or _NAMED_COLOR_RE.match(value)
    )


def _find_preview_path(theme_dir: Path) -> Path | None:
    candidates = (
        theme_dir / "preview.png",
        theme_dir / "preview.jpg",
        theme_dir / "preview.jpeg",
        theme_dir / "preview.webp",
    )
    for candidate in candidates:
        if candidate.exists() and candidate.is_file() and not candidate.is_symlink():
            try:
                if candidate.stat().st_size > _MAX_PREVIEW_BYTES:
                    continue
            except OSError:
                continue
            return candidate
    return None


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(str(key) for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise ThemeValidationError(f"{context}: unsupported keys found: {joined}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ThemeValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise ThemeValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeValidationError(f"Unable to read {path}: {exc}") from exc
