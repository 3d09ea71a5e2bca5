"""Tests for theme package loader and registry behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dashtheme.runtime_paths import builtin_themes_root
from dashtheme.themes.constants import DEFAULT_THEME_ID
from dashtheme.themes.loader import dump_theme_document, load_theme_document, load_theme_package
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
    ThemeConfiguration,
    ThemeValidationError,
    Typography,
    UiSettings,
)
from dashtheme.themes.registry import ThemeRegistry


def _write_json(path: Path, data: dict[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _base_manifest(theme_id: str) -> dict[str, object]:
    return {
        "schema_version": "1",
        "theme_id": theme_id,
        "name": theme_id,
        "version": "0.1.0",
        "author": "tests",
        "description": "test theme",
    }


def _base_document(card_color: str = "#22aa66") -> dict[str, object]:
    document = dump_theme_document(ThemeConfiguration())
    document["elementStyles"] = {"card": {"backgroundColor": card_color, "borderRadius": 12}}
    return document


def _write_theme_dir(theme_dir: Path, theme_id: str, card_color: str = "#22aa66") -> None:
    _write_json(theme_dir / "manifest.json", _base_manifest(theme_id))
    _write_json(theme_dir / "theme.json", _base_document(card_color))


def test_load_theme_package_valid(tmp_path: Path) -> None:
    theme_dir = tmp_path / "test-theme"
    _write_theme_dir(theme_dir, "test-theme")

    package = load_theme_package(theme_dir)
    assert package.manifest.theme_id == "test-theme"
    assert package.config.element_styles["card"] == ElementStyleSpec(
        background_color="#22aa66",
        border_radius=12,
    )
    assert package.config.colors_light == DEFAULT_PALETTE_LIGHT
    assert package.preview_path is None


def test_load_theme_package_finds_preview(tmp_path: Path) -> None:
    theme_dir = tmp_path / "with-preview"
    _write_theme_dir(theme_dir, "with-preview")
    (theme_dir / "preview.png").write_bytes(b"\x89PNG")

    assert load_theme_package(theme_dir).preview_path == theme_dir / "preview.png"


def test_load_theme_package_missing_theme_json_rejected(tmp_path: Path) -> None:
    theme_dir = tmp_path / "no-document"
    _write_json(theme_dir / "manifest.json", _base_manifest("no-document"))

    with pytest.raises(ThemeValidationError):
        load_theme_package(theme_dir)


def test_load_theme_rejects_manifest_unknown_key(tmp_path: Path) -> None:
    theme_dir = tmp_path / "unknown-manifest"
    manifest = _base_manifest("unknown-manifest")
    manifest["sql"] = "DROP TABLE themes"
    _write_json(theme_dir / "manifest.json", manifest)
    _write_json(theme_dir / "theme.json", _base_document())

    with pytest.raises(ThemeValidationError):
        load_theme_package(theme_dir)


def test_load_theme_rejects_manifest_field_length_and_newlines(tmp_path: Path) -> None:
    theme_dir = tmp_path / "bad-manifest"
    manifest = _base_manifest("bad-manifest")
    manifest["name"] = "A" * 200
    _write_json(theme_dir / "manifest.json", manifest)
    _write_json(theme_dir / "theme.json", _base_document())
    with pytest.raises(ThemeValidationError):
        load_theme_package(theme_dir)

    manifest["name"] = "bad\nname"
    _write_json(theme_dir / "manifest.json", manifest)
    with pytest.raises(ThemeValidationError):
        load_theme_package(theme_dir)


class TestLoadThemeDocument:
    def test_missing_palette_key_rejected(self) -> None:
        document = _base_document()
        document["colorsLight"].pop("accent")
        with pytest.raises(ThemeValidationError, match="accent"):
            load_theme_document(document)

    def test_unknown_document_key_rejected(self) -> None:
        document = _base_document()
        document["layout"] = {"type": "sidebar"}
        with pytest.raises(ThemeValidationError, match="layout"):
            load_theme_document(document)

    def test_unknown_element_rejected(self) -> None:
        document = _base_document()
        document["elementStyles"]["toaster"] = {"backgroundColor": "#000000"}
        with pytest.raises(ThemeValidationError, match="toaster"):
            load_theme_document(document)

    def test_unknown_element_style_key_rejected(self) -> None:
        document = _base_document()
        document["elementStyles"]["card"]["onClick"] = "alert(1)"
        with pytest.raises(ThemeValidationError, match="onClick"):
            load_theme_document(document)

    @pytest.mark.parametrize("color", ["#12345", "rgb(1, 2", "not a color!", 123])
    def test_invalid_colors_rejected(self, color: object) -> None:
        document = _base_document()
        document["elementStyles"]["card"]["backgroundColor"] = color
        with pytest.raises(ThemeValidationError):
            load_theme_document(document)

    @pytest.mark.parametrize("opacity", [1.5, -0.1, True, "0.5"])
    def test_invalid_opacity_rejected(self, opacity: object) -> None:
        document = _base_document()
        document["elementStyles"]["card"]["backgroundOpacity"] = opacity
        with pytest.raises(ThemeValidationError):
            load_theme_document(document)

    def test_legacy_image_opacity_is_a_percentage(self) -> None:
        document = _base_document()
        document["sidebar"] = {"backgroundType": "image", "imageUrl": "/a.png", "imageOpacity": 40}
        assert load_theme_document(document).sidebar.image_opacity == 40

        document["sidebar"]["imageOpacity"] = 140
        with pytest.raises(ThemeValidationError):
            load_theme_document(document)

    def test_unsupported_background_type_rejected(self) -> None:
        document = _base_document()
        document["header"] = {"backgroundType": "video"}
        with pytest.raises(ThemeValidationError, match="backgroundType"):
            load_theme_document(document)

    def test_custom_css_import_rejected(self) -> None:
        document = _base_document()
        document["elementStyles"]["card"]["customCSS"] = '@import "https://example.com/x.css";'
        with pytest.raises(ThemeValidationError):
            load_theme_document(document)

    def test_gradient_requires_both_endpoints(self) -> None:
        document = _base_document()
        document["elementStyles"]["card"]["backgroundGradient"] = {"from": "#000000"}
        with pytest.raises(ThemeValidationError, match="to"):
            load_theme_document(document)

    def test_palettes_default_when_absent(self) -> None:
        config = load_theme_document({"elementStyles": {}})
        assert config.colors_light == DEFAULT_PALETTE_LIGHT
        assert config.colors_dark == DEFAULT_PALETTE_DARK

    def test_export_then_import_is_lossless(self) -> None:
        config = ThemeConfiguration(
            element_styles={
                "page-background": ElementStyleSpec(
                    background_gradient=Gradient("#000800", "#001a00", "45deg"),
                    custom_css="matrix-rain: true; matrix-rain-speed: fast;",
                ),
                "card": ElementStyleSpec(
                    background_image="/uploads/card.png",
                    background_opacity=0.8,
                    text_size=14,
                    font_weight="bold",
                    border_radius=0,
                    skew_x=-3,
                    hover_opacity=0.9,
                ),
                "home-stats-widget": ElementStyleSpec(glow_color="#00ff41", glow_size=6),
            },
            sidebar=LegacySection(
                background_type="gradient",
                gradient_from="#111111",
                gradient_to="#222222",
                blur=4,
            ),
            page_background=LegacyPageBackground(type="pattern", color="#ffffff", pattern="dots"),
        )
        exported = dump_theme_document(config)
        round_tripped = load_theme_document(json.loads(json.dumps(exported)))
        assert round_tripped == config

    def test_default_theme_settings_are_not_exported(self) -> None:
        exported = dump_theme_document(ThemeConfiguration())
        assert set(exported) == {"colorsLight", "colorsDark"}

    def test_theme_settings_and_special_blocks_round_trip(self) -> None:
        config = ThemeConfiguration(
            layout=LayoutSettings(type="top-header", header_height=72, nav_style="text-only"),
            typography=Typography(font_family="Inter", base_font_size=14, line_height="compact", font_weight="medium"),
            ui=UiSettings(border_radius="small", shadow_intensity="none"),
            login_page=LoginPageStyle(
                background_type="image",
                image_url="/uploads/login.jpg",
                image_opacity=60,
                logo_url="/uploads/logo.png",
                logo_size=80,
                brand_name="Family Hub",
                brand_color="#ffcc00",
                card_style=ElementStyleSpec(background_color="#101010", border_radius=16, blur=8),
            ),
            kiosk_style=KioskStyle(
                background_type="gradient",
                background_gradient=Gradient("#8b5cf6", "#3b82f6"),
                text_color="#ffffff",
                button_hover_color="rgba(255, 255, 255, 0.3)",
                border_width=2,
                custom_css="snowfall: true;",
            ),
        )
        exported = dump_theme_document(config)
        assert exported["loginPage"]["cardStyle"] == {
            "backgroundColor": "#101010",
            "borderRadius": 16,
            "blur": 8,
        }
        assert exported["kioskStyle"]["backgroundGradient"] == {"from": "#8b5cf6", "to": "#3b82f6"}
        round_tripped = load_theme_document(json.loads(json.dumps(exported)))
        assert round_tripped == config

    @pytest.mark.parametrize(
        ("key", "block"),
        [
            ("layout", {"type": "floating"}),
            ("layout", {"navStyle": "icons"}),
            ("layout", {"sidebarWidth": 0}),
            ("typography", {"lineHeight": "loose"}),
            ("typography", {"fontWeight": "heavy"}),
            ("typography", {"baseFontSize": -2}),
            ("ui", {"borderRadius": "round"}),
            ("ui", {"shadowIntensity": "huge"}),
            ("loginPage", {"backgroundType": "video"}),
            ("loginPage", {"cardStyle": {"shimmer": 1}}),
            ("kioskStyle", {"backgroundGradient": {"from": "#000000"}}),
            ("kioskStyle", {"buttonBgColor": "not a color"}),
        ],
    )
    def test_invalid_theme_settings_rejected(self, key: str, block: dict[str, object]) -> None:
        document = _base_document()
        document[key] = block
        with pytest.raises(ThemeValidationError):
            load_theme_document(document)



def test_registry_user_theme_overrides_builtin(tmp_path: Path) -> None:
    builtin_root = tmp_path / "builtin"
    user_root = tmp_path / "user"
    _write_theme_dir(builtin_root / "shared-theme", "shared-theme", card_color="#00ff00")
    _write_theme_dir(user_root / "shared-theme", "shared-theme", card_color="#ff00ff")

    registry = ThemeRegistry(builtin_root=builtin_root, user_root=user_root)
    registry.reload()

    package = registry.get_theme("shared-theme")
    assert package is not None
    assert package.config.element_styles["card"].background_color == "#ff00ff"
    assert package.is_builtin is False
    assert any("overrides built-in theme" in msg for msg in registry.load_errors())


def test_registry_rejects_invalid_theme_id(tmp_path: Path) -> None:
    builtin_root = tmp_path / "builtin"
    user_root = tmp_path / "user"
    _write_theme_dir(user_root / "bad", "Bad Theme")

    registry = ThemeRegistry(builtin_root=builtin_root, user_root=user_root)
    registry.reload()

    assert registry.get_theme("Bad Theme") is None
    assert any("theme_id must match pattern" in msg for msg in registry.load_errors())


def test_registry_lists_builtin_first_and_exports(tmp_path: Path) -> None:
    builtin_root = tmp_path / "builtin"
    user_root = tmp_path / "user"
    _write_theme_dir(builtin_root / "zeta", "zeta")
    _write_theme_dir(user_root / "alpha", "alpha")

    registry = ThemeRegistry(builtin_root=builtin_root, user_root=user_root)
    registry.reload()

    assert [row.theme_id for row in registry.list_themes()] == ["zeta", "alpha"]
    exported = registry.export_theme("alpha")
    assert exported is not None
    assert load_theme_document(exported) == registry.get_config("alpha")
    assert registry.export_theme("missing") is None


def test_shipped_builtin_themes_are_valid(tmp_path: Path) -> None:
    registry = ThemeRegistry(builtin_root=builtin_themes_root(), user_root=tmp_path / "user")
    registry.reload()

    assert registry.load_errors() == []
    assert registry.get_theme(DEFAULT_THEME_ID) is not None
    assert registry.get_theme("midnight-matrix") is not None
