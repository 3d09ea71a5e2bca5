"""Tests for QSettings-backed application settings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings

from dashtheme.config.settings import AppSettings
from dashtheme.themes.constants import DEFAULT_THEME_ID


def _settings(tmp_path: Path) -> AppSettings:
    return AppSettings(QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat))


def test_theme_ids_default_and_normalize(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    assert settings.theme_id == DEFAULT_THEME_ID
    assert settings.theme_last_known_good_id == DEFAULT_THEME_ID

    settings.theme_id = "  midnight-matrix  "
    assert settings.theme_id == "midnight-matrix"
    settings.theme_id = "   "
    assert settings.theme_id == DEFAULT_THEME_ID

    settings.theme_last_known_good_id = "midnight-matrix"
    assert settings.theme_last_known_good_id == "midnight-matrix"


def test_theme_mode_is_restricted(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    assert settings.theme_mode == "light"
    settings.theme_mode = "DARK"
    assert settings.theme_mode == "dark"
    settings.theme_mode = "sepia"
    assert settings.theme_mode == "light"


def test_asset_base_url_strips_trailing_slash(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    assert settings.asset_base_url == ""
    settings.asset_base_url = "https://dash.example.com/"
    assert settings.asset_base_url == "https://dash.example.com"


def test_values_persist_across_instances(tmp_path: Path) -> None:
    first = _settings(tmp_path)
    first.theme_id = "midnight-matrix"
    first.theme_mode = "dark"
    first.sync()

    second = _settings(tmp_path)
    assert second.theme_id == "midnight-matrix"
    assert second.theme_mode == "dark"


def test_data_directories_follow_appdata(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    settings = _settings(tmp_path)

    assert settings.app_data_dir == tmp_path / "appdata" / "dashtheme"
    assert settings.themes_dir == tmp_path / "appdata" / "dashtheme" / "themes"
    assert settings.themes_dir.is_dir()
