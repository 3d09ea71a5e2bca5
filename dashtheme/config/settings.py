"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from dashtheme.themes.constants import DEFAULT_THEME_ID

_THEME_MODES = {"light", "dark"}


class AppSettings:
    """Wraps QSettings for persistent theme configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("DashTheme", "DashTheme")

    # -- theme --

    @property
    def theme_id(self) -> str:
        raw = self._qs.value("ui/theme_id", DEFAULT_THEME_ID, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_THEME_ID

    @theme_id.setter
    def theme_id(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME_ID
        self._qs.setValue("ui/theme_id", cleaned)

    @property
    def theme_last_known_good_id(self) -> str:
        raw = self._qs.value("ui/theme_last_known_good_id", DEFAULT_THEME_ID, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_THEME_ID

    @theme_last_known_good_id.setter
    def theme_last_known_good_id(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME_ID
        self._qs.setValue("ui/theme_last_known_good_id", cleaned)

    @property
    def theme_mode(self) -> str:
        raw = self._qs.value("ui/theme_mode", "light", type=str)
        mode = (raw or "").strip().lower()
        if mode in _THEME_MODES:
            return mode
        return "light"

    @theme_mode.setter
    def theme_mode(self, value: str) -> None:
        mode = (value or "").strip().lower()
        if mode not in _THEME_MODES:
            mode = "light"
        self._qs.setValue("ui/theme_mode", mode)

    # -- assets --

    @property
    def asset_base_url(self) -> str:
        raw = self._qs.value("assets/base_url", "", type=str)
        return (raw or "").strip().rstrip("/")

    @asset_base_url.setter
    def asset_base_url(self, value: str) -> None:
        self._qs.setValue("assets/base_url", (value or "").strip().rstrip("/"))

    # -- helpers --

    def sync(self) -> None:
        self._qs.sync()

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def themes_dir(self) -> Path:
        path = self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "dashtheme"
