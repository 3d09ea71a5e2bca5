"""Runtime theme apply and persistence service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QObject, Signal

from dashtheme.errors import DashThemeError, ErrorCode, classify_exception, format_error_for_user
from dashtheme.themes.animation import page_animation_classes, sidebar_animation_classes
from dashtheme.themes.compiler import compile_theme
from dashtheme.themes.constants import DEFAULT_THEME_ID
from dashtheme.themes.models import RenderContext, ThemeConfiguration, ThemeSummary
from dashtheme.themes.registry import ThemeRegistry
from dashtheme.themes.sync import VariableSynchronizer, VariableTarget
from dashtheme.themes.variables import theme_variables

logger = logging.getLogger(__name__)


def prefix_locator(base_url: str) -> Callable[[str], str]:
    """Build an image locator that prefixes root-relative references with *base_url*."""
    base = (base_url or "").rstrip("/")

    def locate(reference: str) -> str:
        if base and reference.startswith("/") and not reference.startswith("//"):
            return f"{base}{reference}"
        return reference

    return locate


class ThemeService(QObject):
    """Apply themes to a live variable target and persist selection."""

    theme_changed = Signal(str)
    mode_changed = Signal(str)

    def __init__(
        self,
        target: VariableTarget,
        settings,
        registry: ThemeRegistry,
        synchronizer: VariableSynchronizer | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._registry = registry
        self._synchronizer = synchronizer if synchronizer is not None else VariableSynchronizer(target)
        self._active_theme_id = ""
        self._config: ThemeConfiguration | None = None
        self._route: str | None = None

    @property
    def active_theme_id(self) -> str:
        return self._active_theme_id

    @property
    def active_config(self) -> ThemeConfiguration | None:
        return self._config

    @property
    def route(self) -> str | None:
        return self._route

    @property
    def user_themes_dir(self) -> Path:
        return self._registry.user_root

    def set_user_themes_dir(self, path: Path) -> None:
        self._registry.set_user_root(path)

    def reload_themes(self) -> list[str]:
        self._registry.reload()
        return self._registry.load_errors()

    def available_themes(self) -> list[ThemeSummary]:
        return self._registry.list_themes()

    def render_context(self) -> RenderContext:
        return RenderContext(
            mode=self._settings.theme_mode,
            route=self._route,
            locator=prefix_locator(self._settings.asset_base_url),
        )

    def apply_theme(self, theme_id: str, *, persist: bool = True) -> tuple[bool, str]:
        package = self._registry.get_theme(theme_id)
        if package is None:
            error = DashThemeError(ErrorCode.THEME_NOT_FOUND, message=f"Theme not found: {theme_id}")
            return False, format_error_for_user(error)
        try:
            self._render(package.config)
        except Exception as exc:
            logger.exception("failed to apply theme %s", theme_id)
            error = classify_exception(exc, path=package.source_dir, default_code=ErrorCode.THEME_APPLY_FAILED)
            return False, format_error_for_user(error)

        self._config = package.config
        self._active_theme_id = theme_id
        if persist:
            self._settings.theme_id = theme_id
        self._settings.theme_last_known_good_id = theme_id
        logger.info("applied theme %s", theme_id)
        self.theme_changed.emit(theme_id)
        return True, f"Applied theme: {package.manifest.name}"

    def apply_startup_theme(self) -> tuple[bool, str]:
        requested = self._settings.theme_id
        fallback = self._settings.theme_last_known_good_id
        candidates = [requested, fallback, DEFAULT_THEME_ID]
        seen: set[str] = set()

        for candidate in candidates:
            if not candidate or candidate in seen:
                continue
            seen.add(candidate)
            ok, message = self.apply_theme(candidate, persist=True)
            if ok:
                return True, message
            logger.warning("startup theme %s rejected: %s", candidate, message)

        config = ThemeConfiguration()
        self._render(config)
        self._config = config
        self._active_theme_id = DEFAULT_THEME_ID
        self._settings.theme_id = DEFAULT_THEME_ID
        self._settings.theme_last_known_good_id = DEFAULT_THEME_ID
        self.theme_changed.emit(DEFAULT_THEME_ID)
        return False, format_error_for_user(DashThemeError(ErrorCode.THEME_FALLBACK))

    def set_mode(self, mode: str) -> str:
        """Persist the light/dark mode and re-apply the active theme."""
        self._settings.theme_mode = mode
        applied = self._settings.theme_mode
        self._refresh()
        self.mode_changed.emit(applied)
        return applied

    def set_route(self, route: str | None) -> None:
        if route == self._route:
            return
        self._route = route
        self._refresh()

    def animation_classes(self, route: str | None = None) -> tuple[str, ...]:
        """Animation tokens for the page at *route* (default: the current route)."""
        target = route if route is not None else (self._route or "/")
        return page_animation_classes(self._config, target)

    def sidebar_animation_classes(self) -> tuple[str, ...]:
        return sidebar_animation_classes(self._config)

    def _refresh(self) -> None:
        if self._config is not None:
            self._render(self._config)

    def _render(self, config: ThemeConfiguration) -> dict[str, str]:
        context = self.render_context()
        tables = compile_theme(config, context)
        palette = config.palette(context.mode)
        return self._synchronizer.apply(tables, palette, theme_variables(config, palette, context))
