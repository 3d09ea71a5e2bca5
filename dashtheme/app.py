"""Theme engine bootstrap for a host application."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from PySide6.QtCore import QObject

from dashtheme.config.settings import AppSettings
from dashtheme.runtime_paths import builtin_themes_root
from dashtheme.themes.registry import ThemeRegistry
from dashtheme.themes.service import ThemeService
from dashtheme.themes.sync import QtPropertyTarget, VariableTarget


def _configure_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("dashtheme")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "theme.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def create_theme_service(
    target: QObject | VariableTarget,
    settings: AppSettings | None = None,
) -> ThemeService:
    """Build a theme service for *target*, load themes and apply the startup theme.

    A bare QObject target receives the variables as dynamic properties.
    """
    settings = settings if settings is not None else AppSettings()
    logger = _configure_logger(settings)
    builtin_themes = builtin_themes_root()
    logger.info("theme startup builtin_root=%s", builtin_themes)
    if not builtin_themes.exists():
        logger.warning("builtin theme root missing at %s", builtin_themes)

    if isinstance(target, QObject):
        target = QtPropertyTarget(target)
    registry = ThemeRegistry(builtin_root=builtin_themes, user_root=settings.themes_dir)
    service = ThemeService(target, settings, registry)
    errors = service.reload_themes()
    if errors:
        logger.warning("theme load warnings: %s", " | ".join(errors[:6]))
    ok, message = service.apply_startup_theme()
    if not ok:
        logger.warning("startup theme fallback: %s", message)
    return service
