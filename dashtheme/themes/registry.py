"""Theme package discovery and registry."""

from __future__ import annotations

import logging
from pathlib import Path

from dashtheme.themes.loader import dump_theme_document, load_theme_package
from dashtheme.themes.models import (
    ThemeConfiguration,
    ThemePackage,
    ThemeSummary,
    ThemeValidationError,
)

logger = logging.getLogger(__name__)

_MAX_THEME_DIR_CANDIDATES = 512


class ThemeRegistry:
    """Theme packages found under a builtin root and a user root.

    User packages replace builtin packages carrying the same theme id.
    """

    def __init__(self, builtin_root: Path, user_root: Path) -> None:
        self._builtin_root = builtin_root
        self._user_root = user_root
        self._themes: dict[str, ThemePackage] = {}
        self._load_errors: list[str] = []

    @property
    def builtin_root(self) -> Path:
        return self._builtin_root

    @property
    def user_root(self) -> Path:
        return self._user_root

    def set_user_root(self, path: Path) -> None:
        self._user_root = path

    def reload(self) -> None:
        self._themes = {}
        self._load_errors = []
        self._scan(self._builtin_root, is_builtin=True)
        self._scan(self._user_root, is_builtin=False)
        for message in self._load_errors:
            logger.warning("theme load: %s", message)

    def list_themes(self) -> list[ThemeSummary]:
        rows = [_summary(package) for package in self._themes.values()]
        return sorted(rows, key=lambda row: (0 if row.is_builtin else 1, row.name.lower()))

    def get_theme(self, theme_id: str) -> ThemePackage | None:
        return self._themes.get(theme_id)

    def get_config(self, theme_id: str) -> ThemeConfiguration | None:
        package = self._themes.get(theme_id)
        return None if package is None else package.config

    def export_theme(self, theme_id: str) -> dict[str, object] | None:
        """Theme document for *theme_id*, ready to be written as theme.json."""
        config = self.get_config(theme_id)
        return None if config is None else dump_theme_document(config)

    def load_errors(self) -> list[str]:
        return list(self._load_errors)

    def _scan(self, root: Path, *, is_builtin: bool) -> None:
        if not root.exists():
            return
        try:
            directories = sorted(path for path in root.iterdir() if path.is_dir())
        except OSError as exc:
            self._load_errors.append(f"Failed to list themes in {root}: {exc}")
            return

        candidates: list[Path] = []
        for path in directories:
            if path.is_symlink():
                self._load_errors.append(f"Skipping symlink theme directory: {path}")
                continue
            candidates.append(path)
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            self._load_errors.append(
                f"Theme directory limit exceeded in {root}; "
                f"only first {_MAX_THEME_DIR_CANDIDATES} folders were scanned."
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]

        for theme_dir in candidates:
            try:
                package = load_theme_package(theme_dir, is_builtin=is_builtin)
            except ThemeValidationError as exc:
                self._load_errors.append(str(exc))
                continue
            self._register(package, theme_dir)

    def _register(self, package: ThemePackage, theme_dir: Path) -> None:
        theme_id = package.manifest.theme_id
        existing = self._themes.get(theme_id)
        if existing is not None:
            if package.is_builtin:
                self._load_errors.append(
                    f"Duplicate builtin theme id {theme_id!r} at {theme_dir}; skipping."
                )
                return
            if existing.is_builtin:
                self._load_errors.append(f"User theme {theme_id!r} overrides built-in theme.")
            else:
                self._load_errors.append(
                    f"Duplicate user theme id {theme_id!r} at {theme_dir}; replacing {existing.source_dir}."
                )
        self._themes[theme_id] = package


def _summary(package: ThemePackage) -> ThemeSummary:
    manifest = package.manifest
    return ThemeSummary(
        theme_id=manifest.theme_id,
        name=manifest.name,
        version=manifest.version,
        author=manifest.author,
        description=manifest.description,
        is_builtin=package.is_builtin,
        source_dir=package.source_dir,
        preview_path=package.preview_path,
    )
