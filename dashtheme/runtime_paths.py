"""Locations of resources shipped inside the package."""

from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    """Return the directory of the `dashtheme` package."""
    return Path(__file__).resolve().parent


def builtin_themes_root() -> Path:
    return package_root() / "themes" / "builtin"
