"""Theme engine exports."""

from dashtheme.themes.cascade import resolve
from dashtheme.themes.color import apply_opacity
from dashtheme.themes.compiler import compile_theme
from dashtheme.themes.constants import DEFAULT_THEME_ID, THEMABLE_ELEMENTS
from dashtheme.themes.custom_style import parse, serialize
from dashtheme.themes.effects import is_effect_active, merge, remove
from dashtheme.themes.animation import classify
from dashtheme.themes.models import (
    EffectiveStyle,
    ElementStyleSpec,
    KioskStyle,
    LayoutSettings,
    LoginPageStyle,
    RenderContext,
    ThemeConfiguration,
    ThemePackage,
    ThemeSummary,
    ThemeValidationError,
    Typography,
    UiSettings,
)
from dashtheme.themes.registry import ThemeRegistry
from dashtheme.themes.service import ThemeService
from dashtheme.themes.sync import (
    MappingTarget,
    PreviousApplicationSnapshot,
    QtPropertyTarget,
    VariableSynchronizer,
    synchronize,
)
from dashtheme.themes.variables import theme_variables

__all__ = [
    "DEFAULT_THEME_ID",
    "THEMABLE_ELEMENTS",
    "EffectiveStyle",
    "ElementStyleSpec",
    "KioskStyle",
    "LayoutSettings",
    "LoginPageStyle",
    "MappingTarget",
    "PreviousApplicationSnapshot",
    "QtPropertyTarget",
    "RenderContext",
    "ThemeConfiguration",
    "ThemePackage",
    "ThemeRegistry",
    "ThemeService",
    "ThemeSummary",
    "ThemeValidationError",
    "Typography",
    "UiSettings",
    "VariableSynchronizer",
    "apply_opacity",
    "classify",
    "compile_theme",
    "is_effect_active",
    "merge",
    "parse",
    "remove",
    "resolve",
    "serialize",
    "synchronize",
    "theme_variables",
]
