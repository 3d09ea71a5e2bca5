"""Theme compilation helpers."""

from __future__ import annotations

from dashtheme.themes.cascade import resolve
from dashtheme.themes.constants import THEMABLE_ELEMENTS
from dashtheme.themes.elements import namespace_for
from dashtheme.themes.models import EffectiveStyle, RenderContext, ThemeConfiguration


def compile_theme(
    config: ThemeConfiguration,
    context: RenderContext | None = None,
) -> list[tuple[str, EffectiveStyle]]:
    """Resolve every themable element into ``(namespace, style)`` tables."""
    context = context or RenderContext()
    return [(namespace_for(element), resolve(config, element, context)) for element in THEMABLE_ELEMENTS]
