"""Lookups over the themable element catalog."""

from __future__ import annotations

from dashtheme.themes.constants import (
    ELEMENT_NAMESPACES,
    ROUTE_ALIASES,
    ROUTE_BACKGROUND_ELEMENTS,
    ROUTE_SUB_ELEMENTS,
    THEMABLE_ELEMENTS,
)

_KNOWN = frozenset(THEMABLE_ELEMENTS)


def is_themable(element: object) -> bool:
    return isinstance(element, str) and element in _KNOWN


def namespace_for(element: str) -> str:
    return ELEMENT_NAMESPACES.get(element, element)


def route_background_element(route: str | None) -> str | None:
    """Map a route such as ``/calendar/week`` to its background element."""
    if not isinstance(route, str):
        return None
    segment = route.strip().strip("/").split("/", 1)[0].split("?", 1)[0].lower()
    alias = ROUTE_ALIASES.get(segment)
    if alias is not None:
        return alias
    candidate = f"{segment}-background"
    if candidate in ROUTE_BACKGROUND_ELEMENTS:
        return candidate
    return None


def parent_element(element: str) -> str | None:
    """Generic element a per-route sub-element falls back to."""
    if element not in ROUTE_SUB_ELEMENTS:
        return None
    if element.endswith("-widget"):
        return "widget"
    if element.endswith(("-card", "-grid", "-banner")):
        return "card"
    return None


def owning_page(element: str) -> str | None:
    """Route background element of the page a sub-element lives on."""
    if element not in ROUTE_SUB_ELEMENTS:
        return None
    candidate = f"{element.split('-', 1)[0]}-background"
    if candidate in ROUTE_BACKGROUND_ELEMENTS:
        return candidate
    return None
