"""Theme engine constants."""

from __future__ import annotations

DEFAULT_THEME_ID = "dashtheme-classic"
THEME_SCHEMA_VERSION = "1"

GLOBAL_ELEMENTS: tuple[str, ...] = (
    "page-background",
    "sidebar",
    "header",
    "card",
    "widget",
    "button-primary",
    "button-secondary",
    "modal",
    "input",
    "login-page",
    "kiosk",
)

ROUTE_BACKGROUND_ELEMENTS: tuple[str, ...] = (
    "home-background",
    "calendar-background",
    "chores-background",
    "shopping-background",
    "messages-background",
    "settings-background",
    "budget-background",
    "meals-background",
    "recipes-background",
    "paidchores-background",
    "family-background",
    "store-background",
)

ROUTE_SUB_ELEMENTS: tuple[str, ...] = (
    "home-title",
    "home-welcome-banner",
    "home-stats-widget",
    "home-chores-card",
    "home-events-card",
    "home-weather-widget",
    "home-leaderboard-widget",
    "home-meals-widget",
    "home-shopping-widget",
    "home-earnings-widget",
    "home-family-widget",
    "home-announcements-widget",
    "calendar-title",
    "calendar-grid",
    "calendar-meal-widget",
    "calendar-user-card",
    "chores-task-card",
    "chores-paid-card",
    "shopping-filter-widget",
    "shopping-list-card",
    "messages-announcements-card",
    "messages-chat-card",
    "settings-nav-card",
    "settings-content-card",
)

THEMABLE_ELEMENTS: tuple[str, ...] = GLOBAL_ELEMENTS + ROUTE_BACKGROUND_ELEMENTS + ROUTE_SUB_ELEMENTS

# Variable namespace per element. Values must stay unique.
ELEMENT_NAMESPACES: dict[str, str] = {
    "page-background": "page",
    "sidebar": "sidebar",
    "header": "header",
    "card": "card",
    "widget": "widget",
    "button-primary": "btn-primary",
    "button-secondary": "btn-secondary",
    "modal": "modal",
    "input": "input",
    "login-page": "login",
    "kiosk": "kiosk",
    "home-background": "home-page",
    "calendar-background": "calendar-page",
    "chores-background": "chores-page",
    "shopping-background": "shopping-page",
    "messages-background": "messages-page",
    "settings-background": "settings-page",
    "budget-background": "budget-page",
    "meals-background": "meals-page",
    "recipes-background": "recipes-page",
    "paidchores-background": "paidchores-page",
    "family-background": "family-page",
    "store-background": "store-page",
    "home-title": "home-title",
    "home-welcome-banner": "home-welcome",
    "home-stats-widget": "home-stats",
    "home-chores-card": "home-chores",
    "home-events-card": "home-events",
    "home-weather-widget": "home-weather",
    "home-leaderboard-widget": "home-leaderboard",
    "home-meals-widget": "home-meals",
    "home-shopping-widget": "home-shopping",
    "home-earnings-widget": "home-earnings",
    "home-family-widget": "home-family",
    "home-announcements-widget": "home-announcements",
    "calendar-title": "calendar-title",
    "calendar-grid": "calendar-grid",
    "calendar-meal-widget": "calendar-meal",
    "calendar-user-card": "calendar-user",
    "chores-task-card": "chores-task",
    "chores-paid-card": "chores-paid",
    "shopping-filter-widget": "shopping-filter",
    "shopping-list-card": "shopping-list",
    "messages-announcements-card": "messages-announcements",
    "messages-chat-card": "messages-chat",
    "settings-nav-card": "settings-nav",
    "settings-content-card": "settings-content",
}

PALETTE_NAMESPACE = "color"

# Route segment -> route background element. Segments not listed map to
# "<segment>-background" when that element exists.
ROUTE_ALIASES: dict[str, str] = {
    "": "home-background",
    "dashboard": "home-background",
    "paid-chores": "paidchores-background",
}

# Palette fields used when nothing else styles an element.
# element -> (background, text)
PALETTE_FALLBACKS: dict[str, tuple[str, str]] = {
    "page-background": ("background", "foreground"),
    "sidebar": ("card", "foreground"),
    "header": ("card", "foreground"),
    "card": ("card", "card_foreground"),
    "widget": ("muted", "foreground"),
    "button-primary": ("primary", "primary_foreground"),
    "button-secondary": ("secondary", "secondary_foreground"),
    "modal": ("card", "card_foreground"),
    "input": ("background", "foreground"),
    "login-page": ("background", "foreground"),
    "kiosk": ("background", "foreground"),
}

AUTO_BORDER_COLOR = "rgba(255,255,255,0.15)"

EFFECT_FLAGS: tuple[str, ...] = (
    "matrix-rain",
    "snowfall",
    "sparkle",
    "bubbles",
    "embers",
)

# variant property -> owning flag
EFFECT_VARIANTS: dict[str, str] = {
    "matrix-rain-speed": "matrix-rain",
}

VARIANT_LEVELS: tuple[str, ...] = ("slow", "normal", "fast", "veryfast")

SHADOW_PRESETS: dict[str, str] = {
    "none": "none",
    "subtle": "0 1px 2px rgba(0,0,0,0.05)",
    "medium": "0 4px 6px rgba(0,0,0,0.1)",
    "strong": "0 10px 15px rgba(0,0,0,0.15)",
}

FONT_WEIGHTS: dict[str, str] = {
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
}

BORDER_STYLES: tuple[str, ...] = ("solid", "dashed", "dotted", "none")

PALETTE_KEYS: tuple[str, ...] = (
    "primary",
    "primary_foreground",
    "secondary",
    "secondary_foreground",
    "accent",
    "accent_foreground",
    "background",
    "foreground",
    "card",
    "card_foreground",
    "muted",
    "muted_foreground",
    "border",
    "destructive",
    "destructive_foreground",
    "success",
    "success_foreground",
    "warning",
    "warning_foreground",
)

DEFAULT_COLORS_LIGHT: dict[str, str] = {
    "primary": "#3cb371",
    "primary_foreground": "#ffffff",
    "secondary": "#f3f4f6",
    "secondary_foreground": "#3d4f5f",
    "accent": "#3cb371",
    "accent_foreground": "#ffffff",
    "background": "#ffffff",
    "foreground": "#3d4f5f",
    "card": "#ffffff",
    "card_foreground": "#3d4f5f",
    "muted": "#f3f4f6",
    "muted_foreground": "#6b7280",
    "border": "#e5e7eb",
    "destructive": "#ef4444",
    "destructive_foreground": "#ffffff",
    "success": "#22c55e",
    "success_foreground": "#ffffff",
    "warning": "#f59e0b",
    "warning_foreground": "#1f2937",
}

DEFAULT_COLORS_DARK: dict[str, str] = {
    "primary": "#4fd693",
    "primary_foreground": "#1a2e26",
    "secondary": "#374151",
    "secondary_foreground": "#f9fafb",
    "accent": "#4fd693",
    "accent_foreground": "#1a2e26",
    "background": "#1a2530",
    "foreground": "#f9fafb",
    "card": "#243340",
    "card_foreground": "#f9fafb",
    "muted": "#2d3e4e",
    "muted_foreground": "#9ca3af",
    "border": "#3d4f5f",
    "destructive": "#f87171",
    "destructive_foreground": "#1f2937",
    "success": "#4ade80",
    "success_foreground": "#1f2937",
    "warning": "#fbbf24",
    "warning_foreground": "#1f2937",
}

LAYOUT_TYPES: tuple[str, ...] = ("sidebar-left", "sidebar-right", "top-header", "minimal")
NAV_STYLES: tuple[str, ...] = ("icons-only", "icons-text", "text-only")

LINE_HEIGHTS: dict[str, str] = {
    "compact": "1.4",
    "normal": "1.5",
    "relaxed": "1.75",
}

RADIUS_SCALE: dict[str, str] = {
    "none": "0",
    "small": "0.25rem",
    "medium": "0.5rem",
    "large": "1rem",
}

DEFAULT_SIDEBAR_WIDTH = 256
DEFAULT_HEADER_HEIGHT = 64
DEFAULT_FONT_FAMILY = "system-ui, -apple-system, sans-serif"
DEFAULT_BASE_FONT_SIZE = 16

# legacy image layers render at 30% unless told otherwise
DEFAULT_IMAGE_OPACITY = 30
