"""
Color palettes. Themes only change colors, never geometry.
"""
from loguru import logger

from bujo_planner.utils import css_color_to_hex

LIGHT = {
    "name": "Light",
    "colors": {
        "background":         "FFFFFF",
        "dot_grid":           "CCCCCC",
        "borders":            "E5E5E5",
        "section_headers":    "AAAAAA",
        "weekend_bg":         "CCCCCC",   # drawn at 10% opacity
        "text_black":         "000000",
        "text_gray":          "888888",
        "empty_cell_overlay": "000000",   # drawn at 20% opacity
        "diagnostic_red":     "FF0000",
        "diagnostic_label_bg": "FFFFFF",
        "margin_line":        "FFCCCC",
    },
}

DARK = {
    "name": "Dark",
    "colors": {
        "background":         "1E1E1E",
        "dot_grid":           "505050",
        "borders":            "555555",
        "section_headers":    "888888",
        "weekend_bg":         "505050",
        "text_black":         "B0B0B0",
        "text_gray":          "A0A0A0",
        "empty_cell_overlay": "000000",
        "diagnostic_red":     "FF6B6B",
        "diagnostic_label_bg": "2A2A2A",
        "margin_line":        "7A4040",
    },
}

EARTH = {
    "name": "Earth",
    "colors": {
        "background":         "F5F1E8",
        "dot_grid":           "758C74",
        "borders":            "D4CDB8",
        "section_headers":    "8B9A8B",
        "weekend_bg":         "758C74",
        "text_black":         "696953",
        "text_gray":          "6B7565",
        "empty_cell_overlay": "758C74",
        "diagnostic_red":     "D97757",
        "diagnostic_label_bg": "F5F1E8",
        "margin_line":        "E0B8A8",
    },
}

THEMES = {
    "light": LIGHT,
    "dark":  DARK,
    "earth": EARTH,
}


def available_themes() -> list[str]:
    return sorted(THEMES)


def get_theme(name: str | None = None) -> dict:
    """
    Return a theme with every color normalized to '#RRGGBB'.
    Raises ValueError for unknown names.
    """
    key = (name or "light").strip().lower()
    if key not in THEMES:
        logger.error("Unknown theme '{}'. Available: {}", name, ", ".join(available_themes()))
        raise ValueError(f"Unknown theme '{name}'")
    theme = THEMES[key]
    return {
        "name": theme["name"],
        "colors": {role: css_color_to_hex(value) for role, value in theme["colors"].items()},
    }
