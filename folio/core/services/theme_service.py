# folio/core/services/theme_service.py
from enum import Enum
from typing import Optional

THEME_COOKIE = "theme"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


def parse_theme(value: Optional[str]) -> Theme:
    try:
        return Theme(value)
    except ValueError:
        return Theme.LIGHT


def toggle_theme(theme: Theme) -> Theme:
    return Theme.LIGHT if theme == Theme.DARK else Theme.DARK


def theme_icon(theme: Theme) -> str:
    return "☀️" if theme == Theme.DARK else "🌙"
