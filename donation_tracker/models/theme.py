"""
Theme Models

The theme is a single dark/light switch. It is stored as the string
"dark" or "light" under its own key, independent of the transactions.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ThemeMode(str, Enum):
    """Stored theme values."""
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_stored(cls, value: Optional[str]) -> "ThemeMode":
        """Anything other than "dark" means light."""
        return cls.DARK if value == cls.DARK.value else cls.LIGHT

    @classmethod
    def from_flag(cls, is_dark: bool) -> "ThemeMode":
        return cls.DARK if is_dark else cls.LIGHT


class ThemePalette(BaseModel):
    """Colours used by the presentation layer."""
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    card: str
    text: str
    accent: str


LIGHT_PALETTE = ThemePalette(
    primary="#F0F4F8",
    secondary="#E0E6EF",
    card="#FFFFFF",
    text="#334E68",
    accent="#2196F3",
)

DARK_PALETTE = ThemePalette(
    primary="#101826",
    secondary="#1b2940",
    card="#21324a",
    text="#E0E6EF",
    accent="#42A5F5",
)


def palette_for(is_dark: bool) -> ThemePalette:
    return DARK_PALETTE if is_dark else LIGHT_PALETTE
