"""Registry of named resume themes.

Themes are data: colors, sizes and which decoration variant to draw.
Every entry is validated when this module is imported.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from folio.shared import ThemeNotFoundError


class ThemeName(str, Enum):
    MODERN = "modern"
    PROFESSIONAL = "professional"
    MINIMALIST = "minimalist"
    CHINESE = "chinese"


class Decoration(str, Enum):
    TIMELINE = "timeline"
    UNDERLINE = "underline"
    CARD = "card"
    NONE = "none"


class HeaderStyle(str, Enum):
    BAND = "band"
    RULE = "rule"
    PLAIN = "plain"


class ThemeConfig(BaseModel):
    """Immutable style record for one theme."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: ThemeName
    description: str
    primary: tuple[float, float, float]
    secondary: tuple[float, float, float]
    accent: tuple[float, float, float]
    text: tuple[float, float, float]
    light: tuple[float, float, float]
    background: tuple[float, float, float] = (1.0, 1.0, 1.0)

    decoration: Decoration = Decoration.NONE
    header_style: HeaderStyle = HeaderStyle.PLAIN
    header_centered: bool = False
    uppercase_titles: bool = True
    bullet: str = "•"
    font_family: str | None = None

    margin: float = 50
    name_size: float = 24
    contact_size: float = 10
    section_size: float = 12
    title_size: float = 11
    body_size: float = 10
    small_size: float = 9
    leading: float = 1.4
    section_gap: float = 14
    item_gap: float = 10

    @field_validator("primary", "secondary", "accent", "text", "light", "background")
    @classmethod
    def check_channels(cls, value: tuple[float, float, float]) -> tuple[float, float, float]:
        if any(not 0.0 <= channel <= 1.0 for channel in value):
            raise ValueError(f"color channels must be within [0, 1], got {value}")
        return value

    @field_validator("margin", "name_size", "section_size", "title_size", "body_size")
    @classmethod
    def check_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("sizes and margins must be positive")
        return value

    def line_height(self, size: float) -> float:
        return size * self.leading


_THEME_DATA = [
    {
        "name": "modern",
        "description": "Clean design with blue accents and a timeline",
        "primary": (0.4, 0.49, 0.92),
        "secondary": (0.46, 0.29, 0.64),
        "accent": (0.20, 0.60, 0.86),
        "text": (0.13, 0.13, 0.13),
        "light": (0.96, 0.96, 0.98),
        "background": (0.98, 0.98, 1.0),
        "decoration": "timeline",
        "header_style": "band",
        "name_size": 28,
        "section_size": 13,
        "title_size": 12,
    },
    {
        "name": "professional",
        "description": "Traditional business style",
        "primary": (0.17, 0.24, 0.31),
        "secondary": (0.52, 0.58, 0.64),
        "accent": (0.15, 0.68, 0.38),
        "text": (0.17, 0.17, 0.17),
        "light": (0.95, 0.96, 0.97),
        "decoration": "underline",
        "header_style": "rule",
        "header_centered": True,
        "margin": 60,
        "name_size": 26,
    },
    {
        "name": "minimalist",
        "description": "Simple black and white",
        "primary": (0.0, 0.0, 0.0),
        "secondary": (0.4, 0.4, 0.4),
        "accent": (0.2, 0.2, 0.2),
        "text": (0.1, 0.1, 0.1),
        "light": (0.97, 0.97, 0.97),
        "uppercase_titles": False,
        "section_size": 11,
        "title_size": 11,
        "bullet": "-",
    },
    {
        "name": "chinese",
        "description": "Optimized for Chinese text with red accents",
        "primary": (0.8, 0.2, 0.2),
        "secondary": (0.3, 0.3, 0.3),
        "accent": (0.9, 0.3, 0.3),
        "text": (0.1, 0.1, 0.1),
        "light": (0.98, 0.95, 0.95),
        "decoration": "card",
        "header_style": "band",
        "font_family": "noto-sans-sc",
        "leading": 1.5,
    },
]

THEMES: dict[ThemeName, ThemeConfig] = {
    config.name: config for config in (ThemeConfig.model_validate(d) for d in _THEME_DATA)
}


def get_theme(name: str | ThemeName) -> ThemeConfig:
    """Look up a registered theme; unknown names are a fatal error."""
    value = name.value if isinstance(name, ThemeName) else str(name).strip().lower()
    try:
        return THEMES[ThemeName(value)]
    except ValueError as exc:
        raise ThemeNotFoundError(str(name), theme_names()) from exc


def theme_names() -> list[str]:
    return [name.value for name in ThemeName]
