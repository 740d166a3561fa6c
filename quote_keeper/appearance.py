from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .models import TextSize, Theme

DEFAULT_COLOR_NAME = "blue"

CATEGORY_COLORS: Dict[str, str] = {
    "blue": "#007aff",
    "green": "#34c759",
    "purple": "#af52de",
    "pink": "#ff2d55",
    "orange": "#ff9500",
    "red": "#ff3b30",
    "yellow": "#ffcc00",
}


def category_color(color_name: str) -> str:
    """分类颜色名 -> 十六进制颜色；未知名称一律回退为蓝色。"""
    return CATEGORY_COLORS.get(color_name, CATEGORY_COLORS[DEFAULT_COLOR_NAME])


@dataclass(frozen=True)
class FontSizes:
    body: int
    title: int
    headline: int
    caption: int


FONT_SIZES: Dict[TextSize, FontSizes] = {
    TextSize.SMALL: FontSizes(body=12, title=15, headline=17, caption=11),
    TextSize.STANDARD: FontSizes(body=17, title=20, headline=22, caption=12),
    TextSize.LARGE: FontSizes(body=20, title=22, headline=28, caption=15),
}


def font_sizes(text_size: TextSize) -> FontSizes:
    return FONT_SIZES.get(text_size, FONT_SIZES[TextSize.STANDARD])


@dataclass(frozen=True)
class ThemePalette:
    window: str
    card: str
    text: str
    secondary_text: str
    accent: str


THEME_PALETTES: Dict[Theme, ThemePalette] = {
    Theme.LIGHT: ThemePalette(
        window="#f7f5f3",
        card="#fffdf9",
        text="#2c2c2c",
        secondary_text="#8c6b54",
        accent="#d0652f",
    ),
    Theme.DARK: ThemePalette(
        window="#1c1c1e",
        card="#2c2c2e",
        text="#f2f2f7",
        secondary_text="#aeaeb2",
        accent="#ff9f0a",
    ),
}


def theme_palette(theme: Theme) -> Optional[ThemePalette]:
    """System 主题返回 None，交给平台默认样式。"""
    return THEME_PALETTES.get(theme)
