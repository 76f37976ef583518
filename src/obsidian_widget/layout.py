"""Per-size display settings for the widget."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WidgetSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extraLarge"
    DEFAULT = "default"


@dataclass(frozen=True)
class DisplayConfig:
    title_font: int
    description_font: int
    row_output: int


DISPLAY_CONFIGS: dict[WidgetSize, DisplayConfig] = {
    WidgetSize.SMALL: DisplayConfig(title_font=20, description_font=14, row_output=5),
    WidgetSize.MEDIUM: DisplayConfig(title_font=22, description_font=14, row_output=5),
    WidgetSize.LARGE: DisplayConfig(title_font=24, description_font=14, row_output=12),
    WidgetSize.EXTRA_LARGE: DisplayConfig(title_font=26, description_font=15, row_output=12),
    WidgetSize.DEFAULT: DisplayConfig(title_font=20, description_font=14, row_output=12),
}


def display_config(size: str | WidgetSize | None) -> DisplayConfig:
    """Look up the display settings for *size*, falling back to ``default``."""

    try:
        key = WidgetSize(size)
    except ValueError:
        key = WidgetSize.DEFAULT
    return DISPLAY_CONFIGS[key]
