"""Pillow preview rendering for calendar views."""

from .layout import DEFAULT_LAYOUT, LayoutMetrics
from .renderer import DayRenderer, RendererConfig

__all__ = [
    "DEFAULT_LAYOUT",
    "DayRenderer",
    "LayoutMetrics",
    "RendererConfig",
]
