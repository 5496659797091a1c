"""Styling module for the quiz page."""

from .color_palette import ColorPalette, ToneColors
from .styles import Styles

__all__ = ["ColorPalette", "Styles", "ToneColors"]
