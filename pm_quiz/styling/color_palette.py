"""Color palette for the quiz page and badge tones."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ToneColors:
    """Pill and heading colors for one badge tone."""
    background: str
    text: str
    border: str
    title: str


class ColorPalette:
    """Centralized color definitions for the quiz page."""

    # Text colors
    TEXT_PRIMARY = "#0F172A"      # Slate 900
    TEXT_SECONDARY = "#475569"    # Slate 600
    TEXT_MUTED = "#64748B"        # Slate 500

    # Background colors
    BACKGROUND_PAGE = "#FAFAFA"
    BACKGROUND_CARD = "#FAFAF9"   # Stone 50
    BACKGROUND_SELECTED = "#EEF2FF"

    # Accent colors
    ACCENT_PRIMARY = "#4F46E5"    # Indigo 600
    ACCENT_SECONDARY = "#C026D3"  # Fuchsia 600
    ACCENT_TERTIARY = "#10B981"   # Emerald 500

    # Border colors
    BORDER_PRIMARY = "#E2E8F0"
    BORDER_FOCUS = "#818CF8"

    # Status colors
    SUCCESS = "#047857"
    ERROR = "#B91C1C"

    # Badge tones, keyed by Badge.tone
    BADGE_TONES: dict[str, ToneColors] = {
        "amber": ToneColors(background="#FEF3C7", text="#92400E", border="#FDE68A", title="#D97706"),
        "indigo": ToneColors(background="#E0E7FF", text="#3730A3", border="#C7D2FE", title="#4F46E5"),
        "emerald": ToneColors(background="#D1FAE5", text="#065F46", border="#A7F3D0", title="#059669"),
        "slate": ToneColors(background="#F1F5F9", text="#1E293B", border="#E2E8F0", title="#475569"),
    }
