"""Badge classification by score percentage."""

from __future__ import annotations

from pm_quiz.core.models import Badge

# Descending, non-overlapping thresholds.
_BADGE_THRESHOLDS: tuple[tuple[int, Badge], ...] = (
    (90, Badge(label="PM Ace", emoji="🏆", tone="amber")),
    (75, Badge(label="Strong Builder", emoji="🚀", tone="indigo")),
    (50, Badge(label="Solid Start", emoji="✅", tone="emerald")),
)
_FALLBACK_BADGE = Badge(label="Keep Going", emoji="💪", tone="slate")


def badge_for_percent(percent: int) -> Badge:
    for threshold, badge in _BADGE_THRESHOLDS:
        if percent >= threshold:
            return badge
    return _FALLBACK_BADGE


def compute_percent(part: int, total: int) -> int:
    """Return 100 * part / total rounded half up, or 0 for an empty quiz."""
    if total <= 0:
        return 0
    # Integer form of floor(x + 0.5); built-in round() rounds halves to even.
    return (200 * part + total) // (2 * total)
