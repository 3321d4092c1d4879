"""Mood normalisation and immutable context snapshot helpers."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any

from quick_actions.protocol.types import Clock, RecommendationContext, TimeOfDay

logger = logging.getLogger(__name__)

NEUTRAL_MOOD: int = 5

MOOD_SCORES: dict[str, int] = {
    "very_bad": 1,
    "bad": 2,
    "low": 3,
    "neutral": 5,
    "okay": 6,
    "good": 7,
    "very_good": 8,
    "excellent": 9,
}


def mood_score(mood: str | None) -> int:
    """Map a mood label onto the 1-9 scale.

    Exact, case-insensitive lookup.  Absent or unknown labels are neutral.
    """
    if not mood or not isinstance(mood, str):
        return NEUTRAL_MOOD
    return MOOD_SCORES.get(mood.lower(), NEUTRAL_MOOD)


def update_context(context: RecommendationContext, **patch: Any) -> RecommendationContext:
    """Return a new snapshot with *patch* merged over *context*.

    The new snapshot's ``version`` is one past the old one.
    """
    if not patch:
        return context
    patch.setdefault("version", context.version + 1)
    updated = replace(context, **patch)
    logger.debug("Context for user %s updated: %s", context.user_id, sorted(patch))
    return updated


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    if 5 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 17:
        return TimeOfDay.AFTERNOON
    if 17 <= hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def context_for_now(
    user_id: str,
    clock: Clock | None = None,
    **fields: Any,
) -> RecommendationContext:
    """Build a snapshot whose time fields come from *clock*.

    Explicit ``time_of_day`` or ``day_of_week`` values in *fields* win over
    the clock.  ``day_of_week`` counts from Sunday = 0.
    """
    now = (clock or datetime.now)()
    fields.setdefault("time_of_day", time_of_day_for_hour(now.hour))
    fields.setdefault("day_of_week", now.isoweekday() % 7)
    return RecommendationContext(user_id=user_id, **fields)
