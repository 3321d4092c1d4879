"""Context-independent prior for a catalog action.

The prior only looks at the action's static attributes and how often the
user has picked it before; live signals are applied later by the booster.
"""

from __future__ import annotations

from quick_actions.protocol.types import ActionCategory, QuickAction, RecommendationContext

# ---------------------------------------------------------------------------
# Tuneable constants
# ---------------------------------------------------------------------------

BASE_SCORE: float = 0.5
EMERGENCY_SCORE: float = 0.9
HISTORY_BOOST_PER_USE: float = 0.05
HISTORY_BOOST_CAP: float = 0.2

# ``other`` has no weight and is left unblended.
CATEGORY_WEIGHTS: dict[ActionCategory, float] = {
    ActionCategory.CRISIS: 0.9,
    ActionCategory.WELLNESS: 0.7,
    ActionCategory.TRACKING: 0.6,
    ActionCategory.THERAPY: 0.7,
    ActionCategory.SOCIAL: 0.5,
    ActionCategory.PROFESSIONAL: 0.6,
}


def history_boost(action_id: str, action_history: tuple[str, ...]) -> float:
    """Familiarity boost: 0.05 per past use, capped at 0.2."""
    frequency = action_history.count(action_id)
    if frequency == 0:
        return 0.0
    return min(HISTORY_BOOST_CAP, frequency * HISTORY_BOOST_PER_USE)


def base_score(action: QuickAction, context: RecommendationContext) -> float:
    score = BASE_SCORE

    # Emergency actions override the base, they do not add to it
    if action.is_emergency or action.category == ActionCategory.CRISIS:
        score = EMERGENCY_SCORE

    score += history_boost(action.id, context.action_history)

    weight = CATEGORY_WEIGHTS.get(action.category)
    if weight is not None:
        score = (score + weight) / 2

    return min(1.0, score)
