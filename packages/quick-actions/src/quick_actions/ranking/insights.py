"""Read-only usage insights for a single action id."""

from __future__ import annotations

from quick_actions.protocol.types import ActionInsights, RecommendationContext

ANYTIME = "anytime"

BEST_TIMES: dict[str, list[str]] = {
    "meditation": ["morning", "evening"],
    "journal": ["evening", "night"],
    "exercise": ["morning", "afternoon"],
    "breathe": [ANYTIME],
    "medication": ["morning", "evening"],
}

COMPLEMENTARY_ACTIONS: dict[str, list[str]] = {
    "meditation": ["journal", "breathe"],
    "exercise": ["meditation", "hydration"],
    "therapy": ["journal", "mood"],
    "journal": ["mood", "meditation"],
    "crisis": ["breathe", "grounding", "contact"],
}


def best_times(action_id: str) -> list[str]:
    return list(BEST_TIMES.get(action_id, [ANYTIME]))


def complementary_actions(action_id: str) -> list[str]:
    return list(COMPLEMENTARY_ACTIONS.get(action_id, []))


def effectiveness(frequency: int) -> float:
    # TODO: replace with mood-delta correlation once outcome data is collected
    return min(1.0, 0.5 + frequency * 0.1)


def get_action_insights(action_id: str, context: RecommendationContext) -> ActionInsights:
    frequency = context.action_history.count(action_id)
    return ActionInsights(
        best_times=best_times(action_id),
        complementary_actions=complementary_actions(action_id),
        frequency=frequency,
        effectiveness=effectiveness(frequency),
    )
