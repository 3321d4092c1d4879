"""Context booster: turns a prior into a final score with reasons.

Applies hand-authored time, mood and sequence heuristics plus every
registry rule whose live value clears ``RULE_THRESHOLD``.  Each positive
contribution appends a human-readable reason; reasons are kept in the order
they fired and are not deduplicated.
"""

from __future__ import annotations

from quick_actions.protocol.context import mood_score
from quick_actions.protocol.types import ActionScore, QuickAction, RecommendationContext, TimeOfDay
from quick_actions.ranking.rules import RuleRegistry

# ---------------------------------------------------------------------------
# Boost sizes
# ---------------------------------------------------------------------------

TIME_OF_DAY_BOOST: float = 0.2
LOW_MOOD_BOOST: float = 0.3
ANXIETY_BOOST: float = 0.25
SEQUENCE_BOOST: float = 0.15
STRESS_BOOST: float = 0.2
SLEEP_BOOST: float = 0.2

RULE_THRESHOLD: float = 0.5
RULE_WEIGHT: float = 0.3

LOW_MOOD_CEILING: int = 4
STRESS_THRESHOLD: float = 6
POOR_SLEEP_THRESHOLD: float = 5

# ---------------------------------------------------------------------------
# Icon groups
# ---------------------------------------------------------------------------

MORNING_ICONS = frozenset({"meditation", "mood", "medication"})
EVENING_ICONS = frozenset({"journal", "breathe", "sleep"})
LOW_MOOD_ICONS = frozenset({"emergency", "crisis", "grounding", "breathe"})
ANXIETY_ICONS = frozenset({"breathe", "meditation", "grounding", "music"})
STRESS_ICONS = frozenset({"breathe", "meditation", "music", "grounding"})
SLEEP_ICONS = frozenset({"sleep", "meditation", "breathe"})

# last recent activity -> (icon it complements, reason)
COMPLEMENTS: dict[str, tuple[str, str]] = {
    "exercise": ("meditation", "Great after exercise"),
    "therapy": ("journal", "Process therapy insights"),
}


class ContextBooster:
    """Apply live-context boosts on top of a base score."""

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry

    def boost(
        self,
        action: QuickAction,
        base: float,
        context: RecommendationContext,
        rule_values: dict[str, float] | None = None,
    ) -> ActionScore:
        """Return the boosted, clamped score for *action*.

        Parameters
        ----------
        action:
            Catalog entry being scored.
        base:
            Prior from the base scorer.
        context:
            Snapshot the boosts are evaluated against.
        rule_values:
            Precomputed registry values for *context*.  Evaluated on demand
            when omitted; the ranking engine passes one dict per call so
            every action sees the same clock reading.
        """
        if rule_values is None:
            rule_values = self._registry.evaluate(context)

        score = base
        reasons: list[str] = []
        icon = action.icon

        # 1-2. Time of day
        if context.time_of_day == TimeOfDay.MORNING and icon in MORNING_ICONS:
            score += TIME_OF_DAY_BOOST
            reasons.append("Recommended for morning routine")

        if context.time_of_day == TimeOfDay.EVENING and icon in EVENING_ICONS:
            score += TIME_OF_DAY_BOOST
            reasons.append("Good for evening wind-down")

        # 3-4. Mood
        if mood_score(context.current_mood) < LOW_MOOD_CEILING and icon in LOW_MOOD_ICONS:
            score += LOW_MOOD_BOOST
            reasons.append("Helpful for current mood")

        # case-sensitive, unlike the breathing_anxiety rule
        if context.current_mood and "anxious" in context.current_mood and icon in ANXIETY_ICONS:
            score += ANXIETY_BOOST
            reasons.append("Can help with anxiety")

        # 5. Complementary follow-ups
        complement = COMPLEMENTS.get(context.last_activity or "")
        if complement is not None and icon == complement[0]:
            score += SEQUENCE_BOOST
            reasons.append(complement[1])

        # 6. Registry rules
        for rule in self._registry.rules:
            value = rule_values.get(rule.name, 0.0)
            if value > RULE_THRESHOLD and rule.applies_to(action):
                score += value * RULE_WEIGHT
                reasons.append(rule.reason)

        # 7. Stress
        if context.stress_level and context.stress_level > STRESS_THRESHOLD and icon in STRESS_ICONS:
            score += STRESS_BOOST
            reasons.append("Stress relief activity")

        # 8. Sleep
        if (
            context.sleep_quality
            and context.sleep_quality < POOR_SLEEP_THRESHOLD
            and context.time_of_day == TimeOfDay.NIGHT
            and icon in SLEEP_ICONS
        ):
            score += SLEEP_BOOST
            reasons.append("May improve sleep")

        return ActionScore(action=action, score=min(1.0, score), reasons=reasons)
