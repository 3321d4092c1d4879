"""Named contextual rules and the tables that tie them to actions.

Rules never see actions.  Each one scores how relevant a kind of behaviour
is for the current context; ``RULE_KEYWORDS`` then decides which catalog
entries that score can boost, by icon equality or a case-insensitive label
substring.  New rules need no action changes and new actions need no rule
changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from quick_actions.protocol.context import mood_score
from quick_actions.protocol.types import Clock, QuickAction, RecommendationContext, TimeOfDay

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Rule identifiers
# ---------------------------------------------------------------------------


class RuleName(str, Enum):
    MORNING_MEDITATION = "morning_meditation"
    EVENING_JOURNAL = "evening_journal"
    CRISIS_LOW_MOOD = "crisis_low_mood"
    BREATHING_ANXIETY = "breathing_anxiety"
    MEDICATION_REMINDER = "medication_reminder"
    SOCIAL_ISOLATION = "social_isolation"
    SLEEP_HYGIENE = "sleep_hygiene"
    INDOOR_ACTIVITIES = "indoor_activities"
    STRESS_RELIEF = "stress_relief"


# Common medication times: 8am, 12pm, 6pm, 10pm
MEDICATION_HOURS: frozenset[int] = frozenset({8, 12, 18, 22})
INDOOR_WEATHER: frozenset[str] = frozenset({"rainy", "stormy"})

DEFAULT_RULE_REASON = "Contextually relevant"

RULE_KEYWORDS: dict[RuleName, tuple[str, ...]] = {
    RuleName.MORNING_MEDITATION: ("meditation", "breathe", "mindfulness"),
    RuleName.EVENING_JOURNAL: ("journal", "reflection", "gratitude"),
    RuleName.CRISIS_LOW_MOOD: ("emergency", "crisis", "help"),
    RuleName.BREATHING_ANXIETY: ("breathe", "grounding", "calm"),
    RuleName.MEDICATION_REMINDER: ("medication", "pill", "reminder"),
    RuleName.SOCIAL_ISOLATION: ("community", "connect", "social"),
    RuleName.SLEEP_HYGIENE: ("sleep", "relax", "wind-down"),
    RuleName.INDOOR_ACTIVITIES: ("meditation", "journal", "breathe"),
    RuleName.STRESS_RELIEF: ("breathe", "meditation", "music", "grounding"),
}

RULE_REASONS: dict[RuleName, str] = {
    RuleName.MORNING_MEDITATION: "Start your day mindfully",
    RuleName.EVENING_JOURNAL: "Reflect on your day",
    RuleName.CRISIS_LOW_MOOD: "Support available",
    RuleName.BREATHING_ANXIETY: "Calm your mind",
    RuleName.MEDICATION_REMINDER: "Medication time",
    RuleName.SOCIAL_ISOLATION: "Connect with others",
    RuleName.SLEEP_HYGIENE: "Prepare for better sleep",
    RuleName.INDOOR_ACTIVITIES: "Indoor activity",
    RuleName.STRESS_RELIEF: "Reduce stress",
}


# ---------------------------------------------------------------------------
# Rule bodies
# ---------------------------------------------------------------------------
# Unset or zero numeric signals never satisfy a threshold.


def morning_meditation(ctx: RecommendationContext, now: datetime) -> float:
    return 0.8 if ctx.time_of_day == TimeOfDay.MORNING else 0.2


def evening_journal(ctx: RecommendationContext, now: datetime) -> float:
    if ctx.time_of_day == TimeOfDay.EVENING:
        return 0.9
    if ctx.time_of_day == TimeOfDay.NIGHT:
        return 0.7
    return 0.3


def crisis_low_mood(ctx: RecommendationContext, now: datetime) -> float:
    return 1.0 if mood_score(ctx.current_mood) < 3 else 0.1


def breathing_anxiety(ctx: RecommendationContext, now: datetime) -> float:
    mood = (ctx.current_mood or "").lower()
    if "anxious" in mood or "stressed" in mood:
        return 0.9
    return 0.4


def medication_reminder(ctx: RecommendationContext, now: datetime) -> float:
    return 0.8 if now.hour in MEDICATION_HOURS else 0.2


def social_isolation(ctx: RecommendationContext, now: datetime) -> float:
    if ctx.social_interaction and ctx.social_interaction < 3:
        return 0.7
    return 0.3


def sleep_hygiene(ctx: RecommendationContext, now: datetime) -> float:
    if ctx.time_of_day == TimeOfDay.NIGHT and ctx.sleep_quality and ctx.sleep_quality < 5:
        return 0.8
    return 0.2


def indoor_activities(ctx: RecommendationContext, now: datetime) -> float:
    return 0.7 if ctx.weather_condition in INDOOR_WEATHER else 0.4


def stress_relief(ctx: RecommendationContext, now: datetime) -> float:
    if ctx.stress_level and ctx.stress_level > 7:
        return 0.9
    return 0.3


_RULE_FUNCS: dict[RuleName, Callable[[RecommendationContext, datetime], float]] = {
    RuleName.MORNING_MEDITATION: morning_meditation,
    RuleName.EVENING_JOURNAL: evening_journal,
    RuleName.CRISIS_LOW_MOOD: crisis_low_mood,
    RuleName.BREATHING_ANXIETY: breathing_anxiety,
    RuleName.MEDICATION_REMINDER: medication_reminder,
    RuleName.SOCIAL_ISOLATION: social_isolation,
    RuleName.SLEEP_HYGIENE: sleep_hygiene,
    RuleName.INDOOR_ACTIVITIES: indoor_activities,
    RuleName.STRESS_RELIEF: stress_relief,
}


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------


def matches_keywords(keywords: tuple[str, ...], action: QuickAction) -> bool:
    label = action.label.lower()
    return any(action.icon == kw or kw in label for kw in keywords)


def rule_applies(rule_name: RuleName | str, action: QuickAction) -> bool:
    """True if *action* is one of the targets of the named built-in rule."""
    try:
        keywords = RULE_KEYWORDS[RuleName(rule_name)]
    except ValueError:
        return False
    return matches_keywords(keywords, action)


def rule_reason(rule_name: RuleName | str) -> str:
    try:
        return RULE_REASONS[RuleName(rule_name)]
    except ValueError:
        return DEFAULT_RULE_REASON


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    name: str
    evaluate: Callable[[RecommendationContext, datetime], float]
    keywords: tuple[str, ...]
    reason: str = DEFAULT_RULE_REASON

    def applies_to(self, action: QuickAction) -> bool:
        return matches_keywords(self.keywords, action)


class RuleRegistry:
    """Ordered collection of named rules sharing one clock.

    Parameters
    ----------
    clock:
        Callable returning the current ``datetime``.  Defaults to
        ``datetime.now``; pass a fixed clock for deterministic scoring.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or datetime.now
        self._rules: dict[str, Rule] = {}

    @classmethod
    def default(cls, clock: Clock | None = None) -> RuleRegistry:
        registry = cls(clock=clock)
        for name, func in _RULE_FUNCS.items():
            registry.register(Rule(
                name=name.value,
                evaluate=func,
                keywords=RULE_KEYWORDS[name],
                reason=RULE_REASONS[name],
            ))
        return registry

    def register(self, rule: Rule) -> None:
        if rule.name in self._rules:
            logger.warning("Replacing registered rule %s", rule.name)
        self._rules[rule.name] = rule

    def get(self, name: RuleName | str) -> Rule | None:
        key = name.value if isinstance(name, RuleName) else name
        return self._rules.get(key)

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        key = name.value if isinstance(name, RuleName) else name
        return key in self._rules

    def now(self) -> datetime:
        return self._clock()

    def evaluate(self, context: RecommendationContext) -> dict[str, float]:
        """Compute every rule's value for *context*, in registration order."""
        now = self._clock()
        values = {rule.name: rule.evaluate(context, now) for rule in self._rules.values()}
        logger.debug("Rule values at %s: %s", now.isoformat(timespec="minutes"), values)
        return values
