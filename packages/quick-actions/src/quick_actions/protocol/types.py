"""Enums and typed contracts for the quick-action ranking engine."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable

# Wall-clock provider; injected so the medication rule can be pinned in tests.
Clock = Callable[[], datetime]


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class ActionCategory(str, Enum):
    CRISIS = "crisis"
    WELLNESS = "wellness"
    TRACKING = "tracking"
    THERAPY = "therapy"
    SOCIAL = "social"
    PROFESSIONAL = "professional"
    OTHER = "other"


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float


@dataclass(frozen=True)
class RecommendationContext:
    """Snapshot of the "why now" signals for one user.

    Snapshots are never mutated; use ``update_context`` to derive a new one.
    Sequences are stored as tuples so a snapshot can be shared safely.
    """

    user_id: str
    current_mood: str | None = None
    time_of_day: TimeOfDay | None = None
    location: Location | None = None
    recent_activity: tuple[str, ...] = ()
    action_history: tuple[str, ...] = ()
    weather_condition: str | None = None
    day_of_week: int | None = None
    stress_level: float | None = None
    sleep_quality: float | None = None
    social_interaction: float | None = None
    version: int = 0

    def __post_init__(self) -> None:
        if self.time_of_day is not None and not isinstance(self.time_of_day, TimeOfDay):
            object.__setattr__(self, "time_of_day", TimeOfDay(self.time_of_day))
        object.__setattr__(self, "recent_activity", tuple(self.recent_activity or ()))
        object.__setattr__(self, "action_history", tuple(self.action_history or ()))

    @property
    def last_activity(self) -> str | None:
        return self.recent_activity[-1] if self.recent_activity else None


@dataclass(frozen=True)
class QuickAction:
    """A catalog entry the engine can recommend.

    ``icon`` is the primary matching key for rules and boosts; ``label`` is
    only consulted for keyword substring matches.
    """

    id: str
    label: str
    icon: str
    category: ActionCategory = ActionCategory.OTHER
    is_emergency: bool = False
    description: str = ""
    action: str = ""
    color: str | None = None
    keyboard: str | None = None
    tags: tuple[str, ...] = ()
    voice_aliases: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.category, ActionCategory):
            object.__setattr__(self, "category", ActionCategory(self.category))
        object.__setattr__(self, "tags", tuple(self.tags or ()))
        object.__setattr__(self, "voice_aliases", tuple(self.voice_aliases or ()))


@dataclass
class ActionScore:
    action: QuickAction
    score: float
    reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RankedAction:
    """A catalog action annotated with its final score and reasons."""

    action: QuickAction
    score: float
    reasons: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.action.id

    @property
    def label(self) -> str:
        return self.action.label

    @property
    def icon(self) -> str:
        return self.action.icon

    @property
    def category(self) -> ActionCategory:
        return self.action.category

    @property
    def is_emergency(self) -> bool:
        return self.action.is_emergency

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the action's fields plus ``score`` and ``reasons``."""
        data = asdict(self.action)
        data["category"] = self.action.category.value
        data["tags"] = list(self.action.tags)
        data["voice_aliases"] = list(self.action.voice_aliases)
        data["score"] = self.score
        data["reasons"] = list(self.reasons)
        return data


@dataclass
class ActionInsights:
    best_times: list[str]
    complementary_actions: list[str]
    frequency: int
    effectiveness: float
