"""Tests for ActionRecommendationEngine: ranking, context updates, insights."""

from __future__ import annotations

from datetime import datetime

import pytest

from quick_actions.config import EngineSettings
from quick_actions.protocol.catalog_loader import load_default_catalog
from quick_actions.protocol.types import (
    ActionCategory,
    ActionInsights,
    QuickAction,
    RankedAction,
    RecommendationContext,
)
from quick_actions.ranking.engine import ActionRecommendationEngine
from quick_actions.ranking.rules import RuleRegistry


def _clock(hour: int = 10):
    return lambda: datetime(2026, 1, 5, hour, 0)


def _engine(hour: int = 10, **fields) -> ActionRecommendationEngine:
    return ActionRecommendationEngine(
        RecommendationContext(user_id="u1", **fields),
        clock=_clock(hour),
    )


HOTLINE = QuickAction(
    id="call-988",
    label="Call 988",
    icon="emergency",
    category=ActionCategory.CRISIS,
    is_emergency=True,
)

WELLNESS = [
    QuickAction(id="journal", label="Journal", icon="journal", category="wellness"),
    QuickAction(id="gratitude", label="Gratitude", icon="gratitude", category="wellness"),
    QuickAction(id="music", label="Music", icon="music", category="wellness"),
    QuickAction(id="mood", label="Log Mood", icon="mood", category="wellness"),
]


class TestRankingContract:

    def test_empty_catalog(self):
        assert _engine().rank([], 5) == []

    def test_missing_catalog_treated_as_empty(self):
        assert _engine().rank(None, 5) == []

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, limit):
        assert _engine().rank(WELLNESS, limit) == []

    @pytest.mark.parametrize("limit", [1, 3, 5, 10])
    def test_truncation(self, limit):
        catalog = [HOTLINE, *WELLNESS]
        ranked = _engine().rank(catalog, limit)
        assert len(ranked) == min(limit, len(catalog))

    def test_default_limit_is_five(self):
        catalog = load_default_catalog()
        assert len(_engine().rank(catalog)) == 5

    def test_default_limit_from_settings(self, monkeypatch):
        monkeypatch.setenv("QUICK_ACTIONS_DEFAULT_LIMIT", "2")
        engine = ActionRecommendationEngine(
            RecommendationContext(user_id="u1"),
            clock=_clock(),
            settings=EngineSettings(),
        )
        assert len(engine.rank(load_default_catalog())) == 2

    def test_sorted_descending(self):
        ranked = _engine(current_mood="anxious", stress_level=8).rank(load_default_catalog(), 15)
        scores = [r.score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_catalog_order(self):
        catalog = [
            QuickAction(id=f"plain-{i}", label=f"Plain {i}", icon="star") for i in range(6)
        ]
        ranked = _engine().rank(catalog, 6)
        assert [r.id for r in ranked] == [a.id for a in catalog]
        assert {r.score for r in ranked} == {0.5}

    def test_returns_ranked_actions(self):
        ranked = _engine().rank(WELLNESS, 2)
        assert all(isinstance(r, RankedAction) for r in ranked)
        assert all(isinstance(r.reasons, tuple) for r in ranked)

    def test_scores_never_exceed_one(self):
        contexts = [
            {"current_mood": "very_bad", "stress_level": 10, "time_of_day": "night", "sleep_quality": 1},
            {"current_mood": "anxious", "time_of_day": "evening", "weather_condition": "stormy"},
            {"time_of_day": "morning", "recent_activity": ["exercise"], "action_history": ["meditation"] * 8},
        ]
        catalog = load_default_catalog()
        for fields in contexts:
            for hour in (8, 10, 22):
                for ranked in _engine(hour, **fields).rank(catalog, len(catalog)):
                    assert ranked.score <= 1.0

    def test_deterministic(self):
        engine = _engine(current_mood="low", time_of_day="evening", stress_level=7)
        catalog = load_default_catalog()
        first = engine.rank(catalog, 15)
        second = engine.rank(catalog, 15)
        assert first == second


class TestScenarios:

    def test_crisis_context_puts_hotline_first(self):
        ranked = _engine(current_mood="very_bad").rank([*WELLNESS[:2], HOTLINE, *WELLNESS[2:]], 1)
        assert ranked[0].id == "call-988"
        assert ranked[0].score >= 0.9

    def test_morning_routine(self):
        med = QuickAction(id="med", label="Meditate", icon="meditation")
        shop = QuickAction(id="shop", label="Browse shop", icon="browse")
        ranked = _engine(time_of_day="morning").rank([shop, med], 2)
        assert [r.id for r in ranked] == ["med", "shop"]
        assert ranked[0].score > ranked[1].score
        assert "Recommended for morning routine" in ranked[0].reasons
        assert "Start your day mindfully" in ranked[0].reasons

    def test_default_catalog_crisis_actions_lead(self):
        ranked = _engine(current_mood="very_bad").rank(load_default_catalog(), 3)
        assert [r.id for r in ranked] == ["emergency-hotline", "safety-plan", "crisis-text"]
        assert all(r.score == 1.0 for r in ranked)

    def test_frequency_boost_bounded(self):
        action = QuickAction(id="walk", label="Walk", icon="walk")
        ranked = _engine(action_history=["walk"] * 10).rank([action], 1)
        assert ranked[0].score == pytest.approx(0.7)

    def test_to_dict_merges_metadata(self):
        ranked = _engine(time_of_day="evening").rank(WELLNESS, 1)
        data = ranked[0].to_dict()
        assert data["id"] == "journal"
        assert data["category"] == "wellness"
        assert data["score"] == ranked[0].score
        assert data["reasons"] == list(ranked[0].reasons)


class TestContextUpdates:

    def test_update_replaces_snapshot(self):
        engine = _engine(current_mood="good")
        before = engine.context
        after = engine.update_context(current_mood="very_bad")
        assert engine.context is after
        assert before.current_mood == "good"
        assert after.current_mood == "very_bad"
        assert after.user_id == "u1"

    def test_update_changes_ranking(self):
        engine = _engine()
        catalog = [*WELLNESS, HOTLINE]
        engine.update_context(time_of_day="evening")
        assert engine.rank(catalog, 1)[0].id == "journal"
        engine.update_context(current_mood="bad", time_of_day=None)
        top = engine.rank(catalog, 1)[0]
        assert top.id == "call-988"
        assert "Support available" in top.reasons


class TestInsights:

    def test_unknown_action_defaults(self):
        insights = _engine().insights("nonexistent-id")
        assert insights == ActionInsights(
            best_times=["anytime"],
            complementary_actions=[],
            frequency=0,
            effectiveness=0.5,
        )

    def test_insights_follow_history(self):
        engine = _engine(action_history=["meditation", "journal", "meditation"])
        insights = engine.insights("meditation")
        assert insights.frequency == 2
        assert insights.effectiveness == pytest.approx(0.7)
        assert insights.best_times == ["morning", "evening"]
        assert insights.complementary_actions == ["journal", "breathe"]


class TestRegistryInjection:

    def test_custom_registry_used(self):
        registry = RuleRegistry(clock=_clock())
        engine = ActionRecommendationEngine(RecommendationContext(user_id="u1", stress_level=9), registry=registry)
        assert engine.registry is registry
        ranked = engine.rank([QuickAction(id="b", label="Breathe", icon="breathe")], 1)
        # no rules registered, only the stress heuristic fires
        assert ranked[0].reasons == ("Stress relief activity",)

    def test_empty_registry_not_replaced(self):
        registry = RuleRegistry(clock=_clock())
        assert len(registry) == 0
        engine = ActionRecommendationEngine(RecommendationContext(user_id="u1", time_of_day="morning"), registry=registry)
        assert engine.registry is registry
        ranked = engine.rank([QuickAction(id="med", label="Meditate", icon="meditation")], 1)
        assert ranked[0].reasons == ("Recommended for morning routine",)
