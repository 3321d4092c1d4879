"""Ranking: rule registry, scoring stages and the recommendation engine."""

from quick_actions.ranking.base_scorer import CATEGORY_WEIGHTS, base_score, history_boost
from quick_actions.ranking.booster import ContextBooster
from quick_actions.ranking.engine import ActionRecommendationEngine
from quick_actions.ranking.insights import get_action_insights
from quick_actions.ranking.rules import Rule, RuleName, RuleRegistry

__all__ = [
    "ActionRecommendationEngine",
    "CATEGORY_WEIGHTS",
    "ContextBooster",
    "Rule",
    "RuleName",
    "RuleRegistry",
    "base_score",
    "get_action_insights",
    "history_boost",
]
