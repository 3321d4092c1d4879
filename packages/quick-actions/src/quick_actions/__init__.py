"""Quick Actions: contextual ranking of quick actions for the wellness dashboard."""

from quick_actions.catalog import filter_actions, find_by_shortcut, find_by_voice_command, search_actions
from quick_actions.config import EngineSettings, configure_logging
from quick_actions.history import ActionHistory
from quick_actions.protocol.catalog_loader import (
    CatalogValidationError,
    load_catalog,
    load_configured_catalog,
    load_default_catalog,
)
from quick_actions.protocol.context import context_for_now, mood_score, update_context
from quick_actions.protocol.types import (
    ActionCategory,
    ActionInsights,
    Location,
    QuickAction,
    RankedAction,
    RecommendationContext,
    TimeOfDay,
)
from quick_actions.ranking.engine import ActionRecommendationEngine

__all__ = [
    "ActionCategory",
    "ActionHistory",
    "ActionInsights",
    "ActionRecommendationEngine",
    "CatalogValidationError",
    "EngineSettings",
    "Location",
    "QuickAction",
    "RankedAction",
    "RecommendationContext",
    "TimeOfDay",
    "configure_logging",
    "context_for_now",
    "filter_actions",
    "find_by_shortcut",
    "find_by_voice_command",
    "load_catalog",
    "load_configured_catalog",
    "load_default_catalog",
    "mood_score",
    "search_actions",
    "update_context",
]
