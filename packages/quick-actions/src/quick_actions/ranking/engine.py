"""Action recommendation engine: scores, ranks and explains quick actions.

Pipeline per ``rank`` call:

1. Evaluate every registry rule once against the held context snapshot
2. Base prior per action (static attributes + history familiarity)
3. Context boosts and rule boosts, clamped to 1.0
4. Stable sort by score descending, truncate to ``limit``

The engine holds exactly one context snapshot and never mutates it.  It does
no locking; give each session its own engine instance.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from quick_actions.config import EngineSettings
from quick_actions.protocol.context import update_context
from quick_actions.protocol.types import (
    ActionInsights,
    ActionScore,
    Clock,
    QuickAction,
    RankedAction,
    RecommendationContext,
)
from quick_actions.ranking.base_scorer import base_score
from quick_actions.ranking.booster import ContextBooster
from quick_actions.ranking.insights import get_action_insights
from quick_actions.ranking.rules import RuleRegistry

logger = logging.getLogger(__name__)


class ActionRecommendationEngine:
    """Rank catalog actions for one user's current context.

    Parameters
    ----------
    context:
        Initial context snapshot.
    registry:
        Rule registry to apply.  Defaults to the built-in rule set bound to
        *clock*.
    clock:
        Wall-clock provider for time-dependent rules.  Ignored when a
        *registry* is supplied, since the registry owns its clock.
    settings:
        Engine settings; only ``default_limit`` is used here.
    """

    def __init__(
        self,
        context: RecommendationContext,
        *,
        registry: RuleRegistry | None = None,
        clock: Clock | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self._context = context
        self._registry = registry if registry is not None else RuleRegistry.default(clock=clock)
        self._booster = ContextBooster(self._registry)
        self._default_limit = settings.default_limit if settings else EngineSettings().default_limit

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    @property
    def context(self) -> RecommendationContext:
        return self._context

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def update_context(self, **patch: Any) -> RecommendationContext:
        """Swap in a new snapshot built from the current one plus *patch*."""
        self._context = update_context(self._context, **patch)
        return self._context

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_actions(self, actions: Iterable[QuickAction] | None) -> list[ActionScore]:
        """Score every action in catalog order, without sorting."""
        if not actions:
            return []
        context = self._context
        rule_values = self._registry.evaluate(context)
        scored: list[ActionScore] = []
        for action in actions:
            prior = base_score(action, context)
            result = self._booster.boost(action, prior, context, rule_values)
            logger.debug(
                "Scored %s: prior=%.3f final=%.3f reasons=%s",
                action.id, prior, result.score, result.reasons,
            )
            scored.append(result)
        return scored

    def rank(
        self,
        actions: Iterable[QuickAction] | None,
        limit: int | None = None,
    ) -> list[RankedAction]:
        """Return the top *limit* actions, best first, with scores and reasons.

        A missing or empty catalog, or ``limit <= 0``, yields an empty list.
        Ties keep catalog order.
        """
        if limit is None:
            limit = self._default_limit
        if limit <= 0:
            return []

        scored = self.score_actions(actions)
        # sorted() is stable, reverse=True included
        scored = sorted(scored, key=lambda s: s.score, reverse=True)[:limit]

        ranked = [
            RankedAction(action=s.action, score=s.score, reasons=tuple(s.reasons))
            for s in scored
        ]
        if ranked:
            summary = ", ".join(f"{r.id} ({r.score:.3f})" for r in ranked)
            logger.info("Ranked actions for user %s: %s", self._context.user_id, summary)
        return ranked

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    def insights(self, action_id: str) -> ActionInsights:
        return get_action_insights(action_id, self._context)
