"""In-memory record of executed quick actions.

Feeds ``action_history`` and ``recent_activity`` into context snapshots and
answers the "frequent" and "recent" rows of the quick-action widget.  Storage
across sessions is the caller's concern.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Iterable

from quick_actions.config import EngineSettings
from quick_actions.protocol.types import QuickAction

logger = logging.getLogger(__name__)


class ActionHistory:
    """Bounded, ordered log of executed action ids (oldest first).

    Parameters
    ----------
    max_length:
        Entries kept; the oldest are dropped once the log is full.
    initial:
        Previously stored ids to seed the log with, oldest first.
    recent_limit:
        Default window for ``recent_actions``.
    """

    def __init__(
        self,
        max_length: int = 100,
        initial: Iterable[str] = (),
        recent_limit: int = 10,
    ) -> None:
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self._entries: deque[str] = deque(initial, maxlen=max_length)
        self._recent_limit = recent_limit

    @classmethod
    def from_settings(cls, settings: EngineSettings, initial: Iterable[str] = ()) -> ActionHistory:
        return cls(
            max_length=settings.history_max,
            initial=initial,
            recent_limit=settings.recent_limit,
        )

    def record(self, action_id: str) -> None:
        self._entries.append(action_id)
        logger.debug("Recorded action %s (%d entries)", action_id, len(self._entries))

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def count(self, action_id: str) -> int:
        return self._entries.count(action_id)

    def __len__(self) -> int:
        return len(self._entries)

    def frequent_actions(self, catalog: Iterable[QuickAction]) -> list[QuickAction]:
        """Catalog actions present in the log, most used first.

        Equal counts keep the order in which ids first appear in the log.
        Ids with no catalog entry are skipped.
        """
        by_id = {a.id: a for a in catalog}
        counts = Counter(self._entries)
        ordered = sorted(counts, key=lambda aid: counts[aid], reverse=True)
        return [by_id[aid] for aid in ordered if aid in by_id]

    def recent_actions(
        self,
        catalog: Iterable[QuickAction],
        limit: int | None = None,
    ) -> list[QuickAction]:
        """Distinct actions from the last *limit* entries, most recent first."""
        if limit is None:
            limit = self._recent_limit
        if limit <= 0:
            return []
        by_id = {a.id: a for a in catalog}
        window = list(self._entries)[-limit:]
        seen: list[str] = []
        for aid in reversed(window):
            if aid not in seen:
                seen.append(aid)
        return [by_id[aid] for aid in seen if aid in by_id]
