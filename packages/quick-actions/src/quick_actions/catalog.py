"""Catalog queries used by the quick-action surfaces: search, filters, lookups."""

from __future__ import annotations

from typing import Iterable

from quick_actions.protocol.types import ActionCategory, QuickAction

ALL_CATEGORIES = "all"


def _text_matches(action: QuickAction, query: str) -> bool:
    return (
        query in action.label.lower()
        or query in action.description.lower()
        or any(query in tag.lower() for tag in action.tags)
    )


def search_actions(actions: Iterable[QuickAction], query: str) -> list[QuickAction]:
    """Case-insensitive substring search over label, description, tags and category."""
    q = query.lower()
    return [a for a in actions if _text_matches(a, q) or q in a.category.value]


def filter_actions(
    actions: Iterable[QuickAction],
    category: ActionCategory | str = ALL_CATEGORIES,
    query: str = "",
    crisis_mode: bool = False,
) -> list[QuickAction]:
    """Narrow a catalog for display.

    Crisis mode keeps only crisis or emergency actions; the category filter
    and text query are applied on top.
    """
    filtered = list(actions)
    if crisis_mode:
        filtered = [a for a in filtered if a.category == ActionCategory.CRISIS or a.is_emergency]

    if category != ALL_CATEGORIES:
        filtered = [a for a in filtered if a.category == category]

    if query:
        q = query.lower()
        filtered = [a for a in filtered if _text_matches(a, q)]

    return filtered


def find_by_shortcut(actions: Iterable[QuickAction], key: str) -> QuickAction | None:
    return next((a for a in actions if a.keyboard == key), None)


def find_by_voice_command(actions: Iterable[QuickAction], command: str) -> QuickAction | None:
    """First action whose label contains *command* or has it as an alias."""
    cmd = command.lower()
    for action in actions:
        if cmd in action.label.lower():
            return action
        if any(alias.lower() == cmd for alias in action.voice_aliases):
            return action
    return None
