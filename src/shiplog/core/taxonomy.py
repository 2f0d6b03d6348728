"""The fixed vocabulary of change categories.

Every change entry is tagged with exactly one of six categories. The
order of ``ChangeCategory`` members is the order renderers present
categories in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ChangeCategory(StrEnum):
    """Category of a single change entry."""

    ADDED = "added"
    CHANGED = "changed"
    FIXED = "fixed"
    REMOVED = "removed"
    SECURITY = "security"
    DEPRECATED = "deprecated"


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """Presentation metadata for a category."""

    label: str
    emoji: str
    color: str


CATEGORY_ORDER: tuple[ChangeCategory, ...] = tuple(ChangeCategory)

CATEGORY_INFO: dict[ChangeCategory, CategoryInfo] = {
    ChangeCategory.ADDED: CategoryInfo("Added", "✨", "#22c55e"),
    ChangeCategory.CHANGED: CategoryInfo("Changed", "🔄", "#3b82f6"),
    ChangeCategory.FIXED: CategoryInfo("Fixed", "🐛", "#eab308"),
    ChangeCategory.REMOVED: CategoryInfo("Removed", "🗑️", "#ef4444"),
    ChangeCategory.SECURITY: CategoryInfo("Security", "🔒", "#a855f7"),
    ChangeCategory.DEPRECATED: CategoryInfo("Deprecated", "⚠️", "#f97316"),
}


def category_info(category: ChangeCategory) -> CategoryInfo:
    """Get presentation metadata for a category."""
    return CATEGORY_INFO[category]
