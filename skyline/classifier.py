"""
Height Classifier - Maps a day's contribution count to a building level and stack role

Counts are normalized against the busiest day of the grid and split into
tertiles. Within a week, contributing days are stacked bottom-to-top; the
first one is the foundation, the last one is the top (spire), the rest are
middle floors.
"""
from dataclasses import dataclass
from typing import Optional

from .models import ContributionGrid, HeightLevel, StackRole

LOW_THRESHOLD = 1.0 / 3.0
MEDIUM_THRESHOLD = 2.0 / 3.0


@dataclass(frozen=True)
class Classification:
    level: HeightLevel
    role: Optional[StackRole]  # None for sky


def normalize(count: int, max_count: int) -> float:
    """Scale a count into [0, 1]. A max of 0 is treated as 1."""
    return count / max(max_count, 1)


def level_for(normalized: float) -> HeightLevel:
    if normalized <= 0:
        return HeightLevel.SKY
    if normalized <= LOW_THRESHOLD:
        return HeightLevel.LOW
    if normalized <= MEDIUM_THRESHOLD:
        return HeightLevel.MEDIUM
    return HeightLevel.HIGH


def classify_level(count: int, max_count: int) -> HeightLevel:
    return level_for(normalize(count, max_count))


def role_for(normalized: float, day_index: int, non_zero_count: int) -> Optional[StackRole]:
    """
    Stack role of a contributing day.

    Args:
        normalized: Normalized count of the day
        day_index: 0-based index among the week's non-zero days (bottom to top)
        non_zero_count: Number of non-zero days in the week

    Returns:
        None for an empty day, otherwise the day's StackRole
    """
    if normalized <= 0:
        return None
    # A lone contributing day is the foundation, never the top
    if day_index == 0:
        return StackRole.FOUNDATION
    if day_index == non_zero_count - 1:
        return StackRole.TOP
    return StackRole.MIDDLE


def classify_role(count: int, max_count: int, day_index: int, non_zero_count: int) -> Optional[StackRole]:
    return role_for(normalize(count, max_count), day_index, non_zero_count)


def classify(count: int, max_count: int, day_index: int, non_zero_count: int) -> Classification:
    normalized = normalize(count, max_count)
    return Classification(
        level=level_for(normalized),
        role=role_for(normalized, day_index, non_zero_count),
    )


def max_contributions(grid: ContributionGrid) -> int:
    """Highest single-day count in the grid (0 for an all-empty grid)"""
    return max((day.count for week in grid for day in week), default=0)
