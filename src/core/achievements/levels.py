"""
Level Calculator Module.

Level is always recomputed from the full award set and never stored.
"""
from typing import Iterable

from .types import AwardedAchievement, UserLevel

POINTS_PER_LEVEL = 100


def compute_level(
    awards: Iterable[AwardedAchievement],
    points_per_level: int = POINTS_PER_LEVEL
) -> UserLevel:
    """
    Map accumulated award points to a level.

    0-99 points is level 1, 100-199 is level 2, and so on.
    `next_level_points` is the total at which the next level starts.
    """
    points = sum(a.points for a in awards)
    level = points // points_per_level + 1

    return UserLevel(
        level=level,
        points=points,
        next_level_points=level * points_per_level,
        points_per_level=points_per_level
    )
