"""
Achievement Notifier Module.

Delivery of "achievement unlocked" notices is owned by the surrounding
application; the engine only hands over newly earned awards.
"""
from typing import Protocol

from ..logger import log
from .types import AwardedAchievement


class AchievementNotifier(Protocol):
    async def notify(self, user_id: str, achievement: AwardedAchievement) -> None: ...


class LogNotifier:
    """Writes unlocked achievements to the terminal log."""

    async def notify(self, user_id: str, achievement: AwardedAchievement) -> None:
        log.notify(
            f"🎉 Achievement Unlocked! {achievement.icon} {achievement.title}: {achievement.description}",
            user=user_id,
            points=achievement.points
        )
