"""
Award Evaluator Module.

Checks the rule catalog against a user's stats and existing awards and
persists each newly qualifying rule once.

Duplicate protection has two layers: the earned-id set built here, and the
store's (user_id, rule_id) uniqueness constraint for evaluations racing on the
same user. A ConflictError from the store means the other evaluation won.
"""
import asyncio
from datetime import datetime
from typing import Iterable, Optional

from ..logger import log, Component
from .errors import ConflictError, TransientStoreError
from .rules import RULE_CATALOG
from .storage import AchievementStore
from .types import AchievementRule, AwardedAchievement, UserStats


class AwardEvaluator:
    """Evaluates rules and persists new awards through an AchievementStore."""

    def __init__(
        self,
        store: AchievementStore,
        catalog: tuple[AchievementRule, ...] = RULE_CATALOG,
        timeout: Optional[float] = None
    ):
        self._store = store
        self._catalog = catalog
        self._timeout = timeout

    @property
    def catalog(self) -> tuple[AchievementRule, ...]:
        return self._catalog

    def pending_rules(
        self,
        stats: UserStats,
        existing_awards: Iterable[AwardedAchievement]
    ) -> list[AchievementRule]:
        """Rules whose condition holds and that the user has not earned yet."""
        earned = {a.rule_id for a in existing_awards}
        return [
            rule for rule in self._catalog
            if rule.id not in earned and rule.is_met(stats)
        ]

    async def evaluate_and_award(
        self,
        user_id: str,
        stats: UserStats,
        existing_awards: Iterable[AwardedAchievement],
        now: Optional[datetime] = None
    ) -> list[AwardedAchievement]:
        """
        Award every newly qualifying rule.

        Inserts are independent: a conflict or transient failure on one rule
        skips that rule only. Skipped rules are retried on the next call since
        they are still missing from the user's awards.

        Returns:
            Newly persisted awards, in catalog order
        """
        now = now or datetime.now()
        awarded = []

        for rule in self.pending_rules(stats, existing_awards):
            award = await self._award(user_id, rule, now)
            if award is not None:
                awarded.append(award)

        return awarded

    async def _award(
        self,
        user_id: str,
        rule: AchievementRule,
        now: datetime
    ) -> Optional[AwardedAchievement]:
        """Insert one award. Returns None when the rule was not newly awarded."""
        try:
            award = await asyncio.wait_for(
                self._store.insert_achievement(
                    user_id=user_id,
                    rule_id=rule.id,
                    title=rule.title,
                    description=rule.description,
                    icon=rule.icon,
                    points=rule.points,
                    earned_at=now
                ),
                timeout=self._timeout
            )
        except ConflictError:
            log.debug("Award already present", component=Component.AWARD,
                      user=user_id, rule=rule.id)
            return None
        except asyncio.TimeoutError:
            log.error("Award insert timed out", component=Component.AWARD,
                      user=user_id, rule=rule.id, timeout=self._timeout)
            return None
        except TransientStoreError as e:
            log.error(f"Error awarding achievement: {e}", component=Component.AWARD,
                      user=user_id, rule=rule.id)
            return None

        log.award(f"{rule.icon} Awarded", user=user_id, rule=rule.id, points=rule.points)
        return award
