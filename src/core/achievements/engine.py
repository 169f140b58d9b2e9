"""
Achievement Engine Module.

Caller-facing service: fetch history, derive stats, evaluate rules,
persist awards and recompute the level.
"""
import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional, TypeVar

from ..config import AchievementConfig
from ..logger import log, Component
from .errors import TransientStoreError, ValidationError
from .evaluator import AwardEvaluator
from .levels import compute_level
from .notifier import AchievementNotifier
from .responder import ResponseGenerator
from .rules import RULE_CATALOG
from .stats import MOOD_MAX, MOOD_MIN, derive_stats, event_sort_key
from .storage import AchievementStore, MoodEventStore
from .types import (
    AchievementProgress, AchievementRule, AwardedAchievement,
    MoodEvent, MoodLogResult, StressLevel, UserLevel, UserStats
)

T = TypeVar("T")


def validate_mood(mood: int, stress_level) -> StressLevel:
    """
    Check a new mood entry before it is stored.

    Returns:
        The stress level as a StressLevel member

    Raises:
        ValidationError: mood outside 1-10 or unknown stress level
    """
    if isinstance(mood, bool) or not isinstance(mood, int) or not MOOD_MIN <= mood <= MOOD_MAX:
        raise ValidationError(f"Mood must be an integer between {MOOD_MIN} and {MOOD_MAX}, got {mood!r}")
    try:
        return StressLevel(stress_level)
    except ValueError as e:
        raise ValidationError(f"Unknown stress level: {stress_level!r}") from e


class AchievementService:
    """
    Stateless achievement service built from injected collaborators.

    Provides:
    - check_and_award_achievements() -> newly earned awards
    - get_user_level() -> level from all awards
    - get_user_stats() -> derived stats
    - get_achievements() -> full catalog with per-user progress
    - log_mood() -> store an entry, then evaluate as a best-effort side step
    """

    def __init__(
        self,
        mood_store: MoodEventStore,
        achievement_store: AchievementStore,
        notifier: Optional[AchievementNotifier] = None,
        responder: Optional[ResponseGenerator] = None,
        settings: Optional[AchievementConfig] = None,
        catalog: tuple[AchievementRule, ...] = RULE_CATALOG,
        clock: Callable[[], datetime] = datetime.now
    ):
        self._moods = mood_store
        self._awards = achievement_store
        self._notifier = notifier
        self._responder = responder
        self._settings = settings or AchievementConfig()
        self._clock = clock
        self._evaluator = AwardEvaluator(
            achievement_store,
            catalog=catalog,
            timeout=self._settings.store_timeout
        )

    async def _call_store(self, call: Awaitable[T], what: str) -> T:
        """Await a store read; a timeout becomes TransientStoreError."""
        try:
            return await asyncio.wait_for(call, timeout=self._settings.store_timeout)
        except asyncio.TimeoutError as e:
            log.error(f"Store call timed out: {what}", component=Component.STORE,
                      timeout=self._settings.store_timeout)
            raise TransientStoreError(f"Timed out while trying to {what}") from e

    def _derive(self, events, now: datetime) -> UserStats:
        return derive_stats(
            events,
            now=now,
            mood_policy=self._settings.mood_policy,
            improvement_window=self._settings.improvement_window,
            consistency_window_days=self._settings.consistency_window_days
        )

    async def get_user_stats(self, user_id: str) -> UserStats:
        """Derive stats from the user's full mood history."""
        events = await self._call_store(self._moods.fetch_mood_events(user_id), "fetch mood events")
        return self._derive(events, self._clock())

    async def list_mood_events(self, user_id: str) -> list[MoodEvent]:
        """The user's mood entries, newest first."""
        events = await self._call_store(self._moods.fetch_mood_events(user_id), "fetch mood events")
        return sorted(events, key=lambda e: event_sort_key(e.created_at), reverse=True)

    async def list_awards(self, user_id: str) -> list[AwardedAchievement]:
        """All awards the user holds."""
        return await self._call_store(
            self._awards.fetch_awarded_achievements(user_id), "fetch achievements"
        )

    async def _evaluate(self, user_id: str) -> tuple[list[AwardedAchievement], list[AwardedAchievement]]:
        """Run one evaluation. Returns (new awards, all awards after the run)."""
        log.evaluation_start(user_id)
        now = self._clock()

        try:
            stats = await self.get_user_stats(user_id)
            existing = await self.list_awards(user_id)
            new = await self._evaluator.evaluate_and_award(user_id, stats, existing, now=now)
        except BaseException:
            log.evaluation_abort(user_id)
            raise

        all_awards = existing + new
        log.evaluation_end(user_id, awarded=len(new), points=sum(a.points for a in all_awards))
        return new, all_awards

    async def check_and_award_achievements(self, user_id: str) -> list[AwardedAchievement]:
        """
        Evaluate all rules for a user and persist new awards.

        Raises:
            TransientStoreError: History or awards could not be fetched
        """
        new, _ = await self._evaluate(user_id)
        return new

    async def get_user_level(self, user_id: str) -> UserLevel:
        """Level from every award the user holds."""
        awards = await self.list_awards(user_id)
        return compute_level(awards, self._settings.points_per_level)

    async def get_achievements(self, user_id: str) -> list[AchievementProgress]:
        """Every catalog rule with earned state and progress, in catalog order."""
        stats = await self.get_user_stats(user_id)
        earned = {a.rule_id: a for a in await self.list_awards(user_id)}

        progress = []
        for rule in self._evaluator.catalog:
            award = earned.get(rule.id)
            current = getattr(stats, rule.metric, 0) if rule.metric else 0
            progress.append(AchievementProgress(
                rule=rule,
                earned=award is not None,
                current_value=current,
                earned_at=award.earned_at if award else None,
                met=rule.is_met(stats)
            ))
        return progress

    async def log_mood(
        self,
        user_id: str,
        mood: int,
        stress_level,
        journal_text: Optional[str] = None
    ) -> MoodLogResult:
        """
        Store a mood entry and check for new achievements.

        Storing the entry is the primary action and its errors propagate.
        Achievement evaluation is best effort: any failure there is logged and
        leaves `new_achievements` empty.

        Raises:
            ValidationError: mood or stress level out of range
            StoreError: the entry itself could not be stored
        """
        level_enum = validate_mood(mood, stress_level)
        ai_response = await self._respond(mood, level_enum, journal_text)

        event = await self._moods.insert_mood_event(
            user_id=user_id,
            mood=mood,
            stress_level=level_enum,
            journal_text=journal_text,
            ai_response_text=ai_response,
            created_at=self._clock()
        )

        result = MoodLogResult(event=event)
        try:
            new, all_awards = await self._evaluate(user_id)
        except Exception as e:
            log.error(f"Error checking achievements: {e}", component=Component.AWARD,
                      user=user_id, error=type(e).__name__)
            return result

        result.new_achievements = new
        result.level = compute_level(all_awards, self._settings.points_per_level)
        await self._notify(user_id, new)
        return result

    async def _respond(self, mood: int, stress_level: StressLevel, journal_text: Optional[str]) -> Optional[str]:
        if self._responder is None:
            return None
        try:
            return await self._responder.generate(mood, stress_level, journal_text)
        except Exception as e:
            log.error(f"Response generator failed: {e}")
            return None

    async def _notify(self, user_id: str, awards: list[AwardedAchievement]):
        if not self._settings.achievement_alerts or self._notifier is None:
            return
        for award in awards:
            try:
                await self._notifier.notify(user_id, award)
            except Exception as e:
                log.error(f"Error sending achievement notification: {e}",
                          component=Component.NOTIFY, rule=award.rule_id)
