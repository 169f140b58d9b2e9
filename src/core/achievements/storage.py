"""
Achievement Storage Module.

Store interfaces used by the engine, plus the SQLite implementation that
backs both of them.
"""
import uuid
from datetime import datetime
from typing import Optional, Protocol

import aiosqlite

from ..logger import log, Component
from .errors import ConflictError, TransientStoreError
from .types import AwardedAchievement, MoodEvent, StressLevel


class MoodEventStore(Protocol):
    """Source of a user's mood history. Ordering is not guaranteed."""

    async def fetch_mood_events(self, user_id: str) -> list[MoodEvent]: ...

    async def insert_mood_event(
        self,
        user_id: str,
        mood: int,
        stress_level: StressLevel,
        journal_text: Optional[str] = None,
        ai_response_text: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> MoodEvent: ...


class AchievementStore(Protocol):
    """Persisted awards. insert_achievement raises ConflictError on duplicates."""

    async def fetch_awarded_achievements(self, user_id: str) -> list[AwardedAchievement]: ...

    async def insert_achievement(
        self,
        user_id: str,
        rule_id: str,
        title: str,
        description: str,
        icon: str,
        points: int,
        earned_at: Optional[datetime] = None
    ) -> AwardedAchievement: ...


class WellnessStorage:
    """SQLite-backed MoodEventStore and AchievementStore."""

    def __init__(self, db: Optional[aiosqlite.Connection] = None):
        self._db = db

    async def initialize(self, db: aiosqlite.Connection):
        """Initialize with database connection."""
        self._db = db
        await self._ensure_tables()

    async def _ensure_tables(self):
        """Create tables if they don't exist."""
        await self._db.executescript("""
            CREATE TABLE IF NOT EXISTS mood_logs (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                mood INTEGER NOT NULL,
                stress_level TEXT NOT NULL,
                journal_entry TEXT,
                ai_response TEXT,
                created_at TIMESTAMP NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_mood_logs_user
                ON mood_logs (user_id, created_at);

            CREATE TABLE IF NOT EXISTS achievements (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                rule_id TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT,
                icon TEXT,
                points INTEGER NOT NULL,
                earned_at TIMESTAMP NOT NULL,
                UNIQUE (user_id, rule_id)
            );
        """)
        await self._db.commit()

    # === Mood events ===

    async def insert_mood_event(
        self,
        user_id: str,
        mood: int,
        stress_level: StressLevel,
        journal_text: Optional[str] = None,
        ai_response_text: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> MoodEvent:
        """Insert a mood entry and return it."""
        event = MoodEvent(
            id=str(uuid.uuid4()),
            user_id=user_id,
            mood=mood,
            stress_level=stress_level,
            journal_text=journal_text,
            ai_response_text=ai_response_text,
            created_at=created_at or datetime.now()
        )

        try:
            await self._db.execute("""
                INSERT INTO mood_logs
                (id, user_id, mood, stress_level, journal_entry, ai_response, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                event.id, user_id, mood, stress_level.value,
                journal_text, ai_response_text, event.created_at.isoformat()
            ))
            await self._db.commit()
        except aiosqlite.OperationalError as e:
            raise TransientStoreError(f"Could not insert mood entry: {e}") from e

        log.store("Mood entry saved", user=user_id, mood=mood)
        return event

    async def fetch_mood_events(self, user_id: str) -> list[MoodEvent]:
        """Get all mood entries for a user, newest first."""
        try:
            async with self._db.execute("""
                SELECT id, user_id, mood, stress_level, journal_entry, ai_response, created_at
                FROM mood_logs
                WHERE user_id = ?
                ORDER BY created_at DESC
            """, (user_id,)) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.OperationalError as e:
            raise TransientStoreError(f"Could not fetch mood entries: {e}") from e

        events = []
        for row in rows:
            try:
                events.append(MoodEvent(
                    id=row[0],
                    user_id=row[1],
                    mood=int(row[2]),
                    stress_level=StressLevel(row[3]),
                    journal_text=row[4],
                    ai_response_text=row[5],
                    created_at=datetime.fromisoformat(row[6])
                ))
            except (TypeError, ValueError) as e:
                # One corrupt row must not hide the rest of the history
                log.warn(f"Skipping unreadable mood entry: {e}", component=Component.STORE,
                         entry=row[0], user=user_id)
        return events

    # === Achievements ===

    async def insert_achievement(
        self,
        user_id: str,
        rule_id: str,
        title: str,
        description: str,
        icon: str,
        points: int,
        earned_at: Optional[datetime] = None
    ) -> AwardedAchievement:
        """
        Persist an award.

        Raises:
            ConflictError: The user already holds this rule's award
            TransientStoreError: The database is locked or unavailable
        """
        award = AwardedAchievement(
            id=str(uuid.uuid4()),
            user_id=user_id,
            rule_id=rule_id,
            title=title,
            description=description,
            icon=icon,
            points=points,
            earned_at=earned_at or datetime.now()
        )

        try:
            await self._db.execute("""
                INSERT INTO achievements
                (id, user_id, rule_id, title, description, icon, points, earned_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                award.id, user_id, rule_id, title, description, icon,
                points, award.earned_at.isoformat()
            ))
            await self._db.commit()
        except aiosqlite.IntegrityError as e:
            # Only the failed statement is aborted; other pending inserts on
            # this connection stay intact.
            raise ConflictError(user_id, rule_id) from e
        except aiosqlite.OperationalError as e:
            raise TransientStoreError(f"Could not insert achievement {rule_id}: {e}") from e

        return award

    async def fetch_awarded_achievements(self, user_id: str) -> list[AwardedAchievement]:
        """Get all awards for a user in the order they were earned."""
        try:
            async with self._db.execute("""
                SELECT id, user_id, rule_id, title, description, icon, points, earned_at
                FROM achievements
                WHERE user_id = ?
                ORDER BY earned_at ASC
            """, (user_id,)) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.OperationalError as e:
            raise TransientStoreError(f"Could not fetch achievements: {e}") from e

        return [
            AwardedAchievement(
                id=row[0],
                user_id=row[1],
                rule_id=row[2],
                title=row[3],
                description=row[4] or "",
                icon=row[5] or "",
                points=row[6],
                earned_at=datetime.fromisoformat(row[7])
            )
            for row in rows
        ]
