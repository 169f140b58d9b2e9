"""
Pytest configuration and fixtures for Wellspring tests.
"""
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import aiosqlite
import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.achievements import (
    AchievementService,
    AwardedAchievement,
    MoodEvent,
    StressLevel,
    WellnessStorage,
)
from src.core.config import AchievementConfig


# ============= Time =============

NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def now():
    """Fixed evaluation time: 2024-06-15 12:00."""
    return NOW


# ============= Sample Data =============

@pytest.fixture
def make_event():
    """Factory for mood events."""
    counter = {"n": 0}

    def _make(
        created_at: datetime,
        mood: int = 7,
        stress_level: StressLevel = StressLevel.MEDIUM,
        journal_text: Optional[str] = None,
        ai_response_text: Optional[str] = None,
        user_id: str = "user-1"
    ) -> MoodEvent:
        counter["n"] += 1
        return MoodEvent(
            id=f"evt-{counter['n']}",
            user_id=user_id,
            mood=mood,
            stress_level=stress_level,
            created_at=created_at,
            journal_text=journal_text,
            ai_response_text=ai_response_text
        )

    return _make


@pytest.fixture
def daily_events(make_event, now):
    """Factory: one event per day for `days` consecutive days ending today."""
    def _make(days: int, mood: int = 7, **kwargs) -> list[MoodEvent]:
        return [
            make_event(now - timedelta(days=offset, hours=1), mood=mood, **kwargs)
            for offset in range(days)
        ]
    return _make


@pytest.fixture
def make_award(now):
    """Factory for already-earned awards."""
    def _make(rule_id: str, points: int = 10, user_id: str = "user-1") -> AwardedAchievement:
        return AwardedAchievement(
            id=f"award-{rule_id}",
            user_id=user_id,
            rule_id=rule_id,
            title=rule_id.replace("_", " ").title(),
            description="",
            icon="🏆",
            points=points,
            earned_at=now
        )
    return _make


# ============= Database =============

@pytest_asyncio.fixture
async def storage():
    """WellnessStorage on an in-memory SQLite database."""
    db = await aiosqlite.connect(":memory:")
    store = WellnessStorage()
    await store.initialize(db)
    yield store
    await db.close()


@pytest_asyncio.fixture
async def service(storage, now):
    """AchievementService over in-memory storage with a fixed clock."""
    return AchievementService(
        mood_store=storage,
        achievement_store=storage,
        settings=AchievementConfig(store_timeout=5.0),
        clock=lambda: now
    )


# ============= Test Client for FastAPI =============

@pytest.fixture
def test_client(tmp_path):
    """TestClient over an app backed by a temporary database."""
    from fastapi.testclient import TestClient
    from src.api.app import create_app

    app = create_app(db_path=tmp_path / "test.db")
    with TestClient(app) as client:
        yield client
