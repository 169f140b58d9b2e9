"""
Tests for AwardEvaluator.
"""
import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.achievements import (
    AwardEvaluator,
    AwardedAchievement,
    ConflictError,
    TransientStoreError,
    UserStats,
)


def _echo_insert():
    """AsyncMock insert_achievement that returns the award it was asked to store."""
    async def insert(user_id, rule_id, title, description, icon, points, earned_at=None):
        return AwardedAchievement(
            id=f"id-{rule_id}", user_id=user_id, rule_id=rule_id, title=title,
            description=description, icon=icon, points=points,
            earned_at=earned_at or datetime.now()
        )
    return AsyncMock(side_effect=insert)


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.insert_achievement = _echo_insert()
    return store


class TestEvaluateAndAward:

    @pytest.mark.asyncio
    async def test_first_entry_only(self, mock_store, now):
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=1, current_streak=1, longest_streak=1,
                          average_mood=7, days_active=1, weekly_consistency=1 / 28)

        awarded = await evaluator.evaluate_and_award("user-1", stats, [], now=now)

        assert [a.rule_id for a in awarded] == ["first_entry"]
        assert awarded[0].points == 10
        assert awarded[0].title == "First Step"
        assert awarded[0].earned_at == now
        mock_store.insert_achievement.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_week_streak_with_milestones(self, mock_store, now):
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=7, current_streak=7, longest_streak=7,
                          average_mood=7, days_active=7, weekly_consistency=0.25)

        awarded = await evaluator.evaluate_and_award("user-1", stats, [], now=now)

        assert [a.rule_id for a in awarded] == ["first_entry", "week_streak"]

    @pytest.mark.asyncio
    async def test_existing_award_skipped(self, mock_store, make_award, now):
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=1, current_streak=1, longest_streak=1)

        awarded = await evaluator.evaluate_and_award(
            "user-1", stats, [make_award("first_entry")], now=now
        )

        assert awarded == []
        mock_store.insert_achievement.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returned_in_catalog_order(self, mock_store, now):
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=100, journal_entries=25, ai_interactions=10,
                          current_streak=30, longest_streak=30, average_mood=9,
                          mood_improvement=2, days_active=30, weekly_consistency=1.0)

        awarded = await evaluator.evaluate_and_award("user-1", stats, [], now=now)

        assert [a.rule_id for a in awarded] == [r.id for r in evaluator.catalog]

    @pytest.mark.asyncio
    async def test_conflict_is_not_newly_awarded(self, mock_store, now):
        async def insert(user_id, rule_id, **kwargs):
            if rule_id == "first_entry":
                raise ConflictError(user_id, rule_id)
            return AwardedAchievement(id="x", user_id=user_id, rule_id=rule_id,
                                      title=kwargs["title"], description="", icon="",
                                      points=kwargs["points"], earned_at=now)
        mock_store.insert_achievement = AsyncMock(side_effect=insert)
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=1, journal_entries=1)

        awarded = await evaluator.evaluate_and_award("user-1", stats, [], now=now)

        assert [a.rule_id for a in awarded] == ["first_journal"]

    @pytest.mark.asyncio
    async def test_transient_failure_skips_only_that_rule(self, mock_store, now):
        async def insert(user_id, rule_id, **kwargs):
            if rule_id == "first_journal":
                raise TransientStoreError("connection reset")
            return AwardedAchievement(id="x", user_id=user_id, rule_id=rule_id,
                                      title=kwargs["title"], description="", icon="",
                                      points=kwargs["points"], earned_at=now)
        mock_store.insert_achievement = AsyncMock(side_effect=insert)
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=1, journal_entries=1, current_streak=7, longest_streak=7)

        awarded = await evaluator.evaluate_and_award("user-1", stats, [], now=now)

        assert [a.rule_id for a in awarded] == ["first_entry", "week_streak"]
        assert mock_store.insert_achievement.await_count == 3

    @pytest.mark.asyncio
    async def test_insert_timeout_skips_rule(self, mock_store, now):
        async def slow_insert(user_id, rule_id, **kwargs):
            await asyncio.sleep(1)
        mock_store.insert_achievement = AsyncMock(side_effect=slow_insert)
        evaluator = AwardEvaluator(mock_store, timeout=0.01)

        awarded = await evaluator.evaluate_and_award("user-1", UserStats(total_entries=1), [], now=now)

        assert awarded == []

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, mock_store, now):
        mock_store.insert_achievement = AsyncMock(side_effect=RuntimeError("bug"))
        evaluator = AwardEvaluator(mock_store)

        with pytest.raises(RuntimeError):
            await evaluator.evaluate_and_award("user-1", UserStats(total_entries=1), [], now=now)

    @pytest.mark.asyncio
    async def test_inputs_not_mutated(self, mock_store, make_award, now):
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=5, journal_entries=2)
        existing = [make_award("first_entry")]

        await evaluator.evaluate_and_award("user-1", stats, existing, now=now)

        assert stats == UserStats(total_entries=5, journal_entries=2)
        assert [a.rule_id for a in existing] == ["first_entry"]


class TestPendingRules:

    def test_pending_rules_is_pure(self, mock_store, make_award):
        evaluator = AwardEvaluator(mock_store)
        stats = UserStats(total_entries=1, journal_entries=1)

        pending = evaluator.pending_rules(stats, [make_award("first_journal")])

        assert [r.id for r in pending] == ["first_entry"]
        mock_store.insert_achievement.assert_not_called()
