"""
Tests for the rule catalog.
"""
import pytest

from src.core.achievements import RULE_CATALOG, AchievementType, UserStats, get_rule
from src.core.achievements.rules import validate_catalog
from src.core.achievements.types import AchievementRule


class TestCatalogStructure:

    def test_ids_unique(self):
        ids = [r.id for r in RULE_CATALOG]
        assert len(ids) == len(set(ids))

    def test_at_least_ten_rules(self):
        assert len(RULE_CATALOG) >= 10

    def test_points_positive(self):
        assert all(r.points > 0 for r in RULE_CATALOG)

    def test_catalog_order(self):
        assert [r.id for r in RULE_CATALOG] == [
            "first_entry", "first_journal", "week_streak", "month_streak",
            "mood_improver", "ai_friend", "journal_master", "consistency_king",
            "hundred_club", "wellness_guru",
        ]

    def test_get_rule(self):
        rule = get_rule("week_streak")
        assert rule.type is AchievementType.STREAK
        assert rule.points == 50
        assert get_rule("does_not_exist") is None

    def test_validate_rejects_duplicates(self):
        rule = RULE_CATALOG[0]
        with pytest.raises(ValueError):
            validate_catalog((rule, rule))

    def test_validate_rejects_zero_points(self):
        rule = AchievementRule(
            id="free", type=AchievementType.MILESTONE, title="Free", description="",
            icon="", points=0, condition=lambda s: True
        )
        with pytest.raises(ValueError):
            validate_catalog((rule,))

    def test_rule_to_dict(self):
        d = get_rule("first_entry").to_dict()
        assert d["id"] == "first_entry"
        assert d["type"] == "first_time"
        assert d["points"] == 10


class TestConditions:

    def test_nothing_met_on_empty_stats(self):
        assert not any(r.is_met(UserStats()) for r in RULE_CATALOG)

    @pytest.mark.parametrize("rule_id,stats,expected", [
        ("first_entry", UserStats(total_entries=1), True),
        ("first_journal", UserStats(journal_entries=1), True),
        ("week_streak", UserStats(current_streak=6), False),
        ("week_streak", UserStats(current_streak=7), True),
        ("month_streak", UserStats(current_streak=30), True),
        ("mood_improver", UserStats(mood_improvement=1.99), False),
        ("mood_improver", UserStats(mood_improvement=2.0), True),
        ("ai_friend", UserStats(ai_interactions=10), True),
        ("journal_master", UserStats(journal_entries=24), False),
        ("consistency_king", UserStats(weekly_consistency=0.9), True),
        ("hundred_club", UserStats(total_entries=100), True),
        ("wellness_guru", UserStats(average_mood=8.5, current_streak=13), False),
        ("wellness_guru", UserStats(average_mood=7.9, current_streak=14), False),
        ("wellness_guru", UserStats(average_mood=8.0, current_streak=14), True),
    ])
    def test_thresholds(self, rule_id, stats, expected):
        assert get_rule(rule_id).is_met(stats) is expected
