"""
Rule Catalog Module.

The static, ordered table of achievement rules. Catalog order is evaluation
order, which fixes the order of newly awarded achievements.

Rule ids are the de-dup key for persisted awards: never rename one and never
reuse an id for a different rule.
"""
from typing import Optional

from .types import AchievementRule, AchievementType


RULE_CATALOG: tuple[AchievementRule, ...] = (
    AchievementRule(
        id="first_entry",
        type=AchievementType.FIRST_TIME,
        title="First Step",
        description="Logged your first mood entry",
        icon="🌱",
        points=10,
        condition=lambda s: s.total_entries >= 1,
        metric="total_entries",
        target=1
    ),
    AchievementRule(
        id="first_journal",
        type=AchievementType.FIRST_TIME,
        title="Opening Up",
        description="Wrote your first journal entry",
        icon="📝",
        points=15,
        condition=lambda s: s.journal_entries >= 1,
        metric="journal_entries",
        target=1
    ),
    AchievementRule(
        id="week_streak",
        type=AchievementType.STREAK,
        title="Week Warrior",
        description="7 days in a row of mood tracking",
        icon="🔥",
        points=50,
        condition=lambda s: s.current_streak >= 7,
        metric="current_streak",
        target=7
    ),
    AchievementRule(
        id="month_streak",
        type=AchievementType.STREAK,
        title="Monthly Master",
        description="30 days of consistent tracking",
        icon="💎",
        points=200,
        condition=lambda s: s.current_streak >= 30,
        metric="current_streak",
        target=30
    ),
    AchievementRule(
        id="mood_improver",
        type=AchievementType.MOOD_IMPROVEMENT,
        title="Rising Star",
        description="Improved average mood by 2 points",
        icon="⭐",
        points=75,
        condition=lambda s: s.mood_improvement >= 2,
        metric="mood_improvement",
        target=2
    ),
    AchievementRule(
        id="ai_friend",
        type=AchievementType.MILESTONE,
        title="AI Companion",
        description="Had 10 conversations with AI",
        icon="🤖",
        points=30,
        condition=lambda s: s.ai_interactions >= 10,
        metric="ai_interactions",
        target=10
    ),
    AchievementRule(
        id="journal_master",
        type=AchievementType.MILESTONE,
        title="Reflection Master",
        description="Written 25 journal entries",
        icon="📚",
        points=100,
        condition=lambda s: s.journal_entries >= 25,
        metric="journal_entries",
        target=25
    ),
    AchievementRule(
        id="consistency_king",
        type=AchievementType.CONSISTENCY,
        title="Consistency Champion",
        description="90% weekly consistency for a month",
        icon="👑",
        points=150,
        condition=lambda s: s.weekly_consistency >= 0.9,
        metric="weekly_consistency",
        target=0.9
    ),
    AchievementRule(
        id="hundred_club",
        type=AchievementType.MILESTONE,
        title="Century Club",
        description="100 mood entries logged",
        icon="💯",
        points=300,
        condition=lambda s: s.total_entries >= 100,
        metric="total_entries",
        target=100
    ),
    AchievementRule(
        id="wellness_guru",
        type=AchievementType.MILESTONE,
        title="Wellness Guru",
        description="Maintained 8+ average mood for 2 weeks",
        icon="🧘",
        points=250,
        condition=lambda s: s.average_mood >= 8 and s.current_streak >= 14,
        metric="current_streak",
        target=14
    ),
)


def validate_catalog(catalog: tuple[AchievementRule, ...]) -> None:
    """Reject duplicate ids and non-positive point values."""
    seen = set()
    for rule in catalog:
        if rule.id in seen:
            raise ValueError(f"Duplicate achievement rule id: {rule.id}")
        if rule.points <= 0:
            raise ValueError(f"Achievement rule {rule.id} must award positive points")
        seen.add(rule.id)


_RULES_BY_ID = {rule.id: rule for rule in RULE_CATALOG}

validate_catalog(RULE_CATALOG)


def get_rule(rule_id: str) -> Optional[AchievementRule]:
    """Look up a catalog rule by id."""
    return _RULES_BY_ID.get(rule_id)
