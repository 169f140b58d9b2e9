"""
Achievement Types Module.

Contains all dataclasses and enums used by the achievement system.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

# Highest progress shown for a rule whose condition does not hold yet
PROGRESS_UNMET_CAP = 99.0


class StressLevel(Enum):
    """Self-reported stress level of a mood entry."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AchievementType(Enum):
    """Categories of achievement rules."""
    STREAK = "streak"
    MILESTONE = "milestone"
    FIRST_TIME = "first_time"
    MOOD_IMPROVEMENT = "mood_improvement"
    CONSISTENCY = "consistency"


@dataclass(frozen=True)
class MoodEvent:
    """One logged mood entry. Read-only to the achievement engine."""
    id: str
    user_id: str
    mood: int                          # 1-10
    stress_level: StressLevel
    created_at: datetime
    journal_text: Optional[str] = None
    ai_response_text: Optional[str] = None

    @property
    def has_journal(self) -> bool:
        return bool(self.journal_text and self.journal_text.strip())

    @property
    def has_ai_response(self) -> bool:
        return bool(self.ai_response_text and self.ai_response_text.strip())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "mood": self.mood,
            "stress_level": self.stress_level.value,
            "journal_text": self.journal_text,
            "ai_response_text": self.ai_response_text,
            "created_at": self.created_at.isoformat()
        }


@dataclass
class UserStats:
    """Statistics derived from a user's mood history."""
    total_entries: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    average_mood: float = 0.0
    mood_improvement: float = 0.0     # recent 7 avg - previous 7 avg
    journal_entries: int = 0
    ai_interactions: int = 0
    days_active: int = 0
    weekly_consistency: float = 0.0   # 0-1

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        d = asdict(self)
        d["average_mood"] = round(self.average_mood, 2)
        d["mood_improvement"] = round(self.mood_improvement, 2)
        d["weekly_consistency"] = round(self.weekly_consistency, 3)
        return d


@dataclass(frozen=True)
class AchievementRule:
    """
    Static catalog entry: metadata plus an unlock predicate.

    `metric` and `target` are only used to report progress towards the rule;
    whether the rule is met is decided by `condition` alone.
    """
    id: str
    type: AchievementType
    title: str
    description: str
    icon: str
    points: int
    condition: Callable[[UserStats], bool] = field(compare=False, repr=False)
    metric: Optional[str] = None
    target: Optional[float] = None

    def is_met(self, stats: UserStats) -> bool:
        return bool(self.condition(stats))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "points": self.points
        }


@dataclass(frozen=True)
class AwardedAchievement:
    """Persisted record that a user satisfied a rule."""
    id: str
    user_id: str
    rule_id: str
    title: str
    description: str
    icon: str
    points: int
    earned_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "rule_id": self.rule_id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "points": self.points,
            "earned_at": self.earned_at.isoformat()
        }


@dataclass(frozen=True)
class UserLevel:
    """Level derived from the sum of awarded points."""
    level: int
    points: int
    next_level_points: int
    points_per_level: int = 100

    @property
    def progress(self) -> float:
        """Progress through the current level (0-100)."""
        level_start = self.next_level_points - self.points_per_level
        return min(100.0, max(0.0, (self.points - level_start) / self.points_per_level * 100))

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "points": self.points,
            "next_level_points": self.next_level_points,
            "progress": round(self.progress, 1)
        }


@dataclass
class AchievementProgress:
    """Catalog rule joined with one user's state, for UI."""
    rule: AchievementRule
    earned: bool
    current_value: float = 0.0
    earned_at: Optional[datetime] = None
    met: bool = False

    @property
    def progress(self) -> float:
        """
        Progress to unlock (0-100).

        The tracked metric may reach its target before a compound condition
        holds, so an unmet rule stays below 100.
        """
        if self.earned:
            return 100.0
        if not self.rule.target or self.rule.target <= 0:
            return 0.0
        ceiling = 100.0 if self.met else PROGRESS_UNMET_CAP
        return min(ceiling, max(0.0, (self.current_value / self.rule.target) * 100))

    def to_dict(self) -> dict:
        d = self.rule.to_dict()
        d.update({
            "earned": self.earned,
            "earned_at": self.earned_at.isoformat() if self.earned_at else None,
            "current_value": self.current_value,
            "target": self.rule.target,
            "progress": round(self.progress, 1)
        })
        return d


@dataclass
class MoodLogResult:
    """Outcome of logging a mood entry."""
    event: MoodEvent
    new_achievements: list = field(default_factory=list)
    level: Optional[UserLevel] = None

    def to_dict(self) -> dict:
        return {
            "event": self.event.to_dict(),
            "new_achievements": [a.to_dict() for a in self.new_achievements],
            "level": self.level.to_dict() if self.level else None
        }
