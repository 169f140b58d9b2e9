"""
Achievements Package.

Streak statistics and gamified achievements for Wellspring.

- Statistics: derive_stats() turns mood history into UserStats
- Rules: RULE_CATALOG, the ordered table of unlock predicates
- Evaluator: AwardEvaluator persists each new award once per user
- Levels: compute_level() maps award points to a level
- Engine: AchievementService wires stores, evaluator and notifier together
"""

from .types import (
    StressLevel,
    AchievementType,
    MoodEvent,
    UserStats,
    AchievementRule,
    AwardedAchievement,
    UserLevel,
    AchievementProgress,
    MoodLogResult
)
from .errors import (
    AchievementError,
    StoreError,
    TransientStoreError,
    ConflictError,
    ValidationError
)
from .stats import derive_stats
from .rules import RULE_CATALOG, get_rule
from .evaluator import AwardEvaluator
from .levels import compute_level
from .storage import MoodEventStore, AchievementStore, WellnessStorage
from .notifier import AchievementNotifier, LogNotifier
from .responder import ResponseGenerator, ScriptedResponder
from .engine import AchievementService, validate_mood

__all__ = [
    # Types
    "StressLevel",
    "AchievementType",
    "MoodEvent",
    "UserStats",
    "AchievementRule",
    "AwardedAchievement",
    "UserLevel",
    "AchievementProgress",
    "MoodLogResult",
    # Errors
    "AchievementError",
    "StoreError",
    "TransientStoreError",
    "ConflictError",
    "ValidationError",
    # Functions
    "derive_stats",
    "compute_level",
    "get_rule",
    "validate_mood",
    "RULE_CATALOG",
    # Classes
    "AwardEvaluator",
    "MoodEventStore",
    "AchievementStore",
    "WellnessStorage",
    "AchievementNotifier",
    "LogNotifier",
    "ResponseGenerator",
    "ScriptedResponder",
    "AchievementService",
]
