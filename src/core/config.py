"""
Configuration settings for Wellspring.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class MoodPolicy(Enum):
    """How statistics treat mood values outside the 1-10 scale."""
    EXCLUDE = "exclude"
    CLAMP = "clamp"


@dataclass
class AchievementConfig:
    """Achievement engine configuration."""
    # Level curve: every N points is one level
    points_per_level: int = 100

    # Seconds to wait on a single store call before treating it as transient
    store_timeout: float = 10.0

    # Malformed mood handling in the statistics deriver
    mood_policy: MoodPolicy = MoodPolicy.EXCLUDE

    # Trailing window for weekly consistency (days, inclusive of today)
    consistency_window_days: int = 28

    # Mood improvement compares two blocks of this many recent entries
    improvement_window: int = 7

    # Deliver notices for newly earned achievements
    achievement_alerts: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    data_dir: Path = field(default_factory=lambda: _get_data_dir())
    db_path: Path = field(default_factory=lambda: _get_db_path())

    # Server
    host: str = field(default_factory=lambda: os.environ.get("WELLSPRING_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.environ.get("WELLSPRING_PORT", "8000")))
    cors_origins: list = field(default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"])
    debug: bool = field(default_factory=lambda: os.environ.get("WELLSPRING_DEBUG", "") == "1")

    # Sub-configs
    achievements: AchievementConfig = field(default_factory=AchievementConfig)

    def __post_init__(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Lazy imports to avoid circular dependency
def _get_data_dir() -> Path:
    from .paths import get_app_data_dir
    return get_app_data_dir()

def _get_db_path() -> Path:
    from .paths import get_db_path
    return get_db_path()


# Global config instance
config = AppConfig()
