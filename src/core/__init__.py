# Core modules
"""Core business logic for Wellspring."""

from .achievements import AchievementService, WellnessStorage

__all__ = [
    "AchievementService",
    "WellnessStorage",
]
