"""
Pydantic Schemas for Wellspring API.

All request/response models in one place for reusability.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field


class MoodLogRequest(BaseModel):
    """Request to log a mood entry."""
    mood: int = Field(..., ge=1, le=10, description="1 = very low, 10 = excellent")
    stress_level: Literal["low", "medium", "high"]
    journal_text: Optional[str] = Field(None, max_length=5000)


class AchievementOut(BaseModel):
    """An earned achievement."""
    id: str
    rule_id: str
    title: str
    description: str
    icon: str
    points: int
    earned_at: str


class LevelOut(BaseModel):
    """User level derived from achievement points."""
    level: int
    points: int
    next_level_points: int
    progress: float
