"""
Moods Router for Wellspring API.

Endpoints:
- POST /api/moods
- GET /api/moods
"""
from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_service, get_user_id
from src.api.schemas import MoodLogRequest
from src.core.achievements import AchievementService, TransientStoreError, ValidationError
from src.core.logger import log

router = APIRouter(prefix="/api", tags=["moods"])


@router.post("/moods")
async def log_mood(
    data: MoodLogRequest,
    user_id: str = Depends(get_user_id),
    service: AchievementService = Depends(get_service)
):
    """Log a mood entry; the response includes any achievements it unlocked."""
    log.api("Mood entry received", user=user_id, mood=data.mood, stress=data.stress_level)
    try:
        result = await service.log_mood(
            user_id=user_id,
            mood=data.mood,
            stress_level=data.stress_level,
            journal_text=data.journal_text
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except TransientStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return result.to_dict()


@router.get("/moods")
async def list_moods(
    user_id: str = Depends(get_user_id),
    service: AchievementService = Depends(get_service)
):
    """Get the user's mood entries, newest first."""
    try:
        events = await service.list_mood_events(user_id)
    except TransientStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [e.to_dict() for e in events]
