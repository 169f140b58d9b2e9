"""
Achievements Router for Wellspring API.

Endpoints:
- GET /api/achievements
- POST /api/achievements/check
- GET /api/level
- GET /api/stats
"""
from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_service, get_user_id
from src.api.schemas import AchievementOut, LevelOut
from src.core.achievements import AchievementService, TransientStoreError

router = APIRouter(prefix="/api", tags=["achievements"])


@router.get("/achievements")
async def get_achievements(
    user_id: str = Depends(get_user_id),
    service: AchievementService = Depends(get_service)
):
    """Get all achievements with earned state and progress."""
    try:
        achievements = await service.get_achievements(user_id)
    except TransientStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [a.to_dict() for a in achievements]


@router.post("/achievements/check", response_model=list[AchievementOut])
async def check_achievements(
    user_id: str = Depends(get_user_id),
    service: AchievementService = Depends(get_service)
):
    """Evaluate rules now and return newly earned achievements."""
    try:
        awarded = await service.check_and_award_achievements(user_id)
    except TransientStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [a.to_dict() for a in awarded]


@router.get("/level", response_model=LevelOut)
async def get_level(
    user_id: str = Depends(get_user_id),
    service: AchievementService = Depends(get_service)
):
    """Get the user's level."""
    try:
        level = await service.get_user_level(user_id)
    except TransientStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return level.to_dict()


@router.get("/stats")
async def get_stats(
    user_id: str = Depends(get_user_id),
    service: AchievementService = Depends(get_service)
):
    """Get streaks and other statistics."""
    try:
        stats = await service.get_user_stats(user_id)
    except TransientStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return stats.to_dict()
