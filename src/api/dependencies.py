"""
Shared FastAPI dependencies.
"""
from typing import Optional

from fastapi import Header, HTTPException, Request

from src.core.achievements import AchievementService


def get_service(request: Request) -> AchievementService:
    """Service instance built during app startup."""
    service = getattr(request.app.state, "achievement_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity; authentication happens upstream."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="X-User-Id header required")
    return x_user_id.strip()
