"""
Health Router for Wellspring API.

Endpoints:
- GET /api/health
"""
from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Health check."""
    initialized = getattr(request.app.state, "achievement_service", None) is not None
    return {"status": "ok", "initialized": initialized}
