"""
Routers package for Wellspring API.

Contains domain-specific routers:
- moods: /moods
- achievements: /achievements, /achievements/check, /level, /stats
- health: /health
"""

from .moods import router as moods_router
from .achievements import router as achievements_router
from .health import router as health_router

__all__ = [
    "moods_router",
    "achievements_router",
    "health_router",
]
