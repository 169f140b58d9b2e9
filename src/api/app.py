"""
Wellspring API Application.

FastAPI application with modular routers.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import aiosqlite
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import config
from src.core.logger import log
from src.core.achievements import (
    AchievementService,
    LogNotifier,
    ScriptedResponder,
    WellnessStorage,
)
from src.api.routers import (
    moods_router,
    achievements_router,
    health_router,
)


def create_app(db_path: Optional[Path] = None) -> FastAPI:
    """Build the API; `db_path` defaults to the configured database."""
    database = str(db_path or config.db_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database and build the service for the app's lifetime."""
        # ===== STARTUP =====
        db = await aiosqlite.connect(database)
        await db.execute("PRAGMA journal_mode=WAL")
        storage = WellnessStorage()
        await storage.initialize(db)

        app.state.achievement_service = AchievementService(
            mood_store=storage,
            achievement_store=storage,
            notifier=LogNotifier(),
            responder=ScriptedResponder(),
            settings=config.achievements
        )
        log.api("✅ Wellspring initialized", db=database)

        yield  # Application runs here

        # ===== SHUTDOWN =====
        app.state.achievement_service = None
        await db.close()
        log.api("Database closed")

    app = FastAPI(
        title="Wellspring API",
        description="Mood journaling with streaks and achievements",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # ============= Register Routers =============

    app.include_router(moods_router)
    app.include_router(achievements_router)
    app.include_router(health_router)

    return app


app = create_app()


# ============= Run Server =============

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.host, port=config.port)
