"""
Wellspring API package.

Provides modular FastAPI routers for:
- Mood entries
- Achievements, level and stats
- Health checks

Architecture:
- app.py - entry point; create_app() builds the application
- routers/ - Domain-specific routers
- schemas.py - Pydantic models
- dependencies.py - service and caller-identity dependencies
"""
