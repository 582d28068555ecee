"""
Health check endpoints for monitoring.

``/health`` is liveness only; ``/health/db`` also pings the database
that backs the plant, tip and garden stores.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from gardenchat.sqlite.database import init_db

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": "gardenchat"}


@router.get("/health/db")
def database_check():
    """Readiness: 503 while the database is unreachable."""
    if init_db():
        return {"status": "ok", "database": True}
    return JSONResponse(status_code=503, content={"status": "unavailable", "database": False})
