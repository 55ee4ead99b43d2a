"""
Health Check Routes
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.db import get_db

logger = get_logger(__name__)
router = APIRouter()

# Track startup time
_startup_time = datetime.utcnow()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Liveness: returns immediately while the process is up"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "uptime_seconds": int((datetime.utcnow() - _startup_time).total_seconds()),
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/health/ready")
async def readiness_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Readiness check - verifies the database answers
    """
    try:
        db.execute(text("SELECT 1"))
        database = True
        error = None
    except Exception as e:
        logger.error(f"Readiness database check failed: {e}")
        database = False
        error = str(e)

    return {
        "status": "ready" if database else "not_ready",
        "checks": {"database": database},
        "error": error,
        "timestamp": datetime.utcnow().isoformat()
    }
