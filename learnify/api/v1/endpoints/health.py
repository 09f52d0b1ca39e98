# learnify/api/v1/endpoints/health.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnify.core.config import settings
from learnify.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("")
def api_index():
    return {
        "message": "Learnify API v1",
        "version": settings.API_VERSION,
        "endpoints": {
            "auth": f"{settings.API_V1_PREFIX}/auth",
            "courses": f"{settings.API_V1_PREFIX}/courses",
            "admin": f"{settings.API_V1_PREFIX}/admin",
            "enrollments": f"{settings.API_V1_PREFIX}/enrollments",
            "health": f"{settings.API_V1_PREFIX}/health",
        },
    }


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "Connected"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        database = "Disconnected"
    return {
        "status": "OK",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.API_VERSION,
    }
