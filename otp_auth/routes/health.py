# otp_auth/routes/health.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import datetime
import logging

from otp_auth.config import settings
from otp_auth.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/health",
    tags=["Health Check"]
)

@router.get("/")
def health_check(db: Session = Depends(get_db)):
    """
    Health check with database connectivity
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.datetime.now().isoformat(),
        "service": f"{settings.APP_NAME} Auth API",
        "version": "1.0.0",
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = {
            "status": "connected",
            "type": db.get_bind().dialect.name
        }
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {str(e)}")
        health_status["database"] = {"status": "disconnected"}
        health_status["status"] = "degraded"

    logger.info(f"Health check completed: {health_status['status']}")
    return health_status
