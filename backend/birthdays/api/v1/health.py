from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session
from birthdays.core.db import get_session
from datetime import datetime, timezone

router = APIRouter()

@router.get("/")
def health_check():
    """basic liveness check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "birthdays"
    }

@router.get("/ready")
def readiness_check(session: Session = Depends(get_session)):
    """readiness check - verifies the database answers"""
    checks = {}
    all_healthy = True

    try:
        session.connection().execute(text("SELECT 1"))
        checks["database"] = {"status": "healthy", "message": "connected"}
    except Exception as e:
        checks["database"] = {"status": "unhealthy", "message": str(e)}
        all_healthy = False

    return {
        "status": "healthy" if all_healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks
    }
