# parkslot/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + expiry sweep.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from sqlalchemy import text
from parkslot.database import get_db
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(request: Request, db: Session = Depends(get_db)):
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "expiry_sweep": "stopped",
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    sweeper = getattr(request.app.state, "sweeper", None)
    if sweeper is not None and sweeper.running:
        result["expiry_sweep"] = "running"

    return result
