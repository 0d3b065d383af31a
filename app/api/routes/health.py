"""
Health check endpoint for deployment monitoring.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.db.session import StoreConnection, get_store

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check(store: StoreConnection = Depends(get_store)):
    """
    Health check endpoint for deployment monitoring.
    
    Returns 200 with status "degraded" when the database is unreachable.
    """
    db_ok = store.ping()

    return {
        "status": "healthy" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if db_ok else "error",
        "version": "1.0.0",
    }
