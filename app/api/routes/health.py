"""
Liveness probe covering the two backing stores: the database and the buckets.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.storage_service import BUCKETS, StorageClient, get_storage

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check(db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage)):
    """
    Always 200. ``status`` is "degraded" if the database query fails or a
    bucket directory is missing.
    """
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        database = f"error: {type(e).__name__}"

    missing = [bucket for bucket in BUCKETS if not (storage.root / bucket).is_dir()]
    buckets = "ok" if not missing else f"missing: {', '.join(missing)}"

    return {
        "status": "healthy" if database == "connected" and not missing else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "database": database,
        "storage": buckets,
        "service": "HireScreen API",
        "version": "1.0.0",
    }
