# agroscore/api/v1/health.py
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from agroscore.core.config import settings
from agroscore.db.session import get_db, persistence_scope

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(db: Session = Depends(get_db)):
    with persistence_scope(db, "Database unavailable"):
        db.execute(text("SELECT 1"))
    return {"status": "ok", "version": settings.API_VERSION}
