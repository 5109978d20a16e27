# agroscore/api/v1/alerts.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db, persistence_scope
from agroscore.schemas import AlertOut, AuthUser
from agroscore.services import alert_service

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=List[AlertOut])
def list_alerts(db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    with persistence_scope(db, "Failed to fetch alerts"):
        return alert_service.list_open(db, user.id)


@router.post("/{alert_id}/acknowledge", response_model=AlertOut)
def acknowledge_alert(alert_id: str, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return alert_service.acknowledge(db, user.id, alert_id)
