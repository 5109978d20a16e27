# agroscore/services/alert_service.py
from typing import List

from sqlalchemy.orm import Session

from agroscore.core.errors import NotFoundError
from agroscore.db.session import persistence_scope
from agroscore.models import Alert


def list_open(db: Session, user_id: str, limit: int | None = None) -> List[Alert]:
    """Unacknowledged alerts of the user, newest first."""
    q = (
        db.query(Alert)
        .filter(Alert.user_id == user_id, Alert.acknowledged.is_(False))
        .order_by(Alert.created_at.desc())
    )
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def acknowledge(db: Session, user_id: str, alert_id: str) -> Alert:
    with persistence_scope(db, "Failed to acknowledge alert"):
        alert = db.query(Alert).filter(Alert.id == alert_id, Alert.user_id == user_id).first()
        if not alert:
            raise NotFoundError("Alert not found or access denied")
        alert.acknowledged = True
        db.commit()
        db.refresh(alert)
        return alert
