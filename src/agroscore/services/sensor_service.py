# agroscore/services/sensor_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Query, Session

from agroscore.db.session import persistence_scope
from agroscore.models import Farm, Field, SensorReading
from agroscore.schemas import AuthUser, SensorReadingCreate
from agroscore.services import farm_service

logger = logging.getLogger(__name__)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def record_reading(db: Session, user: AuthUser, body: SensorReadingCreate) -> SensorReading:
    with persistence_scope(db, "Failed to record sensor reading"):
        farm_service.get_owned_field(db, user.id, body.field_id)
        reading = SensorReading(
            field_id=body.field_id,
            timestamp=to_utc(body.timestamp) or datetime.now(tz=timezone.utc),
            temperature=body.temperature,
            humidity=body.humidity,
            soil_moisture=body.soil_moisture,
            soil_ph=body.soil_ph,
        )
        db.add(reading)
        db.commit()
        db.refresh(reading)
        return reading


def latest_for_field(db: Session, field_id: Optional[str]) -> Optional[SensorReading]:
    if not field_id:
        return None
    return (
        db.query(SensorReading)
        .filter(SensorReading.field_id == field_id)
        .order_by(SensorReading.timestamp.desc())
        .first()
    )


def _scoped(db: Session, user_id: Optional[str]) -> Query:
    q = db.query(SensorReading)
    if user_id is not None:
        q = (
            q.join(Field, SensorReading.field_id == Field.id)
            .join(Farm, Field.farm_id == Farm.id)
            .filter(Farm.user_id == user_id)
        )
    return q


def recent_readings(db: Session, limit: int, user_id: Optional[str] = None) -> List[SensorReading]:
    """Most recent readings across all fields, or across ``user_id``'s fields only."""
    return _scoped(db, user_id).order_by(SensorReading.timestamp.desc()).limit(limit).all()
