# agroscore/services/action_service.py
"""
Action logging.

One request runs: read the field's latest reading, the field, and the
caller's 7-day irrigation count; score; then insert Action, Score and
Alerts inside a single transaction. A failure anywhere rolls the whole
unit back, so an Action never exists without its Score.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from agroscore.db.session import persistence_scope
from agroscore.models import Action, ActionType, Alert, Score
from agroscore.schemas import ActionCreate, AuthUser
from agroscore.services import farm_service, sensor_service
from agroscore.services.alert_generator import evaluate_alerts
from agroscore.services.field_condition import score_field_condition
from agroscore.services.weed_risk import (
    WeedRiskInput,
    estimate_weed_risk,
    risk_level,
    weed_risk_trend,
)

logger = logging.getLogger(__name__)

DEFAULT_HUMIDITY = 60
DEFAULT_TEMPERATURE = 25
DEFAULT_WEED_RISK = 25
IRRIGATION_WINDOW = timedelta(days=7)


def _check_ownership(db: Session, user_id: str, body: ActionCreate):
    """Referenced farm/field/crop must all belong to the caller."""
    if body.farm_id:
        farm_service.get_owned_farm(db, user_id, body.farm_id)
    field = None
    if body.field_id:
        field = farm_service.get_owned_field(db, user_id, body.field_id)
    if body.crop_id:
        farm_service.get_owned_crop(db, user_id, body.crop_id)
    return field


def irrigation_count(db: Session, user_id: str, since: datetime) -> int:
    return (
        db.query(Action)
        .filter(
            Action.user_id == user_id,
            Action.action_type == ActionType.IRRIGATION,
            Action.action_timestamp >= since,
        )
        .count()
    )


def log_action(db: Session, user: AuthUser, body: ActionCreate, now: Optional[datetime] = None) -> dict:
    now = sensor_service.to_utc(now) or datetime.now(tz=timezone.utc)

    with persistence_scope(db, "Failed to log action"):
        field = _check_ownership(db, user.id, body)

        action = Action(
            user_id=user.id,
            farm_id=body.farm_id,
            field_id=body.field_id,
            crop_id=body.crop_id,
            action_type=body.action_type,
            action_timestamp=sensor_service.to_utc(body.action_timestamp) or now,
            quantity=body.quantity,
            unit=body.unit,
            notes=body.notes,
            created_at=now,
        )
        db.add(action)
        db.flush()

        reading = sensor_service.latest_for_field(db, body.field_id)
        frequency = irrigation_count(db, user.id, now - IRRIGATION_WINDOW)

        weed_risk = estimate_weed_risk(
            WeedRiskInput(
                humidity=DEFAULT_HUMIDITY if reading is None or reading.humidity is None else reading.humidity,
                temperature=(
                    DEFAULT_TEMPERATURE if reading is None or reading.temperature is None else reading.temperature
                ),
                soil_type=field.soil_type if field else "unknown",
                crop_spacing=body.crop_spacing,
                irrigation_frequency=frequency,
            )
        )
        condition = score_field_condition(reading, body.action_type)

        db.add(
            Score(
                user_id=user.id,
                farm_id=body.farm_id,
                field_id=body.field_id,
                crop_id=body.crop_id,
                action_id=action.id,
                date=now.date(),
                soil_health_score=condition.soil_health,
                irrigation_score=condition.irrigation,
                weed_risk_score=weed_risk.score,
                created_at=now,
            )
        )

        alerts: List[Alert] = []
        for draft in evaluate_alerts(weed_risk, reading):
            alert = Alert(
                user_id=user.id,
                farm_id=body.farm_id,
                field_id=body.field_id,
                crop_id=body.crop_id,
                action_id=action.id,
                type=draft.type,
                severity=draft.severity,
                risk_score=draft.risk_score,
                message=draft.message,
                suggested_action=draft.suggested_action,
                acknowledged=False,
                created_at=now,
            )
            db.add(alert)
            alerts.append(alert)

        db.commit()
        for alert in alerts:
            db.refresh(alert)

    logger.info(
        "Logged %s action %s for user %s (weed risk %d, %d alerts)",
        body.action_type.value, action.id, user.id, weed_risk.score, len(alerts),
    )
    return {
        "success": True,
        "action_id": action.id,
        "scores": {
            "soil_health": condition.soil_health,
            "irrigation": condition.irrigation,
            "weed_risk": {"score": weed_risk.score, "level": weed_risk.level},
        },
        "alerts": alerts,
    }


def get_weed_risk(db: Session, user: AuthUser, now: Optional[datetime] = None) -> dict:
    with persistence_scope(db, "Failed to get weed risk"):
        latest = (
            db.query(Score)
            .filter(Score.user_id == user.id)
            .order_by(Score.created_at.desc())
            .limit(2)
            .all()
        )

    if not latest:
        return {
            "current_score": DEFAULT_WEED_RISK,
            "level": risk_level(DEFAULT_WEED_RISK),
            "trend": "stable",
            "last_updated": now or datetime.now(tz=timezone.utc),
        }

    current = latest[0].weed_risk_score
    previous = latest[1].weed_risk_score if len(latest) == 2 else None
    return {
        "current_score": current,
        "level": risk_level(current),
        "trend": weed_risk_trend(current, previous),
        "last_updated": latest[0].created_at,
    }
