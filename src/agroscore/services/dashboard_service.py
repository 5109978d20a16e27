# agroscore/services/dashboard_service.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

import numpy as np
from sqlalchemy.orm import Session

from agroscore.core.config import settings
from agroscore.db.session import persistence_scope
from agroscore.models import Action, Score, SensorReading
from agroscore.schemas import AuthUser
from agroscore.services import alert_service, report_service, sensor_service
from agroscore.services.field_condition import round_half_up

DEFAULT_WEATHER = {"temp": 25, "humidity": 60}
DEFAULT_SCORES = {"soil_health": 75, "irrigation": 75, "weed_risk": 25}
FORECAST = "Clear skies expected for the next 24 hours."
MOOD_WINDOW = 5
ALERT_LIMIT = 3

_MOODS = {
    "Happy": {"label": "Happy", "icon": "leaf", "color": "green"},
    "Stressed": {"label": "Stressed", "icon": "leaf", "color": "red"},
    "Moderate": {"label": "Moderate", "icon": "leaf", "color": "yellow"},
    "Neutral": {"label": "Neutral", "icon": "leaf", "color": "gray"},
}


def weather_from_reading(reading: Optional[SensorReading]) -> Dict:
    temp = DEFAULT_WEATHER["temp"]
    humidity = DEFAULT_WEATHER["humidity"]
    if reading is not None:
        if reading.temperature is not None:
            temp = reading.temperature
        if reading.humidity is not None:
            humidity = reading.humidity
    return {
        "temp": temp,
        "humidity": humidity,
        "condition": "Cloudy" if humidity > 70 else "Sunny",
        "forecast": FORECAST,
    }


def classify_soil_mood(readings: Sequence[SensorReading]) -> Dict:
    if not readings:
        return dict(_MOODS["Neutral"])

    # missing values count as dry soil and neutral pH
    avg_moisture = float(np.mean([r.soil_moisture if r.soil_moisture is not None else 0 for r in readings]))
    avg_ph = float(np.mean([r.soil_ph if r.soil_ph is not None else 7 for r in readings]))

    if avg_moisture > 60 and 6 <= avg_ph <= 7.5:
        return dict(_MOODS["Happy"])
    if avg_moisture < 30 or avg_ph < 5.5 or avg_ph > 8:
        return dict(_MOODS["Stressed"])
    return dict(_MOODS["Moderate"])


def local_midnight_utc(now: datetime) -> datetime:
    """Start of the local calendar day of ``now``, expressed in UTC."""
    local = now.astimezone()
    return local.replace(hour=0, minute=0, second=0, microsecond=0).astimezone(timezone.utc)


def _monthly_scores(db: Session, user_id: str, now: datetime) -> Dict:
    start, end = report_service.month_bounds(report_service.current_month(now))
    rows = (
        db.query(Score.soil_health_score, Score.irrigation_score, Score.weed_risk_score)
        .filter(Score.user_id == user_id, Score.date >= start.date(), Score.date < end.date())
        .all()
    )
    if not rows:
        return dict(DEFAULT_SCORES)
    return {
        "soil_health": round_half_up(float(np.mean([r.soil_health_score or 0 for r in rows]))),
        "irrigation": round_half_up(float(np.mean([r.irrigation_score or 0 for r in rows]))),
        "weed_risk": round_half_up(float(np.mean([r.weed_risk_score or 0 for r in rows]))),
    }


def compose_summary(
    db: Session,
    user: AuthUser,
    now: Optional[datetime] = None,
    sensor_scope: Optional[str] = None,
) -> Dict:
    """
    Dashboard read-model. ``sensor_scope`` selects whether weather and soil
    mood come from all readings ("global") or the caller's fields ("user");
    it defaults to the SENSOR_SCOPE setting.
    """
    now = now or datetime.now(tz=timezone.utc)
    scope = sensor_scope or settings.SENSOR_SCOPE
    reading_owner = user.id if scope == "user" else None

    with persistence_scope(db, "Internal Server Error"):
        readings = sensor_service.recent_readings(db, MOOD_WINDOW, user_id=reading_owner)
        action_count = (
            db.query(Action)
            .filter(Action.user_id == user.id, Action.action_timestamp >= local_midnight_utc(now))
            .count()
        )
        scores = _monthly_scores(db, user.id, now)
        alerts = alert_service.list_open(db, user.id, limit=ALERT_LIMIT)

    return {
        "weather": weather_from_reading(readings[0] if readings else None),
        "soil_mood": classify_soil_mood(readings),
        "action_count": action_count,
        "scores": scores,
        "alerts": alerts,
    }
