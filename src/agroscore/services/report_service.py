# agroscore/services/report_service.py
"""
Monthly aggregate report and rewards tier.

A report is computed once per (user, month) and then served from storage.
Forced regeneration deletes the stored row and recomputes it with the same
``compute_summary`` used on a cache miss.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

import numpy as np
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agroscore.core.config import settings
from agroscore.core.errors import ValidationError
from agroscore.db.session import persistence_scope
from agroscore.models import Action, ActionType, MonthlyReport, RewardsTier, Score
from agroscore.services.field_condition import round_half_up

logger = logging.getLogger(__name__)

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

# evaluated top-down, boundaries inclusive
TIER_CUTOFFS = (
    (85, RewardsTier.GOLD),
    (70, RewardsTier.SILVER),
    (60, RewardsTier.BRONZE),
)


def current_month(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(tz=timezone.utc)
    return now.strftime("%Y-%m")


def month_bounds(month: str) -> Tuple[datetime, datetime]:
    """[start, start of next month) in UTC."""
    if not month or not _MONTH_RE.match(month):
        raise ValidationError("month must be in YYYY-MM format")
    year, mon = (int(p) for p in month.split("-"))
    start = datetime(year, mon, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc) if mon == 12 else datetime(year, mon + 1, 1, tzinfo=timezone.utc)
    return start, end


def combined_score(avg_soil_health: float, avg_irrigation: float, avg_weed_risk: float) -> float:
    return (avg_soil_health + avg_irrigation + (100 - avg_weed_risk)) / 3


def rewards_tier(score: float) -> RewardsTier:
    for cutoff, tier in TIER_CUTOFFS:
        if score >= cutoff:
            return tier
    return RewardsTier.NONE


def _mean(values) -> int:
    if not values:
        return 0
    return round_half_up(float(np.mean(values)))


def compute_summary(db: Session, user_id: str, month: str) -> Tuple[Dict, RewardsTier]:
    start, end = month_bounds(month)

    total_actions = (
        db.query(Action)
        .filter(Action.user_id == user_id, Action.action_timestamp >= start, Action.action_timestamp < end)
        .count()
    )
    scores = (
        db.query(Score.soil_health_score, Score.weed_risk_score, Score.irrigation_score)
        .filter(Score.user_id == user_id, Score.date >= start.date(), Score.date < end.date())
        .all()
    )
    irrigations = (
        db.query(Action.quantity, Action.unit)
        .filter(
            Action.user_id == user_id,
            Action.action_type == ActionType.IRRIGATION,
            Action.action_timestamp >= start,
            Action.action_timestamp < end,
        )
        .all()
    )

    avg_soil_health = _mean([s.soil_health_score or 0 for s in scores])
    avg_weed_risk = _mean([s.weed_risk_score or 0 for s in scores])
    avg_irrigation = _mean([s.irrigation_score or 0 for s in scores])

    # only hectare-equivalent units are summed, others are not converted
    hectare_units = {u.lower() for u in settings.HECTARE_UNITS}
    irrigated_area = float(sum(
        (a.quantity or 0) for a in irrigations if a.unit and a.unit.lower() in hectare_units
    ))

    summary = {
        "totalActions": total_actions,
        "averageSoilHealth": avg_soil_health,
        "averageWeedRisk": avg_weed_risk,
        "averageIrrigation": avg_irrigation,
        "totalIrrigatedArea": irrigated_area,
        "unit": "hectares",
    }
    tier = rewards_tier(combined_score(avg_soil_health, avg_irrigation, avg_weed_risk))
    return summary, tier


def _find(db: Session, user_id: str, month: str) -> Optional[MonthlyReport]:
    return (
        db.query(MonthlyReport)
        .filter(MonthlyReport.user_id == user_id, MonthlyReport.month == month)
        .first()
    )


def _create(db: Session, user_id: str, month: str) -> MonthlyReport:
    summary, tier = compute_summary(db, user_id, month)
    report = MonthlyReport(user_id=user_id, month=month, summary=summary, rewards_tier=tier)
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("Generated %s report for user %s: tier=%s", month, user_id, tier.value)
    return report


def get_monthly_report(db: Session, user_id: str, month: Optional[str] = None) -> MonthlyReport:
    """Stored report for the month, computed and stored on first request."""
    month = month or current_month()
    month_bounds(month)

    with persistence_scope(db, "Failed to fetch report"):
        existing = _find(db, user_id, month)
        if existing:
            return existing
        try:
            return _create(db, user_id, month)
        except IntegrityError:
            # a concurrent request stored the same (user, month) first
            db.rollback()
            logger.info("Report %s for user %s created concurrently, serving stored row", month, user_id)
            return _find(db, user_id, month)


def generate_report(db: Session, user_id: str, month: Optional[str] = None) -> MonthlyReport:
    """Forced regeneration: delete the stored row, then recompute."""
    month = month or current_month()
    month_bounds(month)

    with persistence_scope(db, "Failed to generate report"):
        deleted = (
            db.query(MonthlyReport)
            .filter(MonthlyReport.user_id == user_id, MonthlyReport.month == month)
            .delete()
        )
        if deleted:
            logger.info("Discarded stored %s report for user %s", month, user_id)
        return _create(db, user_id, month)
