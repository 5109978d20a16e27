# agroscore/services/crop_advisor.py
"""
Crop comparison and crop-switch recommendation.

A field's current crop should be switched when it has an open high-risk
alert, its recent weed risk averages above the high threshold, or the crop
itself is rated high-risk. Alternatives are the three lowest-risk reference
crops rated below the current one; among those the best soil match wins and
ties keep the lower-risk candidate.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
from sqlalchemy import func
from sqlalchemy.orm import Session

from agroscore.core.errors import ValidationError
from agroscore.db.session import persistence_scope
from agroscore.models import Alert, CropReference, MarketPrice, Score, Severity
from agroscore.schemas import AuthUser
from agroscore.services import farm_service
from agroscore.services.field_condition import round_half_up
from agroscore.services.weed_risk import HIGH_RISK_THRESHOLD, MEDIUM_RISK_THRESHOLD

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 5
MAX_CANDIDATES = 3
DEFAULT_RISK_LEVEL = 50
DEFAULT_SOIL_SUITABILITY = 50


def soil_suitability(ref: Optional[CropReference], soil_type: str) -> float:
    preference = (ref.soil_preference if ref is not None else None) or {}
    return preference.get(soil_type) or 0


def select_alternative(candidates: Sequence[CropReference], soil_type: str) -> CropReference:
    """
    ``candidates`` must be ordered by ascending base risk. A later candidate
    replaces the selection only when its soil suitability is strictly higher.
    """
    selected = candidates[0]
    for candidate in candidates:
        if soil_suitability(candidate, soil_type) > soil_suitability(selected, soil_type):
            selected = candidate
    return selected


def switch_reason(current: str, suggested: str, has_high_risk_alert: bool, avg_weed_risk: float) -> str:
    reason = f"Switch from {current} to {suggested}"
    if has_high_risk_alert:
        return reason + " - high risk alerts detected."
    if avg_weed_risk > HIGH_RISK_THRESHOLD:
        return reason + " - elevated weed risk."
    return reason + " - lower risk alternative available."


def _is_high_risk_alert(alert: Alert) -> bool:
    return alert.severity == Severity.HIGH or (
        alert.risk_score is not None and alert.risk_score > HIGH_RISK_THRESHOLD
    )


def suggest_switch(db: Session, user: AuthUser, field_id: Optional[str]) -> dict:
    if not field_id:
        raise ValidationError("fieldId is required")

    with persistence_scope(db, "Suggestion failed"):
        field = farm_service.get_owned_field(db, user.id, field_id)

        crop = farm_service.latest_crop(db, field.id)
        if not crop:
            return {"should_switch": False, "message": "No crop found for this field."}

        recent_scores = (
            db.query(Score.weed_risk_score)
            .filter(Score.field_id == field.id, Score.crop_id == crop.id)
            .order_by(Score.created_at.desc())
            .limit(HISTORY_WINDOW)
            .all()
        )
        recent_alerts = (
            db.query(Alert)
            .filter(
                Alert.field_id == field.id,
                Alert.crop_id == crop.id,
                Alert.acknowledged.is_(False),
            )
            .order_by(Alert.created_at.desc())
            .limit(HISTORY_WINDOW)
            .all()
        )

        weed_risks = [row.weed_risk_score or 0 for row in recent_scores]
        avg_weed_risk = float(np.mean(weed_risks)) if weed_risks else 0.0
        has_high_risk_alert = any(_is_high_risk_alert(a) for a in recent_alerts)

        current_ref = db.query(CropReference).filter(CropReference.name == crop.name).first()
        current_risk = DEFAULT_RISK_LEVEL
        if current_ref is not None and current_ref.base_risk_level is not None:
            current_risk = current_ref.base_risk_level

        should_switch = (
            has_high_risk_alert
            or avg_weed_risk > HIGH_RISK_THRESHOLD
            or current_risk > HIGH_RISK_THRESHOLD
        )
        if not should_switch:
            return {"should_switch": False, "message": "Current crop is doing well."}

        candidates = (
            db.query(CropReference)
            .filter(
                CropReference.name != crop.name,
                CropReference.base_risk_level < current_risk,
            )
            .order_by(CropReference.base_risk_level.asc(), CropReference.name.asc())
            .limit(MAX_CANDIDATES)
            .all()
        )

    if not candidates:
        return {"should_switch": False, "message": "No better alternatives found at this time."}

    suggested = select_alternative(candidates, field.soil_type or "unknown")
    logger.info(
        "Switch suggested for field %s: %s -> %s", field.id, crop.name, suggested.name,
    )
    return {
        "should_switch": True,
        "current_crop": crop.name,
        "suggested_crop": suggested.name,
        "reason": switch_reason(crop.name, suggested.name, has_high_risk_alert, avg_weed_risk),
    }


# ---- comparison ----
def profit_range(base_profit: Optional[float]) -> str:
    if not base_profit:
        return "Unknown"
    low = round_half_up(base_profit * 0.8 / 1000)
    high = round_half_up(base_profit * 1.2 / 1000)
    return f"₹{low}k-{high}k"


def risk_band(base_risk: Optional[int]) -> str:
    if base_risk is None:
        return "Unknown"
    if base_risk >= HIGH_RISK_THRESHOLD:
        return "high"
    if base_risk >= MEDIUM_RISK_THRESHOLD:
        return "medium"
    return "low"


def compare_crops(db: Session, user: AuthUser, crops: List[str]) -> dict:
    if not crops:
        raise ValidationError("Crops array is required")

    lowered = [c.lower() for c in crops]
    with persistence_scope(db, "Comparison failed"):
        soil_type = farm_service.first_soil_type(db, user.id)
        refs = db.query(CropReference).filter(func.lower(CropReference.name).in_(lowered)).all()
        prices = (
            db.query(MarketPrice)
            .filter(func.lower(MarketPrice.crop_name).in_(lowered))
            .order_by(MarketPrice.date.desc())
            .all()
        )

    refs_by_name = {r.name.lower(): r for r in refs}
    latest_price = {}
    for p in prices:
        latest_price.setdefault(p.crop_name.lower(), p.price_per_quintal)

    results = []
    for name in crops:
        ref = refs_by_name.get(name.lower())
        if ref is not None and ref.soil_preference and soil_type != "unknown":
            suitability = ref.soil_preference.get(soil_type) or DEFAULT_SOIL_SUITABILITY
        else:
            suitability = DEFAULT_SOIL_SUITABILITY
        results.append({
            "name": name,
            "profit_range": profit_range(ref.base_profit_per_hectare if ref else None),
            "risk_level": risk_band(ref.base_risk_level if ref else None),
            "water_need": str(ref.water_need_level) if ref and ref.water_need_level else "Unknown",
            "soil_suitability": suitability,
            "market_price": latest_price.get(name.lower()),
        })
    return {"crops": results}
