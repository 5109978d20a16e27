# agroscore/services/alert_generator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from agroscore.models.alert import AlertType, Severity
from agroscore.services.weed_risk import (
    HIGH_RISK_THRESHOLD,
    MEDIUM_RISK_THRESHOLD,
    WeedRiskResult,
)

WATER_STRESS_MOISTURE = 30


@dataclass(frozen=True)
class AlertDraft:
    """An alert to be appended to storage for the action being logged."""

    type: str
    severity: Severity
    message: str
    suggested_action: str
    risk_score: Optional[int] = None


def _weed_risk_alert(weed_risk: WeedRiskResult) -> Optional[AlertDraft]:
    if weed_risk.score > HIGH_RISK_THRESHOLD:
        return AlertDraft(
            type=AlertType.WEED_RISK,
            severity=Severity.HIGH,
            risk_score=weed_risk.score,
            message=weed_risk.message,
            suggested_action="Schedule weeding activity immediately",
        )
    if weed_risk.score > MEDIUM_RISK_THRESHOLD:
        return AlertDraft(
            type=AlertType.WEED_RISK,
            severity=Severity.MEDIUM,
            risk_score=weed_risk.score,
            message=weed_risk.message,
            suggested_action="Monitor field closely for weed growth",
        )
    return None


def _water_stress_alert(reading) -> Optional[AlertDraft]:
    if reading is None or reading.soil_moisture is None:
        return None
    if reading.soil_moisture >= WATER_STRESS_MOISTURE:
        return None
    return AlertDraft(
        type=AlertType.WATER_STRESS,
        severity=Severity.MEDIUM,
        message=f"Low soil moisture detected ({reading.soil_moisture:g}%) - consider irrigation",
        suggested_action="Schedule irrigation within 24 hours",
    )


def evaluate_alerts(weed_risk: WeedRiskResult, reading) -> List[AlertDraft]:
    """
    Rules are evaluated independently, so one action yields 0-2 drafts.
    Existing open alerts are not consulted.
    """
    drafts = []
    for draft in (_weed_risk_alert(weed_risk), _water_stress_alert(reading)):
        if draft is not None:
            drafts.append(draft)
    return drafts
