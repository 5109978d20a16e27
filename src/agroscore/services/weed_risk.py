# agroscore/services/weed_risk.py
"""
Weed risk estimation.

Additive point rule over environmental and behavioral inputs:

    humidity      > 80 : +30   (> 60 : +15)
    temperature   20..30 inclusive : +20
    irrigations   > 3 in 7 days : +25   (> 1 : +10)
    crop spacing  narrow : +10
    soil type     loamy : +15

The total is clamped to 0..100. Pure function of its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np

CropSpacing = Literal["narrow", "medium", "wide"]

HIGH_RISK_THRESHOLD = 70
MEDIUM_RISK_THRESHOLD = 40

# trend over the two most recent scores
TREND_DEADBAND = 5

_LEVEL_ADVICE = {
    "high": "Early weeding required.",
    "medium": "Monitor field closely.",
    "low": "Low risk currently.",
}


@dataclass(frozen=True)
class WeedRiskInput:
    humidity: float
    temperature: float
    soil_type: str
    crop_spacing: CropSpacing = "medium"
    irrigation_frequency: int = 0  # irrigation actions in the trailing 7 days


@dataclass(frozen=True)
class WeedRiskResult:
    score: int
    level: str
    message: str


def risk_level(score: float) -> str:
    if score > HIGH_RISK_THRESHOLD:
        return "high"
    if score > MEDIUM_RISK_THRESHOLD:
        return "medium"
    return "low"


def risk_message(score: int, level: str) -> str:
    return f"Weed Risk: {score}/100 ({level}) - {_LEVEL_ADVICE[level]}"


def _humidity_points(humidity: float) -> int:
    if humidity > 80:
        return 30
    if humidity > 60:
        return 15
    return 0


def _temperature_points(temperature: float) -> int:
    return 20 if 20 <= temperature <= 30 else 0


def _irrigation_points(frequency: int) -> int:
    if frequency > 3:
        return 25
    if frequency > 1:
        return 10
    return 0


def estimate_weed_risk(params: WeedRiskInput) -> WeedRiskResult:
    score = (
        _humidity_points(params.humidity)
        + _temperature_points(params.temperature)
        + _irrigation_points(params.irrigation_frequency)
        + (10 if params.crop_spacing == "narrow" else 0)
        + (15 if params.soil_type == "loamy" else 0)
    )
    score = int(np.clip(score, 0, 100))
    level = risk_level(score)
    return WeedRiskResult(score=score, level=level, message=risk_message(score, level))


def weed_risk_trend(current: Optional[float], previous: Optional[float]) -> str:
    """'increasing' / 'decreasing' when the latest score moved more than the deadband."""
    if current is None or previous is None:
        return "stable"
    if current > previous + TREND_DEADBAND:
        return "increasing"
    if current < previous - TREND_DEADBAND:
        return "decreasing"
    return "stable"
