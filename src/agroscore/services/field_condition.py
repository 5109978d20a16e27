# agroscore/services/field_condition.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from agroscore.models.action import ActionType

DEFAULT_SCORE = 75

OPTIMAL_PH_MIN = 6.0
OPTIMAL_PH_MAX = 7.5
NEUTRAL_PH = 7.0


@dataclass(frozen=True)
class FieldConditionScores:
    soil_health: int
    irrigation: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_score(value: float) -> int:
    return int(np.clip(round_half_up(value), 0, 100))


def moisture_score(soil_moisture: Optional[float]) -> float:
    if soil_moisture is None:
        return DEFAULT_SCORE
    return min(100.0, soil_moisture)


def ph_score(soil_ph: Optional[float]) -> float:
    if soil_ph is None:
        return DEFAULT_SCORE
    if OPTIMAL_PH_MIN <= soil_ph <= OPTIMAL_PH_MAX:
        return 100.0
    return max(50.0, 100.0 - abs(NEUTRAL_PH - soil_ph) * 20)


def _after_irrigation(moisture: float) -> int:
    # watering a dry field is efficient, watering a wet one less so
    return 90 if moisture < 40 else 70


def _without_irrigation(moisture: float) -> int:
    return 85 if 40 <= moisture <= 80 else 65


IRRIGATION_RULES: Dict[ActionType, Callable[[float], int]] = {
    ActionType.IRRIGATION: _after_irrigation,
    ActionType.FERTILIZATION: _without_irrigation,
    ActionType.WEEDING: _without_irrigation,
    ActionType.PESTICIDE: _without_irrigation,
    ActionType.SCOUTING: _without_irrigation,
}


def score_field_condition(reading, action_type: ActionType) -> FieldConditionScores:
    """
    Soil-health and irrigation-efficiency scores for a logged action.

    ``reading`` is the latest SensorReading of the field (or None); only its
    ``soil_moisture`` and ``soil_ph`` attributes are read.
    """
    if reading is None:
        return FieldConditionScores(soil_health=DEFAULT_SCORE, irrigation=DEFAULT_SCORE)

    soil_health = _clamp_score(
        (moisture_score(reading.soil_moisture) + ph_score(reading.soil_ph)) / 2
    )

    if reading.soil_moisture is None:
        irrigation = DEFAULT_SCORE
    else:
        irrigation = IRRIGATION_RULES[ActionType(action_type)](reading.soil_moisture)

    return FieldConditionScores(soil_health=soil_health, irrigation=irrigation)
