# agroscore/schemas/action.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from agroscore.models.action import ActionType
from agroscore.schemas.alert import AlertOut
from agroscore.schemas.base import CamelModel


class ActionCreate(CamelModel):
    action_type: ActionType
    farm_id: Optional[str] = None
    field_id: Optional[str] = None
    crop_id: Optional[str] = None
    action_timestamp: Optional[datetime] = None
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=4000)
    crop_spacing: Literal["narrow", "medium", "wide"] = "medium"


class WeedRiskBrief(CamelModel):
    score: int
    level: str


class ActionScoresOut(CamelModel):
    soil_health: int
    irrigation: int
    weed_risk: WeedRiskBrief


class ActionLogOut(CamelModel):
    success: bool = True
    action_id: str
    scores: ActionScoresOut
    alerts: List[AlertOut]


class WeedRiskOut(CamelModel):
    current_score: int
    level: str
    trend: Literal["increasing", "decreasing", "stable"]
    last_updated: datetime
