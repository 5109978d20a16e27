# agroscore/schemas/alert.py
from datetime import datetime
from typing import Optional

from agroscore.models.alert import Severity
from agroscore.schemas.base import CamelModel


class AlertOut(CamelModel):
    id: str
    type: str
    severity: Severity
    message: str
    suggested_action: str
    risk_score: Optional[int] = None
    field_id: Optional[str] = None
    crop_id: Optional[str] = None
    acknowledged: bool = False
    created_at: datetime


class AlertBrief(CamelModel):
    id: str
    type: str
    severity: Severity
    message: str
    created_at: datetime
