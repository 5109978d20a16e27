# agroscore/schemas/report.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from agroscore.models.monthly_report import RewardsTier
from agroscore.schemas.base import CamelModel

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class ReportSummary(CamelModel):
    total_actions: int
    average_soil_health: int
    average_weed_risk: int
    average_irrigation: int
    total_irrigated_area: float
    unit: str = "hectares"


class MonthlyReportOut(CamelModel):
    id: str
    user_id: str
    month: str
    summary: ReportSummary
    rewards_tier: RewardsTier
    created_at: datetime


class ReportGenerateIn(CamelModel):
    month: Optional[str] = Field(default=None, pattern=MONTH_PATTERN)
    defer: bool = False


class ReportGenerateOut(CamelModel):
    success: bool = True
    message: str
    report_id: Optional[str] = None
    report: Optional[MonthlyReportOut] = None
    task_id: Optional[str] = None
