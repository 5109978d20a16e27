# agroscore/schemas/dashboard.py
from typing import List

from agroscore.schemas.alert import AlertBrief
from agroscore.schemas.base import CamelModel


class WeatherOut(CamelModel):
    temp: float
    humidity: float
    condition: str
    forecast: str


class SoilMoodOut(CamelModel):
    label: str
    icon: str
    color: str


class DashboardScores(CamelModel):
    soil_health: int
    irrigation: int
    weed_risk: int


class DashboardSummaryOut(CamelModel):
    weather: WeatherOut
    soil_mood: SoilMoodOut
    action_count: int
    scores: DashboardScores
    alerts: List[AlertBrief]
