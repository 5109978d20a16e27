from agroscore.models.farm import Profile, Farm, Field, Crop
from agroscore.models.sensor import SensorReading
from agroscore.models.action import Action, ActionType, Score
from agroscore.models.alert import Alert, AlertType, Severity
from agroscore.models.crop_reference import CropReference, MarketPrice
from agroscore.models.monthly_report import MonthlyReport, RewardsTier

__all__ = [
    "Profile", "Farm", "Field", "Crop",
    "SensorReading",
    "Action", "ActionType", "Score",
    "Alert", "AlertType", "Severity",
    "CropReference", "MarketPrice",
    "MonthlyReport", "RewardsTier",
]
