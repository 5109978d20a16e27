from agroscore.schemas.user import AuthUser
from agroscore.schemas.alert import AlertOut, AlertBrief
from agroscore.schemas.action import ActionCreate, ActionLogOut, WeedRiskOut
from agroscore.schemas.crop import CropCompareIn, CropCompareOut, SwitchSuggestionOut
from agroscore.schemas.report import MonthlyReportOut, ReportGenerateIn, ReportGenerateOut
from agroscore.schemas.dashboard import DashboardSummaryOut
from agroscore.schemas.sensor import SensorReadingCreate, SensorReadingOut
from agroscore.schemas.farm import (
    ProfileUpdate, ProfileOut, ProfileOverviewOut,
    FarmUpsert, FarmOut, FieldUpsert, FieldOut, CropUpsert, CropOut,
)
