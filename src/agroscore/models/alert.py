# agroscore/models/alert.py
import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.types import Enum as SQLEnum

from agroscore.db.base import Base
from agroscore.models._common import new_id, now_dt


class Severity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlertType:
    WEED_RISK = "weed_risk"
    WATER_STRESS = "water_stress"


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(String, primary_key=True, default=lambda: new_id("al"))
    user_id = Column(String, index=True, nullable=False)
    farm_id = Column(String, nullable=True)
    field_id = Column(String, index=True, nullable=True)
    crop_id = Column(String, index=True, nullable=True)
    action_id = Column(String, ForeignKey("actions.id", ondelete="SET NULL"), nullable=True)
    type = Column(String(32), nullable=False)
    severity = Column(
        SQLEnum(Severity, name="severity_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    risk_score = Column(Integer, nullable=True)
    message = Column(String, nullable=False)
    suggested_action = Column(String, nullable=False)
    acknowledged = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), index=True, nullable=False, default=now_dt)
