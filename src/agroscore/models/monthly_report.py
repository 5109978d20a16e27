# agroscore/models/monthly_report.py
import enum

from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlalchemy.types import Enum as SQLEnum

from agroscore.db.base import Base, JSONType
from agroscore.models._common import new_id, now_dt


class RewardsTier(str, enum.Enum):
    NONE = "none"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class MonthlyReport(Base):
    __tablename__ = "monthly_reports"

    id = Column(String, primary_key=True, default=lambda: new_id("rep"))
    user_id = Column(String, index=True, nullable=False)
    month = Column(String(7), nullable=False)  # YYYY-MM
    summary = Column(JSONType, nullable=False)
    rewards_tier = Column(
        SQLEnum(RewardsTier, name="rewards_tier_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)

    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uq_report_user_month"),
    )
