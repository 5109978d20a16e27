# agroscore/models/action.py
import enum

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.types import Enum as SQLEnum
from sqlalchemy.orm import relationship

from agroscore.db.base import Base
from agroscore.models._common import new_id, now_dt


class ActionType(str, enum.Enum):
    IRRIGATION = "irrigation"
    FERTILIZATION = "fertilization"
    WEEDING = "weeding"
    PESTICIDE = "pesticide"
    SCOUTING = "scouting"


class Action(Base):
    __tablename__ = "actions"

    id = Column(String, primary_key=True, default=lambda: new_id("act"))
    user_id = Column(String, index=True, nullable=False)
    farm_id = Column(String, ForeignKey("farms.id", ondelete="SET NULL"), nullable=True)
    field_id = Column(String, ForeignKey("fields.id", ondelete="SET NULL"), nullable=True)
    crop_id = Column(String, ForeignKey("crops.id", ondelete="SET NULL"), nullable=True)
    action_type = Column(
        SQLEnum(ActionType, name="action_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    action_timestamp = Column(DateTime(timezone=True), index=True, nullable=False, default=now_dt)
    quantity = Column(Float, nullable=True)
    unit = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)

    score = relationship("Score", back_populates="action", uselist=False)


class Score(Base):
    """Derived per-action record; one per Action, never mutated."""

    __tablename__ = "scores"

    id = Column(String, primary_key=True, default=lambda: new_id("sc"))
    user_id = Column(String, index=True, nullable=False)
    farm_id = Column(String, nullable=True)
    field_id = Column(String, index=True, nullable=True)
    crop_id = Column(String, index=True, nullable=True)
    action_id = Column(String, ForeignKey("actions.id", ondelete="CASCADE"), unique=True, nullable=False)
    date = Column(Date, index=True, nullable=False)
    soil_health_score = Column(Integer, nullable=False)
    irrigation_score = Column(Integer, nullable=False)
    weed_risk_score = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)

    action = relationship("Action", back_populates="score")
