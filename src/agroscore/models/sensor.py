# agroscore/models/sensor.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, String

from agroscore.db.base import Base
from agroscore.models._common import new_id, now_dt


class SensorReading(Base):
    """Immutable once recorded."""

    __tablename__ = "sensor_readings"

    id = Column(String, primary_key=True, default=lambda: new_id("rd"))
    field_id = Column(String, ForeignKey("fields.id", ondelete="CASCADE"), index=True, nullable=False)
    timestamp = Column(DateTime(timezone=True), index=True, nullable=False, default=now_dt)
    temperature = Column(Float, nullable=True)
    humidity = Column(Float, nullable=True)
    soil_moisture = Column(Float, nullable=True)  # already on a 0-100 scale
    soil_ph = Column(Float, nullable=True)
