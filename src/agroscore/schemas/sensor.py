# agroscore/schemas/sensor.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from agroscore.schemas.base import CamelModel


class SensorReadingCreate(CamelModel):
    field_id: str
    timestamp: Optional[datetime] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = Field(default=None, ge=0, le=100)
    soil_moisture: Optional[float] = Field(default=None, ge=0)
    soil_ph: Optional[float] = Field(default=None, ge=0, le=14)


class SensorReadingOut(SensorReadingCreate):
    id: str
    timestamp: datetime
