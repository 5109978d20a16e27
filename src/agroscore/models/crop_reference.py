# agroscore/models/crop_reference.py
from sqlalchemy import Column, Date, Float, Integer, String

from agroscore.db.base import Base, JSONType
from agroscore.models._common import new_id


class CropReference(Base):
    """Static agronomic reference data, read-only to the engine."""

    __tablename__ = "crop_reference"

    id = Column(String, primary_key=True, default=lambda: new_id("ref"))
    name = Column(String, unique=True, nullable=False)
    base_profit_per_hectare = Column(Float, nullable=True)
    base_risk_level = Column(Integer, nullable=True)  # 0..100
    water_need_level = Column(String, nullable=True)
    soil_preference = Column(JSONType, nullable=True)  # {soil type: suitability}


class MarketPrice(Base):
    __tablename__ = "market_prices"

    id = Column(String, primary_key=True, default=lambda: new_id("mp"))
    crop_name = Column(String, index=True, nullable=False)
    price_per_quintal = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
