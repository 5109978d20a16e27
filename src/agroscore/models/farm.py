# agroscore/models/farm.py
from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from agroscore.db.base import Base, JSONType
from agroscore.models._common import new_id, now_dt


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True)  # the authenticated user id
    email = Column(String, nullable=True)
    name = Column(String, nullable=True)
    region = Column(String, nullable=True)
    preferred_language = Column(String(8), nullable=False, default="en")
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_dt, onupdate=now_dt)


class Farm(Base):
    __tablename__ = "farms"

    id = Column(String, primary_key=True, default=lambda: new_id("fm"))
    user_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    location_text = Column(String, nullable=True)
    primary_crops = Column(JSONType, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_dt, onupdate=now_dt)

    fields = relationship("Field", back_populates="farm", order_by="Field.created_at.desc()")


class Field(Base):
    __tablename__ = "fields"

    id = Column(String, primary_key=True, default=lambda: new_id("fd"))
    farm_id = Column(String, ForeignKey("farms.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    area_hectares = Column(Float, nullable=True)
    soil_type = Column(String, nullable=False, default="unknown")
    irrigation_type = Column(String, nullable=False, default="other")
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_dt, onupdate=now_dt)

    farm = relationship("Farm", back_populates="fields")
    crops = relationship("Crop", back_populates="field", order_by="Crop.created_at.desc()")


class Crop(Base):
    __tablename__ = "crops"

    id = Column(String, primary_key=True, default=lambda: new_id("cr"))
    field_id = Column(String, ForeignKey("fields.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    variety = Column(String, nullable=True)
    sowing_date = Column(Date, nullable=True)
    expected_harvest_date = Column(Date, nullable=True)
    current_stage = Column(String, nullable=False, default="unknown")
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_dt)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_dt, onupdate=now_dt)

    field = relationship("Field", back_populates="crops")
