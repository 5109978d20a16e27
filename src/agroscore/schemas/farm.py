# agroscore/schemas/farm.py
from datetime import date, datetime
from typing import List, Optional

from agroscore.schemas.base import CamelModel


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    region: Optional[str] = None
    preferred_language: Optional[str] = None


class ProfileOut(CamelModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    region: Optional[str] = None
    preferred_language: str = "en"


class FarmUpsert(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    location_text: Optional[str] = None
    primary_crops: List[str] = []


class FieldUpsert(CamelModel):
    id: Optional[str] = None
    farm_id: Optional[str] = None
    name: Optional[str] = None
    area_hectares: Optional[float] = None
    soil_type: Optional[str] = None
    irrigation_type: Optional[str] = None


class CropUpsert(CamelModel):
    id: Optional[str] = None
    field_id: Optional[str] = None
    name: Optional[str] = None
    variety: Optional[str] = None
    sowing_date: Optional[date] = None
    expected_harvest_date: Optional[date] = None
    current_stage: Optional[str] = None


class CropOut(CamelModel):
    id: str
    field_id: str
    name: str
    variety: Optional[str] = None
    sowing_date: Optional[date] = None
    expected_harvest_date: Optional[date] = None
    current_stage: str
    created_at: datetime


class FieldOut(CamelModel):
    id: str
    farm_id: str
    name: str
    area_hectares: Optional[float] = None
    soil_type: str
    irrigation_type: str
    created_at: datetime


class FieldDetailOut(FieldOut):
    crops: List[CropOut] = []


class FarmOut(CamelModel):
    id: str
    user_id: str
    name: str
    location_text: Optional[str] = None
    primary_crops: List[str] = []
    created_at: datetime


class FarmDetailOut(FarmOut):
    fields: List[FieldDetailOut] = []


class ProfileOverviewOut(CamelModel):
    profile: ProfileOut
    farms: List[FarmDetailOut]
