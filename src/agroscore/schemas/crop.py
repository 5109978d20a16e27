# agroscore/schemas/crop.py
from typing import List, Optional

from pydantic import Field

from agroscore.schemas.base import CamelModel


class CropCompareIn(CamelModel):
    crops: List[str] = Field(default_factory=list)


class CropComparison(CamelModel):
    name: str
    profit_range: str
    risk_level: str
    water_need: str
    soil_suitability: float
    market_price: Optional[float] = None


class CropCompareOut(CamelModel):
    crops: List[CropComparison]


class SwitchSuggestionOut(CamelModel):
    should_switch: bool
    current_crop: Optional[str] = None
    suggested_crop: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None
