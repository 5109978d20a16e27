# agroscore/api/v1/crops.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db
from agroscore.schemas import AuthUser, CropCompareIn, CropCompareOut, SwitchSuggestionOut
from agroscore.services import crop_advisor

router = APIRouter(prefix="/crops", tags=["crops"])


@router.post("/compare", response_model=CropCompareOut)
def compare_crops(body: CropCompareIn, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return crop_advisor.compare_crops(db, user, body.crops)


@router.get(
    "/switch-suggestion",
    response_model=SwitchSuggestionOut,
    response_model_exclude_none=True,
)
def get_switch_suggestion(
    field_id: Optional[str] = Query(None, alias="fieldId"),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    return crop_advisor.suggest_switch(db, user, field_id)
