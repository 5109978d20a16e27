# agroscore/api/v1/farms.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db
from agroscore.schemas import (
    AuthUser, CropOut, CropUpsert, FarmOut, FarmUpsert, FieldOut, FieldUpsert,
    ProfileOut, ProfileOverviewOut, ProfileUpdate,
)
from agroscore.services import farm_service

router = APIRouter(tags=["farms"])


@router.get("/profile", response_model=ProfileOverviewOut)
def get_profile_overview(db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return farm_service.profile_overview(db, user)


@router.put("/profile", response_model=ProfileOut)
def update_profile(body: ProfileUpdate, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return farm_service.update_profile(db, user, body)


@router.post("/farms", response_model=FarmOut)
def upsert_farm(body: FarmUpsert, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return farm_service.upsert_farm(db, user, body)


@router.post("/fields", response_model=FieldOut)
def upsert_field(body: FieldUpsert, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return farm_service.upsert_field(db, user, body)


@router.post("/crops", response_model=CropOut)
def upsert_crop(body: CropUpsert, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return farm_service.upsert_crop(db, user, body)
