# agroscore/services/farm_service.py
"""Profile and the farm -> field -> crop ownership chain."""

import logging
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from agroscore.core.errors import NotFoundError, ValidationError
from agroscore.db.session import persistence_scope
from agroscore.models import Crop, Farm, Field, Profile
from agroscore.schemas import AuthUser, CropUpsert, FarmUpsert, FieldUpsert, ProfileUpdate

logger = logging.getLogger(__name__)


# ---- ownership checks ----
def get_owned_farm(db: Session, user_id: str, farm_id: str) -> Farm:
    farm = db.query(Farm).filter(Farm.id == farm_id, Farm.user_id == user_id).first()
    if not farm:
        logger.warning("Farm %s denied for user %s", farm_id, user_id)
        raise NotFoundError("Farm not found or access denied")
    return farm


def get_owned_field(db: Session, user_id: str, field_id: str) -> Field:
    field = (
        db.query(Field)
        .join(Farm, Field.farm_id == Farm.id)
        .filter(Field.id == field_id, Farm.user_id == user_id)
        .first()
    )
    if not field:
        logger.warning("Field %s denied for user %s", field_id, user_id)
        raise NotFoundError("Field not found or access denied")
    return field


def get_owned_crop(db: Session, user_id: str, crop_id: str) -> Crop:
    crop = (
        db.query(Crop)
        .join(Field, Crop.field_id == Field.id)
        .join(Farm, Field.farm_id == Farm.id)
        .filter(Crop.id == crop_id, Farm.user_id == user_id)
        .first()
    )
    if not crop:
        logger.warning("Crop %s denied for user %s", crop_id, user_id)
        raise NotFoundError("Crop not found or access denied")
    return crop


def first_soil_type(db: Session, user_id: str) -> str:
    """Soil type of the caller's first field, 'unknown' without fields."""
    field = (
        db.query(Field)
        .join(Farm, Field.farm_id == Farm.id)
        .filter(Farm.user_id == user_id)
        .order_by(Field.created_at)
        .first()
    )
    return field.soil_type if field and field.soil_type else "unknown"


# ---- profile ----
def get_or_create_profile(db: Session, user: AuthUser) -> Profile:
    with persistence_scope(db, "Failed to fetch profile"):
        profile = db.get(Profile, user.id)
        if profile:
            return profile
        local_part = (user.email or "").split("@")[0]
        profile = Profile(
            id=user.id,
            email=user.email,
            name=local_part or "Farmer",
            region=None,
            preferred_language="en",
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info("Created profile for user %s", user.id)
        return profile


def profile_overview(db: Session, user: AuthUser) -> dict:
    profile = get_or_create_profile(db, user)
    with persistence_scope(db, "Failed to fetch farms"):
        farms = (
            db.query(Farm)
            .options(selectinload(Farm.fields).selectinload(Field.crops))
            .filter(Farm.user_id == user.id)
            .order_by(Farm.created_at.desc())
            .all()
        )
    return {"profile": profile, "farms": farms}


def update_profile(db: Session, user: AuthUser, body: ProfileUpdate) -> Profile:
    profile = get_or_create_profile(db, user)
    with persistence_scope(db, "Failed to update profile"):
        if body.name is not None:
            profile.name = body.name
        if body.region is not None:
            profile.region = body.region
        profile.preferred_language = body.preferred_language or "en"
        db.commit()
        db.refresh(profile)
        return profile


# ---- upserts ----
def upsert_farm(db: Session, user: AuthUser, body: FarmUpsert) -> Farm:
    if not body.name:
        raise ValidationError("Farm name is required")

    with persistence_scope(db, "Failed to save farm"):
        if body.id:
            farm = get_owned_farm(db, user.id, body.id)
        else:
            farm = Farm(user_id=user.id)
            db.add(farm)
        farm.name = body.name
        farm.location_text = body.location_text or None
        farm.primary_crops = list(body.primary_crops or [])
        db.commit()
        db.refresh(farm)
        return farm


def upsert_field(db: Session, user: AuthUser, body: FieldUpsert) -> Field:
    if not body.name or not body.farm_id:
        raise ValidationError("Field name and farm_id are required")

    with persistence_scope(db, "Failed to save field"):
        get_owned_farm(db, user.id, body.farm_id)
        if body.id:
            field = get_owned_field(db, user.id, body.id)
        else:
            field = Field(farm_id=body.farm_id)
            db.add(field)
        field.name = body.name
        field.area_hectares = body.area_hectares
        field.soil_type = body.soil_type or "unknown"
        field.irrigation_type = body.irrigation_type or "other"
        db.commit()
        db.refresh(field)
        return field


def upsert_crop(db: Session, user: AuthUser, body: CropUpsert) -> Crop:
    if not body.name or not body.field_id:
        raise ValidationError("Crop name and field_id are required")

    with persistence_scope(db, "Failed to save crop"):
        get_owned_field(db, user.id, body.field_id)
        if body.id:
            crop = get_owned_crop(db, user.id, body.id)
        else:
            crop = Crop(field_id=body.field_id)
            db.add(crop)
        crop.name = body.name
        crop.variety = body.variety or None
        crop.sowing_date = body.sowing_date
        crop.expected_harvest_date = body.expected_harvest_date
        crop.current_stage = body.current_stage or "unknown"
        db.commit()
        db.refresh(crop)
        return crop


def latest_crop(db: Session, field_id: str) -> Optional[Crop]:
    return (
        db.query(Crop)
        .filter(Crop.field_id == field_id)
        .order_by(Crop.created_at.desc())
        .first()
    )
