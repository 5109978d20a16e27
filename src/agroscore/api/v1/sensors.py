# agroscore/api/v1/sensors.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db
from agroscore.schemas import AuthUser, SensorReadingCreate, SensorReadingOut
from agroscore.services import sensor_service

router = APIRouter(prefix="/sensor-readings", tags=["sensors"])


@router.post("", response_model=SensorReadingOut, status_code=status.HTTP_201_CREATED)
def record_reading(body: SensorReadingCreate, db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return sensor_service.record_reading(db, user, body)
