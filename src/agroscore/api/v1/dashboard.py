# agroscore/api/v1/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db
from agroscore.schemas import AuthUser, DashboardSummaryOut
from agroscore.services import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummaryOut)
def get_dashboard_summary(db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return dashboard_service.compose_summary(db, user)
