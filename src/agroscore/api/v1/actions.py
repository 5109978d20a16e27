# agroscore/api/v1/actions.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db
from agroscore.schemas import ActionCreate, ActionLogOut, AuthUser, WeedRiskOut
from agroscore.services import action_service

router = APIRouter(tags=["actions"])


@router.post("/actions", response_model=ActionLogOut, status_code=status.HTTP_201_CREATED)
def log_action(
    body: ActionCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    return action_service.log_action(db, user, body)


@router.get("/weed-risk", response_model=WeedRiskOut)
def get_weed_risk(db: Session = Depends(get_db), user: AuthUser = Depends(get_current_user)):
    return action_service.get_weed_risk(db, user)
