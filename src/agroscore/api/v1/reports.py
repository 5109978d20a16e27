# agroscore/api/v1/reports.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agroscore.core.security import get_current_user
from agroscore.db.session import get_db
from agroscore.schemas import AuthUser, MonthlyReportOut, ReportGenerateIn, ReportGenerateOut
from agroscore.schemas.report import MONTH_PATTERN
from agroscore.services import report_service
from agroscore.services.report_task import generate_report_task

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=MonthlyReportOut)
def get_monthly_report(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    return report_service.get_monthly_report(db, user.id, month)


@router.post("/generate", response_model=ReportGenerateOut, response_model_exclude_none=True)
def generate_report(
    body: Optional[ReportGenerateIn] = None,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    body = body or ReportGenerateIn()
    month = body.month or report_service.current_month()

    if body.defer:
        async_result = generate_report_task.delay(user_id=user.id, month=month)
        return {"success": True, "message": "Report generation queued", "task_id": async_result.id}

    report = report_service.generate_report(db, user.id, month)
    return {
        "success": True,
        "message": "Report generated successfully",
        "report_id": report.id,
        "report": report,
    }
