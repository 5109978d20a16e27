# agroscore/services/report_task.py
from agroscore.core.celery_app import celery
from agroscore.core.errors import PersistenceError
from agroscore.db.session import SessionLocal
from agroscore.services import report_service


@celery.task(
    name="agroscore.services.report_task.generate_report_task",
    bind=True,
    autoretry_for=(PersistenceError,),
    retry_backoff=True,
    max_retries=3,
    time_limit=120,
)
def generate_report_task(self, user_id: str, month: str) -> dict:
    """
    Forced regeneration off the request path. Routed to the reports queue;
    run that queue with concurrency 1 to serialize generation per (user, month).
    """
    db = SessionLocal()
    try:
        report = report_service.generate_report(db, user_id, month)
        return {"status": "ok", "report_id": report.id, "rewards_tier": report.rewards_tier.value}
    finally:
        db.close()
