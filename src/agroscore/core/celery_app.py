# agroscore/core/celery_app.py
from celery import Celery

from agroscore.core.config import settings

celery = Celery("agroscore", broker=settings.CELERY_BROKER_URL, backend=settings.CELERY_RESULT_BACKEND)
celery.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    worker_max_tasks_per_child=100,
    task_acks_late=True,
    broker_transport_options={"visibility_timeout": 3600},
    task_routes={
        "agroscore.services.report_task.generate_report_task": {"queue": settings.REPORTS_QUEUE},
    },
    imports=("agroscore.services.report_task",),
)
