from fastapi import APIRouter

from agroscore.api.v1.actions import router as actions_router
from agroscore.api.v1.alerts import router as alerts_router
from agroscore.api.v1.crops import router as crops_router
from agroscore.api.v1.dashboard import router as dashboard_router
from agroscore.api.v1.farms import router as farms_router
from agroscore.api.v1.health import router as health_router
from agroscore.api.v1.reports import router as reports_router
from agroscore.api.v1.sensors import router as sensors_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(farms_router)
api_router.include_router(sensors_router)
api_router.include_router(actions_router)
api_router.include_router(alerts_router)
api_router.include_router(crops_router)
api_router.include_router(reports_router)
api_router.include_router(dashboard_router)
