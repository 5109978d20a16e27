# agroscore/core/config.py
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from agroscore import __version__


class Settings(BaseSettings):
    # ===== service =====
    PROJECT_NAME: str = "AgroScore API"
    API_V1_STR: str = "/api/v1"
    API_VERSION: str = __version__
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    # ===== DB =====
    DATABASE_URL: str = Field(default="sqlite:///./agroscore.db", alias="DATABASE_URL")

    # ===== Celery/Redis =====
    CELERY_BROKER_URL: str = Field(default="redis://redis:6379/0", alias="CELERY_BROKER_URL")
    CELERY_RESULT_BACKEND: str = Field(default="redis://redis:6379/0", alias="CELERY_RESULT_BACKEND")
    REPORTS_QUEUE: str = "reports"

    # ===== auth (bearer JWT issued by the identity provider) =====
    AUTH_JWT_SECRET: str = "agroscore-development-secret-change-me-0001"
    AUTH_JWT_ALGORITHMS: List[str] = ["HS256"]
    AUTH_JWT_AUDIENCE: Optional[str] = None

    # ===== engine =====
    # "global" keeps the broad latest-reading queries of the dashboard,
    # "user" restricts them to readings of the caller's own fields
    SENSOR_SCOPE: Literal["global", "user"] = "global"
    HECTARE_UNITS: List[str] = ["hectares", "ha"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )


settings = Settings()
