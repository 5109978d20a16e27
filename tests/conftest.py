"""
Shared pytest fixtures.

Every test runs against a fresh in-memory SQLite store and signs its own
HS256 bearer tokens with the configured secret, so no external service
(PostgreSQL, Redis, identity provider) is needed.
"""

from datetime import date, datetime, timedelta, timezone

import jwt as pyjwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agroscore.core.config import settings
from agroscore.db.base import Base
from agroscore.db.session import get_db
from agroscore.main import app
from agroscore.models import Crop, CropReference, Farm, Field, MarketPrice, SensorReading
from agroscore.schemas import AuthUser

USER_ID = "user-uuid-1234"
OTHER_USER_ID = "user-uuid-9999"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


# ---------------------------------------------------------------------------
# JWT helper
# ---------------------------------------------------------------------------
def create_test_jwt(
    user_id: str = USER_ID,
    email: str | None = "farmer@example.com",
    expired: bool = False,
    secret: str | None = None,
) -> str:
    now = datetime.now(tz=timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {"sub": user_id, "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
    if email is not None:
        payload["email"] = email
    return pyjwt.encode(payload, secret or settings.AUTH_JWT_SECRET, algorithm="HS256")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user():
    return AuthUser(id=USER_ID, email="farmer@example.com")


@pytest.fixture
def auth_headers():
    return bearer(create_test_jwt())


@pytest.fixture
def other_headers():
    return bearer(create_test_jwt(user_id=OTHER_USER_ID, email="other@example.com"))


@pytest.fixture
def field_setup(db):
    """
    One farm -> field (clay) -> crop (Rice) owned by USER_ID, with a calm
    sensor reading: no weed-risk points and moisture inside the optimal band.
    """
    farm = Farm(user_id=USER_ID, name="North Farm", primary_crops=["Rice"])
    db.add(farm)
    db.flush()
    field = Field(farm_id=farm.id, name="Plot A", area_hectares=2.0, soil_type="clay")
    db.add(field)
    db.flush()
    crop = Crop(field_id=field.id, name="Rice", sowing_date=date(2024, 6, 1))
    db.add(crop)
    db.commit()
    return {"farm": farm, "field": field, "crop": crop}


@pytest.fixture
def add_reading(db):
    def _add(field_id, **values):
        values.setdefault("timestamp", datetime.now(tz=timezone.utc))
        reading = SensorReading(field_id=field_id, **values)
        db.add(reading)
        db.commit()
        return reading

    return _add


@pytest.fixture
def crop_references(db):
    refs = [
        CropReference(name="Rice", base_profit_per_hectare=60000, base_risk_level=80,
                      water_need_level="high", soil_preference={"clay": 95}),
        CropReference(name="Wheat", base_profit_per_hectare=50000, base_risk_level=30,
                      water_need_level="medium", soil_preference={"clay": 60, "loamy": 90}),
        CropReference(name="Millet", base_profit_per_hectare=30000, base_risk_level=20,
                      water_need_level="low", soil_preference={"clay": 60}),
        CropReference(name="Maize", base_profit_per_hectare=45000, base_risk_level=25,
                      water_need_level="medium", soil_preference={"clay": 90}),
        CropReference(name="Sorghum", base_profit_per_hectare=35000, base_risk_level=35,
                      water_need_level="low", soil_preference={"clay": 95}),
    ]
    db.add_all(refs)
    db.add_all([
        MarketPrice(crop_name="Wheat", price_per_quintal=2100, date=date(2024, 5, 1)),
        MarketPrice(crop_name="Wheat", price_per_quintal=2275, date=date(2024, 6, 1)),
    ])
    db.commit()
    return {r.name: r for r in refs}
