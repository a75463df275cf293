from datetime import date, datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from weather_records.core.db import get_db
from weather_records.core.state import SessionState
from weather_records.models import Base
from weather_records.main import app
from weather_records.schemas.records import DailySeries, WeatherRecord


GEOCODING_PARIS = {
    "results": [
        {
            "name": "Paris",
            "admin1": "Île-de-France",
            "country": "France",
            "latitude": 48.85341,
            "longitude": 2.3488,
        }
    ]
}

ARCHIVE_DAILY = {
    "time": ["2023-01-01", "2023-01-02", "2023-01-03"],
    "temperature_2m_max": [10.0, 12.5, 11.2],
    "temperature_2m_min": [2.1, 3.4, 1.0],
    "precipitation_sum": [0.0, 4.3, 1.25],
    "weathercode": [3, 61, 2],
}


def make_record(record_id: str = "weather_1_abc", location: str = "Paris, Île-de-France, France", **overrides) -> WeatherRecord:
    fields = dict(
        id=record_id,
        location=location,
        latitude=48.85341,
        longitude=2.3488,
        start_date=date(2023, 1, 1),
        end_date=date(2023, 1, 3),
        avg_max_temp=11.2,
        avg_min_temp=2.2,
        total_precipitation=5.5,
        daily_data=DailySeries.model_validate(ARCHIVE_DAILY),
        saved_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return WeatherRecord(**fields)


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """
    Create a SQLite async engine on a throwaway file for each test
    and create all tables.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    """
    Provide a fresh AsyncSession for each test.
    """
    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def test_app(db_session):
    """
    Return the FastAPI app with get_db overridden to use the test session
    and a clean session state.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.session = SessionState()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def geocoding_payload():
    return GEOCODING_PARIS


@pytest.fixture
def archive_daily():
    return ARCHIVE_DAILY
