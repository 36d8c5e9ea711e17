"""Shared fixtures: every test runs against a fresh SQLite file."""

import os
import tempfile
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

# Must be set before the application modules create the engine
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="meter-readings-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'test.db'}"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.database import Base, SessionLocal, engine, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.customer import Customer  # noqa: E402
from app.models.enums import MeasureType  # noqa: E402
from app.models.reading import Reading  # noqa: E402
from app.services import reading_store  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    """Recreate the schema around each test."""
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client with proper lifespan handling."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def customer(db: Session) -> Customer:
    return reading_store.create_customer(
        db, name="Jane Doe", address="1 Reservoir Road", customer_code="CUST-1"
    )


@pytest.fixture
def make_reading(db: Session, customer: Customer):
    """Factory for unconfirmed readings belonging to ``customer``."""

    def _make(
        measure_type: MeasureType = MeasureType.WATER,
        measure_value: float = 100,
        measure_datetime: datetime = datetime(2024, 1, 15, 10, 0, 0),
        customer_code: str | None = None,
    ) -> Reading:
        return reading_store.create_reading(
            db,
            customer_code=customer_code or customer.customer_code,
            measure_type=measure_type,
            measure_value=measure_value,
            measure_datetime=measure_datetime,
        )

    return _make
