"""Seed script to create the schema and populate it with sample data."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import select

from app.core.database import SessionLocal, init_db
from app.core.logging import configure_logging
from app.models.customer import Customer
from app.models.enums import MeasureType
from app.services import reading_store

logger = logging.getLogger(__name__)


def seed_database() -> None:
    """Seed the database with a sample customer and readings."""
    init_db()
    db = SessionLocal()
    try:
        # Check if data already exists
        if db.scalars(select(Customer)).first():
            logger.info("Database already has data. Skipping seed.")
            return

        logger.info("Seeding database...")

        customer = reading_store.create_customer(
            db,
            name="Sample Customer",
            address="123 Main Street",
            customer_code="CUST-001",
        )
        logger.info("Created customer", extra={"customer_code": customer.customer_code})

        start = datetime.now(UTC) - timedelta(days=90)
        for month in range(3):
            for measure_type, value in ((MeasureType.WATER, 120.0), (MeasureType.GAS, 45.75)):
                reading = reading_store.create_reading(
                    db,
                    customer_code=customer.customer_code,
                    measure_type=measure_type,
                    measure_value=value + month * 10,
                    measure_datetime=start + timedelta(days=30 * month),
                )
                logger.info(
                    "Created reading",
                    extra={"measure_uuid": reading.uuid, "measure_type": measure_type.value},
                )

        logger.info("Seeding complete.")
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    seed_database()
