"""Reading store: row-level access to customers and readings.

Every function takes the request-scoped ``Session``. Store failures are
logged, rolled back and re-raised as ``InternalError`` so callers never see
driver exceptions.
"""

import logging
import uuid as uuid_lib
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import Row, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager

from app.core.errors import InternalError, InvalidDataError, NotFoundError
from app.models.customer import Customer
from app.models.enums import MeasureType
from app.models.reading import Reading

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(db: Session, operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store failure during %s", operation, exc_info=exc)
        raise InternalError() from exc


def create_customer(db: Session, name: str, address: str, customer_code: str) -> Customer:
    """Create a customer with a unique external code."""
    customer = Customer(name=name, address=address, customer_code=customer_code)
    try:
        db.add(customer)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise InvalidDataError(f"Customer code '{customer_code}' already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store failure during create_customer", exc_info=exc)
        raise InternalError() from exc
    db.refresh(customer)
    return customer


def get_customer_by_code(db: Session, customer_code: str) -> Customer | None:
    """Look up a customer by its external code."""
    with _store_errors(db, "get_customer_by_code"):
        return db.scalars(
            select(Customer).where(Customer.customer_code == customer_code)
        ).first()


def create_reading(
    db: Session,
    customer_code: str,
    measure_type: MeasureType | str,
    measure_value: float,
    measure_datetime: datetime,
    uuid: str | None = None,
) -> Reading:
    """Record a new, unconfirmed reading for a customer.

    Raises:
        NotFoundError: if no customer has ``customer_code``.
        InvalidDataError: if the measure type is unknown or the uuid is taken.
    """
    try:
        parsed_type = (
            measure_type if isinstance(measure_type, MeasureType) else MeasureType.parse(measure_type)
        )
    except ValueError as exc:
        raise InvalidDataError("Invalid measure type") from exc

    customer = get_customer_by_code(db, customer_code)
    if customer is None:
        raise NotFoundError("Customer not found")

    reading = Reading(
        uuid=uuid or str(uuid_lib.uuid4()),
        customer_id=customer.id,
        measure_type=parsed_type.value,
        measure_value=measure_value,
        measure_datetime=measure_datetime,
        confirmed=False,
    )
    try:
        db.add(reading)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise InvalidDataError(f"Reading '{reading.uuid}' already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store failure during create_reading", exc_info=exc)
        raise InternalError() from exc
    db.refresh(reading)
    return reading


def get_reading_state(db: Session, measure_uuid: str) -> Row[tuple[bool]] | None:
    """Fetch only the ``confirmed`` flag of a reading, or None if it does not exist."""
    with _store_errors(db, "get_reading_state"):
        return db.execute(
            select(Reading.confirmed).where(Reading.uuid == measure_uuid)
        ).first()


def confirm_reading(db: Session, measure_uuid: str, confirmed_value: float) -> bool:
    """Mark a reading confirmed if, and only if, it is still unconfirmed.

    The check and the write are one conditional UPDATE, so concurrent
    confirmations of the same reading cannot both succeed.

    Returns:
        True when a row was confirmed, False when the reading is missing or
        was already confirmed.
    """
    statement = (
        update(Reading)
        .where(Reading.uuid == measure_uuid, Reading.confirmed.is_(False))
        .values(confirmed=True, confirmed_value=float(confirmed_value))
        .execution_options(synchronize_session=False)
    )
    with _store_errors(db, "confirm_reading"):
        result = db.execute(statement)
        db.commit()
    return result.rowcount == 1


def list_readings(
    db: Session,
    customer_code: str,
    measure_type: MeasureType | None = None,
) -> list[Reading]:
    """All readings of a customer, optionally restricted to one measure type."""
    query = (
        select(Reading)
        .join(Reading.customer)
        .options(contains_eager(Reading.customer))
        .where(Customer.customer_code == customer_code)
    )
    if measure_type is not None:
        query = query.where(Reading.measure_type == measure_type.value)

    with _store_errors(db, "list_readings"):
        return list(db.scalars(query.order_by(Reading.id)).all())
