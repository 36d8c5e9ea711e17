"""Reading service for the confirm and list workflows."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import AlreadyConfirmedError, InvalidDataError, NotFoundError
from app.models.enums import MeasureType
from app.schemas.reading import ConfirmRequest, MeasureListResponse, MeasureResponse
from app.services import reading_store

logger = logging.getLogger(__name__)


def confirm_measure(db: Session, confirm_data: ConfirmRequest) -> None:
    """Attach a confirmed value to a reading exactly once.

    Raises:
        NotFoundError: if no reading has ``measure_uuid``.
        AlreadyConfirmedError: if the reading was confirmed before.
    """
    measure_uuid = confirm_data.measure_uuid
    if reading_store.confirm_reading(db, measure_uuid, confirm_data.confirmed_value):
        logger.info("Reading confirmed", extra={"measure_uuid": measure_uuid})
        return

    # Nothing was updated: tell a missing reading apart from a replay
    state = reading_store.get_reading_state(db, measure_uuid)
    if state is None:
        logger.warning("Confirmation for unknown reading", extra={"measure_uuid": measure_uuid})
        raise NotFoundError()

    logger.warning("Reading already confirmed", extra={"measure_uuid": measure_uuid})
    raise AlreadyConfirmedError()


def list_measures(
    db: Session,
    customer_code: str,
    measure_type: str | None = None,
) -> MeasureListResponse:
    """List a customer's readings, optionally filtered by measure type.

    The type filter is case-insensitive. An empty result is reported as
    ``NotFoundError`` whether or not the customer exists.
    """
    parsed_type: MeasureType | None = None
    if measure_type:
        try:
            parsed_type = MeasureType.parse(measure_type)
        except ValueError as exc:
            raise InvalidDataError("Invalid measure type") from exc

    readings = reading_store.list_readings(db, customer_code, parsed_type)
    if not readings:
        logger.info(
            "No readings found",
            extra={"customer_code": customer_code, "measure_type": measure_type},
        )
        raise NotFoundError("No readings found")

    return MeasureListResponse(
        customer_code=customer_code,
        measures=[
            MeasureResponse(
                measure_uuid=r.uuid,
                measure_datetime=r.measure_datetime,
                measure_type=MeasureType(r.measure_type),
                has_confirmed=r.confirmed,
                image_url=r.image_url,
            )
            for r in readings
        ],
    )
