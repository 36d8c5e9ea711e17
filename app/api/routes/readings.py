"""Reading routes for confirmation and listing."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.reading import (
    ConfirmRequest,
    ConfirmResponse,
    ErrorResponse,
    MeasureListResponse,
)
from app.services import reading as reading_service

router = APIRouter(tags=["readings"])


@router.patch(
    "/confirm",
    response_model=ConfirmResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def confirm_reading(
    confirm_data: ConfirmRequest,
    db: Session = Depends(get_db),
) -> ConfirmResponse:
    """Confirm the value of a reading. A reading can only be confirmed once."""
    reading_service.confirm_measure(db, confirm_data)
    return ConfirmResponse()


@router.get(
    "/{customer_code}/list",
    response_model=MeasureListResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def list_readings(
    customer_code: str,
    measure_type: str | None = Query(None, description="WATER or GAS, case-insensitive"),
    db: Session = Depends(get_db),
) -> MeasureListResponse:
    """List every reading of a customer, optionally filtered by measure type."""
    return reading_service.list_measures(db, customer_code, measure_type)
