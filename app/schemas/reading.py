"""Reading Pydantic schemas for request/response validation."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import AllowInfNan, BaseModel, StrictFloat, StrictInt, StrictStr

from app.models.enums import MeasureType


class ConfirmRequest(BaseModel):
    """Body of a confirmation request."""

    measure_uuid: StrictStr
    confirmed_value: StrictInt | Annotated[StrictFloat, AllowInfNan(False)]


class ConfirmResponse(BaseModel):
    """Acknowledgement of a successful confirmation."""

    message: Literal["OK"] = "OK"


class MeasureResponse(BaseModel):
    """Schema for a single reading in a customer listing."""

    measure_uuid: str
    measure_datetime: datetime
    measure_type: MeasureType
    has_confirmed: bool
    image_url: str


class MeasureListResponse(BaseModel):
    """All readings of a customer, optionally filtered by type."""

    customer_code: str
    measures: list[MeasureResponse]


class ErrorResponse(BaseModel):
    """Uniform error body."""

    error_code: str
    error_description: str
