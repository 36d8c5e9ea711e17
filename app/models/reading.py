"""Reading database model."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import MeasureType

if TYPE_CHECKING:
    from app.models.customer import Customer

IMAGE_URL_TEMPLATE = "/images/{uuid}.jpeg"


def image_url_for(uuid: str) -> str:
    """Public URL of the image attached to a reading."""
    return IMAGE_URL_TEMPLATE.format(uuid=uuid)


class Reading(Base):
    """Single water or gas meter observation for a customer."""

    __tablename__ = "readings"
    __table_args__ = (
        CheckConstraint("measure_type IN ('WATER', 'GAS')", name="ck_readings_measure_type"),
        # confirmed_value is present exactly when the reading is confirmed
        CheckConstraint(
            "(confirmed = 0 AND confirmed_value IS NULL)"
            " OR (confirmed = 1 AND confirmed_value IS NOT NULL)",
            name="ck_readings_confirmed_value",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    uuid: Mapped[str] = mapped_column(String(36), unique=True, index=True)

    # Foreign keys
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        index=True,
    )

    measure_type: Mapped[MeasureType] = mapped_column(String(10), index=True)
    measure_value: Mapped[float]  # Value read by the ingestion path
    measure_datetime: Mapped[datetime] = mapped_column(index=True)

    # Confirmation state
    confirmed: Mapped[bool] = mapped_column(default=False)
    confirmed_value: Mapped[float | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    customer: Mapped["Customer"] = relationship(back_populates="readings")

    @property
    def customer_code(self) -> str:
        return self.customer.customer_code

    @property
    def image_url(self) -> str:
        return image_url_for(self.uuid)
