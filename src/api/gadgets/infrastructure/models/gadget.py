"""SQLAlchemy ORM model for the gadgets table."""

from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from gadgets.domain.value_objects import GadgetStatus
from infrastructure.database.models import Base, TimestampMixin


class GadgetModel(Base, TimestampMixin):
    """ORM model for the gadgets table.

    Status is stored as a native enum whose labels are the status values
    ("Available", "Deployed", ...).
    """

    __tablename__ = "gadgets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    codename: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    status: Mapped[GadgetStatus] = mapped_column(
        Enum(
            GadgetStatus,
            name="gadget_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=GadgetStatus.AVAILABLE,
        index=True,
    )
    decommissioned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GadgetModel(id={self.id}, codename={self.codename}, "
            f"status={self.status})>"
        )
