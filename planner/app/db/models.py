"""SQLAlchemy ORM models for stored bookings."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Booking(Base):
    """Booking table - itineraries handed off at checkout."""

    __tablename__ = "booking"
    __table_args__ = (Index("idx_booking_itinerary", "itinerary_id", "created_at"),)

    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    itinerary_id: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    contact_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_with_tax: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
