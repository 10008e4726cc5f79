"""SQL implementations of repository interfaces."""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from planner.app.db.models import Booking
from planner.app.models.booking import BookingReceipt, ItinerarySnapshot
from planner.app.models.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqlPersistenceGateway:
    """SQL implementation of PersistenceGateway."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save_booking(self, snapshot: ItinerarySnapshot) -> BookingReceipt:
        """Insert a booking row holding the snapshot as JSON."""
        booking = Booking(
            booking_id=uuid.uuid4(),
            itinerary_id=snapshot.itinerary_id,
            status="pending",
            contact_email=snapshot.contact.email if snapshot.contact else None,
            total_with_tax=snapshot.total_with_tax,
            data=snapshot.model_dump(mode="json"),
        )

        try:
            self._session.add(booking)
            self._session.commit()
            self._session.refresh(booking)
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Failed to store booking for {snapshot.itinerary_id}: {e}")
            raise PersistenceError(
                "Could not store the booking", itinerary_id=snapshot.itinerary_id
            ) from e

        return BookingReceipt(
            booking_id=str(booking.booking_id),
            status=booking.status,
            created_at=booking.created_at,
        )

    def get_booking(self, booking_id: str) -> ItinerarySnapshot | None:
        """Load a stored snapshot by booking id."""
        try:
            key = uuid.UUID(booking_id)
        except ValueError:
            return None

        booking = self._session.get(Booking, key)
        if booking is None:
            return None

        return ItinerarySnapshot.model_validate(booking.data)
