"""In-memory implementations of repository interfaces."""

import uuid
from datetime import datetime

from planner.app.models.booking import BookingReceipt, ItinerarySnapshot


class InMemoryPersistenceGateway:
    """In-memory implementation of PersistenceGateway."""

    def __init__(self) -> None:
        self._bookings: dict[str, tuple[BookingReceipt, ItinerarySnapshot]] = {}

    def save_booking(self, snapshot: ItinerarySnapshot) -> BookingReceipt:
        """Store a snapshot copy and issue a receipt."""
        receipt = BookingReceipt(booking_id=str(uuid.uuid4()), created_at=datetime.now())
        self._bookings[receipt.booking_id] = (receipt, snapshot.model_copy(deep=True))
        return receipt

    def get_booking(self, booking_id: str) -> ItinerarySnapshot | None:
        """Get a stored snapshot by booking id."""
        data = self._bookings.get(booking_id)
        if data is None:
            return None
        return data[1]

    def __len__(self) -> int:
        return len(self._bookings)
