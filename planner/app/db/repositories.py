"""Repository protocol interfaces for booking persistence."""

from typing import Protocol

from planner.app.models.booking import BookingReceipt, ItinerarySnapshot


class PersistenceGateway(Protocol):
    """Stores finished itineraries handed off at checkout."""

    def save_booking(self, snapshot: ItinerarySnapshot) -> BookingReceipt:
        """Store a finished itinerary.

        Args:
            snapshot: Frozen copy of the itinerary and its totals

        Returns:
            Receipt with the new booking id

        Raises:
            PersistenceError: If the snapshot could not be stored
        """
        ...

    def get_booking(self, booking_id: str) -> ItinerarySnapshot | None:
        """Get a stored snapshot by booking id.

        Args:
            booking_id: Id from a previous receipt

        Returns:
            Snapshot or None if not found
        """
        ...
