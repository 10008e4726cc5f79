"""Tests for the daily time-slot grid."""

import pytest

from planner.app.config import Settings
from planner.app.models.errors import SlotOutOfRange
from planner.app.scheduling.slots import TimeSlotCatalog, normalize_label


class TestTimeSlotCatalog:
    """Test index <-> label lookups."""

    def test_default_grid_has_nine_hourly_slots(self, slots: TimeSlotCatalog) -> None:
        """Test the default grid runs 9:00 AM .. 5:00 PM."""
        assert slots.count() == 9
        assert slots.label_of(0) == "9:00 AM"
        assert slots.label_of(3) == "12:00 PM"
        assert slots.label_of(8) == "5:00 PM"

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_label_of_out_of_range(self, slots: TimeSlotCatalog, index: int) -> None:
        """Test indexes outside [0, count()) fail with SlotOutOfRange."""
        with pytest.raises(SlotOutOfRange):
            slots.label_of(index)

    def test_index_of_known_label(self, slots: TimeSlotCatalog) -> None:
        """Test label lookup returns the slot index."""
        assert slots.index_of("11:00 AM") == 2
        assert slots.index_of("5:00 PM") == 8

    def test_index_of_normalizes_whitespace_and_case(self, slots: TimeSlotCatalog) -> None:
        """Test labels compare after whitespace normalization."""
        assert slots.index_of("  12:00   pm ") == 3

    def test_index_of_unknown_label(self, slots: TimeSlotCatalog) -> None:
        """Test unknown labels return None instead of raising."""
        assert slots.index_of("6:00 PM") is None

    def test_end_label_of(self, slots: TimeSlotCatalog) -> None:
        """Test end labels, clamped to the last slot."""
        assert slots.end_label_of(2, 2) == "1:00 PM"
        assert slots.end_label_of(7, 1) == "5:00 PM"
        assert slots.end_label_of(8, 1) == "5:00 PM"

    def test_labels_are_read_only_tuple(self, slots: TimeSlotCatalog) -> None:
        """Test labels are exposed as an immutable tuple."""
        assert isinstance(slots.labels, tuple)
        assert len(slots.labels) == slots.count()


class TestTimeSlotCatalogConstruction:
    """Test construction guards."""

    def test_empty_labels_rejected(self) -> None:
        """Test a catalog needs at least one slot."""
        with pytest.raises(ValueError, match="at least one"):
            TimeSlotCatalog([])

    def test_duplicate_labels_rejected(self) -> None:
        """Test labels that normalize to the same value are duplicates."""
        with pytest.raises(ValueError, match="unique"):
            TimeSlotCatalog(["9:00 AM", "9:00  am"])

    def test_built_from_settings(self) -> None:
        """Test the grid follows configured labels."""
        slots = TimeSlotCatalog.from_settings(Settings(time_slot_labels=["Morning", "Afternoon"]))

        assert slots.count() == 2
        assert slots.label_of(1) == "Afternoon"


def test_normalize_label() -> None:
    """Test label normalization collapses whitespace and upper-cases."""
    assert normalize_label(" 9:00\tam ") == "9:00 AM"
