"""Fixed daily time-slot grid shared by all days."""

import re
from collections.abc import Sequence

from planner.app.config import Settings, get_settings
from planner.app.models.errors import SlotOutOfRange

_WHITESPACE = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Standardize a slot label ("9:00  am " -> "9:00 AM")."""
    return _WHITESPACE.sub(" ", label).strip().upper()


class TimeSlotCatalog:
    """Ordered, immutable index <-> label lookup for the daily grid."""

    def __init__(self, labels: Sequence[str]) -> None:
        if not labels:
            raise ValueError("time slot catalog needs at least one label")

        normalized = [normalize_label(label) for label in labels]
        if len(set(normalized)) != len(normalized):
            raise ValueError("time slot labels must be unique")

        self._labels: tuple[str, ...] = tuple(_WHITESPACE.sub(" ", label).strip() for label in labels)
        self._index = {label: i for i, label in enumerate(normalized)}

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TimeSlotCatalog":
        """Build the catalog from configured labels."""
        resolved = settings or get_settings()
        return cls(resolved.time_slot_labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def count(self) -> int:
        """Number of slots per day."""
        return len(self._labels)

    def contains(self, index: int) -> bool:
        """Whether index addresses a slot."""
        return 0 <= index < len(self._labels)

    def label_of(self, index: int) -> str:
        """Display label of a slot.

        Raises:
            SlotOutOfRange: If index is outside [0, count())
        """
        if not self.contains(index):
            raise SlotOutOfRange(
                f"Slot index {index} is outside 0..{len(self._labels) - 1}",
                slot_index=index,
                slot_count=len(self._labels),
            )
        return self._labels[index]

    def index_of(self, label: str) -> int | None:
        """Index of a label, or None when the label is unknown."""
        return self._index.get(normalize_label(label))

    def end_label_of(self, start: int, duration: int) -> str:
        """Label where a range ends, clamped to the last slot for display."""
        end = start + duration
        if end >= len(self._labels):
            return self._labels[-1]
        return self.label_of(end)
