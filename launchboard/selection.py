"""Selected-launch tracking, resolved against the full (unfiltered) set."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from launchboard.models import LaunchRecord


@dataclass(frozen=True)
class SelectionStore:
    flight_number: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.flight_number is not None

    def select(self, flight_number: int) -> "SelectionStore":
        # No deselect: a new selection simply replaces the old one.
        return SelectionStore(flight_number=flight_number)

    def resolve(self, launches: Iterable[LaunchRecord]) -> Optional[LaunchRecord]:
        """First record with the selected flight_number, else None."""
        if self.flight_number is None:
            return None
        return next((r for r in launches if r.flight_number == self.flight_number), None)
