"""
Staff Shift Roster

In-memory roster backing the shift-time editor. Only shift start and
end can be edited; name and role are read-only here.
"""

import logging
from dataclasses import dataclass, asdict, replace
from functools import lru_cache
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaffMember:
    """A staff member and their scheduled shift ("HH:MM", 24h)."""
    id: str
    name: str
    role: str
    shift_start: str
    shift_end: str

    def to_dict(self) -> dict:
        return asdict(self)


class StaffNotFoundError(LookupError):
    """Raised when a staff id is not on the roster."""

    def __init__(self, staff_id: str):
        super().__init__(f"Staff member {staff_id} not found")
        self.staff_id = staff_id


SAMPLE_STAFF: List[dict] = [
    {"id": "4", "name": "Lisa Marie", "role": "Waiter", "shift_start": "11:00", "shift_end": "19:00"},
    {"id": "5", "name": "Thomas James", "role": "Bartender", "shift_start": "16:00", "shift_end": "24:00"},
    {"id": "6", "name": "Emma Grace", "role": "Host", "shift_start": "17:00", "shift_end": "23:00"},
]


class StaffRoster:
    """Staff members keyed by id, in roster order."""

    def __init__(self, members: Iterable[StaffMember]):
        self._members: Dict[str, StaffMember] = {member.id: member for member in members}

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "StaffRoster":
        return cls(StaffMember(**record) for record in records)

    def list_staff(self) -> List[StaffMember]:
        return list(self._members.values())

    def get(self, staff_id: str) -> StaffMember:
        try:
            return self._members[staff_id]
        except KeyError:
            raise StaffNotFoundError(staff_id) from None

    def update_shift_time(self, staff_id: str, shift_start: str, shift_end: str) -> StaffMember:
        """
        Replace a member's shift times.

        Times are expected pre-validated as "HH:MM". A shift may run past
        midnight, so end is not required to be after start.
        """
        updated = replace(self.get(staff_id), shift_start=shift_start, shift_end=shift_end)
        self._members[staff_id] = updated
        logger.info(f"Shift for {updated.name} set to {shift_start}-{shift_end}")
        return updated


@lru_cache()
def get_staff_roster() -> StaffRoster:
    """Get the shared roster seeded with sample staff."""
    return StaffRoster.from_records(SAMPLE_STAFF)
