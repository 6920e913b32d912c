from typing import List, Optional

from app.models.slot import Slot
from app.services.base import BaseService
from app.services.slot_store import SlotStore


class AvailabilityService(BaseService):
    """Read-only slot lookups. Status is not filtered; callers tell AVAILABLE from BOOKED."""

    def __init__(self, db):
        super().__init__(db)
        self.store = SlotStore(db)

    def find_slots(self, start: int, end: int, interviewer_id: Optional[str] = None) -> List[Slot]:
        if interviewer_id:
            return self.store.find_slots_by_interviewer_and_start_range(interviewer_id, start, end)
        return self.store.find_slots_by_start_range(start, end)
