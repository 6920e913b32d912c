"""
Durable store for interviewers and slots.

Every method runs inside the caller's session transaction; nothing here
commits. The one operation with a concurrency contract is
``conditional_update_slot``: it is a single UPDATE guarded by the expected
status, so of any number of concurrent callers exactly one sees the row
change.
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.interviewer import Interviewer
from app.models.slot import Slot, SlotStatus


class SlotStore:
    def __init__(self, db: Session):
        self.db = db

    # --- Interviewers ---

    def get_interviewer(self, interviewer_id: str) -> Optional[Interviewer]:
        return self.db.get(Interviewer, interviewer_id)

    def save_interviewer(self, interviewer: Interviewer) -> Interviewer:
        """Upsert by id."""
        if interviewer.id is not None and interviewer not in self.db:
            interviewer = self.db.merge(interviewer)
        else:
            self.db.add(interviewer)
        self.db.flush()
        return interviewer

    # --- Slots ---

    def get_slot(self, slot_id: str) -> Optional[Slot]:
        return self.db.get(Slot, slot_id)

    def save_slots_batch(self, slots: Iterable[Slot]) -> None:
        self.db.add_all(list(slots))
        self.db.flush()

    def save_slot(self, slot: Slot) -> Slot:
        """Unconditional overwrite; the mapper's version column still guards the row."""
        self.db.add(slot)
        self.db.flush()
        return slot

    def find_slots_by_start_range(self, start: int, end: int) -> List[Slot]:
        stmt = select(Slot).where(Slot.start_time >= start, Slot.start_time < end)
        return list(self.db.scalars(stmt).all())

    def find_slots_by_interviewer_and_start_range(self, interviewer_id: str, start: int, end: int) -> List[Slot]:
        stmt = select(Slot).where(
            Slot.interviewer_id == interviewer_id,
            Slot.start_time >= start,
            Slot.start_time < end,
        )
        return list(self.db.scalars(stmt).all())

    def find_slots_overlapping(self, interviewer_id: str, start: int, end: int) -> List[Slot]:
        """Slots of the interviewer whose [start_time, end_time) intersects [start, end)."""
        stmt = select(Slot).where(
            Slot.interviewer_id == interviewer_id,
            Slot.start_time < end,
            Slot.end_time > start,
        )
        return list(self.db.scalars(stmt).all())

    def conditional_update_slot(
        self,
        slot_id: str,
        expected_status: SlotStatus,
        new_fields: Dict[str, Any],
    ) -> Optional[Slot]:
        """
        Apply ``new_fields`` only if the stored status equals ``expected_status``.
        Returns the post-update slot, or None when the condition did not match.
        """
        stmt = (
            update(Slot)
            .where(Slot.id == slot_id, Slot.status == expected_status)
            .values(version=Slot.version + 1, **new_fields)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount == 0:
            return None

        # Overwrite any stale copy already sitting in the identity map
        refreshed = select(Slot).where(Slot.id == slot_id).execution_options(populate_existing=True)
        return self.db.scalars(refreshed).one()
