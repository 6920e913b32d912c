"""
Booking transactor: AVAILABLE -> BOOKED.

Steps 1-3 (load slot, load interviewer, quota check) are advisory reads.
Only the final status-guarded UPDATE is atomic, which closes the
same-slot race completely. Two bookings for different slots of one
interviewer can both pass the quota check before either commits, so the
weekly maximum may be overshot under contention.
"""
from typing import Optional

from app.core.exceptions import (
    InterviewerNotFoundError,
    SlotAlreadyBookedError,
    SlotNotFoundError,
    SlotValidationError,
    WeeklyLimitExceededError,
)
from app.models.slot import Slot, SlotStatus
from app.services.base import BaseService
from app.services.quota_service import WeeklyQuotaEvaluator
from app.services.slot_store import SlotStore


class BookingService(BaseService):
    def __init__(self, db, timezone_name: Optional[str] = None):
        super().__init__(db)
        self.store = SlotStore(db)
        self.quota = WeeklyQuotaEvaluator(db, timezone_name=timezone_name)

    def book(self, slot_id: str, candidate_name: str) -> Slot:
        # 1. Slot must exist
        slot = self.store.get_slot(slot_id)
        if slot is None:
            raise SlotNotFoundError(slot_id)

        if not candidate_name or not candidate_name.strip():
            raise SlotValidationError("candidate_name is required")

        # 2. Orphaned slot is a data-integrity fault
        interviewer = self.store.get_interviewer(slot.interviewer_id)
        if interviewer is None:
            self._logger.error(f"Slot {slot_id} references missing interviewer {slot.interviewer_id}")
            raise InterviewerNotFoundError(slot.interviewer_id)

        # 3-4. Quota check; the target slot is not counted since it is not booked yet
        current_bookings = self.quota.booked_in_week_of(interviewer.id, slot.start_time)
        if current_bookings >= interviewer.max_interviews_per_week:
            self.log_warning(
                f"Weekly limit reached for interviewer {interviewer.id}",
                slot_id=slot_id,
                booked=current_bookings,
                limit=interviewer.max_interviews_per_week,
            )
            raise WeeklyLimitExceededError(interviewer.id, interviewer.max_interviews_per_week)

        # 5. Atomic transition, only matches while still AVAILABLE
        try:
            booked = self.store.conditional_update_slot(
                slot_id,
                SlotStatus.AVAILABLE,
                {"status": SlotStatus.BOOKED, "candidate_name": candidate_name},
            )
        except Exception:
            self.db.rollback()
            raise

        # 6. Lost the race (or was never available)
        if booked is None:
            self.db.rollback()
            self._logger.info(f"Slot {slot_id} already booked; rejecting candidate booking")
            raise SlotAlreadyBookedError(slot_id)

        self.commit()
        self.db.refresh(booked)
        self._logger.info(f"Booked slot {slot_id} for interviewer {interviewer.id} ({current_bookings + 1}/{interviewer.max_interviews_per_week} this week)")
        return booked
