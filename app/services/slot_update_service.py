from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import SlotNotFoundError, SlotValidationError, SlotVersionConflictError
from app.models.slot import Slot
from app.schemas.scheduling import SlotUpdate
from app.services.base import BaseService
from app.services.slot_store import SlotStore


class SlotUpdateService(BaseService):
    """
    Administrative partial update of a slot.

    Bypasses the booking quota and the status guard. Lost updates are still
    prevented: the write is versioned, and callers may pin the version they read.
    """

    def __init__(self, db):
        super().__init__(db)
        self.store = SlotStore(db)

    def update_slot(self, slot_id: str, updates: SlotUpdate) -> Slot:
        existing = self.store.get_slot(slot_id)
        if existing is None:
            raise SlotNotFoundError(slot_id)

        if updates.version is not None and updates.version != existing.version:
            raise SlotVersionConflictError(slot_id, expected=updates.version, actual=existing.version)

        # 0 is the "unset" sentinel for instants, same as None
        start_time = updates.start_time if updates.start_time else existing.start_time
        end_time = updates.end_time if updates.end_time else existing.end_time

        # Validate before touching the mapped object so a failure leaves it clean
        if end_time <= start_time:
            raise SlotValidationError("end_time must be after start_time")

        existing.start_time = start_time
        existing.end_time = end_time
        if updates.status is not None:
            existing.status = updates.status
        if updates.candidate_name is not None:
            existing.candidate_name = updates.candidate_name

        try:
            self.store.save_slot(existing)
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            self.log_warning(f"Concurrent modification of slot {slot_id} detected during update")
            raise SlotVersionConflictError(slot_id, expected=updates.version)
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(existing)
        self._logger.info(f"Updated slot {slot_id} (version {existing.version})")
        return existing
