"""
Slot generation from interviewer availability.

Each availability window [start, end) is tiled from its start into
back-to-back slots of a fixed duration. A trailing remainder shorter than
one slot is dropped. Windows are tiled independently, in input order.
"""
from typing import Any, Iterable, List, Optional, Tuple

from app.core.config import settings
from app.core.exceptions import InterviewerNotFoundError, SlotOverlapError
from app.models.slot import Slot, SlotStatus
from app.services.base import BaseService
from app.services.slot_store import SlotStore

ONE_MINUTE_MILLIS = 60_000

OVERLAP_ALLOW = "allow"
OVERLAP_REJECT = "reject"


def tile_window(start: int, end: int, duration_ms: int) -> List[Tuple[int, int]]:
    """Return the [start, end) bounds of every full slot that fits in the window."""
    if duration_ms <= 0:
        raise ValueError("duration_ms must be positive")
    bounds = []
    current = start
    while current + duration_ms <= end:
        bounds.append((current, current + duration_ms))
        current += duration_ms
    return bounds


def _window_bounds(window: Any) -> Tuple[int, int]:
    if isinstance(window, dict):
        return int(window["start_time"]), int(window["end_time"])
    return int(window.start_time), int(window.end_time)


class SlotGenerator(BaseService):
    def __init__(
        self,
        db,
        slot_duration_minutes: Optional[int] = None,
        overlap_policy: Optional[str] = None,
    ):
        super().__init__(db)
        self.store = SlotStore(db)
        minutes = slot_duration_minutes or settings.scheduling.slot_duration_minutes
        self.duration_ms = minutes * ONE_MINUTE_MILLIS
        self.overlap_policy = (overlap_policy or settings.scheduling.overlap_policy).lower()
        if self.overlap_policy not in (OVERLAP_ALLOW, OVERLAP_REJECT):
            raise ValueError(f"Unknown overlap policy: {self.overlap_policy}")

    def generate_slots(self, interviewer_id: str, availability: Optional[Iterable[Any]]) -> List[Slot]:
        """
        Replace the interviewer's availability with ``availability`` and insert
        one AVAILABLE slot per tiled unit. Both writes commit together.
        An empty or missing list still clears the stored availability.
        """
        interviewer = self.store.get_interviewer(interviewer_id)
        if interviewer is None:
            raise InterviewerNotFoundError(interviewer_id)

        windows = [_window_bounds(w) for w in (availability or [])]

        bounds: List[Tuple[int, int]] = []
        for window_start, window_end in windows:
            bounds.extend(tile_window(window_start, window_end, self.duration_ms))

        if self.overlap_policy == OVERLAP_REJECT:
            self._check_overlaps(interviewer_id, bounds)

        new_slots = [
            Slot(
                interviewer_id=interviewer.id,
                start_time=slot_start,
                end_time=slot_end,
                status=SlotStatus.AVAILABLE,
            )
            for slot_start, slot_end in bounds
        ]

        try:
            # New list object so the JSON column is flagged dirty
            interviewer.availability = [{"start_time": s, "end_time": e} for s, e in windows]
            self.store.save_interviewer(interviewer)
            self.store.save_slots_batch(new_slots)
        except Exception:
            self.db.rollback()
            raise
        self.commit()

        self._logger.info(
            f"Generated {len(new_slots)} slots for interviewer {interviewer_id} from {len(windows)} windows"
        )
        return new_slots

    def _check_overlaps(self, interviewer_id: str, bounds: List[Tuple[int, int]]):
        if not bounds:
            return

        # Within this submission
        ordered = sorted(bounds)
        for (prev_start, prev_end), (cur_start, cur_end) in zip(ordered, ordered[1:]):
            if cur_start < prev_end:
                raise SlotOverlapError(interviewer_id, cur_start, cur_end)

        # Against what is already stored
        existing = self.store.find_slots_overlapping(interviewer_id, ordered[0][0], max(e for _, e in ordered))
        for slot_start, slot_end in ordered:
            for slot in existing:
                if slot.start_time < slot_end and slot.end_time > slot_start:
                    raise SlotOverlapError(interviewer_id, slot_start, slot_end)
