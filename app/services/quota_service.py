"""
Weekly booking quota.

The quota week is [Monday 00:00, next Monday 00:00) in the configured
scheduling timezone. Counts are point-in-time reads and may already be
stale when the caller acts on them.
"""
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Dict, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.exceptions import InterviewerNotFoundError
from app.models.slot import SlotStatus
from app.services.base import BaseService
from app.services.slot_store import SlotStore

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


def _resolve_zone(zone: Union[str, tzinfo]) -> tzinfo:
    return ZoneInfo(zone) if isinstance(zone, str) else zone


def millis_to_datetime(instant_ms: int, zone: Union[str, tzinfo] = timezone.utc) -> datetime:
    return (EPOCH + timedelta(milliseconds=instant_ms)).astimezone(_resolve_zone(zone))


def datetime_to_millis(value: datetime) -> int:
    return (value - EPOCH) // ONE_MILLISECOND


def quota_week_bounds(instant_ms: int, zone: Union[str, tzinfo]) -> Tuple[int, int]:
    """Half-open [week_start, week_end) in epoch millis for the week containing ``instant_ms``."""
    tz = _resolve_zone(zone)
    local = millis_to_datetime(instant_ms, tz)
    monday = local.date() - timedelta(days=local.weekday())
    week_start = datetime.combine(monday, time.min, tzinfo=tz)
    week_end = datetime.combine(monday + timedelta(days=7), time.min, tzinfo=tz)
    return datetime_to_millis(week_start), datetime_to_millis(week_end)


class WeeklyQuotaEvaluator(BaseService):
    def __init__(self, db, timezone_name: Optional[str] = None):
        super().__init__(db)
        self.store = SlotStore(db)
        self.zone = ZoneInfo(timezone_name or settings.scheduling.timezone)

    def week_for(self, instant_ms: int) -> Tuple[int, int]:
        return quota_week_bounds(instant_ms, self.zone)

    def count_booked(self, interviewer_id: str, week_start: int, week_end: int) -> int:
        slots = self.store.find_slots_by_interviewer_and_start_range(interviewer_id, week_start, week_end)
        return sum(1 for s in slots if s.status == SlotStatus.BOOKED)

    def booked_in_week_of(self, interviewer_id: str, instant_ms: int) -> int:
        week_start, week_end = self.week_for(instant_ms)
        return self.count_booked(interviewer_id, week_start, week_end)

    def weekly_usage(self, interviewer_id: str, at_ms: int) -> Dict[str, int]:
        interviewer = self.store.get_interviewer(interviewer_id)
        if interviewer is None:
            raise InterviewerNotFoundError(interviewer_id)

        week_start, week_end = self.week_for(at_ms)
        booked = self.count_booked(interviewer_id, week_start, week_end)
        limit = interviewer.max_interviews_per_week
        return {
            "interviewer_id": interviewer_id,
            "week_start": week_start,
            "week_end": week_end,
            "booked": booked,
            "max_interviews_per_week": limit,
            "remaining": max(limit - booked, 0),
        }
