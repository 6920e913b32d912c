from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self, 
        message: str, 
        status_code: int = 400, 
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class InterviewerNotFoundError(AppException):
    def __init__(self, interviewer_id: str):
        super().__init__(
            message=f"Interviewer not found: {interviewer_id}",
            status_code=404,
            error_code="INTERVIEWER_NOT_FOUND",
            details={"interviewer_id": interviewer_id}
        )

class SlotNotFoundError(AppException):
    def __init__(self, slot_id: str):
        super().__init__(
            message=f"Slot not found: {slot_id}",
            status_code=404,
            error_code="SLOT_NOT_FOUND",
            details={"slot_id": slot_id}
        )

class SlotAlreadyBookedError(AppException):
    def __init__(self, slot_id: str):
        super().__init__(
            message=f"Slot is already booked: {slot_id}",
            status_code=409,
            error_code="SLOT_ALREADY_BOOKED",
            details={"slot_id": slot_id}
        )

class WeeklyLimitExceededError(AppException):
    def __init__(self, interviewer_id: str, limit: int):
        super().__init__(
            message=f"Interviewer {interviewer_id} has reached the maximum bookings for this week.",
            status_code=409,
            error_code="WEEKLY_LIMIT_EXCEEDED",
            details={"interviewer_id": interviewer_id, "max_interviews_per_week": limit}
        )

class SlotValidationError(AppException):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR"
        )

class SlotVersionConflictError(AppException):
    """The slot changed since the caller (or this request) last read it."""
    def __init__(self, slot_id: str, expected: Optional[int] = None, actual: Optional[int] = None):
        super().__init__(
            message=f"Slot {slot_id} was modified concurrently; reload and retry.",
            status_code=409,
            error_code="SLOT_VERSION_CONFLICT",
            details={"slot_id": slot_id, "expected_version": expected, "current_version": actual}
        )

class SlotOverlapError(AppException):
    def __init__(self, interviewer_id: str, start_time: int, end_time: int):
        super().__init__(
            message=f"Generated slot [{start_time}, {end_time}) overlaps an existing slot of interviewer {interviewer_id}.",
            status_code=409,
            error_code="SLOT_OVERLAP",
            details={"interviewer_id": interviewer_id, "start_time": start_time, "end_time": end_time}
        )
