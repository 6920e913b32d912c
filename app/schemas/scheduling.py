from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Optional
from app.models.slot import SlotStatus

# --- Availability ---
class AvailabilityWindowBase(BaseModel):
    """Half-open [start_time, end_time) range in epoch milliseconds."""
    start_time: int
    end_time: int

class AvailabilityWindow(AvailabilityWindowBase):
    """Inbound window; rejects empty or inverted ranges."""

    @model_validator(mode="after")
    def check_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

class AvailabilitySubmitResponse(BaseModel):
    interviewer_id: str
    windows: int
    slots_generated: int

# --- Interviewers ---
class InterviewerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    max_interviews_per_week: int = Field(..., ge=0)
    availability: List[AvailabilityWindow] = []

class InterviewerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: Optional[str] = None
    max_interviews_per_week: int
    availability: List[AvailabilityWindowBase] = []

# --- Slots ---
class SlotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    interviewer_id: str
    start_time: int
    end_time: int
    status: SlotStatus
    candidate_name: Optional[str] = None
    version: int

class BookSlotRequest(BaseModel):
    candidate_name: str = Field(..., min_length=1)

class SlotUpdate(BaseModel):
    """
    Partial update. Omitted/None fields are left untouched; for the instant
    fields 0 also means "unset".
    """
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    status: Optional[SlotStatus] = None
    candidate_name: Optional[str] = None
    version: Optional[int] = None  # expected current version, checked when supplied

# --- Quota ---
class WeeklyUsageResponse(BaseModel):
    interviewer_id: str
    week_start: int
    week_end: int
    booked: int
    max_interviews_per_week: int
    remaining: int
