"""
Interviewer Router
Interviewer creation, availability submission and weekly quota usage.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import time

from app.database import get_db
from app.schemas.scheduling import (
    AvailabilityWindow, AvailabilitySubmitResponse,
    InterviewerCreate, InterviewerResponse,
    WeeklyUsageResponse,
)
from app.services.interviewer_service import InterviewerService
from app.services.slot_generator import SlotGenerator
from app.services.quota_service import WeeklyQuotaEvaluator

router = APIRouter(
    prefix="/v1/interviewers",
    tags=["interviewers"]
)

@router.post("", response_model=InterviewerResponse, status_code=status.HTTP_201_CREATED)
def create_interviewer(request: InterviewerCreate, db: Session = Depends(get_db)):
    """Create an interviewer with a weekly booking quota."""
    return InterviewerService(db).create_interviewer(request)

@router.get("/{interviewer_id}", response_model=InterviewerResponse)
def get_interviewer(interviewer_id: str, db: Session = Depends(get_db)):
    return InterviewerService(db).get_interviewer(interviewer_id)

@router.post("/{interviewer_id}/availability", response_model=AvailabilitySubmitResponse)
def set_availability(
    interviewer_id: str,
    availability: List[AvailabilityWindow],
    db: Session = Depends(get_db)
):
    """
    Replace the interviewer's availability and generate slots from it.
    Resubmitting the same windows creates a second, independent set of slots
    unless the overlap policy is set to reject.
    """
    slots = SlotGenerator(db).generate_slots(interviewer_id, availability)
    return AvailabilitySubmitResponse(
        interviewer_id=interviewer_id,
        windows=len(availability),
        slots_generated=len(slots),
    )

@router.get("/{interviewer_id}/weekly-usage", response_model=WeeklyUsageResponse)
def get_weekly_usage(
    interviewer_id: str,
    at: Optional[int] = Query(None, description="Instant (epoch ms) inside the week; defaults to now"),
    db: Session = Depends(get_db)
):
    """Booked count versus quota for the week containing `at`."""
    at_ms = at if at is not None else int(time.time() * 1000)
    return WeeklyQuotaEvaluator(db).weekly_usage(interviewer_id, at_ms)
