"""
Slot Router
Availability queries, candidate booking and administrative slot patches.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.exceptions import SlotNotFoundError
from app.database import get_db
from app.schemas.scheduling import BookSlotRequest, SlotResponse, SlotUpdate
from app.services.availability_service import AvailabilityService
from app.services.booking_service import BookingService
from app.services.slot_store import SlotStore
from app.services.slot_update_service import SlotUpdateService

router = APIRouter(
    prefix="/slots",
    tags=["slots"]
)

@router.get("", response_model=List[SlotResponse])
def get_slots(
    start: int = Query(..., description="Inclusive lower bound on slot start (epoch ms)"),
    end: int = Query(..., description="Exclusive upper bound on slot start (epoch ms)"),
    interviewer_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """All slots starting in [start, end), booked ones included."""
    return AvailabilityService(db).find_slots(start, end, interviewer_id=interviewer_id)

@router.get("/{slot_id}", response_model=SlotResponse)
def get_slot(slot_id: str, db: Session = Depends(get_db)):
    slot = SlotStore(db).get_slot(slot_id)
    if slot is None:
        raise SlotNotFoundError(slot_id)
    return slot

@router.post("/{slot_id}/book", response_model=SlotResponse)
def book_slot(slot_id: str, request: BookSlotRequest, db: Session = Depends(get_db)):
    """
    Book a slot for a candidate.
    409 when the slot is taken or the interviewer's weekly quota is used up.
    """
    return BookingService(db).book(slot_id, request.candidate_name)

@router.put("/{slot_id}", response_model=SlotResponse)
@router.patch("/{slot_id}", response_model=SlotResponse)
def update_slot(slot_id: str, updates: SlotUpdate, db: Session = Depends(get_db)):
    """Partial update for administrative correction. Does not apply the booking quota."""
    return SlotUpdateService(db).update_slot(slot_id, updates)
