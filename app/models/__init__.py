# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import interviewer, slot

# Explicit class exports for cleaner imports
from .interviewer import Interviewer
from .slot import Slot, SlotStatus

__all__ = [
    "Interviewer",
    "Slot",
    "SlotStatus",
]
