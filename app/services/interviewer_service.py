from app.core.exceptions import InterviewerNotFoundError
from app.models.interviewer import Interviewer
from app.schemas.scheduling import InterviewerCreate
from app.services.base import BaseService
from app.services.slot_store import SlotStore


class InterviewerService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.store = SlotStore(db)

    def create_interviewer(self, data: InterviewerCreate) -> Interviewer:
        """
        Persist a new interviewer. Availability given here is stored as-is;
        slots are only generated through an availability submission.
        """
        interviewer = Interviewer(
            name=data.name,
            email=data.email,
            max_interviews_per_week=data.max_interviews_per_week,
            availability=[w.model_dump() for w in data.availability],
        )
        try:
            interviewer = self.store.save_interviewer(interviewer)
        except Exception:
            self.db.rollback()
            raise
        self.commit()
        self.db.refresh(interviewer)
        self._logger.info(f"Created interviewer {interviewer.id} (quota {interviewer.max_interviews_per_week}/week)")
        return interviewer

    def get_interviewer(self, interviewer_id: str) -> Interviewer:
        interviewer = self.store.get_interviewer(interviewer_id)
        if interviewer is None:
            raise InterviewerNotFoundError(interviewer_id)
        return interviewer
