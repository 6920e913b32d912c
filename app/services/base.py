import logging
from sqlalchemy.orm import Session


class BaseService:
    """
    Common plumbing for services bound to a request-scoped session.
    Services own their transaction boundaries: they commit on success and
    roll back before re-raising on failure.
    """

    def __init__(self, db: Session):
        self.db = db
        self._logger = logging.getLogger(self.__class__.__module__)

    def commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def log_warning(self, message: str, **extra):
        self._logger.warning(message, extra=extra or None)
