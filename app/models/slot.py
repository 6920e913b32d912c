import uuid
import enum
from sqlalchemy import Column, Integer, BigInteger, String, Enum as SQLEnum
from app.database import Base

class SlotStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"

class Slot(Base):
    __tablename__ = "slots"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    interviewer_id = Column(String(36), index=True, nullable=False)  # Reference, not a FK-owned relationship
    start_time = Column(BigInteger, index=True, nullable=False)  # epoch millis
    end_time = Column(BigInteger, nullable=False)
    status = Column(SQLEnum(SlotStatus), default=SlotStatus.AVAILABLE, nullable=False, index=True)
    candidate_name = Column(String, nullable=True)
    version = Column(Integer, nullable=False)

    # ORM flushes become "UPDATE ... WHERE version = :loaded"; stale writes raise StaleDataError
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Slot {self.id} [{self.start_time}, {self.end_time}) {self.status.value}>"
