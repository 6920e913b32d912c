"""
Interviewer Model.
Owns its availability windows; slots reference it by id only.
"""
import uuid
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from app.database import Base


class Interviewer(Base):
    __tablename__ = "interviewers"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, index=True)
    max_interviews_per_week = Column(Integer, nullable=False, default=0)
    
    # List of {"start_time": ms, "end_time": ms}; replaced wholesale on resubmission
    availability = Column(JSON, nullable=False, default=list)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    def __repr__(self):
        return f"<Interviewer {self.id} ({self.name})>"
