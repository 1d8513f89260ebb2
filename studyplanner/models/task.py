from datetime import datetime

from sqlalchemy import Column, Integer, String, ForeignKey, Text, Date, DateTime, Float, CheckConstraint
from sqlalchemy.orm import relationship
from studyplanner.database import Base

TASK_TYPES = ("assignment", "study_session", "goal")
PRIORITIES = ("low", "medium", "high")
STATUSES = ("pending", "in_progress", "completed")


def _one_of(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(_one_of("type", TASK_TYPES), name="ck_tasks_type"),
        CheckConstraint(_one_of("priority", PRIORITIES), name="ck_tasks_priority"),
        CheckConstraint(_one_of("status", STATUSES), name="ck_tasks_status"),
        CheckConstraint("estimated_hours IS NULL OR estimated_hours >= 0", name="ck_tasks_estimated_hours"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False)
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="pending")
    due_date = Column(Date, nullable=True)
    estimated_hours = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    user = relationship("User", back_populates="tasks")
