from datetime import datetime

from sqlalchemy import Column, Integer, ForeignKey, Text, DateTime, Float
from studyplanner.database import Base


class CompletionLog(Base):
    __tablename__ = "completion_logs"

    id = Column(Integer, primary_key=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    completed_at = Column(DateTime, default=datetime.now, nullable=False)
    hours_spent = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
