from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StudySessionCreate(BaseModel):
    task_id: Optional[int] = None
    duration_minutes: int = Field(..., gt=0)
    session_date: date
    notes: Optional[str] = None


class StudySessionOut(BaseModel):
    id: int
    user_id: int
    task_id: Optional[int] = None
    task_title: Optional[str] = None
    duration_minutes: int
    session_date: date
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompletionLogOut(BaseModel):
    id: int
    task_id: int
    user_id: int
    task_title: str
    completed_at: datetime
    hours_spent: Optional[float] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
