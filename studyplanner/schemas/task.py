from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskType = Literal["assignment", "study_session", "goal"]
Priority = Literal["low", "medium", "high"]
Status = Literal["pending", "in_progress", "completed"]


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    type: TaskType
    priority: Priority = "medium"
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(None, ge=0)

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        if not v.strip():
            raise ValueError("title cannot be empty")
        return v.strip()


class TaskUpdate(BaseModel):
    """Partial update: only the fields present in the request body are applied."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[TaskType] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(None, ge=0)

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("title cannot be empty")
        return v.strip() if v is not None else v


class TaskComplete(BaseModel):
    hours_spent: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    type: str
    priority: str
    status: str
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
