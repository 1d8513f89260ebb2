from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class UserCreate(BaseModel):
    username: str
    email: EmailStr

    @field_validator("username")
    @classmethod
    def username_not_empty(cls, v: str) -> str:
        """Usernames are stored trimmed and must fit the 50-character column."""
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty")
        if len(v) > 50:
            raise ValueError("username too long: must be at most 50 characters")
        return v


class UserOut(BaseModel):
    id: int
    username: str
    email: EmailStr
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
