from pydantic import BaseModel


class ProgressOut(BaseModel):
    total: int
    completed: int
    in_progress: int
    pending: int


class StreakOut(BaseModel):
    current_streak: int
    longest_streak: int
    total_study_days: int
