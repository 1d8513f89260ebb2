from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyplanner import store
from studyplanner.config import DEFAULT_USER_ID
from studyplanner.database import get_db
from studyplanner.schemas.stats import ProgressOut, StreakOut
from studyplanner.utils.stats import summarize_progress, compute_streaks

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/progress", response_model=ProgressOut)
def progress(db: Session = Depends(get_db)):
    return summarize_progress(store.task_statuses(db, DEFAULT_USER_ID))


@router.get("/streak", response_model=StreakOut)
def streak(db: Session = Depends(get_db)):
    return compute_streaks(store.study_dates(db, DEFAULT_USER_ID))
