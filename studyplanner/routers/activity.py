from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from studyplanner import store
from studyplanner.config import DEFAULT_USER_ID, DEFAULT_WINDOW_DAYS
from studyplanner.database import get_db
from studyplanner.schemas.activity import StudySessionCreate, StudySessionOut, CompletionLogOut

router = APIRouter(prefix="/api", tags=["activity"])


@router.get("/study-sessions", response_model=list[StudySessionOut])
def list_study_sessions(days: Optional[int] = Query(None, ge=0, description="Trailing window in days"),
                        db: Session = Depends(get_db)):
    return store.list_study_sessions(db, DEFAULT_USER_ID, days=DEFAULT_WINDOW_DAYS if days is None else days)


@router.post("/study-sessions", status_code=201)
def create_study_session(session: StudySessionCreate, db: Session = Depends(get_db)):
    session_id = store.create_study_session(
        db,
        DEFAULT_USER_ID,
        duration_minutes=session.duration_minutes,
        session_date=session.session_date,
        task_id=session.task_id,
        notes=session.notes,
    )
    return {"id": session_id, "message": "Study session logged successfully"}


@router.get("/completion-logs", response_model=list[CompletionLogOut])
def list_completion_logs(days: Optional[int] = Query(None, ge=0, description="Trailing window in days"),
                         db: Session = Depends(get_db)):
    return store.list_completion_logs(db, DEFAULT_USER_ID, days=DEFAULT_WINDOW_DAYS if days is None else days)
