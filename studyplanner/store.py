"""Reads and writes of users, tasks, completion logs and study sessions.

Every function takes the SQLAlchemy session to work on as its first argument;
nothing here holds a module-level handle. Update/delete report the number of
rows changed and callers turn ``0`` into a not-found response.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy import case
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from studyplanner.errors import ConstraintViolation, StorageUnavailable
from studyplanner.models.user import User
from studyplanner.models.task import Task, TASK_TYPES, PRIORITIES, STATUSES
from studyplanner.models.completion_log import CompletionLog
from studyplanner.models.study_session import StudySession

logger = logging.getLogger(__name__)

UPDATABLE_TASK_FIELDS = {"title", "description", "type", "priority", "status", "due_date", "estimated_hours"}

# high sorts before low when due dates tie
_PRIORITY_RANK = case({"high": 0, "medium": 1, "low": 2}, value=Task.priority, else_=3)


@contextmanager
def _storage_errors(db: Session):
    """Roll back and translate driver errors into the store's own exceptions."""
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning("Write rejected by the database: %s", e.orig)
        raise ConstraintViolation(f"constraint violated: {e.orig}") from e
    except OperationalError as e:
        db.rollback()
        logger.exception("Storage unavailable")
        raise StorageUnavailable(str(e.orig)) from e
    except ConstraintViolation:
        db.rollback()
        raise


def _require_one_of(field: str, value, allowed) -> None:
    if value not in allowed:
        logger.warning("Rejected %s=%r", field, value)
        raise ConstraintViolation(f"{field} must be one of {', '.join(allowed)}, got {value!r}")


def _as_dict(obj, **extra) -> dict:
    row = {c.name: getattr(obj, c.name) for c in obj.__table__.columns}
    row.update(extra)
    return row


def _window_start(days: int) -> date:
    if days < 0:
        raise ConstraintViolation("days must not be negative")
    try:
        return date.today() - timedelta(days=days)
    except OverflowError:
        # window reaches past the earliest representable day
        return date.min


# Users

def create_user(db: Session, username: str, email: str) -> int:
    if not username or not email:
        raise ConstraintViolation("username and email are required")
    with _storage_errors(db):
        user = User(username=username, email=email)
        db.add(user)
        db.commit()
        db.refresh(user)
    logger.info("Created user %s (%s)", user.id, username)
    return user.id


def get_user(db: Session, user_id: int) -> Optional[User]:
    with _storage_errors(db):
        return db.get(User, user_id)


# Tasks

def create_task(db: Session, user_id: int, data: dict) -> int:
    title = (data.get("title") or "").strip()
    if not title:
        raise ConstraintViolation("title is required")
    task_type = data.get("type")
    _require_one_of("type", task_type, TASK_TYPES)
    priority = data.get("priority") or "medium"
    _require_one_of("priority", priority, PRIORITIES)
    hours = data.get("estimated_hours")
    if hours is not None and hours < 0:
        raise ConstraintViolation("estimated_hours must not be negative")

    with _storage_errors(db):
        if db.get(User, user_id) is None:
            raise ConstraintViolation(f"user {user_id} does not exist")
        now = datetime.now()
        task = Task(
            user_id=user_id,
            title=title,
            description=data.get("description"),
            type=task_type,
            priority=priority,
            status="pending",
            due_date=data.get("due_date"),
            estimated_hours=hours,
            created_at=now,
            updated_at=now,
        )
        db.add(task)
        db.commit()
        db.refresh(task)
    logger.info("Created task %s for user %s", task.id, user_id)
    return task.id


def list_tasks(db: Session, user_id: int, type: Optional[str] = None, status: Optional[str] = None) -> list[Task]:
    """Tasks by due date (undated last), then priority high to low."""
    with _storage_errors(db):
        query = db.query(Task).filter(Task.user_id == user_id)
        if type:
            query = query.filter(Task.type == type)
        if status:
            query = query.filter(Task.status == status)
        return query.order_by(Task.due_date.is_(None), Task.due_date.asc(), _PRIORITY_RANK, Task.id).all()


def update_task(db: Session, task_id: int, updates: dict) -> int:
    unknown = set(updates) - UPDATABLE_TASK_FIELDS
    if unknown:
        raise ConstraintViolation(f"unknown task fields: {', '.join(sorted(unknown))}")
    if "title" in updates and not (updates["title"] or "").strip():
        raise ConstraintViolation("title cannot be empty")
    for field, allowed in (("type", TASK_TYPES), ("priority", PRIORITIES), ("status", STATUSES)):
        if field in updates:
            _require_one_of(field, updates[field], allowed)
    if updates.get("estimated_hours") is not None and updates["estimated_hours"] < 0:
        raise ConstraintViolation("estimated_hours must not be negative")

    values = dict(updates, updated_at=datetime.now())
    with _storage_errors(db):
        rows = db.query(Task).filter(Task.id == task_id).update(values, synchronize_session=False)
        db.commit()
    logger.info("Updated task %s (%s): %d row(s)", task_id, ", ".join(sorted(updates)) or "touch", rows)
    return rows


def delete_task(db: Session, task_id: int) -> int:
    # completion logs cascade, study sessions keep a NULL task_id
    with _storage_errors(db):
        rows = db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
        db.commit()
    logger.info("Deleted task %s: %d row(s)", task_id, rows)
    return rows


def complete_task(db: Session, task_id: int, user_id: int, hours_spent: Optional[float] = None,
                  notes: Optional[str] = None) -> Optional[int]:
    """Mark a task completed and log it in one transaction.

    Returns the new completion log id, or None when the task does not exist.
    """
    if hours_spent is not None and hours_spent < 0:
        raise ConstraintViolation("hours_spent must not be negative")
    with _storage_errors(db):
        rows = (
            db.query(Task)
            .filter(Task.id == task_id)
            .update({"status": "completed", "updated_at": datetime.now()}, synchronize_session=False)
        )
        if rows == 0:
            db.rollback()
            return None
        log = CompletionLog(task_id=task_id, user_id=user_id, hours_spent=hours_spent, notes=notes)
        db.add(log)
        db.commit()
        db.refresh(log)
    logger.info("Completed task %s (log %s)", task_id, log.id)
    return log.id


# Study sessions and completion logs

def create_study_session(db: Session, user_id: int, duration_minutes: int, session_date: date,
                         task_id: Optional[int] = None, notes: Optional[str] = None) -> int:
    if duration_minutes is None or isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise ConstraintViolation("duration_minutes must be a whole number of minutes")
    if duration_minutes <= 0:
        raise ConstraintViolation("duration_minutes must be positive")
    if session_date is None:
        raise ConstraintViolation("session_date is required")

    with _storage_errors(db):
        if task_id is not None:
            owner = db.query(Task.user_id).filter(Task.id == task_id).scalar()
            if owner != user_id:
                raise ConstraintViolation(f"task {task_id} does not exist")
        session = StudySession(
            user_id=user_id,
            task_id=task_id,
            duration_minutes=duration_minutes,
            session_date=session_date,
            notes=notes,
        )
        db.add(session)
        db.commit()
        db.refresh(session)
    logger.info("Logged %d minute study session %s on %s", duration_minutes, session.id, session_date)
    return session.id


def list_study_sessions(db: Session, user_id: int, days: int = 30) -> list[dict]:
    since = _window_start(days)
    with _storage_errors(db):
        rows = (
            db.query(StudySession, Task.title)
            .outerjoin(Task, StudySession.task_id == Task.id)
            .filter(StudySession.user_id == user_id, StudySession.session_date >= since)
            .order_by(StudySession.session_date.desc(), StudySession.id.desc())
            .all()
        )
    return [_as_dict(s, task_title=title) for s, title in rows]


def list_completion_logs(db: Session, user_id: int, days: int = 30) -> list[dict]:
    since = datetime.combine(_window_start(days), time.min)
    with _storage_errors(db):
        rows = (
            db.query(CompletionLog, Task.title)
            .join(Task, CompletionLog.task_id == Task.id)
            .filter(CompletionLog.user_id == user_id, CompletionLog.completed_at >= since)
            .order_by(CompletionLog.completed_at.desc(), CompletionLog.id.desc())
            .all()
        )
    return [_as_dict(log, task_title=title) for log, title in rows]


# Aggregates feeding utils.stats

def task_statuses(db: Session, user_id: int) -> list[str]:
    with _storage_errors(db):
        return [s for (s,) in db.query(Task.status).filter(Task.user_id == user_id).all()]


def study_dates(db: Session, user_id: int) -> list[date]:
    """Distinct days with at least one study session, most recent first."""
    with _storage_errors(db):
        rows = (
            db.query(StudySession.session_date)
            .filter(StudySession.user_id == user_id)
            .distinct()
            .order_by(StudySession.session_date.desc())
            .all()
        )
    return [d for (d,) in rows]
