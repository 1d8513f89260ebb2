from datetime import date, timedelta

import pytest
from studyplanner import store
from studyplanner.config import DEFAULT_USER_ID
from studyplanner.database import SessionLocal, Base, engine, init_db
from studyplanner.errors import ConstraintViolation
from studyplanner.models.task import Task
from studyplanner.models.completion_log import CompletionLog
from studyplanner.models.study_session import StudySession

USER = DEFAULT_USER_ID


# Recreate all tables (and the demo user) for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _task(db, **fields):
    data = {"title": "Read chapter 3", "type": "assignment"}
    data.update(fields)
    return store.create_task(db, USER, data)


def _backdate(db, task_id):
    """Push a task's updated_at a day into the past and return the stored value."""
    stale = db.get(Task, task_id).updated_at - timedelta(days=1)
    db.query(Task).filter(Task.id == task_id).update({"updated_at": stale}, synchronize_session=False)
    db.commit()
    return stale


class TestTasks:
    def test_create_task_defaults(self, db):
        task_id = _task(db, description="pages 40-60")
        task = db.get(Task, task_id)
        assert task.status == "pending"
        assert task.priority == "medium"
        assert task.user_id == USER
        assert task.created_at is not None and task.updated_at is not None

    @pytest.mark.parametrize("field,value", [("type", "invalid_value"), ("priority", "urgent")])
    def test_create_task_rejects_bad_enum(self, db, field, value):
        with pytest.raises(ConstraintViolation):
            _task(db, **{field: value})
        assert db.query(Task).count() == 0

    def test_create_task_requires_title(self, db):
        with pytest.raises(ConstraintViolation):
            store.create_task(db, USER, {"type": "goal"})

    def test_create_task_unknown_user(self, db):
        with pytest.raises(ConstraintViolation):
            store.create_task(db, 999, {"title": "x", "type": "goal"})

    def test_storage_rejects_bad_status(self, db):
        # bypass the store to check the table constraint itself
        from sqlalchemy.exc import IntegrityError
        db.add(Task(user_id=USER, title="t", type="goal", priority="low", status="archived"))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_list_tasks_order_and_filters(self, db):
        undated = _task(db, title="undated", priority="high")
        late = _task(db, title="late", due_date=date(2024, 5, 1))
        early_low = _task(db, title="early low", priority="low", due_date=date(2024, 4, 1))
        early_high = _task(db, title="early high", priority="high", due_date=date(2024, 4, 1), type="goal")

        ids = [t.id for t in store.list_tasks(db, USER)]
        assert ids == [early_high, early_low, late, undated]

        goals = store.list_tasks(db, USER, type="goal")
        assert [t.id for t in goals] == [early_high]

        store.update_task(db, late, {"status": "in_progress"})
        assert [t.id for t in store.list_tasks(db, USER, status="in_progress")] == [late]

    def test_update_task_partial(self, db):
        task_id = _task(db, description="keep me", estimated_hours=2.5)
        stale = _backdate(db, task_id)

        assert store.update_task(db, task_id, {"status": "in_progress", "title": "Renamed"}) == 1
        task = db.get(Task, task_id)
        assert task.status == "in_progress"
        assert task.title == "Renamed"
        assert task.description == "keep me"
        assert task.estimated_hours == 2.5
        assert task.updated_at > stale

    def test_update_task_allows_any_status_order(self, db):
        task_id = _task(db)
        assert store.update_task(db, task_id, {"status": "completed"}) == 1
        assert store.update_task(db, task_id, {"status": "pending"}) == 1
        assert db.get(Task, task_id).status == "pending"

    def test_update_missing_task_reports_zero(self, db):
        assert store.update_task(db, 12345, {"title": "nope"}) == 0

    def test_update_rejects_bad_values(self, db):
        task_id = _task(db)
        with pytest.raises(ConstraintViolation):
            store.update_task(db, task_id, {"status": "done"})
        with pytest.raises(ConstraintViolation):
            store.update_task(db, task_id, {"user_id": 2})

    def test_delete_missing_task_reports_zero(self, db):
        assert store.delete_task(db, 12345) == 0

    def test_delete_task_cascades(self, db):
        task_id = _task(db)
        assert store.complete_task(db, task_id, USER, hours_spent=1.5, notes="done") is not None
        session_id = store.create_study_session(db, USER, 45, date.today(), task_id=task_id)

        assert store.delete_task(db, task_id) == 1
        assert db.query(CompletionLog).filter(CompletionLog.task_id == task_id).count() == 0
        session = db.get(StudySession, session_id)
        assert session is not None
        assert session.task_id is None


class TestCompleteTask:
    def test_complete_sets_status_and_logs(self, db):
        task_id = _task(db)
        stale = _backdate(db, task_id)
        log_id = store.complete_task(db, task_id, USER, hours_spent=2, notes="finished early")
        assert db.get(Task, task_id).status == "completed"
        assert db.get(Task, task_id).updated_at > stale
        log = db.get(CompletionLog, log_id)
        assert log.task_id == task_id
        assert log.hours_spent == 2
        assert log.notes == "finished early"

    def test_complete_missing_task(self, db):
        assert store.complete_task(db, 12345, USER) is None
        assert db.query(CompletionLog).count() == 0

    def test_complete_is_all_or_nothing(self, db):
        task_id = _task(db)
        # log insert fails on the user foreign key, status change must roll back too
        with pytest.raises(ConstraintViolation):
            store.complete_task(db, task_id, 999)
        db.expire_all()
        assert db.get(Task, task_id).status == "pending"
        assert db.query(CompletionLog).count() == 0


class TestSessions:
    def test_session_rejects_dangling_task(self, db):
        with pytest.raises(ConstraintViolation):
            store.create_study_session(db, USER, 30, date.today(), task_id=777)
        assert db.query(StudySession).count() == 0

    @pytest.mark.parametrize("minutes", [0, -5])
    def test_session_requires_positive_duration(self, db, minutes):
        with pytest.raises(ConstraintViolation):
            store.create_study_session(db, USER, minutes, date.today())

    def test_session_listing_window_and_title(self, db):
        task_id = _task(db, title="Linear algebra")
        today = date.today()
        store.create_study_session(db, USER, 30, today, task_id=task_id)
        store.create_study_session(db, USER, 60, today - timedelta(days=40), notes="old")

        recent = store.list_study_sessions(db, USER, days=30)
        assert len(recent) == 1
        assert recent[0]["task_title"] == "Linear algebra"

        everything = store.list_study_sessions(db, USER, days=60)
        assert [s["duration_minutes"] for s in everything] == [30, 60]
        assert everything[1]["task_title"] is None

    def test_completion_logs_join_title(self, db):
        task_id = _task(db, title="Essay draft")
        store.complete_task(db, task_id, USER, hours_spent=3)
        logs = store.list_completion_logs(db, USER)
        assert len(logs) == 1
        assert logs[0]["task_title"] == "Essay draft"
        assert logs[0]["hours_spent"] == 3

    def test_study_dates_distinct_and_descending(self, db):
        today = date.today()
        for offset in (2, 0, 0, 1, 2):
            store.create_study_session(db, USER, 25, today - timedelta(days=offset))
        assert store.study_dates(db, USER) == [today, today - timedelta(days=1), today - timedelta(days=2)]

    def test_window_past_earliest_date(self, db):
        store.create_study_session(db, USER, 30, date(1999, 12, 31))
        assert len(store.list_study_sessions(db, USER, days=1_000_000)) == 1
        assert store.list_completion_logs(db, USER, days=10**9) == []

    def test_negative_window_rejected(self, db):
        with pytest.raises(ConstraintViolation):
            store.list_study_sessions(db, USER, days=-1)


class TestUsers:
    def test_duplicate_user_rejected(self, db):
        store.create_user(db, "alice", "alice@example.com")
        with pytest.raises(ConstraintViolation):
            store.create_user(db, "alice", "other@example.com")
        with pytest.raises(ConstraintViolation):
            store.create_user(db, "bob", "alice@example.com")

    def test_user_delete_cascades(self, db):
        from studyplanner.models.user import User
        user_id = store.create_user(db, "carol", "carol@example.com")
        store.create_task(db, user_id, {"title": "t", "type": "goal"})
        store.create_study_session(db, user_id, 10, date.today())
        db.delete(db.get(User, user_id))
        db.commit()
        assert db.query(Task).filter(Task.user_id == user_id).count() == 0
        assert db.query(StudySession).filter(StudySession.user_id == user_id).count() == 0
