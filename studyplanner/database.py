import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from studyplanner.config import DATABASE_URL, DEFAULT_USER_ID, DEMO_USERNAME, DEMO_EMAIL

logger = logging.getLogger(__name__)

# Only apply sqlite-specific connect_args when using sqlite
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Enable pool_pre_ping to avoid stale connections (useful for cloud DBs like Neon)
engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

if DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # sqlite ignores ON DELETE CASCADE / SET NULL unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables and make sure the demo user exists."""
    # Import all models so they register with Base.metadata
    from studyplanner.models.user import User
    from studyplanner.models.task import Task  # noqa: F401
    from studyplanner.models.completion_log import CompletionLog  # noqa: F401
    from studyplanner.models.study_session import StudySession  # noqa: F401

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if db.get(User, DEFAULT_USER_ID) is None:
            exists = db.query(User).filter(User.username == DEMO_USERNAME).first()
            if exists:
                logger.warning("Demo user %s already exists with id %s", DEMO_USERNAME, exists.id)
            else:
                # let the database assign the id so its sequence stays in step
                demo = User(username=DEMO_USERNAME, email=DEMO_EMAIL)
                db.add(demo)
                db.commit()
                if demo.id != DEFAULT_USER_ID:
                    logger.warning("Demo user created with id %s, but DEFAULT_USER_ID is %s", demo.id, DEFAULT_USER_ID)
                else:
                    logger.info("Demo user created with id %s", demo.id)
    finally:
        db.close()
