import os

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./study_planner.db")

# SQLAlchemy only accepts the postgresql:// scheme
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# Single-user deployment: every request acts on this user
DEFAULT_USER_ID = int(os.environ.get("DEFAULT_USER_ID", 1))
DEMO_USERNAME = os.environ.get("DEMO_USERNAME", "demo_user")
DEMO_EMAIL = os.environ.get("DEMO_EMAIL", "demo@studyplanner.com")

# Trailing window (days) for session/log listings when none is requested
DEFAULT_WINDOW_DAYS = int(os.environ.get("DEFAULT_WINDOW_DAYS", 30))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
