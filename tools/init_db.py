import logging
import sys
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from studyplanner.config import DATABASE_URL
from studyplanner.database import init_db

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

print("Initializing database at", DATABASE_URL)
init_db()
print("Database initialization complete. Start the server with `uvicorn studyplanner.main:app` (install the `serve` extra)")
