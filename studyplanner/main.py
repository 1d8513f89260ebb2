import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from studyplanner.config import LOG_LEVEL
from studyplanner.database import init_db
from studyplanner.errors import ConstraintViolation, StorageUnavailable
from studyplanner.routers import tasks, activity, stats, users

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

init_db()

app = FastAPI(title="Study Planner")

# API routers
app.include_router(tasks.router)
app.include_router(activity.router)
app.include_router(stats.router)
app.include_router(users.router)


@app.exception_handler(ConstraintViolation)
async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
	return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
	return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
	logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
	return JSONResponse(status_code=500, content={"detail": "Internal server error"})
