"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skill_tracker import __version__
from skill_tracker.config import settings
from skill_tracker.database import Base, SessionLocal, engine
from skill_tracker.exceptions import (
    DuplicateError,
    InvalidLevelError,
    NotFoundError,
    SkillTrackerError,
    SpreadsheetError,
)
from skill_tracker.routers import dashboard, imports, skill_ratings, skills, system, team_members
from skill_tracker.seed import seed_demo_data
from skill_tracker.services.store import SkillStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("skill_tracker.api")

# Domain error -> (status code, error code)
ERROR_STATUS: dict[type[SkillTrackerError], tuple[int, str]] = {
    NotFoundError: (404, "not_found"),
    DuplicateError: (409, "duplicate"),
    InvalidLevelError: (400, "invalid_level"),
    SpreadsheetError: (422, "invalid_spreadsheet"),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    Path(settings.data_root).mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)
    if settings.seed_demo_data:
        db = SessionLocal()
        try:
            seed_demo_data(SkillStore(db))
        finally:
            db.close()
    logger.info("Skill tracker API ready (database: %s)", settings.database_url)
    yield


app = FastAPI(
    title="Team Skill Tracker API",
    description="Team members, skill catalog, weekly skill ratings and dashboard aggregates",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware to allow the frontend to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


if settings.log_requests:

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            status = getattr(response, "status_code", "error")
            rid = getattr(request.state, "request_id", None)
            logger.info(
                "%s %s -> %s (%.2f ms) request_id=%s",
                request.method,
                request.url.path,
                status,
                duration_ms,
                rid,
            )


# Registered last so it runs first and the request id is set for logging
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or uuid4().hex
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


def _error_response(request: Request, status_code: int, error: str, detail: str) -> JSONResponse:
    payload = {"error": error, "detail": detail}
    rid = getattr(request.state, "request_id", None)
    headers = None
    if rid:
        payload["request_id"] = rid
        headers = {"x-request-id": rid}
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


@app.exception_handler(SkillTrackerError)
async def domain_exception_handler(request: Request, exc: SkillTrackerError):
    status_code, error = 400, "bad_request"
    for exc_type, mapping in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            status_code, error = mapping
            break
    return _error_response(request, status_code, error, str(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = getattr(request.state, "request_id", None)
    logger.exception("Unhandled error on %s (request_id=%s)", request.url.path, rid)
    return _error_response(request, 500, "internal_error", "Unexpected server error")


# Mount routers
app.include_router(team_members.router, prefix="/api")
app.include_router(skills.router, prefix="/api")
app.include_router(skill_ratings.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")
app.include_router(imports.router, prefix="/api")
app.include_router(system.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)
