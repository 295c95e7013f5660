"""FastAPI server that exposes the read-only analytics queries."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import configure_logging, load_settings
from .errors import DataUnavailableError, ProjectNotFoundError
from .repository import JSONFileRepository, SnapshotRepository, build_repository
from .service import ProjectAnalyticsService

logger = logging.getLogger(__name__)

settings = load_settings()
repository: SnapshotRepository = build_repository(settings)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    logger.info("Starting analytics API (%s)", settings.environment)
    if settings.seed_data and isinstance(repository, JSONFileRepository):
        try:
            repository.initialize()
        except DataUnavailableError as exc:
            logger.warning("Data file could not be initialized: %s", exc)
    yield


app = FastAPI(title="Real Estate Project Analytics API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_service() -> ProjectAnalyticsService:
    return ProjectAnalyticsService(repository)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@app.exception_handler(DataUnavailableError)
async def data_unavailable_handler(_: Request, exc: DataUnavailableError) -> JSONResponse:
    logger.error("Analytics data unavailable: %s", exc)
    return JSONResponse(
        status_code=503,
        content={"error": "Failed to generate analytics", "message": str(exc)},
    )


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/analytics/dashboard")
def dashboard_endpoint(service: ProjectAnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    return service.dashboard(_now()).as_dict()


@app.get("/analytics/projects/{project_id}")
def project_detail_endpoint(
    project_id: int,
    service: ProjectAnalyticsService = Depends(get_service),
) -> Dict[str, Any]:
    try:
        detail = service.project_detail(project_id, _now())
    except ProjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Project not found") from exc
    return detail.as_dict()


@app.get("/analytics/financial")
def financial_endpoint(service: ProjectAnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    return service.financial_overview().as_dict()


@app.get("/analytics/workers")
def workers_endpoint(service: ProjectAnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    return service.worker_analytics().as_dict()
