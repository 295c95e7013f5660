from __future__ import annotations

from typing import Any


class AnalyticsError(Exception):
    """Base class for errors surfaced by the analytics engine."""


class ProjectNotFoundError(AnalyticsError):
    def __init__(self, project_id: Any) -> None:
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class DataUnavailableError(AnalyticsError):
    """
    Raised when the dataset snapshot could not be obtained.

    Repositories chain the underlying storage error (``raise ... from exc``) so
    callers can inspect ``__cause__`` without the engine retrying anything.
    """
