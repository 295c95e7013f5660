from __future__ import annotations

from datetime import datetime
from typing import Sequence

from .models import PerformanceMetrics, Project, to_datetime

HIGH_PROGRESS_THRESHOLD = 75
LOW_PROGRESS_THRESHOLD = 25
COMPLETE_PROGRESS = 100

MILESTONES = (
    (75, "Almost Complete"),
    (50, "Halfway"),
    (25, "In Progress"),
)
DEFAULT_MILESTONE = "Just Started"


def is_on_time(project: Project, now: datetime) -> bool:
    if project.end_date is None:
        return False
    return project.end_date >= now and project.progress_percent >= HIGH_PROGRESS_THRESHOLD


def is_delayed(project: Project, now: datetime) -> bool:
    if project.end_date is None:
        return False
    return project.end_date < now and project.progress_percent < COMPLETE_PROGRESS


def is_high_progress(project: Project) -> bool:
    return project.progress_percent >= HIGH_PROGRESS_THRESHOLD


def is_low_progress(project: Project) -> bool:
    return project.progress_percent <= LOW_PROGRESS_THRESHOLD


def analyze_performance(projects: Sequence[Project], now: datetime) -> PerformanceMetrics:
    """
    Count projects per schedule/progress bucket.

    Buckets are evaluated independently, so a single project can be counted as
    both delayed and high-progress. Projects without an end date only take part
    in the progress buckets.
    """

    now = to_datetime(now)
    return PerformanceMetrics(
        on_time_projects=sum(1 for project in projects if is_on_time(project, now)),
        delayed_projects=sum(1 for project in projects if is_delayed(project, now)),
        high_progress_projects=sum(1 for project in projects if is_high_progress(project)),
        low_progress_projects=sum(1 for project in projects if is_low_progress(project)),
    )


def milestone_label(progress_percent: float) -> str:
    for threshold, label in MILESTONES:
        if progress_percent >= threshold:
            return label
    return DEFAULT_MILESTONE
