from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from .activity import build_activity_feed
from .aggregators import aggregate_projects, aggregate_vendors, aggregate_workers
from .dataset import DatasetSnapshot
from .financial import analyze_financials, compute_financial_overview
from .metrics import round_half_up
from .models import (
    DashboardAlerts,
    DashboardSnapshot,
    DashboardSummary,
    FinancialAnalytics,
    FinancialStats,
    GrowthTrends,
    PerformanceMetrics,
    ProjectDetailView,
    WorkerAnalytics,
    WorkerStats,
    to_datetime,
)
from .performance import analyze_performance
from .project_detail import compute_project_detail
from .repository import InMemoryRepository, SnapshotRepository
from .workforce import compute_worker_analytics

__all__ = [
    "ProjectAnalyticsService",
    "compute_dashboard",
    "compute_financial_overview",
    "compute_project_detail",
    "compute_worker_analytics",
    "growth_percent",
]

logger = logging.getLogger(__name__)


def growth_percent(total: int) -> int:
    """
    Month-over-month growth placeholder: ``total / max(1, total - 1)`` as a percent.

    No history is retained, so this is a placeholder rather than a real trend.
    """

    if total <= 0:
        return 0
    return round_half_up(total / max(1, total - 1) * 100)


def _build_alerts(
    financial: FinancialStats,
    performance: PerformanceMetrics,
    workers: WorkerStats,
) -> DashboardAlerts:
    return DashboardAlerts(
        budget_alerts=(
            f"{financial.projects_over_budget} projects over budget" if financial.projects_over_budget > 0 else None
        ),
        progress_alerts=(
            f"{performance.delayed_projects} projects delayed" if performance.delayed_projects > 0 else None
        ),
        resource_alerts="No workers assigned" if workers.total == 0 else None,
    )


def compute_dashboard(snapshot: DatasetSnapshot, now: datetime) -> DashboardSnapshot:
    now = to_datetime(now)
    project_stats = aggregate_projects(snapshot.projects)
    worker_stats = aggregate_workers(snapshot.workers)
    vendor_stats = aggregate_vendors(snapshot.vendors)
    financial = analyze_financials(project_stats, worker_stats, snapshot.projects)
    performance = analyze_performance(snapshot.projects, now)

    return DashboardSnapshot(
        summary=DashboardSummary(
            total_projects=project_stats.total,
            total_workers=worker_stats.total,
            total_vendors=vendor_stats.total,
            overall_budget=project_stats.total_budget,
            budget_utilization=financial.budget_utilization,
        ),
        projects=project_stats,
        workers=worker_stats,
        vendors=vendor_stats,
        financial=financial,
        performance=performance,
        recent_activities=build_activity_feed(snapshot),
        trends=GrowthTrends(
            project_growth=growth_percent(project_stats.total),
            team_growth=growth_percent(worker_stats.total),
            vendor_growth=growth_percent(vendor_stats.total),
        ),
        alerts=_build_alerts(financial, performance, worker_stats),
        generated_at=now,
    )


class ProjectAnalyticsService:
    """
    Runs analytics queries against a fresh snapshot from the repository.

    Nothing is cached between calls; each query reloads the dataset and any
    ``DataUnavailableError`` from the repository propagates untouched.
    """

    def __init__(self, repository: SnapshotRepository) -> None:
        self.repository = repository

    def _snapshot(self) -> DatasetSnapshot:
        snapshot = self.repository.load()
        logger.debug(
            "Loaded snapshot: %d projects, %d workers, %d vendors, %d expenses, %d assignments",
            len(snapshot.projects),
            len(snapshot.workers),
            len(snapshot.vendors),
            len(snapshot.expenses),
            len(snapshot.assignments),
        )
        return snapshot

    def dashboard(self, now: datetime) -> DashboardSnapshot:
        result = compute_dashboard(self._snapshot(), now)
        logger.info("Dashboard generated at %s", result.generated_at.isoformat())
        return result

    def project_detail(self, project_id: Any, now: datetime) -> ProjectDetailView:
        return compute_project_detail(self._snapshot(), project_id, now)

    def financial_overview(self) -> FinancialAnalytics:
        return compute_financial_overview(self._snapshot())

    def worker_analytics(self) -> WorkerAnalytics:
        return compute_worker_analytics(self._snapshot())

    @classmethod
    def from_snapshot(cls, snapshot: DatasetSnapshot) -> "ProjectAnalyticsService":
        return cls(InMemoryRepository(snapshot))
