"""
Real-estate project analytics engine.

Turns an in-memory snapshot of projects, workers, vendors, expenses and
worker assignments into dashboard aggregates, a per-project detail view,
a portfolio financial overview and worker utilization figures.
"""

from .dataset import DatasetSnapshot  # noqa: F401
from .errors import AnalyticsError, DataUnavailableError, ProjectNotFoundError  # noqa: F401
from .models import (  # noqa: F401
    ActivityItem,
    DashboardSnapshot,
    Expense,
    FinancialAnalytics,
    Project,
    ProjectDetailView,
    ProjectWorkerAssignment,
    Vendor,
    Worker,
    WorkerAnalytics,
)
from .repository import (  # noqa: F401
    InMemoryRepository,
    JSONFileRepository,
    SnapshotRepository,
    SQLSnapshotRepository,
    build_repository,
)
from .service import (  # noqa: F401
    ProjectAnalyticsService,
    compute_dashboard,
    compute_financial_overview,
    compute_project_detail,
    compute_worker_analytics,
)
