from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Sequence


def to_number(value: Any) -> float:
    """
    Coerce a loosely typed numeric field into a float.

    Rows coming from the JSON file or a SQL driver may carry ``None``,
    ``Decimal`` or numeric strings. Anything that cannot be read as a finite
    number collapses to ``0.0`` instead of failing the aggregation.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Parse datetimes, dates and ISO-8601 strings into aware UTC-based values.

    Date-only values are read as midnight UTC. Naive values are assumed to be
    UTC so every timestamp in a snapshot stays comparable.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_identifier(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        return text or None
    return value


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _to_optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_name(value: Any) -> str:
    return str(value or "")


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class _EntityRecord:
    """
    Mixin for input records.

    Subclasses list a coercer per field in ``_coercers``; values are normalized
    in ``__post_init__`` so records built directly behave like records read
    from storage. They serialize with their stored snake_case keys.
    """

    _coercers: ClassVar[Dict[str, Callable[[Any], Any]]] = {}

    def __post_init__(self) -> None:
        for name, coerce in self._coercers.items():
            object.__setattr__(self, name, coerce(getattr(self, name)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]):
        return cls(**{item.name: raw.get(item.name) for item in fields(cls)})

    def as_dict(self) -> Dict[str, Any]:
        return {item.name: _encode(getattr(self, item.name)) for item in fields(self)}


@dataclass(frozen=True)
class Project(_EntityRecord):
    id: Any
    name: str
    status: Optional[str] = None
    budget: float = 0.0
    spent: float = 0.0
    progress_percent: float = 0.0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    location: Optional[str] = None
    units: Optional[int] = None

    _coercers = {
        "id": to_identifier,
        "name": _to_name,
        "status": _to_text,
        "budget": to_number,
        "spent": to_number,
        "progress_percent": to_number,
        "start_date": to_datetime,
        "end_date": to_datetime,
        "created_at": to_datetime,
        "location": _to_text,
        "units": _to_optional_int,
    }


@dataclass(frozen=True)
class Worker(_EntityRecord):
    id: Any
    name: str
    role: Optional[str] = None
    hourly_rate: float = 0.0
    contact: Optional[str] = None
    total_paid: float = 0.0
    last_payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    _coercers = {
        "id": to_identifier,
        "name": _to_name,
        "role": _to_text,
        "hourly_rate": to_number,
        "contact": _to_text,
        "total_paid": to_number,
        "last_payment_date": to_datetime,
        "created_at": to_datetime,
    }


@dataclass(frozen=True)
class Vendor(_EntityRecord):
    """
    Supplier record. ``project_id`` is optional; older data files attach
    vendors to the portfolio rather than to a single project.
    """

    id: Any
    name: str
    category: Optional[str] = None
    rating: float = 0.0
    contact: Optional[str] = None
    total_paid: float = 0.0
    last_payment_date: Optional[datetime] = None
    project_id: Any = None
    created_at: Optional[datetime] = None

    _coercers = {
        "id": to_identifier,
        "name": _to_name,
        "category": _to_text,
        "rating": to_number,
        "contact": _to_text,
        "total_paid": to_number,
        "last_payment_date": to_datetime,
        "project_id": to_identifier,
        "created_at": to_datetime,
    }


@dataclass(frozen=True)
class Expense(_EntityRecord):
    id: Any
    project_id: Any
    category: Optional[str] = None
    amount: float = 0.0
    date: Optional[datetime] = None
    description: Optional[str] = None

    _coercers = {
        "id": to_identifier,
        "project_id": to_identifier,
        "category": _to_text,
        "amount": to_number,
        "date": to_datetime,
        "description": _to_text,
    }


@dataclass(frozen=True)
class ProjectWorkerAssignment(_EntityRecord):
    project_id: Any
    worker_id: Any
    hours_per_week: float = 0.0

    _coercers = {
        "project_id": to_identifier,
        "worker_id": to_identifier,
        "hours_per_week": to_number,
    }


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def serialize(obj: Any) -> Any:
    """
    Convert derived results into a JSON-serialisable structure.

    Derived fields use camelCase keys to match the dashboard frontend, while
    embedded entity records keep their stored snake_case keys.
    """

    if isinstance(obj, _EntityRecord):
        return obj.as_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return {_camel(item.name): serialize(getattr(obj, item.name)) for item in fields(obj)}
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Mapping):
        return {str(key): serialize(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [serialize(item) for item in obj]
    return obj


@dataclass(frozen=True)
class ProjectStats:
    total: int
    by_status: Dict[str, int]
    total_budget: float
    total_spent: float
    average_budget: float
    average_progress: float


@dataclass(frozen=True)
class WorkerStats:
    total: int
    by_role: Dict[str, int]
    total_hourly_rate: float
    average_hourly_rate: float


@dataclass(frozen=True)
class VendorStats:
    total: int
    by_category: Dict[str, int]
    total_rating: float
    average_rating: float
    top_rated: int


@dataclass(frozen=True)
class FinancialStats:
    budget_utilization: float
    estimated_monthly_labor: float
    budget_remaining: float
    projects_over_budget: int


@dataclass(frozen=True)
class PerformanceMetrics:
    on_time_projects: int
    delayed_projects: int
    high_progress_projects: int
    low_progress_projects: int


@dataclass(frozen=True)
class ActivityItem:
    type: str
    action: str
    title: str
    timestamp: Optional[datetime]
    description: str
    status: Optional[str]
    priority: str


@dataclass(frozen=True)
class DashboardSummary:
    total_projects: int
    total_workers: int
    total_vendors: int
    overall_budget: float
    budget_utilization: float


@dataclass(frozen=True)
class GrowthTrends:
    project_growth: int
    team_growth: int
    vendor_growth: int


@dataclass(frozen=True)
class DashboardAlerts:
    budget_alerts: Optional[str] = None
    progress_alerts: Optional[str] = None
    resource_alerts: Optional[str] = None


@dataclass(frozen=True)
class DashboardSnapshot:
    summary: DashboardSummary
    projects: ProjectStats
    workers: WorkerStats
    vendors: VendorStats
    financial: FinancialStats
    performance: PerformanceMetrics
    recent_activities: Sequence[ActivityItem]
    trends: GrowthTrends
    alerts: DashboardAlerts
    generated_at: datetime

    def as_dict(self) -> Dict[str, Any]:
        payload = {
            "summary": serialize(self.summary),
            "projects": serialize(self.projects),
            "workers": serialize(self.workers),
            "vendors": serialize(self.vendors),
            "financial": serialize(self.financial),
            "performance": serialize(self.performance),
            "recentActivities": serialize(self.recent_activities),
            "trends": serialize(self.trends),
            "alerts": serialize(self.alerts),
        }
        payload["timestamp"] = self.generated_at.isoformat()
        payload["generatedAt"] = int(self.generated_at.timestamp() * 1000)
        return payload


@dataclass(frozen=True)
class AssignedWorker:
    worker: Worker
    hours_assigned: float

    def as_dict(self) -> Dict[str, Any]:
        payload = self.worker.as_dict()
        payload["hours_assigned"] = self.hours_assigned
        return payload


@dataclass(frozen=True)
class ProjectDetailView:
    project: Project
    budget_remaining: float
    budget_utilization: float
    days_remaining: Optional[int]
    assigned_workers: Sequence[AssignedWorker]
    total_vendors: int
    total_expenses: float
    expense_breakdown: Dict[str, float]
    labor_cost: float
    on_track: bool
    efficiency: Optional[float]
    milestone: str

    @property
    def total_workers(self) -> int:
        return len(self.assigned_workers)

    def as_dict(self) -> Dict[str, Any]:
        project = self.project.as_dict()
        project.update(
            {
                "budgetRemaining": self.budget_remaining,
                "budgetUtilization": self.budget_utilization,
                "daysRemaining": self.days_remaining,
            }
        )
        return {
            "project": project,
            "resources": {
                "totalWorkers": self.total_workers,
                "assignedWorkers": [worker.as_dict() for worker in self.assigned_workers],
                "totalVendors": self.total_vendors,
            },
            "financial": {
                "totalExpenses": self.total_expenses,
                "expenseBreakdown": dict(self.expense_breakdown),
                "laborCost": self.labor_cost,
            },
            "progress": {
                "onTrack": self.on_track,
                "efficiency": self.efficiency,
                "milestone": self.milestone,
            },
        }


@dataclass(frozen=True)
class FinancialOverview:
    total_budget: float
    total_spent: float
    total_remaining: float
    monthly_labor_cost: float
    total_expenses: float


@dataclass(frozen=True)
class CostEfficiencyRow:
    name: str
    budget: float
    spent: float
    progress: float
    efficiency: Optional[float]


@dataclass(frozen=True)
class BudgetAlert:
    project: str
    over_budget: float
    severity: str = "high"


@dataclass(frozen=True)
class FinancialAnalytics:
    overview: FinancialOverview
    budget_distribution: Dict[str, float]
    expense_breakdown: Dict[str, float]
    cost_efficiency: Sequence[CostEfficiencyRow]
    alerts: Sequence[BudgetAlert]

    def as_dict(self) -> Dict[str, Any]:
        return serialize(self)


@dataclass(frozen=True)
class WorkforceSummary:
    total_workers: int
    total_roles: int
    average_rate: float
    total_monthly_cost: float


@dataclass(frozen=True)
class RoleMember:
    name: str
    rate: float
    contact: Optional[str]


@dataclass(frozen=True)
class RoleGroup:
    count: int = 0
    total_rate: float = 0.0
    workers: List[RoleMember] = field(default_factory=list)


@dataclass(frozen=True)
class WorkerAssignmentStats:
    worker_id: Any
    name: str
    role: Optional[str]
    total_projects: int
    total_weekly_hours: float
    monthly_cost: float
    utilization: Optional[str] = None


@dataclass(frozen=True)
class UtilizationSummary:
    fully_utilized: int
    under_utilized: int


@dataclass(frozen=True)
class WorkerAnalytics:
    summary: WorkforceSummary
    by_role: Dict[str, RoleGroup]
    assignment_stats: Sequence[WorkerAssignmentStats]
    utilization: UtilizationSummary

    def as_dict(self) -> Dict[str, Any]:
        return serialize(self)
