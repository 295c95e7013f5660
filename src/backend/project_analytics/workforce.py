from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from .dataset import DatasetSnapshot
from .financial import HOURS_PER_MONTH
from .metrics import UNKNOWN_KEY, average, sum_values
from .models import (
    ProjectWorkerAssignment,
    RoleGroup,
    RoleMember,
    UtilizationSummary,
    Worker,
    WorkerAnalytics,
    WorkerAssignmentStats,
    WorkforceSummary,
)
from .project_detail import WEEKS_PER_MONTH

FULLY_UTILIZED_HOURS = 40
UNDER_UTILIZED_HOURS = 20

FULLY_UTILIZED = "fully utilized"
UNDER_UTILIZED = "under-utilized"


def classify_utilization(weekly_hours: float) -> Optional[str]:
    if weekly_hours >= FULLY_UTILIZED_HOURS:
        return FULLY_UTILIZED
    if weekly_hours < UNDER_UTILIZED_HOURS:
        return UNDER_UTILIZED
    return None


def worker_assignment_stats(
    worker: Worker,
    assignments: Sequence[ProjectWorkerAssignment],
) -> WorkerAssignmentStats:
    weekly_hours = sum_values(assignments, lambda assignment: assignment.hours_per_week)
    return WorkerAssignmentStats(
        worker_id=worker.id,
        name=worker.name,
        role=worker.role,
        total_projects=len(assignments),
        total_weekly_hours=weekly_hours,
        monthly_cost=worker.hourly_rate * weekly_hours * WEEKS_PER_MONTH,
        utilization=classify_utilization(weekly_hours),
    )


def group_by_role(workers: Sequence[Worker]) -> Dict[str, RoleGroup]:
    members: Dict[str, List[Worker]] = defaultdict(list)
    for worker in workers:
        members[worker.role if worker.role is not None else UNKNOWN_KEY].append(worker)
    return {
        role: RoleGroup(
            count=len(group),
            total_rate=sum_values(group, lambda worker: worker.hourly_rate),
            workers=[RoleMember(name=worker.name, rate=worker.hourly_rate, contact=worker.contact) for worker in group],
        )
        for role, group in members.items()
    }


def compute_worker_analytics(snapshot: DatasetSnapshot) -> WorkerAnalytics:
    """
    Per-worker assignment load and utilization across the whole portfolio.

    Weekly hours are summed over every assignment row that references the
    worker; rows for workers that no longer exist are never looked at.
    """

    workers = snapshot.workers
    by_worker: Dict[object, List[ProjectWorkerAssignment]] = defaultdict(list)
    for assignment in snapshot.assignments:
        by_worker[assignment.worker_id].append(assignment)

    assignment_stats = [worker_assignment_stats(worker, by_worker.get(worker.id, [])) for worker in workers]
    by_role = group_by_role(workers)

    return WorkerAnalytics(
        summary=WorkforceSummary(
            total_workers=len(workers),
            total_roles=len(by_role),
            average_rate=average(workers, lambda worker: worker.hourly_rate),
            total_monthly_cost=sum_values(workers, lambda worker: worker.hourly_rate * HOURS_PER_MONTH),
        ),
        by_role=by_role,
        assignment_stats=assignment_stats,
        utilization=UtilizationSummary(
            fully_utilized=sum(1 for stats in assignment_stats if stats.utilization == FULLY_UTILIZED),
            under_utilized=sum(1 for stats in assignment_stats if stats.utilization == UNDER_UTILIZED),
        ),
    )
