from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .dataset import DatasetSnapshot
from .errors import ProjectNotFoundError
from .financial import project_efficiency
from .metrics import group_sum, ratio, sum_values
from .models import AssignedWorker, Project, ProjectDetailView, ProjectWorkerAssignment, Worker, to_datetime
from .performance import milestone_label

logger = logging.getLogger(__name__)

# Monthly labor cost is projected from weekly hours over a 4-week month.
WEEKS_PER_MONTH = 4

_ONE_DAY = timedelta(days=1)


def days_remaining(project: Project, now: datetime) -> Optional[int]:
    if project.end_date is None:
        return None
    return math.ceil((project.end_date - now) / _ONE_DAY)


def _join_assignments(
    assignments: Sequence[ProjectWorkerAssignment],
    workers: Dict[Any, Worker],
) -> List[Tuple[ProjectWorkerAssignment, Worker]]:
    joined = []
    for assignment in assignments:
        worker: Optional[Worker] = workers.get(assignment.worker_id)
        if worker is None:
            logger.debug(
                "Skipping assignment of missing worker %s to project %s",
                assignment.worker_id,
                assignment.project_id,
            )
            continue
        joined.append((assignment, worker))
    return joined


def compute_project_detail(snapshot: DatasetSnapshot, project_id: Any, now: datetime) -> ProjectDetailView:
    """
    Build the enriched analytics view for one project.

    Raises ``ProjectNotFoundError`` before computing anything when the id is not
    in the snapshot. Assignments pointing at deleted workers are dropped from
    both the worker list and the labor cost.
    """

    project = snapshot.find_project(project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)

    now = to_datetime(now)
    joined = _join_assignments(snapshot.assignments_for_project(project.id), snapshot.workers_by_id())
    expenses = snapshot.expenses_for_project(project.id)

    return ProjectDetailView(
        project=project,
        budget_remaining=project.budget - project.spent,
        budget_utilization=ratio(project.spent, project.budget),
        days_remaining=days_remaining(project, now),
        assigned_workers=[
            AssignedWorker(worker=worker, hours_assigned=assignment.hours_per_week)
            for assignment, worker in joined
        ],
        total_vendors=len(snapshot.vendors_for_project(project.id)),
        total_expenses=sum_values(expenses, lambda expense: expense.amount),
        expense_breakdown=group_sum(expenses, lambda expense: expense.category, lambda expense: expense.amount),
        labor_cost=sum(
            (worker.hourly_rate * assignment.hours_per_week * WEEKS_PER_MONTH for assignment, worker in joined),
            0.0,
        ),
        on_track=project.end_date is None or project.end_date >= now,
        efficiency=project_efficiency(project),
        milestone=milestone_label(project.progress_percent),
    )
