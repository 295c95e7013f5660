from __future__ import annotations

import logging
from typing import Optional, Sequence

from .dataset import DatasetSnapshot
from .metrics import group_sum, ratio, sum_values
from .models import (
    BudgetAlert,
    CostEfficiencyRow,
    FinancialAnalytics,
    FinancialOverview,
    FinancialStats,
    Project,
    ProjectStats,
    WorkerStats,
)

logger = logging.getLogger(__name__)

# Full-time month used to project labor cost from hourly rates.
HOURS_PER_MONTH = 160


def is_over_budget(project: Project) -> bool:
    return project.spent > project.budget


def project_efficiency(project: Project) -> Optional[float]:
    """
    Progress delivered per unit of budget consumed.

    ``progress_percent / (spent / budget)``; unbounded, so a project that is
    ahead of its spend curve scores above 100. Without a budget the ratio is 0.
    With a budget but nothing spent yet the value is undefined and reported as
    ``None``.
    """

    if project.budget <= 0:
        return 0.0
    if project.spent == 0:
        return None
    return project.progress_percent / (project.spent / project.budget)


def analyze_financials(
    project_stats: ProjectStats,
    worker_stats: WorkerStats,
    projects: Sequence[Project],
) -> FinancialStats:
    return FinancialStats(
        budget_utilization=ratio(project_stats.total_spent, project_stats.total_budget),
        estimated_monthly_labor=worker_stats.total_hourly_rate * HOURS_PER_MONTH,
        budget_remaining=project_stats.total_budget - project_stats.total_spent,
        projects_over_budget=sum(1 for project in projects if is_over_budget(project)),
    )


def compute_financial_overview(snapshot: DatasetSnapshot) -> FinancialAnalytics:
    projects = snapshot.projects
    overview = FinancialOverview(
        total_budget=sum_values(projects, lambda project: project.budget),
        total_spent=sum_values(projects, lambda project: project.spent),
        total_remaining=sum_values(projects, lambda project: project.budget - project.spent),
        monthly_labor_cost=sum_values(snapshot.workers, lambda worker: worker.hourly_rate * HOURS_PER_MONTH),
        total_expenses=sum_values(snapshot.expenses, lambda expense: expense.amount),
    )
    cost_efficiency = [
        CostEfficiencyRow(
            name=project.name,
            budget=project.budget,
            spent=project.spent,
            progress=project.progress_percent,
            efficiency=project_efficiency(project),
        )
        for project in projects
    ]
    alerts = [
        BudgetAlert(project=project.name, over_budget=project.spent - project.budget)
        for project in projects
        if is_over_budget(project)
    ]
    if alerts:
        logger.info("%d project(s) over budget", len(alerts))

    return FinancialAnalytics(
        overview=overview,
        budget_distribution=group_sum(projects, lambda project: project.status, lambda project: project.budget),
        expense_breakdown=group_sum(snapshot.expenses, lambda expense: expense.category, lambda expense: expense.amount),
        cost_efficiency=cost_efficiency,
        alerts=alerts,
    )
