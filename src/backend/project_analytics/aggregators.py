from __future__ import annotations

from typing import Sequence

from .metrics import average, group_count, sum_values
from .models import Project, ProjectStats, Vendor, VendorStats, Worker, WorkerStats

TOP_RATED_THRESHOLD = 4


def aggregate_projects(projects: Sequence[Project]) -> ProjectStats:
    return ProjectStats(
        total=len(projects),
        by_status=group_count(projects, lambda project: project.status),
        total_budget=sum_values(projects, lambda project: project.budget),
        total_spent=sum_values(projects, lambda project: project.spent),
        average_budget=average(projects, lambda project: project.budget),
        average_progress=average(projects, lambda project: project.progress_percent),
    )


def aggregate_workers(workers: Sequence[Worker]) -> WorkerStats:
    return WorkerStats(
        total=len(workers),
        by_role=group_count(workers, lambda worker: worker.role),
        total_hourly_rate=sum_values(workers, lambda worker: worker.hourly_rate),
        average_hourly_rate=average(workers, lambda worker: worker.hourly_rate),
    )


def aggregate_vendors(vendors: Sequence[Vendor]) -> VendorStats:
    return VendorStats(
        total=len(vendors),
        by_category=group_count(vendors, lambda vendor: vendor.category),
        total_rating=sum_values(vendors, lambda vendor: vendor.rating),
        average_rating=average(vendors, lambda vendor: vendor.rating),
        top_rated=sum(1 for vendor in vendors if vendor.rating >= TOP_RATED_THRESHOLD),
    )
