from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .dataset import DatasetSnapshot, latest
from .models import ActivityItem, Project, Vendor, Worker

RECENT_PROJECTS = 5
RECENT_WORKERS = 3
RECENT_VENDORS = 3
FEED_LIMIT = 8

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def project_activity(project: Project) -> ActivityItem:
    action = "created" if project.status == "Planning" else "updated"
    return ActivityItem(
        type="project",
        action=action,
        title=project.name,
        timestamp=project.created_at,
        description=f'Project "{project.name}" {action} with budget ${_format_amount(project.budget)}',
        status=project.status,
        priority="high",
    )


def worker_activity(worker: Worker) -> ActivityItem:
    return ActivityItem(
        type="worker",
        action="added",
        title=worker.name,
        timestamp=worker.created_at,
        description=f'New worker "{worker.name}" added as {worker.role}',
        status="completed",
        priority="medium",
    )


def vendor_activity(vendor: Vendor) -> ActivityItem:
    return ActivityItem(
        type="vendor",
        action="added",
        title=vendor.name,
        timestamp=vendor.created_at,
        description=f'New vendor "{vendor.name}" added in {vendor.category} category',
        status="completed",
        priority="medium",
    )


def _sort_key(item: ActivityItem) -> Tuple[bool, datetime]:
    timestamp: Optional[datetime] = item.timestamp
    return (timestamp is not None, timestamp or _EPOCH)


def build_activity_feed(snapshot: DatasetSnapshot, limit: int = FEED_LIMIT) -> List[ActivityItem]:
    """
    Merge the newest projects, workers and vendors into one feed.

    Each collection is truncated by load order before merging. The merged feed
    is sorted newest first; ``sorted`` is stable, so equal timestamps keep the
    merge order, and items without a timestamp sink to the end.
    """

    merged: List[ActivityItem] = []
    merged.extend(project_activity(project) for project in latest(snapshot.projects, RECENT_PROJECTS))
    merged.extend(worker_activity(worker) for worker in latest(snapshot.workers, RECENT_WORKERS))
    merged.extend(vendor_activity(vendor) for vendor in latest(snapshot.vendors, RECENT_VENDORS))
    return sorted(merged, key=_sort_key, reverse=True)[:limit]
