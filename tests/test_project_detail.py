from __future__ import annotations

from datetime import timedelta

import pytest

from backend.project_analytics.dataset import DatasetSnapshot
from backend.project_analytics.errors import ProjectNotFoundError
from backend.project_analytics.models import Project, ProjectWorkerAssignment, Worker
from backend.project_analytics.project_detail import compute_project_detail


def test_unknown_project_raises(snapshot, now):
    with pytest.raises(ProjectNotFoundError) as excinfo:
        compute_project_detail(snapshot, 404, now)
    assert excinfo.value.project_id == 404


def test_detail_for_active_project(snapshot, now):
    detail = compute_project_detail(snapshot, 1, now)
    assert detail.project.name == "Harbor View"
    assert detail.budget_remaining == 600000
    assert detail.budget_utilization == pytest.approx(40)
    assert detail.days_remaining == 213
    assert [assigned.worker.name for assigned in detail.assigned_workers] == ["Ada", "Ben"]
    assert [assigned.hours_assigned for assigned in detail.assigned_workers] == [30, 20]
    assert detail.total_workers == 2
    assert detail.total_vendors == 1
    assert detail.total_expenses == 225000
    assert detail.expense_breakdown == {"Materials": 175000, "Labor": 50000}
    assert detail.labor_cost == 30 * 30 * 4 + 25 * 20 * 4
    assert detail.on_track is True
    assert detail.efficiency == pytest.approx(125)
    assert detail.milestone == "Halfway"


def test_detail_accepts_string_ids(snapshot, now):
    assert compute_project_detail(snapshot, "3", now).project.name == "Cedar Lofts"


def test_overdue_project(snapshot, now):
    detail = compute_project_detail(snapshot, 3, now)
    assert detail.days_remaining == -31
    assert detail.on_track is False
    assert detail.budget_remaining == -100000
    assert detail.budget_utilization == pytest.approx(120)
    assert detail.milestone == "Almost Complete"


def test_unspent_project_has_undefined_efficiency(snapshot, now):
    detail = compute_project_detail(snapshot, 2, now)
    assert detail.days_remaining is None
    assert detail.on_track is True
    assert detail.efficiency is None
    assert detail.assigned_workers == []
    assert detail.total_expenses == 0
    assert detail.expense_breakdown == {}
    assert detail.milestone == "Just Started"


def test_zero_budget_project(now):
    snapshot = DatasetSnapshot(projects=[Project(id=1, name="Free", budget=0, spent=0)])
    detail = compute_project_detail(snapshot, 1, now)
    assert detail.budget_utilization == 0
    assert detail.efficiency == 0


def test_days_remaining_rounds_up_partial_days(now):
    project = Project(id=1, name="Soon", end_date=now + timedelta(hours=1))
    detail = compute_project_detail(DatasetSnapshot(projects=[project]), 1, now)
    assert detail.days_remaining == 1


def test_dangling_assignments_are_dropped(now):
    snapshot = DatasetSnapshot(
        projects=[Project(id=1, name="P", budget=100, spent=10)],
        workers=[Worker(id=1, name="Kept", hourly_rate=10)],
        assignments=[
            ProjectWorkerAssignment(project_id=1, worker_id=1, hours_per_week=10),
            ProjectWorkerAssignment(project_id=1, worker_id=2, hours_per_week=40),
            ProjectWorkerAssignment(project_id=2, worker_id=1, hours_per_week=40),
        ],
    )
    detail = compute_project_detail(snapshot, 1, now)
    assert [assigned.worker.name for assigned in detail.assigned_workers] == ["Kept"]
    assert detail.labor_cost == 10 * 10 * 4


def test_detail_serialization(snapshot, now):
    payload = compute_project_detail(snapshot, 1, now).as_dict()
    assert payload["project"]["name"] == "Harbor View"
    assert payload["project"]["budgetRemaining"] == 600000
    assert payload["project"]["daysRemaining"] == 213
    assert payload["resources"]["totalWorkers"] == 2
    assert payload["resources"]["assignedWorkers"][0]["hours_assigned"] == 30
    assert payload["resources"]["assignedWorkers"][0]["name"] == "Ada"
    assert payload["financial"]["expenseBreakdown"] == {"Materials": 175000, "Labor": 50000}
    assert payload["progress"] == {"onTrack": True, "efficiency": pytest.approx(125), "milestone": "Halfway"}
