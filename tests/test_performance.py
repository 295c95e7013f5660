from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from backend.project_analytics.models import Project
from backend.project_analytics.performance import analyze_performance, milestone_label


def test_sample_portfolio(snapshot, now):
    metrics = analyze_performance(snapshot.projects, now)
    assert metrics.on_time_projects == 0
    assert metrics.delayed_projects == 1
    assert metrics.high_progress_projects == 2
    assert metrics.low_progress_projects == 1


def test_buckets_are_independent(now):
    late_but_advanced = Project(
        id=1,
        name="Late",
        progress_percent=90,
        end_date=now - timedelta(days=1),
    )
    metrics = analyze_performance([late_but_advanced], now)
    assert metrics.delayed_projects == 1
    assert metrics.high_progress_projects == 1
    assert metrics.on_time_projects == 0


def test_end_date_equal_to_now_is_on_time(now):
    project = Project(id=1, name="Due", progress_percent=75, end_date=now)
    metrics = analyze_performance([project], now)
    assert metrics.on_time_projects == 1
    assert metrics.delayed_projects == 0


def test_projects_without_end_date_only_count_for_progress(now):
    projects = [
        Project(id=1, name="Open high", progress_percent=95),
        Project(id=2, name="Open low", progress_percent=25),
    ]
    metrics = analyze_performance(projects, now)
    assert metrics.on_time_projects == 0
    assert metrics.delayed_projects == 0
    assert metrics.high_progress_projects == 1
    assert metrics.low_progress_projects == 1


def test_mid_progress_project_is_neither_high_nor_low(now):
    metrics = analyze_performance(
        [Project(id=1, name="Mid", status="Active", budget=1000, spent=1200, progress_percent=50)], now
    )
    assert metrics.low_progress_projects == 0
    assert metrics.high_progress_projects == 0


def test_now_is_injected_not_read():
    project = Project(id=1, name="P", progress_percent=10, end_date=datetime(2030, 1, 1, tzinfo=timezone.utc))
    assert analyze_performance([project], datetime(2029, 1, 1, tzinfo=timezone.utc)).delayed_projects == 0
    assert analyze_performance([project], datetime(2031, 1, 1, tzinfo=timezone.utc)).delayed_projects == 1


def test_naive_now_is_treated_as_utc():
    project = Project(id=1, name="P", progress_percent=10, end_date=datetime(2030, 1, 1, tzinfo=timezone.utc))
    assert analyze_performance([project], datetime(2031, 1, 1)).delayed_projects == 1


@pytest.mark.parametrize(
    "progress, label",
    [
        (100, "Almost Complete"),
        (75, "Almost Complete"),
        (74.9, "Halfway"),
        (50, "Halfway"),
        (25, "In Progress"),
        (24, "Just Started"),
        (0, "Just Started"),
    ],
)
def test_milestone_label(progress, label):
    assert milestone_label(progress) == label
