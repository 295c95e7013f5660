from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from backend.project_analytics.dataset import DatasetSnapshot

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    return {
        "projects": [
            {
                "id": 1,
                "name": "Harbor View",
                "status": "Active",
                "budget": 1000000,
                "spent": 400000,
                "progress_percent": 50,
                "start_date": "2025-01-01",
                "end_date": "2025-12-31",
                "created_at": "2025-01-01T09:00:00Z",
            },
            {
                "id": 2,
                "name": "Maple Court",
                "status": "Planning",
                "budget": 250000,
                "spent": 0,
                "progress_percent": 10,
                "end_date": None,
                "created_at": "2025-02-01T09:00:00Z",
            },
            {
                "id": 3,
                "name": "Cedar Lofts",
                "status": "Active",
                "budget": 500000,
                "spent": 600000,
                "progress_percent": 80,
                "end_date": "2025-05-01",
                "created_at": "2025-03-01T09:00:00Z",
            },
            {
                "id": 4,
                "name": "Oak Plaza",
                "status": "Completed",
                "budget": 300000,
                "spent": 290000,
                "progress_percent": 100,
                "end_date": "2025-04-01",
                "created_at": "2024-12-01T09:00:00Z",
            },
        ],
        "workers": [
            {
                "id": 1,
                "name": "Ada",
                "role": "Electrician",
                "hourly_rate": 30,
                "contact": "ada@example.com",
                "created_at": "2025-01-05T08:00:00Z",
            },
            {
                "id": 2,
                "name": "Ben",
                "role": "Carpenter",
                "hourly_rate": 25,
                "contact": "ben@example.com",
                "created_at": "2025-01-06T08:00:00Z",
            },
            {"id": 3, "name": "Cy", "role": "Electrician", "hourly_rate": 35, "created_at": "2025-03-05T08:00:00Z"},
        ],
        "vendors": [
            {
                "id": 1,
                "name": "Steelworks",
                "category": "Materials",
                "rating": 5,
                "project_id": 1,
                "created_at": "2025-01-10T08:00:00Z",
            },
            {"id": 2, "name": "Quick Haul", "category": "Logistics", "rating": 3, "created_at": "2025-02-10T08:00:00Z"},
        ],
        "expenses": [
            {"id": 1, "project_id": 1, "category": "Materials", "amount": 150000, "date": "2025-02-01"},
            {"id": 2, "project_id": 1, "category": "Labor", "amount": 50000, "date": "2025-03-01"},
            {"id": 3, "project_id": 1, "category": "Materials", "amount": 25000, "date": "2025-04-01"},
            {"id": 4, "project_id": 3, "category": "Permits", "amount": 10000, "date": "2025-03-15"},
        ],
        "project_workers": [
            {"project_id": 1, "worker_id": 1, "hours_per_week": 30},
            {"project_id": 1, "worker_id": 2, "hours_per_week": 20},
            {"project_id": 1, "worker_id": 99, "hours_per_week": 40},
            {"project_id": 3, "worker_id": 1, "hours_per_week": 15},
            {"project_id": 3, "worker_id": 3, "hours_per_week": 10},
        ],
    }


@pytest.fixture
def snapshot(sample_document: Dict[str, Any]) -> DatasetSnapshot:
    return DatasetSnapshot.from_mapping(sample_document)
