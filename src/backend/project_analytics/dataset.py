from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from .models import Expense, Project, ProjectWorkerAssignment, Vendor, Worker, to_identifier

T = TypeVar("T")

ASSIGNMENT_KEYS = ("project_workers", "assignments")


def _records(raw_items: Any, factory: Callable[[Mapping[str, Any]], T]) -> List[T]:
    if not isinstance(raw_items, (list, tuple)):
        return []
    return [factory(item) for item in raw_items if isinstance(item, Mapping)]


@dataclass(frozen=True)
class DatasetSnapshot:
    """
    Immutable view of every entity collection for one aggregation pass.

    Collections keep the order they were loaded in: the activity feed relies on
    insertion order to pick the most recently added rows.
    """

    projects: Sequence[Project] = field(default_factory=tuple)
    workers: Sequence[Worker] = field(default_factory=tuple)
    vendors: Sequence[Vendor] = field(default_factory=tuple)
    expenses: Sequence[Expense] = field(default_factory=tuple)
    assignments: Sequence[ProjectWorkerAssignment] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("projects", "workers", "vendors", "expenses", "assignments"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DatasetSnapshot":
        """
        Build a snapshot from the flat document layout used by the JSON store.

        Assignments are read from ``project_workers`` (falling back to
        ``assignments``). Missing collections and non-object rows are skipped.
        """

        raw_assignments: Any = None
        for key in ASSIGNMENT_KEYS:
            if raw.get(key) is not None:
                raw_assignments = raw.get(key)
                break
        return cls(
            projects=_records(raw.get("projects"), Project.from_mapping),
            workers=_records(raw.get("workers"), Worker.from_mapping),
            vendors=_records(raw.get("vendors"), Vendor.from_mapping),
            expenses=_records(raw.get("expenses"), Expense.from_mapping),
            assignments=_records(raw_assignments, ProjectWorkerAssignment.from_mapping),
        )

    def find_project(self, project_id: Any) -> Optional[Project]:
        target = to_identifier(project_id)
        for project in self.projects:
            if project.id == target:
                return project
        return None

    def workers_by_id(self) -> Dict[Any, Worker]:
        index: Dict[Any, Worker] = {}
        for worker in self.workers:
            # First row wins when an id is duplicated.
            index.setdefault(worker.id, worker)
        return index

    def assignments_for_project(self, project_id: Any) -> List[ProjectWorkerAssignment]:
        return [assignment for assignment in self.assignments if assignment.project_id == project_id]

    def assignments_for_worker(self, worker_id: Any) -> List[ProjectWorkerAssignment]:
        return [assignment for assignment in self.assignments if assignment.worker_id == worker_id]

    def expenses_for_project(self, project_id: Any) -> List[Expense]:
        return [expense for expense in self.expenses if expense.project_id == project_id]

    def vendors_for_project(self, project_id: Any) -> List[Vendor]:
        return [vendor for vendor in self.vendors if vendor.project_id == project_id]


def latest(items: Sequence[T], count: int) -> List[T]:
    """Return the last ``count`` items in collection order."""

    if count <= 0:
        return []
    return list(items[-count:])
