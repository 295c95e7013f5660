from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import AnalyticsSettings
from .dataset import DatasetSnapshot
from .errors import DataUnavailableError

logger = logging.getLogger(__name__)


def default_dataset() -> Dict[str, Any]:
    """Seed document written to a fresh data file."""

    return {
        "projects": [
            {
                "id": 1,
                "name": "Sample Real Estate Project",
                "status": "Active",
                "budget": 500000,
                "spent": 0,
                "progress_percent": 25,
                "start_date": None,
                "end_date": None,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        ],
        "workers": [],
        "vendors": [],
        "expenses": [],
        "inventory_items": [],
        "project_workers": [],
    }


class SnapshotRepository:
    """
    Interface for loading the dataset snapshot.

    Implementations must raise ``DataUnavailableError`` when the backing store
    cannot be read; they never return partial data.
    """

    def load(self) -> DatasetSnapshot:
        raise NotImplementedError


class InMemoryRepository(SnapshotRepository):
    def __init__(self, snapshot: Optional[DatasetSnapshot] = None) -> None:
        self.snapshot = snapshot or DatasetSnapshot()

    def load(self) -> DatasetSnapshot:
        return self.snapshot


class SQLSnapshotRepository(SnapshotRepository):
    """
    Load the snapshot from the relational schema.

    Expected tables:
      - projects(id, name, location, units, status, budget, spent, start_date,
        end_date, progress_percent, created_at)
      - workers(id, name, role, hourly_rate, contact, total_paid,
        last_payment_date, created_at)
      - vendors(id, name, category, contact, rating, total_paid,
        last_payment_date, created_at)
      - expenses(id, project_id, category, amount, date, description) [optional]
      - project_workers(project_id, worker_id, hours_per_week) [optional]
    """

    REQUIRED_TABLES = ("projects", "workers", "vendors")
    OPTIONAL_TABLES = ("expenses", "project_workers")

    def __init__(self, engine: Engine):
        self.engine = engine

    def load(self) -> DatasetSnapshot:
        try:
            with self.engine.connect() as connection:
                available = set(inspect(connection).get_table_names())
                document: Dict[str, List[Dict[str, Any]]] = {}
                for table in self.REQUIRED_TABLES:
                    document[table] = self._fetch(connection, table)
                for table in self.OPTIONAL_TABLES:
                    document[table] = self._fetch(connection, table) if table in available else []
        except SQLAlchemyError as exc:
            logger.warning("Failed to load analytics snapshot from database: %s", exc)
            raise DataUnavailableError("Database is unavailable") from exc
        return DatasetSnapshot.from_mapping(document)

    @staticmethod
    def _fetch(connection: Any, table: str) -> List[Dict[str, Any]]:
        order = "" if table == "project_workers" else " ORDER BY id ASC"
        rows = connection.execute(text(f"SELECT * FROM {table}{order}")).fetchall()
        return [dict(row._mapping) for row in rows]


class JSONFileRepository(SnapshotRepository):
    """
    Load the snapshot from the flat JSON document used by single-node installs.

    A missing file yields the seed dataset. Unreadable or corrupt files raise
    ``DataUnavailableError`` instead of silently falling back.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def initialize(self) -> bool:
        """Write the seed dataset when the file does not exist yet. Returns True if seeded."""

        if self.path.exists():
            logger.info("Using existing data file: %s", self.path)
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(default_dataset(), indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to create data file %s: %s", self.path, exc)
            raise DataUnavailableError(f"Cannot create data file: {self.path}") from exc
        logger.info("Created data file with sample data: %s", self.path)
        return True

    def load(self) -> DatasetSnapshot:
        if not self.path.exists():
            logger.info("Data file %s not found; using sample data", self.path)
            return DatasetSnapshot.from_mapping(default_dataset())
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load data file %s: %s", self.path, exc)
            raise DataUnavailableError(f"Cannot read data file: {self.path}") from exc
        if not isinstance(document, dict):
            logger.warning("Data file %s does not contain a JSON object", self.path)
            raise DataUnavailableError(f"Malformed data file: {self.path}")
        return DatasetSnapshot.from_mapping(document)


def build_repository(settings: AnalyticsSettings) -> SnapshotRepository:
    if settings.database_url:
        engine = create_engine(settings.database_url)
        return SQLSnapshotRepository(engine)
    return JSONFileRepository(settings.data_file)
