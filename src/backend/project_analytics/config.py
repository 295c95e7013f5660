"""
Runtime configuration for the analytics service.

Values come from the environment (optionally via a ``.env`` file) and fall
back to the defaults declared on ``AnalyticsSettings``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEVELOPMENT_DATA_FILE = "./data.json"
PRODUCTION_DATA_FILE = "/tmp/data.json"

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


class AnalyticsSettings(BaseModel):
    database_url: Optional[str] = None
    """SQLAlchemy URL; when unset the JSON data file is used instead"""

    data_file: str = DEVELOPMENT_DATA_FILE
    """Path of the flat JSON data file"""

    environment: str = "development"

    log_level: str = "INFO"

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    seed_data: bool = True
    """Write the sample dataset on startup when the data file is missing"""

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    values = [item.strip() for item in raw.split(",") if item.strip()]
    return values or list(default)


def load_settings(env_file: Optional[str] = None) -> AnalyticsSettings:
    load_dotenv(env_file)
    defaults = AnalyticsSettings()
    environment = os.getenv("ANALYTICS_ENV", defaults.environment)
    default_data_file = PRODUCTION_DATA_FILE if environment.lower() == "production" else defaults.data_file

    return AnalyticsSettings(
        database_url=os.getenv("ANALYTICS_DATABASE_URL") or None,
        data_file=os.getenv("ANALYTICS_DATA_FILE", default_data_file),
        environment=environment,
        log_level=os.getenv("ANALYTICS_LOG_LEVEL", defaults.log_level),
        cors_origins=_env_list("ANALYTICS_CORS_ORIGINS", defaults.cors_origins),
        seed_data=_env_bool("ANALYTICS_SEED_DATA", defaults.seed_data),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.handlers = [handler]

    for name in ("uvicorn.access", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
