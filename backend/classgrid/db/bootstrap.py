from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from classgrid.db.base import Base
from classgrid.db.session import engine as default_engine

import classgrid.models  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "faculty": {"id", "name", "short_name", "department"},
    "subjects": {"id", "name", "year", "branch", "is_lab"},
    "timetables": {"id", "form_data", "entries", "created_at"},
}


def missing_schema_columns(bind: Engine) -> dict[str, list[str]]:
    missing: dict[str, list[str]] = {}
    with bind.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        for table_name, columns in REQUIRED_COLUMNS.items():
            if table_name not in table_names:
                missing[table_name] = sorted(columns)
                continue
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            absent = sorted(columns - existing)
            if absent:
                missing[table_name] = absent
    return missing


def ensure_runtime_schema(bind: Engine | None = None) -> None:
    target = bind or default_engine
    Base.metadata.create_all(bind=target)
    missing = missing_schema_columns(target)
    if missing:
        logger.warning("Database schema is missing columns; run migrations: %s", missing)
