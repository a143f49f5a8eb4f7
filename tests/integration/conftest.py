"""
Name: Integration Test DB Setup

Responsibilities:
  - Skip integration tests unless TEST_DATABASE_URL is set
  - Run Alembic migrations once per test session
  - Provide a psycopg pool bound to the test database

Notes:
  - Uses a disposable database: tables are truncated between tests
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from psycopg_pool import ConnectionPool

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
ROOT_DIR = Path(__file__).resolve().parents[2]

TABLES = (
    "employees",
    "departments",
    "designations",
    "attendance",
    "leaves",
    "payrolls",
    "jobs",
    "applications",
    "trainings",
    "fines",
    "performances",
    "roles",
    "reports",
    "activity_logs",
    "users",
    "id_counters",
)


def pytest_collection_modifyitems(config, items):
    if TEST_DATABASE_URL:
        return
    skip = pytest.mark.skip(reason="TEST_DATABASE_URL not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def migrated_db() -> str:
    cfg = Config(str(ROOT_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    cfg.set_main_option("sqlalchemy.url", TEST_DATABASE_URL)
    command.upgrade(cfg, "head")
    return TEST_DATABASE_URL


@pytest.fixture(scope="session")
def pg_pool(migrated_db):
    pool = ConnectionPool(conninfo=migrated_db, min_size=1, max_size=4, open=True)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def _clean_tables(request):
    if "pg_pool" not in request.fixturenames:
        yield
        return
    pool = request.getfixturevalue("pg_pool")
    with pool.connection() as conn:
        conn.execute(f"TRUNCATE {', '.join(TABLES)}")
    yield
