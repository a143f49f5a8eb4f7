"""
Name: Postgres adapter error mapping

Responsibilities:
  - Driver/connection failures surface as DatabaseError (500 envelope),
    never as logging errors raised while reporting the failure
"""

from unittest.mock import MagicMock

import pytest

from hrms.crosscutting.exceptions import DatabaseError
from hrms.domain.activity import ActivityAction, ActivityLogEntry, ActorSnapshot
from hrms.infrastructure.repositories.postgres.activity_log import (
    PostgresActivityLogRepository,
)

pytestmark = pytest.mark.unit


def _failing_pool() -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value.execute.side_effect = (
        RuntimeError("connection reset")
    )
    return pool


def test_append_failure_raises_database_error():
    entry = ActivityLogEntry(
        actor=ActorSnapshot(user_id="u1", name="Ada", email="ada@example.com", role="admin"),
        action=ActivityAction.CREATE,
        module="Employees",
        description="Created new Employees",
    )

    with pytest.raises(DatabaseError, match="connection reset"):
        PostgresActivityLogRepository(pool=_failing_pool()).append(entry)


def test_list_failure_raises_database_error():
    with pytest.raises(DatabaseError):
        PostgresActivityLogRepository(pool=_failing_pool()).list_entries(limit=5)
