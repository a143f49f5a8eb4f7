"""Unit tests for BackupWriter (timestamped JSON artifacts)."""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from hrms.application.backup import BackupWriter, backup_timestamp
from hrms.crosscutting.exceptions import StorageError

pytestmark = pytest.mark.unit

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def test_backup_timestamp_is_filesystem_safe():
    assert backup_timestamp(FIXED_NOW) == "2024-01-02T03-04-05-678Z"


def test_write_creates_directory_and_file(tmp_path):
    writer = BackupWriter(tmp_path / "nested" / "backups", clock=lambda: FIXED_NOW)

    path = writer.write({"Fine": [{"id": "1", "amount": 10, "created_at": FIXED_NOW}]})

    assert path.name == "backup_2024-01-02T03-04-05-678Z.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["Fine"][0]["amount"] == 10
    assert payload["Fine"][0]["created_at"].startswith("2024-01-02")


def test_write_failure_raises_storage_error(tmp_path):
    writer = BackupWriter(tmp_path, clock=lambda: FIXED_NOW)

    with patch("pathlib.Path.open", side_effect=OSError("disk full")):
        with pytest.raises(StorageError, match="disk full"):
            writer.write({"Job": []})


def test_same_timestamp_never_overwrites(tmp_path):
    writer = BackupWriter(tmp_path, clock=lambda: FIXED_NOW)

    first = writer.write({"Job": [{"id": "1"}]})
    second = writer.write({"Job": [{"id": "2"}]})

    assert first != second
    assert second.name == "backup_2024-01-02T03-04-05-678Z-1.json"
    assert json.loads(first.read_text(encoding="utf-8"))["Job"][0]["id"] == "1"
    assert json.loads(second.read_text(encoding="utf-8"))["Job"][0]["id"] == "2"
