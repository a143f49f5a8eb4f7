"""
===============================================================================
TARJETA CRC — application/backup.py
===============================================================================

Componente:
  BackupWriter (artefacto JSON con todos los registros por modelo)

Responsabilidades:
  - Generar el path `<backup_dir>/backup_<timestamp>.json` (ISO-8601 UTC con
    ':' y '.' reemplazados por '-').
  - Nunca pisar un backup existente: creación exclusiva y sufijo `-1`, `-2`...
    si el timestamp colisiona.
  - Crear el directorio si no existe y escribir el documento con indent=2.
  - Traducir fallas de filesystem/serialización a StorageError.

Colaboradores:
  - application.archive_service (invoca write)
  - crosscutting.metrics (hrms_backups_total)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..crosscutting.exceptions import StorageError
from ..crosscutting.metrics import record_backup

logger = logging.getLogger(__name__)

_UNSAFE_TS_CHARS = re.compile(r"[:.]")
MAX_NAME_ATTEMPTS = 100


def backup_timestamp(now: datetime) -> str:
    """2024-01-02T03:04:05.678Z -> 2024-01-02T03-04-05-678Z"""
    iso = (
        now.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
    return _UNSAFE_TS_CHARS.sub("-", iso)


class BackupWriter:
    def __init__(
        self,
        backup_dir: str | Path,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._backup_dir = Path(backup_dir)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir

    def path_for(self, now: datetime, attempt: int = 0) -> Path:
        suffix = f"-{attempt}" if attempt else ""
        return self._backup_dir / f"backup_{backup_timestamp(now)}{suffix}.json"

    def _write_exclusive(self, now: datetime, body: str) -> Path:
        for attempt in range(MAX_NAME_ATTEMPTS):
            path = self.path_for(now, attempt)
            try:
                with path.open("x", encoding="utf-8") as fh:
                    fh.write(body)
            except FileExistsError:
                continue
            return path
        raise FileExistsError(f"No free backup name for {backup_timestamp(now)}")

    def write(self, payload: Dict[str, List[Dict[str, Any]]]) -> Path:
        now = self._clock()
        path = self.path_for(now)
        try:
            self._backup_dir.mkdir(parents=True, exist_ok=True)
            body = json.dumps(payload, indent=2, default=str, ensure_ascii=False)
            path = self._write_exclusive(now, body)
        except (OSError, TypeError, ValueError) as exc:
            record_backup("failure")
            logger.exception("Backup falló", extra={"path": str(path)})
            raise StorageError(
                f"Error creating backup: {exc}", original_error=exc
            ) from exc

        record_backup("success")
        logger.info(
            "Backup escrito",
            extra={
                "path": str(path),
                "models": len(payload),
                "records": sum(len(v) for v in payload.values()),
            },
        )
        return path
