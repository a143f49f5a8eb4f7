"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus), observabilidad de bajo acoplamiento

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO record_id; `model` es un set acotado).
    - Exponer helpers para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - application.archive_service: restores y backups.
    - application.activity_recorder: entradas escritas y fallas de auditoría.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "hrms_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "hrms_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# ------------------------
# Archivo / restauración
# ------------------------
_archive_restored_total = Counter(
    "hrms_archive_restored_total",
    "Registros restaurados (archived -> active) por modelo",
    ["model"],
    registry=_registry,
)

_backups_total = Counter(
    "hrms_backups_total",
    "Backups escritos",
    ["status"],
    registry=_registry,
)

# ------------------------
# Auditoría
# ------------------------
_audit_entries_total = Counter(
    "hrms_audit_entries_total",
    "Entradas de activity log persistidas",
    ["action"],
    registry=_registry,
)

_audit_failures_total = Counter(
    "hrms_audit_failures_total",
    "Fallas de auditoría absorbidas (no afectan el request)",
    ["stage"],
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_restored(model: str, count: int) -> None:
    if count > 0:
        _archive_restored_total.labels(model=model).inc(count)


def record_backup(status: str) -> None:
    _backups_total.labels(status=status).inc()


def record_audit_entry(action: str) -> None:
    _audit_entries_total.labels(action=action).inc()


def record_audit_failure(stage: str) -> None:
    _audit_failures_total.labels(stage=stage).inc()


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta (UUIDs e IDs numéricos -> {id})."""
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    return re.sub(r"/\d+", "/{id}", path)


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
