"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (es lo que ve el cliente en el envelope)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  HRMSError + subclases

Responsabilidades:
  - Estandarizar errores del subsistema de archivo/restauración
  - Distinguir modelo inexistente, registro inexistente, id malformado y fallas
    de storage
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a envelope {success: false, message})
  - application/archive_store.py (envuelve errores de repositorio)
  - application/activity_recorder.py (AuditRecordingError nunca sale de ahí)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class HRMSError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      HRMSError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "HRMS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class ModelNotFoundError(HRMSError):
    """El nombre de modelo no está registrado (o no es archivable)."""

    error_code: str = "MODEL_NOT_FOUND"

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"Model '{model_name}' is not registered as archivable")


class RecordNotFoundError(HRMSError):
    """No existe un registro con ese id dentro del modelo."""

    error_code: str = "RECORD_NOT_FOUND"

    def __init__(self, model_name: str, record_id: str):
        self.model_name = model_name
        self.record_id = record_id
        super().__init__("Record not found")


class InvalidIdentifierError(HRMSError):
    """El identificador de registro no tiene formato válido (UUID)."""

    error_code: str = "INVALID_IDENTIFIER"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Invalid record identifier: '{record_id}'")


class StorageError(HRMSError):
    """Falla de lectura/escritura con contexto (operación + modelo)."""

    error_code: str = "STORAGE_ERROR"


class DatabaseError(StorageError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class AuditRecordingError(HRMSError):
    """
    Falla dentro del recorder/interceptor de auditoría.

    Nunca se propaga al caller: se loguea y se cuenta en métricas.
    """

    error_code: str = "AUDIT_RECORDING_ERROR"
