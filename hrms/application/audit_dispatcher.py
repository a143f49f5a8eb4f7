"""
===============================================================================
TARJETA CRC — application/audit_dispatcher.py
===============================================================================

Componente:
  AuditDispatcher (pool acotado de threads para escrituras de auditoría)

Responsabilidades:
  - Ejecutar escrituras del activity log fuera del camino del request.
  - Propagar el contexto (request_id) al thread que escribe.
  - Trackear tareas pendientes y drenarlas en el shutdown con timeout.

Colaboradores:
  - application.activity_recorder (submit)
  - api.main lifespan (shutdown)
  - crosscutting.metrics (fallas de dispatch)
===============================================================================
"""

from __future__ import annotations

import contextvars
import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from threading import Lock
from typing import Any, Callable, Optional, Set

from ..crosscutting.metrics import record_audit_failure

logger = logging.getLogger(__name__)


class DispatcherClosedError(RuntimeError):
    """Se intentó encolar trabajo luego del shutdown."""


class AuditDispatcher:
    def __init__(self, max_workers: int = 4, *, thread_name_prefix: str = "audit"):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._lock = Lock()
        self._pending: Set[Future] = set()
        self._closed = False

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        ctx = contextvars.copy_context()
        with self._lock:
            if self._closed:
                raise DispatcherClosedError("AuditDispatcher is shut down")
            future = self._executor.submit(ctx.run, fn, *args, **kwargs)
            self._pending.add(future)
        future.add_done_callback(self._on_done)
        return future

    def _on_done(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            record_audit_failure("dispatch")
            logger.error(
                "Tarea de auditoría falló",
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Espera tareas pendientes. True si no quedó nada sin terminar."""
        with self._lock:
            futures = list(self._pending)
        if not futures:
            return True
        _, not_done = wait(futures, timeout=timeout)
        if not_done:
            logger.warning(
                "Drain de auditoría incompleto",
                extra={"pending": len(not_done), "timeout_s": timeout},
            )
        return not not_done

    def shutdown(self, timeout: Optional[float] = None) -> bool:
        drained = self.drain(timeout)
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=drained, cancel_futures=not drained)
        return drained
