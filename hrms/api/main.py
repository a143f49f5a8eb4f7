"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount the root router (auth, archives, activities, resources)
  - Expose health check and metrics endpoints
  - Drain pending audit writes on shutdown

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID, metrics and logging context
  - interfaces.api.http.router: business endpoints
  - container: audit dispatcher + repositories for the dev admin seed

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - In test env (APP_ENV=test) no DB pool is opened; in-memory adapters are used

Notes:
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .. import __version__
from ..application.dev_seed_admin import ensure_dev_admin
from ..container import (
    get_audit_dispatcher,
    get_sequence_repository,
    get_user_repository,
    reset_audit_pipeline,
)
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..identity.auth_users import hash_password
from ..infrastructure.db.pool import close_pool, init_pool, is_pool_initialized, ping
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


def _startup(settings: Settings) -> None:
    if not settings.is_test():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    ensure_dev_admin(
        settings,
        user_repo=get_user_repository(),
        sequences=get_sequence_repository(),
        password_hasher=hash_password,
    )


def _shutdown(settings: Settings) -> None:
    # Entradas de auditoría pendientes se escriben antes de cerrar el pool.
    if not get_audit_dispatcher().shutdown(timeout=settings.audit_drain_timeout_seconds):
        logger.warning(
            "Audit queue not fully drained on shutdown",
            extra={"timeout_seconds": settings.audit_drain_timeout_seconds},
        )
    reset_audit_pipeline()
    close_pool()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: pool + dev admin seed. Shutdown: drena auditoría y cierra el pool."""
    settings = get_settings()
    try:
        _startup(settings)
    except Exception:
        logger.exception("HRMS API startup failed")
        close_pool()
        raise

    logger.info(
        "HRMS API starting up",
        extra={
            "app_env": settings.app_env,
            "backup_dir": settings.backup_dir,
            "backup_before_restore": settings.backup_before_restore,
            "audit_max_workers": settings.audit_max_workers,
        },
    )
    try:
        yield
    finally:
        _shutdown(settings)
        logger.info("HRMS API shut down")


def _allowed_origins() -> list[str]:
    # Import sin DATABASE_URL (tooling, docs): origen local por defecto.
    try:
        return get_settings().get_allowed_origins_list()
    except ValidationError:
        return ["http://localhost:3000"]


app = FastAPI(
    title="HRMS API",
    version=__version__,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "User authentication (JWT)"},
        {"name": "archives", "description": "Archived records: list, stats, restore, backup"},
        {"name": "activities", "description": "Activity log (append-only)"},
        {"name": "resources", "description": "HR resources CRUD (soft delete)"},
    ],
)

# Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
)

app.include_router(router)

register_exception_handlers(app)


@app.get("/healthz")
def healthz(request: Request):
    """
    Health check.

    Returns:
        success: True if all checked systems operational
        db: "connected", "disconnected" or "in_memory" (test env)
        request_id: Correlation ID for this request
    """
    if get_settings().is_test():
        db_status = "in_memory"
    elif is_pool_initialized() and ping():
        db_status = "connected"
    else:
        db_status = "disconnected"

    return {
        "success": db_status != "disconnected",
        "status": "ok" if db_status != "disconnected" else "degraded",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }


@app.get("/metrics")
def metrics():
    """Prometheus text format metrics."""
    content, content_type = get_metrics_response()
    return Response(content=content, media_type=content_type)
