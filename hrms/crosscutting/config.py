"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for archive/backup, audit dispatch and pagination limits

Collaborators:
  - api/main.py: reads settings for CORS, pool and startup validation
  - container.py: picks storage adapters and audit dispatcher sizing
  - application/archive_service.py: backup directory and pre-restore backups

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/production/test)
        allowed_origins: Comma-separated CORS origins
        backup_dir: Directory where backup artifacts are written (default: backups)
        backup_before_restore: Write a backup before bulk restores (default: True)
        audit_max_workers: Threads used to persist audit entries (default: 4)
        audit_drain_timeout_seconds: Max wait for pending audit writes on shutdown
        activity_page_max_limit: Max page size for /activities (default: 50)
        resource_page_max_limit: Max page size for resource listings (default: 100)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        log_level: Root level for the JSON logger
        log_json: Emit JSON logs (False = plain text, handy in local dev)
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Archive / Backup
    backup_dir: str = "backups"
    backup_before_restore: bool = True

    # Audit dispatch
    audit_max_workers: int = 4
    audit_drain_timeout_seconds: float = 10.0

    # Listings
    activity_page_max_limit: int = 50
    resource_page_max_limit: int = 100

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Dev Tools
    dev_seed_admin: bool = False
    dev_seed_admin_name: str = "Admin"
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = "admin"

    @field_validator("db_pool_min_size", "db_pool_max_size", "audit_max_workers")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("audit_drain_timeout_seconds")
    @classmethod
    def drain_timeout_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("audit_drain_timeout_seconds must be >= 0")
        return v

    @field_validator("activity_page_max_limit", "resource_page_max_limit")
    @classmethod
    def page_limit_valid(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page limits must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if self.dev_seed_admin:
            raise ValueError("DEV_SEED_ADMIN must be disabled in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
