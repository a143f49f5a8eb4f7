"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo desde cero (migración fundacional).
  - Una tabla JSONB por colección HR (mismo layout para todas).
  - Identity (users), activity log y contadores de ids legibles.

Collaborators:
  - PostgreSQL 16+
  - Alembic (framework de migraciones)
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Esta es una migración BASELINE. Downgrade NO soportado.
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Colecciones HR -> flag de archivado (None = sin ciclo de archivo).
HR_COLLECTIONS = {
    "employees": "is_archived",
    "departments": "archive_department",
    "designations": "archive",
    "attendance": "is_archived",
    "leaves": "archive",
    "payrolls": "is_archived",
    "jobs": "is_archived",
    "applications": "is_archived",
    "trainings": "is_archived",
    "fines": "archive_fine",
    "performances": None,
    "roles": None,
    "reports": None,
}


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _create_collection(table: str, flag: str | None) -> None:
    op.create_table(
        table,
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "data",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id", name=f"pk_{table}"),
    )
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])

    # Índice parcial: listados de archivados (restore / stats).
    if flag:
        op.execute(
            f"CREATE INDEX ix_{table}_{flag} ON {table} (created_at) "
            f"WHERE COALESCE((data->>'{flag}')::boolean, false)"
        )


def upgrade() -> None:
    """
    Orden:
      1) Colecciones HR
      2) Identity (users)
      3) Activity log
      4) Contadores (ids legibles)
    """

    # =========================================================
    # 1) HR COLLECTIONS
    # =========================================================
    for table, flag in HR_COLLECTIONS.items():
        _create_collection(table, flag)

    # =========================================================
    # 2) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'user'"),
        ),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("user_code", name="uq_users_user_code"),
    )
    op.create_index("ix_users_role", "users", ["role"])

    # =========================================================
    # 3) ACTIVITY LOG (append-only)
    # =========================================================
    op.create_table(
        "activity_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("user_name", sa.String(255), nullable=True),
        sa.Column("user_email", sa.String(320), nullable=True),
        sa.Column("user_role", sa.String(50), nullable=True),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("module", sa.String(100), nullable=False),
        sa.Column("record_id", sa.String(64), nullable=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("old_values", postgresql.JSONB, nullable=True),
        sa.Column("new_values", postgresql.JSONB, nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.Text, nullable=True),
        sa.Column("method", sa.String(10), nullable=True),
        sa.Column("url", sa.Text, nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id", name="pk_activity_logs"),
        sa.CheckConstraint(
            "action IN ('CREATE','UPDATE','DELETE','LOGIN','LOGOUT')",
            name="ck_activity_logs_action",
        ),
    )
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])
    op.create_index("ix_activity_logs_user_id", "activity_logs", ["user_id"])
    op.create_index("ix_activity_logs_module", "activity_logs", ["module"])

    # =========================================================
    # 4) ID COUNTERS
    # =========================================================
    op.create_table(
        "id_counters",
        sa.Column("key", sa.String(100), nullable=False),
        sa.Column("seq", sa.BigInteger, nullable=False),
        sa.PrimaryKeyConstraint("key", name="pk_id_counters"),
    )


def downgrade() -> None:
    """Downgrade NO soportado para la migración fundacional."""
    raise NotImplementedError(
        "Baseline: downgrade no soportado por política. "
        "Para resetear la base de datos, recrearla y correr `alembic upgrade head`."
    )
