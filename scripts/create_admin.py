"""
Name: Admin Bootstrap Script

Responsibilities:
  - Ensure an HRMS admin exists in PostgreSQL (idempotent)
  - Assign the next sequential user code (USR-001, USR-002, ...)

Usage:
  DATABASE_URL=postgresql://... python scripts/create_admin.py --email admin@acme.test
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from hrms.application.dev_seed_admin import ensure_admin  # noqa: E402
from hrms.identity.auth_users import hash_password  # noqa: E402
from hrms.infrastructure.db.pool import close_pool, init_pool  # noqa: E402
from hrms.infrastructure.repositories import (  # noqa: E402
    PostgresSequenceRepository,
    PostgresUserRepository,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ensure an HRMS admin user exists.")
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--email", help="prompted when omitted")
    parser.add_argument("--password", help="prompted (with confirmation) when omitted")
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL"),
        help="defaults to $DATABASE_URL",
    )
    return parser


def read_password() -> str:
    first = getpass.getpass("Password: ")
    if first != getpass.getpass("Confirm password: "):
        raise SystemExit("Passwords do not match.")
    return first


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.database_url:
        raise SystemExit("DATABASE_URL (or --database-url) is required.")

    email = args.email or input("Email: ")
    password = args.password or read_password()

    init_pool(database_url=args.database_url, min_size=1, max_size=2)
    try:
        user = ensure_admin(
            name=args.name,
            email=email,
            password=password,
            user_repo=PostgresUserRepository(),
            sequences=PostgresSequenceRepository(),
            password_hasher=hash_password,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    finally:
        close_pool()

    print(f"{user.user_code} {user.email} (role={user.role.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
