"""
In-memory UserRepository (tests / local dev).

Emails se comparan tal cual; la normalización (trim/lower) es política del
borde de identidad (identity/auth_users.py, application/user_service.py).
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from ....identity.users import User

_SEARCH_FIELDS = ("user_code", "name", "email")
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _matches(user: User, needle: Optional[str]) -> bool:
    if not needle:
        return True
    haystack = [getattr(user, f) for f in _SEARCH_FIELDS] + [user.role.value]
    return any(needle in str(v).lower() for v in haystack)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        return None

    def create(self, user: User) -> User:
        with self._lock:
            if any(u.email == user.email for u in self._users.values()):
                raise ValueError(f"User with email '{user.email}' already exists")
            self._users[user.id] = user
        return user

    def update(self, user_id: UUID, changes: Mapping[str, Any]) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = replace(current, **dict(changes))
            self._users[user_id] = updated
            return updated

    def _filtered(self, search: Optional[str]) -> List[User]:
        needle = (search or "").strip().lower() or None
        return [u for u in self._users.values() if _matches(u, needle)]

    def list_users(
        self, *, search: Optional[str] = None, limit: int = 10, offset: int = 0
    ) -> List[User]:
        with self._lock:
            users = self._filtered(search)
        users.sort(key=lambda u: u.created_at or _EPOCH, reverse=True)
        return users[offset : offset + limit]

    def count_users(self, *, search: Optional[str] = None) -> int:
        with self._lock:
            return len(self._filtered(search))

    def clear(self) -> None:
        with self._lock:
            self._users.clear()
