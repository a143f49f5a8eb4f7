"""
UserActorResolver: adapta UserRepository al puerto ActorResolver del activity log.

La resolución ocurre al momento del evento; el snapshot queda congelado en la
entrada aunque el usuario cambie después.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ..domain.activity import ActorSnapshot
from .users import User, UserRepository


def actor_from_user(user: User) -> ActorSnapshot:
    return ActorSnapshot(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role.value,
    )


class UserActorResolver:
    def __init__(self, user_repo: UserRepository):
        self._user_repo = user_repo

    def resolve(self, actor_id: str) -> Optional[ActorSnapshot]:
        try:
            user_id = UUID(str(actor_id))
        except ValueError:
            return None
        user = self._user_repo.get_by_id(user_id)
        return actor_from_user(user) if user else None
