"""
Schemas HTTP para el activity log (GET /activities).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from .....application.activity_queries import ActivityPage
from .....domain.activity import ActivityLogEntry
from .common import CamelModel, PageRes


class ActorRes(CamelModel):
    user_id: str
    user_name: str
    user_email: str
    user_role: str


class ChangesRes(CamelModel):
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None


class RequestInfoRes(CamelModel):
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None


class ActivityRes(CamelModel):
    id: UUID
    user: ActorRes
    action: str
    module: str
    record_id: Optional[str] = None
    description: str
    changes: ChangesRes
    request: RequestInfoRes
    created_at: datetime


class ActivityListRes(PageRes):
    data: List[ActivityRes]


def to_activity_res(entry: ActivityLogEntry) -> ActivityRes:
    return ActivityRes(
        id=entry.id,
        user=ActorRes(
            user_id=entry.actor.user_id,
            user_name=entry.actor.name,
            user_email=entry.actor.email,
            user_role=entry.actor.role,
        ),
        action=entry.action.value,
        module=entry.module,
        record_id=entry.record_id,
        description=entry.description,
        changes=ChangesRes(
            old_values=entry.changes.old_values,
            new_values=entry.changes.new_values,
        ),
        request=RequestInfoRes(
            ip_address=entry.request.ip_address,
            user_agent=entry.request.user_agent,
            method=entry.request.method,
            url=entry.request.url,
        ),
        created_at=entry.created_at,
    )


def to_activity_list_res(page: ActivityPage) -> ActivityListRes:
    return ActivityListRes(
        message="Activity logs fetched successfully",
        total=page.total,
        total_pages=page.total_pages,
        current_page=page.current_page,
        limit=page.limit,
        data=[to_activity_res(e) for e in page.data],
    )
