"""
Activity Router: listado paginado del activity log (GET /activities).

Lectura pura; el log es append-only y no expone update/delete.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from .....application.activity_queries import list_activities
from .....container import get_activity_repository
from .....crosscutting.config import get_settings
from .....crosscutting.pagination import page_request
from .....domain.repositories import ActivityLogRepository
from .....identity.users import User
from ..dependencies import authenticated_user
from ..schemas.activities import ActivityListRes, to_activity_list_res

router = APIRouter(tags=["activities"])


@router.get("/activities", response_model=ActivityListRes)
def get_activity_list(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    _: User = Depends(authenticated_user),
    repository: ActivityLogRepository = Depends(get_activity_repository),
):
    page_req = page_request(
        page, limit, max_limit=get_settings().activity_page_max_limit
    )
    return to_activity_list_res(list_activities(repository, page_req, search=search))
