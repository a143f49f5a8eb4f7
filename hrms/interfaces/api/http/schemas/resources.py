"""
Schemas HTTP para el CRUD genérico de recursos HR (/resources/{resource}).
"""

from __future__ import annotations

from typing import Any, Dict, List

from .....application.resource_service import ResourcePage
from .common import CamelModel, PageRes

Record = Dict[str, Any]


class ResourceRes(CamelModel):
    success: bool = True
    message: str
    data: Record


class ResourceListRes(PageRes):
    data: List[Record]


def to_resource_list_res(name: str, page: ResourcePage) -> ResourceListRes:
    return ResourceListRes(
        message=f"{name} records fetched successfully",
        total=page.total,
        total_pages=page.total_pages,
        current_page=page.current_page,
        limit=page.limit,
        data=page.data,
    )
