"""
Listado paginado del activity log (GET /activities).

La búsqueda se aplica antes de paginar, así `total` refleja lo filtrado.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..crosscutting.pagination import PageRequest, total_pages
from ..domain.activity import ActivityLogEntry
from ..domain.repositories import ActivityLogRepository


@dataclass
class ActivityPage:
    total: int
    total_pages: int
    current_page: int
    limit: int
    data: List[ActivityLogEntry] = field(default_factory=list)


def list_activities(
    repository: ActivityLogRepository,
    page: PageRequest,
    *,
    search: Optional[str] = None,
) -> ActivityPage:
    search = (search or "").strip() or None
    total = repository.count_entries(search=search)
    entries = repository.list_entries(
        search=search, limit=page.limit, offset=page.offset
    )
    return ActivityPage(
        total=total,
        total_pages=total_pages(total, page.limit),
        current_page=page.page,
        limit=page.limit,
        data=entries,
    )
