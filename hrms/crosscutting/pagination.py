"""
===============================================================================
MÓDULO: Utilidades de paginación (page + limit)
===============================================================================

Objetivo
--------
Paginación simple y consistente para endpoints listados:
- page >= 1 (valores inválidos -> 1)
- limit ausente/ inválido -> default; limit > max -> max
- metadata total / totalPages / currentPage / limit

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PageRequest + page_request() + total_pages()

Responsabilidades:
  - Normalizar parámetros de paginación
  - Calcular offset y cantidad de páginas
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE_LIMIT = 10


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_request(
    page: Optional[int],
    limit: Optional[int],
    *,
    max_limit: int,
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> PageRequest:
    normalized_page = page if page and page > 0 else 1
    normalized_limit = limit if limit and limit > 0 else default_limit
    return PageRequest(page=normalized_page, limit=min(normalized_limit, max_limit))


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(max(0, total) / limit)
