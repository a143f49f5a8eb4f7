"""
Base de schemas HTTP: snake_case en Python, camelCase en el wire.

Los registros HR viajan como dict y conservan sus claves tal cual.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageRes(CamelModel):
    success: bool = True
    message: str


class PageRes(CamelModel):
    """Metadata de paginación compartida por los listados."""

    success: bool = True
    message: str
    total: int
    total_pages: int
    current_page: int
    limit: int
