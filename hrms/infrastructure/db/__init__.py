"""
Infraestructura de base de datos (pool psycopg del proceso).
"""

from .pool import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
    close_pool,
    get_pool,
    init_pool,
    is_pool_initialized,
    ping,
)

__all__ = [
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
    "close_pool",
    "get_pool",
    "init_pool",
    "is_pool_initialized",
    "ping",
]
