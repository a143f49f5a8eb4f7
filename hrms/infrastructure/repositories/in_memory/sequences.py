"""
In-memory atomic counters for human-readable ids (tests / local dev).
"""

from __future__ import annotations

from threading import Lock
from typing import Dict


class InMemorySequenceRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._counters: Dict[str, int] = {}

    def next_value(self, key: str) -> int:
        with self._lock:
            value = self._counters.get(key, 0) + 1
            self._counters[key] = value
            return value

    def clear(self) -> None:
        with self._lock:
            self._counters.clear()
