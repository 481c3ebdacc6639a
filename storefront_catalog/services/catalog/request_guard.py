"""Discard responses that a newer request for the same view has superseded."""

from __future__ import annotations

import itertools
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class LatestRequestGuard:
    """Hands out increasing tokens per key; only the newest token is current."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    def begin(self, key: str) -> int:
        token = next(self._counter)
        self._latest[key] = token
        return token

    def is_current(self, key: str, token: int) -> bool:
        return self._latest.get(key) == token

    async def run_latest(self, key: str, awaitable: Awaitable[T]) -> T | None:
        """Await ``awaitable``; return ``None`` if a newer request started meanwhile."""

        token = self.begin(key)
        try:
            result = await awaitable
            if not self.is_current(key, token):
                return None
            return result
        finally:
            # Only the newest request owns the key; release it once it settles
            if self._latest.get(key) == token:
                del self._latest[key]

    def __len__(self) -> int:
        return len(self._latest)
