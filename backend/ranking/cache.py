"""
In-memory leaderboard cache keyed by "year:code".

Entries are overwritten on refetch and never evicted otherwise; the cache
lives only as long as the process. The clock is injectable so tests can
move time forward without sleeping.
"""

import time
from datetime import timedelta
from typing import Callable, Optional

from pydantic import BaseModel

from config import CACHE_TTL_MINUTES
from models.leaderboard import LeaderboardDocument

DEFAULT_TTL = timedelta(minutes=CACHE_TTL_MINUTES)


def cache_key(year, code: str) -> str:
    return f"{year}:{code}"


class CacheEntry(BaseModel):
    data: LeaderboardDocument
    fetched_at: float       # clock() seconds


class LeaderboardCache:
    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, data: LeaderboardDocument) -> CacheEntry:
        entry = CacheEntry(data=data, fetched_at=self._clock())
        self._entries[key] = entry
        return entry

    def age(self, entry: CacheEntry) -> float:
        return self._clock() - entry.fetched_at

    def is_fresh(self, entry: Optional[CacheEntry]) -> bool:
        if entry is None:
            return False
        return self.age(entry) < self.ttl.total_seconds()

    def clear(self) -> None:
        self._entries.clear()
