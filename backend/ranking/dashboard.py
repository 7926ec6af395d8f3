"""
Dashboard application context.

One Dashboard owns everything the viewer needs between requests: the
leaderboard cache, the upstream fetcher, the current document and the
selection. Only one logical thread of control mutates it; the cache is
read synchronously before the awaited fetch and written only after the
fetch resolves.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

import pydantic

from aoc.client import fetch_leaderboard
from config import FIRST_YEAR
from models.leaderboard import LeaderboardDocument
from models.selection import Selection
from ranking.cache import LeaderboardCache, cache_key
from ranking.errors import (
    LeaderboardError,
    LoadInProgress,
    RefreshConfirmationRequired,
    TransportError,
    ValidationError,
)
from ranking.selection import apply_defaults

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str, str], Awaitable[dict]]

MISSING_CREDENTIALS = (
    "Please enter both the private leaderboard code and your AoC session token."
)


def validate_year(year) -> str:
    current = datetime.now().year
    try:
        value = int(str(year).strip())
    except (TypeError, ValueError):
        raise ValidationError("Year must be a number.") from None
    if not FIRST_YEAR <= value <= current:
        raise ValidationError(f"Year must be between {FIRST_YEAR} and {current}.")
    return str(value)


class Dashboard:
    def __init__(
        self,
        cache: Optional[LeaderboardCache] = None,
        fetcher: Fetcher = fetch_leaderboard,
    ):
        self.cache = cache if cache is not None else LeaderboardCache()
        self.fetcher = fetcher
        self.selection = Selection(year=str(datetime.now().year))
        self.document: Optional[LeaderboardDocument] = None
        self.loading = False
        self.error = ""

    async def load(
        self,
        year,
        leaderboard_code: str,
        session_token: str,
        force: bool = False,
        confirmed: bool = False,
    ) -> LeaderboardDocument:
        """
        Load a board from the cache or upstream and reset the selection to
        its defaults. Raises a LeaderboardError subclass on any failure,
        after recording its message in self.error. A load submitted while
        another fetch is pending is rejected with LoadInProgress.
        """
        if self.loading:
            raise LoadInProgress()

        self.error = ""
        try:
            code = (leaderboard_code or "").strip()
            token = (session_token or "").strip()
            if not code or not token:
                raise ValidationError(MISSING_CREDENTIALS)
            year = validate_year(year)

            key = cache_key(year, code)
            entry = self.cache.get(key)

            if self.cache.is_fresh(entry) and force and not confirmed:
                raise RefreshConfirmationRequired(
                    self.cache.age(entry), self.cache.ttl.total_seconds()
                )

            if self.cache.is_fresh(entry) and not force:
                logger.info("Serving leaderboard %s from cache", key)
                document = entry.data
            else:
                document = await self._fetch(year, code, token)
                self.cache.put(key, document)
        except LeaderboardError as exc:
            self.error = str(exc)
            raise

        self.document = document
        self.selection.year = year
        apply_defaults(self.selection, document)
        return document

    async def _fetch(self, year: str, code: str, token: str) -> LeaderboardDocument:
        self.loading = True
        self.document = None
        try:
            raw = await self.fetcher(year, code, token)
            try:
                return LeaderboardDocument.model_validate(raw)
            except pydantic.ValidationError as exc:
                logger.warning("Unexpected leaderboard payload for %s/%s", year, code)
                raise TransportError("Unexpected leaderboard format from upstream.") from exc
        finally:
            self.loading = False
