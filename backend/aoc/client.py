"""
Advent of Code upstream client.

Fetches a private leaderboard's JSON with the user's session token sent as
the `session` cookie. The token is only ever placed in the request header;
it is never logged or stored.

Failure modes:
  - non-2xx from adventofcode.com  -> UpstreamError(status_code)
  - network error / invalid JSON   -> TransportError(message)

There is no retry and no explicit timeout beyond httpx's default.
"""

import logging
from typing import Optional

import httpx

from config import AOC_BASE_URL, AOC_USER_AGENT
from ranking.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)


def leaderboard_url(year, code: str) -> str:
    return f"{AOC_BASE_URL}/{year}/leaderboard/private/view/{code}.json"


def _headers(session_token: str) -> dict[str, str]:
    return {
        "cookie": f"session={session_token}",
        "accept": "application/json",
        "user-agent": AOC_USER_AGENT,
    }


async def _get(client: httpx.AsyncClient, year, code: str, session_token: str) -> dict:
    try:
        response = await client.get(leaderboard_url(year, code), headers=_headers(session_token))
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
        # UnicodeError: a non-ASCII session token cannot be sent as a header
        logger.exception("Leaderboard request for %s/%s failed", year, code)
        raise TransportError(str(exc)) from exc

    if not response.is_success:
        logger.warning(
            "Upstream returned %s for leaderboard %s/%s", response.status_code, year, code
        )
        raise UpstreamError(response.status_code)

    try:
        return response.json()
    except ValueError as exc:
        # AoC answers an expired session with a 200 HTML login page
        logger.warning("Leaderboard %s/%s did not return JSON", year, code)
        raise TransportError(f"Invalid JSON from upstream: {exc}") from exc


async def fetch_leaderboard(
    year,
    code: str,
    session_token: str,
    client: Optional[httpx.AsyncClient] = None,
) -> dict:
    """
    GET {AOC_BASE_URL}/{year}/leaderboard/private/view/{code}.json

    Returns the raw JSON document. Pass `client` to reuse a connection pool
    (or an httpx.MockTransport in tests).
    """
    if client is not None:
        return await _get(client, year, code, session_token)

    async with httpx.AsyncClient() as owned:
        return await _get(owned, year, code, session_token)
