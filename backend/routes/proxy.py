import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from aoc.client import fetch_leaderboard
from ranking.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ---------- Endpoint ----------

@router.api_route(
    "/api/leaderboard",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
)
async def proxy_leaderboard(request: Request):
    """
    Relays a private leaderboard from adventofcode.com.

    Body: {"year", "leaderboardCode", "sessionToken"}. The token is sent
    upstream as the `session` cookie. Upstream failures keep their status
    code; network failures become 500.
    """
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    if request.method != "POST":
        return Response(status_code=405)

    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    year = body.get("year")
    code = body.get("leaderboardCode")
    token = body.get("sessionToken")
    if not year or not code or not token:
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    try:
        data = await fetch_leaderboard(year, code, token)
    except UpstreamError as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": f"Upstream status {exc.status_code}"},
        )
    except TransportError as exc:
        return JSONResponse(status_code=500, content={"error": str(exc) or "Fetch failed"})
    except Exception as exc:
        logger.exception("Proxy request for %s/%s failed", year, code)
        return JSONResponse(status_code=500, content={"error": str(exc) or "Fetch failed"})

    return JSONResponse(
        status_code=200,
        content=data,
        headers={"Access-Control-Allow-Origin": "*"},
    )
