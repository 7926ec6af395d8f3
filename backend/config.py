"""
Runtime configuration.

Values come from the environment (a backend/.env file is loaded by main.py).

  AOC_BASE_URL       upstream site, e.g. https://adventofcode.com
  AOC_USER_AGENT     sent on every upstream request
  CACHE_TTL_MINUTES  how long a fetched leaderboard is reused (default 15)
  DISPLAY_TIMEZONE   IANA zone used to render completion times (default UTC)
  ALLOWED_ORIGINS    comma-separated CORS origins (default *)
"""

import os
from zoneinfo import ZoneInfo

AOC_BASE_URL = os.environ.get("AOC_BASE_URL", "https://adventofcode.com").rstrip("/")
AOC_USER_AGENT = os.environ.get("AOC_USER_AGENT", "Aoclytic (FastAPI proxy)")

# Advent of Code asks that private leaderboards are polled at most every 15 minutes
CACHE_TTL_MINUTES = float(os.environ.get("CACHE_TTL_MINUTES", "15"))

DISPLAY_TIMEZONE = ZoneInfo(os.environ.get("DISPLAY_TIMEZONE", "UTC"))

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

FIRST_YEAR = 2015
TOTAL_DAYS = 25
PARTS = ("1", "2")
