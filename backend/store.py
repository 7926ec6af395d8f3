"""
In-memory application context shared across all routes.
One viewer, one dashboard: the cache and selection live in process memory
and disappear on restart.
"""

from ranking.dashboard import Dashboard

dashboard = Dashboard()
