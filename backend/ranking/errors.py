"""
Error kinds raised while loading or navigating a leaderboard.

Every error carries a user-facing message in str(exc). None of them are
retried; the caller reports the message and the user may submit again.
"""

from typing import Optional

GENERIC_FAILURE = "Something went wrong while loading data."


class LeaderboardError(Exception):
    """Base class for all leaderboard load/navigation failures."""


class ValidationError(LeaderboardError):
    """Bad user input. Raised before any network call is attempted."""


class UpstreamError(LeaderboardError):
    """Proxy or upstream answered with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(
            f"Unable to load leaderboard (status {status_code}). "
            "Ensure you are signed in to Advent of Code and have access to this board."
        )


class TransportError(LeaderboardError):
    """Network failure or an unparseable response body."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or GENERIC_FAILURE)


class LoadInProgress(LeaderboardError):
    """A load was submitted while another fetch is still pending."""

    def __init__(self):
        super().__init__("A leaderboard is already loading. Please wait for it to finish.")


class RefreshConfirmationRequired(LeaderboardError):
    """A forced refresh of a still-fresh board needs explicit confirmation."""

    def __init__(self, age_seconds: float, ttl_seconds: float):
        self.age_seconds = age_seconds
        self.ttl_seconds = ttl_seconds
        minutes = int(age_seconds // 60)
        super().__init__(
            f"This leaderboard was fetched {minutes} minute(s) ago. "
            f"Advent of Code asks that private leaderboards are not requested more than "
            f"once every {int(ttl_seconds // 60)} minutes. Confirm to refresh anyway."
        )
