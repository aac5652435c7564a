"""Session recovery: refresh the token once when the backend answers 401.

State machine::

    NORMAL --(primary AuthRequired)--> REFRESH_PENDING
    REFRESH_PENDING --(status "success")--> NORMAL, refetch owed
    REFRESH_PENDING --(anything else)-----> NORMAL, error surfaced, no retry

A 401 that arrives straight after a successful refresh is reported as a
failure instead of starting another refresh.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from scoreboard.services.fetch import (
    DecodeError,
    Failure,
    FetchRequest,
    RemoteResourceFetcher,
    Success,
    decode_json,
)

_log = logging.getLogger(__name__)

REFRESH_SUCCESS_STATUS = "success"
REAUTH_FAILED_MESSAGE = "Authentication failed after refreshing the session token"


class RefreshState(Enum):
    NORMAL = "normal"
    REFRESH_PENDING = "refresh_pending"


@dataclass(frozen=True)
class RefreshResponse:
    """Body of the refresh endpoint; anything besides ``status`` lands in ``detail``."""

    status: str
    detail: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == REFRESH_SUCCESS_STATUS


def decode_refresh(response: httpx.Response) -> RefreshResponse:
    data = decode_json(response)
    if not isinstance(data, dict) or not isinstance(data.get("status"), str):
        raise DecodeError("Refresh response must be an object with a string 'status'")
    detail = {k: v for k, v in data.items() if k != "status"}
    return RefreshResponse(status=data["status"], detail=detail)


class AuthRetryCoordinator:
    """Drives the refresh fetcher on behalf of the scoreboard controller."""

    def __init__(self, fetcher: RemoteResourceFetcher, refresh_url: str) -> None:
        self._fetcher = fetcher
        self._refresh_url = refresh_url
        self._state = RefreshState.NORMAL
        self._just_refreshed = False
        self.last_error: str | None = None

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is RefreshState.REFRESH_PENDING

    def handle_auth_required(self) -> Failure | None:
        """React to a primary 401.

        Returns a ``Failure`` when the 401 follows a refresh that just
        succeeded; otherwise starts a refresh (unless one is pending) and
        returns ``None``.
        """
        if self.pending:
            return None
        if self._just_refreshed:
            self._just_refreshed = False
            _log.error("Request rejected again after token refresh")
            self.last_error = REAUTH_FAILED_MESSAGE
            return Failure(REAUTH_FAILED_MESSAGE)

        self.last_error = None
        self._fetcher.spawn(
            FetchRequest(self._refresh_url, method="POST"), decode_refresh
        )
        self._state = RefreshState.REFRESH_PENDING
        return None

    def note_primary_result(self) -> None:
        """A primary fetch ended with something other than 401."""
        self._just_refreshed = False

    def poll(self) -> bool:
        """Poll the refresh fetch. Returns True when the primary data should be refetched."""
        if not self.pending:
            return False
        outcome = self._fetcher.poll()
        if outcome is None:
            return False

        self._state = RefreshState.NORMAL
        if isinstance(outcome, Success) and outcome.value.succeeded:
            _log.info("Token refreshed")
            self._just_refreshed = True
            return True

        if isinstance(outcome, Success):
            _log.error("Failed to refresh token: %r", outcome.value)
            self.last_error = f"Failed to refresh token: {outcome.value.status}"
        elif isinstance(outcome, Failure):
            _log.error("Failed to refresh token: %s", outcome.message)
            self.last_error = f"Failed to refresh token: {outcome.message}"
        else:
            _log.error("Refresh endpoint rejected the session")
            self.last_error = "Failed to refresh token: session expired"
        return False

    def reset(self) -> None:
        """Drop any pending refresh, e.g. when the panel closes."""
        self._fetcher.discard()
        self._state = RefreshState.NORMAL
        self._just_refreshed = False
