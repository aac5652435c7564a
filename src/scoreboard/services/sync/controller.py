"""ScoreboardController - the per-render-pass contract behind the scoreboard panel."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx

from scoreboard.services.config import ClientSettings, PanelState
from scoreboard.services.fetch import (
    AuthRequired,
    Failure,
    FetchRequest,
    RemoteResourceFetcher,
    Success,
)
from scoreboard.services.scores import QueryParameters, Score, ScoreRow, build_rows, decode_scores
from scoreboard.services.sync.auth_retry import AuthRetryCoordinator
from scoreboard.services.sync.detector import ParameterChangeDetector

_log = logging.getLogger(__name__)

AUTH_REFRESHING_MESSAGE = "Failed to authenticate, refreshing token"


@dataclass(frozen=True)
class ScoreboardView:
    """What the presentation layer draws after a render pass."""

    rows: list[ScoreRow] = field(default_factory=list)
    message: str | None = None
    loading: bool = False
    refreshing_token: bool = False


class ScoreboardController:
    """Owns the scores fetcher, the refresh fetcher and the stored scores.

    Call ``render_pass`` whenever the host re-renders: on user input and from
    the ``on_update`` wake-up fired when a fetch completes.

    Args:
        settings: Backend location; the base URL is never read from the environment here.
        client: Shared HTTP client. Created (and closed by ``aclose``) when omitted.
        on_update: Wake-up callback for the host loop.
    """

    def __init__(
        self,
        settings: ClientSettings,
        client: httpx.AsyncClient | None = None,
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self._settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.request_timeout)
        self._scores_fetcher = RemoteResourceFetcher(self._client, on_update)
        self._refresh_fetcher = RemoteResourceFetcher(self._client, on_update)
        self._coordinator = AuthRetryCoordinator(
            self._refresh_fetcher, settings.refresh_url()
        )
        self._detector = ParameterChangeDetector()
        self._stale = False
        self._scores: list[Score] | None = None
        self._message: str | None = None

    @property
    def scores(self) -> list[Score] | None:
        return self._scores

    @property
    def active(self) -> QueryParameters | None:
        return self._detector.active

    @property
    def primary_in_flight(self) -> bool:
        return self._scores_fetcher.in_flight

    def request_refresh(self) -> None:
        """Manual refresh: the next pass refetches even with unchanged parameters."""
        self._detector.force_stale()

    def render_pass(self, selected: QueryParameters) -> ScoreboardView:
        self._sync(selected)
        self._poll_primary()
        if self._coordinator.pending and self._coordinator.poll():
            self.request_refresh()
        elif self._coordinator.last_error and not self._coordinator.pending:
            self._message = self._coordinator.last_error
            self._coordinator.last_error = None
        # A completed fetch or refresh may leave a refetch owed; issue it now
        # rather than waiting for another event.
        self._sync(selected)
        return self._view(selected)

    def restore(self, state: PanelState) -> None:
        """Adopt persisted scores. The detector starts empty, so the first pass refetches."""
        self._scores = state.scores

    def snapshot(self, selected: QueryParameters) -> PanelState:
        return PanelState(selected=selected, scores=self._scores)

    async def aclose(self) -> None:
        self._scores_fetcher.discard()
        self._coordinator.reset()
        if self._owns_client:
            await self._client.aclose()

    def _sync(self, selected: QueryParameters) -> None:
        if self._detector.check(selected):
            self._stale = True
        if not self._stale or self._coordinator.pending or self._scores_fetcher.in_flight:
            return
        self._stale = False
        self._scores = None
        self._message = None
        url = self._settings.scores_url(self._detector.active.challenge)
        self._scores_fetcher.spawn(FetchRequest(url), decode_scores)

    def _poll_primary(self) -> None:
        outcome = self._scores_fetcher.poll()
        if outcome is None:
            return

        if isinstance(outcome, AuthRequired):
            failure = self._coordinator.handle_auth_required()
            self._message = failure.message if failure else AUTH_REFRESHING_MESSAGE
            return

        self._coordinator.note_primary_result()
        if isinstance(outcome, Failure):
            self._message = outcome.message
        elif isinstance(outcome, Success):
            if self._stale:
                _log.debug("Dropping scores for superseded parameters")
                return
            self._scores = outcome.value
            self._message = None

    def _view(self, selected: QueryParameters) -> ScoreboardView:
        rows = (
            build_rows(self._scores, selected.filter_mode, selected.sort_column)
            if self._scores is not None
            else []
        )
        return ScoreboardView(
            rows=rows,
            message=self._message,
            loading=self._scores_fetcher.in_flight or self._coordinator.pending,
            refreshing_token=self._coordinator.pending,
        )
