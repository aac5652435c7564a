"""ChallengeInfoModal - Modal rendering a challenge's markdown instructions."""

from typing import ClassVar

import httpx
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Markdown, Select, Static

from scoreboard.services.config import (
    NO_INSTRUCTIONS,
    ChallengeInfoState,
    ChallengeInfoStateManager,
    ClientSettings,
)
from scoreboard.services.fetch import (
    Failure,
    FetchRequest,
    RemoteResourceFetcher,
    Success,
    decode_text,
)
from scoreboard.services.scores import Challenge, QueryParameters
from scoreboard.services.sync import ParameterChangeDetector

NOT_LOGGED_IN = "Not logged in. Open the score board to refresh the session."


class ChallengeInfoModal(ModalScreen[None]):
    """Modal fetching and showing instructions for one challenge at a time.

    Selecting another challenge abandons any fetch still running and
    starts a new one. The ``None`` challenge is never requested. The
    selection and the last instructions are restored when the modal
    reopens, and the instructions are refetched for a restored challenge.
    """

    DEFAULT_CSS = """
    ChallengeInfoModal {
        align: center middle;
        background: black 50%;

        #container {
            width: 90%;
            height: 85%;
            border: thick #BD93F9 60%;
            background: $surface;
            padding: 1 2;
        }

        .modal-title {
            text-style: bold;
            text-align: center;
            width: 100%;
        }

        #controls {
            height: auto;
        }

        #challenge-select {
            width: 40;
        }

        #buttons {
            height: auto;
            align-horizontal: right;
        }
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "close", "Close", show=False),
        Binding("r", "refresh", "Refresh", show=False),
    ]

    def __init__(
        self,
        settings: ClientSettings,
        client: httpx.AsyncClient,
        state_manager: ChallengeInfoStateManager | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._state_manager = state_manager
        self._fetcher = RemoteResourceFetcher(client, on_complete=self._on_fetch_complete)
        self._detector = ParameterChangeDetector(QueryParameters(challenge=Challenge.NONE))
        state = state_manager.load() if state_manager is not None else ChallengeInfoState()
        self._selected = state.selected
        self.instructions = state.instructions

    def compose(self) -> ComposeResult:
        with Vertical(id="container"):
            yield Static("📖 Challenge Info", classes="modal-title")
            with Horizontal(id="controls"):
                yield Select(
                    [(str(challenge), challenge) for challenge in Challenge],
                    value=self._selected,
                    allow_blank=False,
                    id="challenge-select",
                )
                yield Button("Refresh", id="refresh-btn")
            with VerticalScroll(id="info-scroll"):
                yield Markdown(self.instructions, id="instructions")
            with Horizontal(id="buttons"):
                yield Button("Close", id="close-btn", variant="primary")

    def on_mount(self) -> None:
        self._fetch()

    def on_unmount(self) -> None:
        self._fetcher.discard()
        if self._state_manager is not None:
            self._state_manager.save(ChallengeInfoState(self._selected, self.instructions))

    def _fetch(self) -> None:
        if not self._detector.check(QueryParameters(challenge=self._selected)):
            return
        self._fetcher.discard()
        if self._selected is Challenge.NONE:
            self._show_instructions(NO_INSTRUCTIONS)
            return
        url = self._settings.challenge_info_url(self._selected)
        self._fetcher.spawn(FetchRequest(url), decode_text)

    def _on_fetch_complete(self) -> None:
        self.call_later(self._check_info)

    def _check_info(self) -> None:
        if not self.is_mounted:
            return
        outcome = self._fetcher.poll()
        if outcome is None:
            return
        if isinstance(outcome, Success):
            self._show_instructions(outcome.value)
        elif isinstance(outcome, Failure):
            self._show_instructions(outcome.message)
        else:
            self._show_instructions(NOT_LOGGED_IN)

    def _show_instructions(self, instructions: str) -> None:
        self.instructions = instructions
        if self.is_mounted:
            self.query_one("#instructions", Markdown).update(instructions)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        self._selected = event.value
        self._fetch()

    def action_refresh(self) -> None:
        self._detector.force_stale()
        self._fetch()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "refresh-btn":
            self.action_refresh()
        elif event.button.id == "close-btn":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
