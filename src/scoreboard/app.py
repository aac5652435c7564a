"""Scoreboard - Textual app hosting the score board and challenge info panels."""

import logging

import httpx
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, Static

from scoreboard import __version__
from scoreboard.modals.challenge_info_modal import ChallengeInfoModal
from scoreboard.modals.scoreboard_modal import ScoreboardModal
from scoreboard.services.config import (
    ChallengeInfoStateManager,
    ClientSettings,
    PanelStateManager,
)

WELCOME_TEXT = (
    "Press [b]s[/b] for the score board, [b]i[/b] for challenge info, "
    "[b]q[/b] to quit."
)


class ScoreboardApp(App):
    """Main application.

    One ``httpx.AsyncClient`` is shared by every panel so the session cookie
    set by a token refresh is seen by all of them.
    """

    TITLE = f"Scoreboard v{__version__}"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("s", "scoreboard", "Score Board"),
        Binding("i", "challenge_info", "Challenge Info"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: ClientSettings | None = None,
        state_manager: PanelStateManager | None = None,
        info_state_manager: ChallengeInfoStateManager | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or ClientSettings.from_env()
        self._state_manager = state_manager or PanelStateManager()
        self._info_state_manager = info_state_manager or ChallengeInfoStateManager()
        self._client = httpx.AsyncClient(timeout=self._settings.request_timeout)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(WELCOME_TEXT, id="welcome")
        yield Footer()

    def on_mount(self) -> None:
        self.push_screen(self._scoreboard_modal())

    async def on_unmount(self) -> None:
        await self._client.aclose()

    def _scoreboard_modal(self) -> ScoreboardModal:
        return ScoreboardModal(
            self._settings, client=self._client, state_manager=self._state_manager
        )

    def action_scoreboard(self) -> None:
        self.push_screen(self._scoreboard_modal())

    def action_challenge_info(self) -> None:
        self.push_screen(
            ChallengeInfoModal(
                self._settings, self._client, state_manager=self._info_state_manager
            )
        )


def configure_logging(level: str) -> None:
    """Route log records to the Textual devtools console."""
    logging.basicConfig(level=level, handlers=[TextualHandler()], force=True)


def main() -> None:
    """Entry point for the application."""
    settings = ClientSettings.from_env()
    configure_logging(settings.log_level)
    ScoreboardApp(settings).run()


if __name__ == "__main__":
    main()
