"""ScoreboardModal - Modal for viewing and filtering a challenge's leaderboard."""

from dataclasses import replace
from typing import ClassVar

import httpx
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    Label,
    LoadingIndicator,
    RadioButton,
    RadioSet,
    Select,
    Static,
)

from scoreboard.services.config import ClientSettings, PanelStateManager
from scoreboard.services.scores import (
    FILTER_LABELS,
    Challenge,
    FilterMode,
    QueryParameters,
    ScoreRow,
    SortColumn,
)
from scoreboard.services.sync import ScoreboardController, ScoreboardView

LEADER_ROW_STYLE = "bold #F1FA8C"
FILTER_MODES = list(FilterMode)


class ScoreboardModal(ModalScreen[None]):
    """Modal showing the leaderboard for the selected challenge.

    Returns None on close (view-only modal).

    Layout:
    +------------------------------------------------------------------+
    |                         Score Board                               |
    +------------------------------------------------------------------+
    | #  | Time     | Name    | Language | Binary   | Challenge [v]     |
    |----|----------+---------+----------+----------| Filter:           |
    | 0  | 1.20 ms  | alice   | rust     | a.out    |  (o) All          |
    | 1  | 3.05 ms  | bob     | python   | main.py  |  ( ) Unique ...   |
    | ...                                           | [Refresh]         |
    +------------------------------------------------------------------+
    |                                                        [Close]   |
    +------------------------------------------------------------------+

    Every user change and every fetch completion triggers one render pass
    of the controller; the table is rebuilt from the returned view.
    """

    DEFAULT_CSS = """
    ScoreboardModal {
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

        #body {
            height: 1fr;
        }

        #results {
            width: 1fr;
        }

        #options {
            width: 28;
            padding: 0 1;
        }

        #loading-container {
            height: auto;
        }

        .error-text {
            color: #FF5555;
            display: none;
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
        client: httpx.AsyncClient | None = None,
        state_manager: PanelStateManager | None = None,
    ) -> None:
        super().__init__()
        self._state_manager = state_manager
        self._controller = ScoreboardController(
            settings, client=client, on_update=self._on_fetch_complete
        )
        self._selected = QueryParameters()
        if state_manager is not None:
            state = state_manager.load()
            self._selected = state.selected
            self._controller.restore(state)

    def compose(self) -> ComposeResult:
        with Vertical(id="container"):
            yield Static("☰ Score Board", classes="modal-title")

            with Horizontal(id="body"):
                with Vertical(id="results"):
                    with Center(id="loading-container"):
                        yield LoadingIndicator(id="loading")
                        yield Static("Loading scores...", id="loading-text")
                    yield Static("", id="error-text", classes="error-text")
                    yield DataTable(id="results-table", classes="results-table")

                with Vertical(id="options"):
                    yield Label("Challenge")
                    yield Select(
                        [(str(challenge), challenge) for challenge in Challenge],
                        value=self._selected.challenge,
                        allow_blank=False,
                        id="challenge-select",
                    )
                    yield Label("Filter:")
                    with RadioSet(id="filter-set"):
                        for mode in FILTER_MODES:
                            yield RadioButton(
                                FILTER_LABELS[mode],
                                value=mode is self._selected.filter_mode,
                            )
                    yield Label("Sort by")
                    yield Select(
                        [(column.value, column) for column in SortColumn],
                        value=self._selected.sort_column,
                        allow_blank=False,
                        id="sort-select",
                    )
                    yield Button("Refresh", id="refresh-btn")

            with Horizontal(id="buttons"):
                yield Button("Close", id="close-btn", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one("#results-table", DataTable)
        table.add_column("#", key="rank", width=4)
        table.add_column("Time", key="time", width=10)
        table.add_column("Name", key="name", width=18)
        table.add_column("Language", key="language", width=12)
        table.add_column("Binary", key="binary")
        table.cursor_type = "row"
        table.zebra_stripes = True
        self._render_pass()

    async def on_unmount(self) -> None:
        if self._state_manager is not None:
            self._state_manager.save(self._controller.snapshot(self._selected))
        await self._controller.aclose()

    def _on_fetch_complete(self) -> None:
        # Fetches finish off the event path; queue a pass so the result shows.
        self.call_later(self._render_pass)

    def _render_pass(self) -> None:
        if not self.is_mounted:
            return
        self._show_view(self._controller.render_pass(self._selected))

    def _show_view(self, view: ScoreboardView) -> None:
        self.query_one("#loading-container").display = view.loading
        loading_text = (
            "Refreshing session..." if view.refreshing_token else "Loading scores..."
        )
        self.query_one("#loading-text", Static).update(loading_text)

        error_widget = self.query_one("#error-text", Static)
        if view.message:
            error_widget.update(f"{view.message}\n\nPress 'r' to retry.")
            error_widget.display = True
        else:
            error_widget.display = False

        table = self.query_one("#results-table", DataTable)
        table.clear()
        for row in view.rows:
            table.add_row(*self._build_row_cells(row))

    def _build_row_cells(self, row: ScoreRow) -> list[str | Text]:
        cells = [str(row.rank), row.time, row.name, row.language, row.binary]
        if row.rank == 0:
            return [Text(c, style=LEADER_ROW_STYLE) for c in cells]
        return cells

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        if event.select.id == "challenge-select":
            self._selected = replace(self._selected, challenge=event.value)
        elif event.select.id == "sort-select":
            self._selected = replace(self._selected, sort_column=event.value)
        self._render_pass()

    def on_radio_set_changed(self, event: RadioSet.Changed) -> None:
        self._selected = replace(self._selected, filter_mode=FILTER_MODES[event.index])
        self._render_pass()

    def action_refresh(self) -> None:
        self._controller.request_refresh()
        self._render_pass()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "refresh-btn":
            self.action_refresh()
        elif event.button.id == "close-btn":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
