# main.py
import argparse
import asyncio
import logging
import random
from dataclasses import replace
from typing import Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.logging import TextualHandler
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input

from config import Config
from models import AppState, Phase
from services import FlixFrameError, TVMazeClient
from state import (Action, DetailClosed, SearchCleared, SearchFailed, SearchStarted,
                   SearchSucceeded, ShowSelected, update)
from ui import ErrorMessage, LogPane, ResultsHeader, SearchControls, ShowDetailScreen, ShowGrid

class FlixFrameApp(App):
    TITLE = "FlixFrame"
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("r", "retry", "Retry"),
    ]
    CSS = """
    #main-container {
        height: 1fr;
        padding: 0 1;
    }

    SearchControls {
        layout: horizontal;
        height: auto;
        margin: 1 0;
    }

    #search-input {
        width: 1fr;
    }

    #results-header {
        height: auto;
        margin-bottom: 1;
    }

    ErrorMessage {
        height: auto;
        border: round $error;
        padding: 0 1;
    }

    #show-grid {
        layout: grid;
        grid-size: 3;
        grid-gutter: 1 2;
        height: 1fr;
    }

    .show-card {
        height: 9;
        border: round $primary;
        padding: 0 1;
    }

    .show-card:focus {
        border: round $accent;
    }

    .empty-results {
        column-span: 3;
        content-align: center middle;
        text-style: italic;
        height: 5;
    }

    #log {
        height: 6;
        border-top: solid $primary;
    }

    ShowDetailScreen {
        align: center middle;
        background: $background 60%;
    }

    #detail-dialog {
        width: 80%;
        height: 80%;
        border: thick $primary;
        background: $surface;
    }

    #detail-toolbar {
        height: auto;
        align: right top;
    }
"""

    app_state = reactive(AppState(), always_update=True, init=False)

    def __init__(self, client: TVMazeClient, config: Config, initial_query: Optional[str] = None):
        super().__init__()
        self.client = client
        self.config = config
        self.initial_query = initial_query

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield SearchControls(id="search-controls")
            yield ResultsHeader(id="results-header")
            yield ErrorMessage(id="error-panel")
            yield ShowGrid(max_genres=self.config.MAX_CARD_GENRES, id="show-grid")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(Input).focus()
        self.query_one(ResultsHeader).show_state(self.app_state)
        self.query_one(LogPane).add_message(f"📺 Using {escape(self.config.API_BASE_URL)}")
        if self.initial_query:
            self.query_one(Input).value = self.initial_query
            self.start_search(self.initial_query)
        elif self.config.FEATURED_QUERIES:
            self.start_search(random.choice(self.config.FEATURED_QUERIES), featured=True)

    def update_state(self, action: Action) -> None:
        """Routes every state change through the reducer."""
        self.app_state = update(self.app_state, action)

    async def watch_app_state(self, old_state: AppState, new_state: AppState) -> None:
        grid = self.query_one(ShowGrid)
        if old_state.results != new_state.results:
            await grid.update_results(new_state.results)
        grid.display = new_state.phase in (Phase.IDLE, Phase.RESULTS)
        self.query_one(ResultsHeader).show_state(new_state)

        error_panel = self.query_one(ErrorMessage)
        if new_state.phase is Phase.ERROR:
            error_panel.show_error(new_state.error or "Failed to search shows")
        else:
            error_panel.clear_error()

        if new_state.detail_open and new_state.selected and not old_state.detail_open:
            self.push_screen(
                ShowDetailScreen(new_state.selected, self.config.PLACEHOLDER_IMAGE_URL),
                self._on_detail_dismissed,
            )
        elif old_state.detail_open and not new_state.detail_open and isinstance(self.screen, ShowDetailScreen):
            self.pop_screen()

        if old_state.phase is not new_state.phase:
            self.refresh_bindings()

    def check_action(self, action: str, parameters: tuple) -> Optional[bool]:
        if action == "retry":
            return self.app_state.phase is Phase.ERROR
        return super().check_action(action, parameters)

    def _on_detail_dismissed(self, result: None = None) -> None:
        if self.app_state.detail_open:
            self.update_state(DetailClosed())

    def start_search(self, query: str, featured: bool = False) -> None:
        if not query.strip():
            self.update_state(SearchCleared())
            return
        self.update_state(SearchStarted(query, featured=featured))
        log = self.query_one(LogPane)
        if featured:
            log.add_message(f"✨ Loading featured shows for '{escape(query)}'...")
        else:
            log.add_message(f"🔎 Searching for '{escape(query)}'...")
        self.run_worker(
            self.perform_search(query, self.app_state.generation, featured),
            group="search_worker",
            exclusive=True,
        )

    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.start_search(message.query)

    def on_error_message_retry_requested(self, message: ErrorMessage.RetryRequested) -> None:
        self.action_retry()

    def on_show_grid_show_selected(self, message: ShowGrid.ShowSelected) -> None:
        self.update_state(ShowSelected(message.show))

    def action_retry(self) -> None:
        state = self.app_state
        if state.phase is Phase.ERROR and state.query:
            self.start_search(state.query, featured=not state.has_searched)

    async def perform_search(self, query: str, generation: int, featured: bool) -> None:
        log = self.query_one(LogPane)
        try:
            hits = await asyncio.to_thread(self.client.search_shows, query)
        except FlixFrameError as e:
            log.add_message(f"[red]❌ {escape(str(e))}[/red]")
            self.update_state(SearchFailed(generation, str(e)))
            return

        shows = [hit.show for hit in hits]
        if featured:
            shows = shows[:self.config.FEATURED_LIMIT]
        self.update_state(SearchSucceeded(generation, shows))
        if not shows:
            log.add_message(f"🤷 No shows found for '{escape(query)}'.")
        else:
            log.add_message(f"🎬 Found {len(shows)} shows for '{escape(query)}'.")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Browse TV shows from TVMaze in your terminal.")
    parser.add_argument("-q", "--query", help="Search for this query right away.")
    parser.add_argument("--log-level", help="Logging level sent to the Textual console (default: WARNING).")
    args = parser.parse_args(argv)

    app_config = Config.from_env()
    if args.log_level:
        app_config = replace(app_config, LOG_LEVEL=args.log_level.upper())
    logging.basicConfig(level=app_config.LOG_LEVEL, handlers=[TextualHandler()])

    client = TVMazeClient(app_config.API_BASE_URL)
    app = FlixFrameApp(client, app_config, initial_query=args.query)
    try:
        app.run()
    finally:
        client.close()


if __name__ == "__main__":
    main()
