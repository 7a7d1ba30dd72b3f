# ui.py
from typing import List, Optional, Sequence

import pyperclip
from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Markdown, RichLog, Static

from formatting import (PLACEHOLDER_IMAGE_URL, RatingTier, format_date, format_rating,
                        format_runtime, format_schedule, format_year, genre_badges,
                        get_image_url, imdb_url, rating_tier, strip_html_tags)
from models import AppState, Phase, Show

NO_RESULTS = "No shows found\nTry searching for popular shows like \"Breaking Bad\" or \"Friends\""

RATING_STYLES = {
    RatingTier.HIGH: "bold black on green",
    RatingTier.MEDIUM: "bold black on yellow",
    RatingTier.LOW: "bold white on red",
    RatingTier.NONE: "grey50",
}

STATUS_STYLES = {
    "Running": "green",
    "Ended": "red",
    "To Be Determined": "yellow",
    "In Development": "blue",
}


class SearchControls(Static):
    """Widget for the search input and button."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search for TV shows and movies...", id="search-input")
        yield Button("Search", id="search-button", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.post_search_message()

    def post_search_message(self) -> None:
        # Blank submissions are forwarded too: they reset the app to its idle state.
        self.post_message(self.SearchRequested(self.query_one(Input).value.strip()))


def describe_results(state: AppState) -> str:
    """Heading shown above the grid for the given state."""
    if state.has_searched:
        if state.phase is Phase.SEARCHING:
            return "Searching..."
        heading = f'Search Results for "{state.query}"'
        if state.phase is Phase.RESULTS and state.results:
            count = len(state.results)
            heading += f"\nFound {count} show{'s' if count != 1 else ''}"
        return heading
    if state.phase is Phase.SEARCHING:
        return "Loading featured shows..."
    if state.results:
        return "Featured Shows"
    return "Discover Amazing TV Shows & Movies\nTry searching for: \"Breaking Bad\", \"Friends\" or \"The Office\""


class ResultsHeader(Static):
    """Heading above the results grid."""
    def show_state(self, state: AppState) -> None:
        self.update(Text(describe_results(state), style="bold"))


class ErrorMessage(Static):
    """Error panel with a retry button. Hidden unless a search failed."""
    class RetryRequested(Message):
        pass

    def compose(self) -> ComposeResult:
        yield Label("", id="error-text")
        yield Button("Retry", id="retry-button", variant="error")

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, message: str) -> None:
        self.query_one("#error-text", Label).update(Text(f"⚠ {message}"))
        self.display = True

    def clear_error(self) -> None:
        self.display = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.RetryRequested())


def render_card(show: Show, max_genres: int = 3) -> Text:
    """Builds the text body of a result card."""
    text = Text()
    text.append(show.name, style="bold")
    rating = format_rating(show.rating.average)
    if rating:
        text.append("  ")
        text.append(f" ★ {rating} ", style=RATING_STYLES[rating_tier(show.rating.average)])
    text.append("\n")
    if show.status:
        text.append(show.status, style=STATUS_STYLES.get(show.status, "grey50"))
    if show.premiered:
        text.append(f"  {format_year(show.premiered)}", style="grey50")
    badges = genre_badges(show.genres, max_genres)
    if badges:
        text.append("\n" + " · ".join(badges), style="cyan")
    text.append("\n")
    text.append(strip_html_tags(show.summary), style="dim")
    if show.channel_name:
        text.append(f"\n{show.channel_name}", style="italic grey50")
    return text


class ShowCard(Static, can_focus=True):
    """A single result card. Click or Enter opens the detail view."""
    BINDINGS = [("enter", "select", "View details")]

    def __init__(self, record: Show, max_genres: int = 3) -> None:
        super().__init__(render_card(record, max_genres), classes="show-card")
        self.record = record

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.action_select()

    def action_select(self) -> None:
        self.post_message(ShowGrid.ShowSelected(self.record))


class ShowGrid(VerticalScroll):
    """Renders exactly the shows it is given, one card each, in order."""
    class ShowSelected(Message):
        def __init__(self, show: Show) -> None:
            self.show = show
            super().__init__()

    def __init__(self, max_genres: int = 3, **kwargs) -> None:
        super().__init__(**kwargs)
        self.max_genres = max_genres

    def compose(self) -> ComposeResult:
        yield Static(NO_RESULTS, classes="empty-results")

    @property
    def cards(self) -> List[ShowCard]:
        return list(self.query(ShowCard))

    async def update_results(self, shows: Sequence[Show]) -> None:
        await self.remove_children()
        if shows:
            await self.mount_all([ShowCard(show, self.max_genres) for show in shows])
        else:
            await self.mount(Static(NO_RESULTS, classes="empty-results"))
        self.scroll_home(animate=False)


def build_detail_markdown(show: Optional[Show], placeholder: str = PLACEHOLDER_IMAGE_URL) -> Optional[str]:
    """Markdown body of the detail view, or None when there is nothing to show."""
    if show is None:
        return None

    lines = [f"# {show.name}", ""]
    rating = format_rating(show.rating.average)
    if rating:
        lines += [f"**★ {rating}/10**", ""]
    lines += ["## Overview", "", strip_html_tags(show.summary), ""]
    if show.genres:
        lines += ["### Genres", "", ", ".join(show.genres), ""]

    links = []
    if show.official_site:
        links.append(f"[Official Site]({show.official_site})")
    imdb = imdb_url(show.externals.imdb)
    if imdb:
        links.append(f"[IMDb]({imdb})")
    if links:
        lines += [" · ".join(links), ""]

    lines += ["### Show Details", ""]
    lines.append(f"- **Status**: {show.status or 'Unknown'}")
    if show.premiered:
        lines.append(f"- **Premiered**: {format_date(show.premiered)}")
    if show.ended:
        lines.append(f"- **Ended**: {format_date(show.ended)}")
    if show.runtime:
        lines.append(f"- **Runtime**: {format_runtime(show.runtime)}")
    if show.channel_name:
        lines.append(f"- **Network**: {show.channel_name}")
    if show.schedule.days:
        lines.append(f"- **Schedule**: {format_schedule(show.schedule)}")
    lines.append(f"- **Language**: {show.language or 'Unknown'}")
    lines.append(f"- **Type**: {show.type or 'Unknown'}")
    lines.append(f"- **Poster**: `{get_image_url(show.image, 'original', placeholder)}`")
    return "\n".join(lines)


def best_link(show: Show) -> Optional[str]:
    return show.official_site or imdb_url(show.externals.imdb) or show.url


class ShowDetailScreen(ModalScreen[None]):
    """Detail view for one already-fetched show."""
    BINDINGS = [("escape", "close", "Close"), ("c", "copy_link", "Copy Link")]

    def __init__(self, record: Show, placeholder: str = PLACEHOLDER_IMAGE_URL) -> None:
        super().__init__()
        self.record = record
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Vertical(id="detail-dialog"):
            with Horizontal(id="detail-toolbar"):
                yield Button("✕ Close", id="close-detail")
            with VerticalScroll(id="detail-scroll"):
                yield Markdown(build_detail_markdown(self.record, self.placeholder) or "", id="detail-body")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-detail":
            event.stop()
            self.dismiss()

    def on_click(self, event: events.Click) -> None:
        dialog = self.query_one("#detail-dialog")
        if not dialog.region.contains(event.screen_x, event.screen_y):
            self.dismiss()

    def action_close(self) -> None:
        self.dismiss()

    def action_copy_link(self) -> None:
        link = best_link(self.record)
        if not link:
            self.notify("No link available for this show.", severity="warning")
            return
        try:
            pyperclip.copy(link)
        except pyperclip.PyperclipException as e:
            self.notify(f"Clipboard unavailable: {e}", severity="warning")
            return
        self.notify(f"Copied link for '{self.record.name}'.")


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
