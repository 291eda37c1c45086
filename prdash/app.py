"""prdash: Textual TUI app.

Launch with: prdash  (or python -m prdash)

The app is a thin host around ``PanelOrchestrator``: it turns key presses,
tab switches and resizes into orchestrator calls, runs fetches in worker
threads, and posts their results back onto its own message queue so every
state change happens on the UI thread.
"""

from __future__ import annotations

import logging
import webbrowser

from rich.text import Text
from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Footer, Header, Static, TabbedContent, TabPane

from .config import DashboardConfig
from .exceptions import FetchFailed, OpenFailed
from .github import GitHubClient
from .models import PanelKind, QueryFilters, SearchResults
from .orchestrator import PanelOrchestrator
from .tabs.prs import PRTableTab

logger = logging.getLogger(__name__)


class SearchResultsReady(Message):
    """Posted from a fetch worker when its search finishes."""

    def __init__(self, results: SearchResults) -> None:
        super().__init__()
        self.results = results


class AppHost:
    """Carries out the orchestrator's side effects inside the Textual app."""

    def __init__(self, app: PRDashApp) -> None:
        self._app = app

    def start_fetch(self, kind: PanelKind, filters: QueryFilters) -> None:
        self._app.run_fetch(kind, filters)

    def open_url(self, url: str) -> None:
        try:
            opened = webbrowser.open_new_tab(url)
        except webbrowser.Error as e:
            raise OpenFailed(f"failed to open {url}: {e}") from e
        if not opened:
            raise OpenFailed(f"no browser available to open {url}")

    def quit(self) -> None:
        self._app.exit()

    def schedule_tick(self, seconds: float) -> None:
        # One-shot; the orchestrator re-arms after each tick
        self._app.set_timer(seconds, self._app.on_refresh_tick)


class PRDashApp(App):
    """Three tabs of pull requests: mine, review requests, and watched repos."""

    TITLE = "prdash"
    SUB_TITLE = "GitHub Pull Requests"

    DEFAULT_CSS = """
    #status-line {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    """

    BINDINGS = [
        Binding("q", "dispatch('q')", "Quit", priority=True),
        Binding("escape", "dispatch('escape')", "Quit", show=False, priority=True),
        Binding("enter", "dispatch('enter')", "Open", priority=True),
        Binding("r", "dispatch('r')", "Reload", priority=True),
        Binding("d", "dispatch('d')", "Drafts", priority=True),
        Binding("c", "dispatch('c')", "Closed", priority=True),
        Binding("w", "dispatch('w')", "Wide", priority=True),
        Binding("u", "dispatch('u')", "Wide", show=False, priority=True),
        Binding("tab", "next_tab", "Next tab", show=False, priority=True),
        Binding("shift+tab", "previous_tab", "Previous tab", show=False, priority=True),
        Binding("1", "show_tab('my-prs')", "My PRs", show=False),
        Binding("2", "show_tab('my-requests')", "My Requests", show=False),
        Binding("3", "show_tab('all-prs')", "All PRs", show=False),
    ]

    def __init__(
        self,
        config: DashboardConfig | None = None,
        start_tab: PanelKind = PanelKind.MY_PRS,
        client: GitHubClient | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)
        config = config or DashboardConfig()
        self._client = client or GitHubClient()
        self._start_tab = start_tab
        self._mounted_ready = False
        self.orchestrator = PanelOrchestrator(
            AppHost(self),
            filters=config.filters,
            view_columns=config.view_columns,
            start_tab=start_tab,
            interval=config.interval,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with TabbedContent(id="tabs", initial=self._start_tab.pane_id):
            for kind in PanelKind:
                with TabPane(kind.title, id=kind.pane_id):
                    yield PRTableTab(
                        self.orchestrator.panels[kind],
                        id=f"{kind.pane_id}-tab",
                    )
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self._mounted_ready = True
        self.orchestrator.start()
        self._sync()
        self._focus_table(self.orchestrator.selected)

    # ------------------------------------------------------------------
    # Orchestrator plumbing
    # ------------------------------------------------------------------

    @work(thread=True, group="fetch")
    def run_fetch(self, kind: PanelKind, filters: QueryFilters) -> None:
        """Run one search in a background thread and post the result."""
        try:
            results = SearchResults.ok(kind, self._client.fetch(kind, filters))
        except FetchFailed as exc:
            logger.warning("Fetch for %s failed: %s", kind.name, exc)
            results = SearchResults.failed(kind, exc)
        except Exception as exc:
            logger.exception("Fetch for %s crashed", kind.name)
            results = SearchResults.failed(kind, FetchFailed(f"fetch failed: {exc}"))
        self.post_message(SearchResultsReady(results))

    def on_search_results_ready(self, message: SearchResultsReady) -> None:
        self.orchestrator.receive(message.results)
        self._sync()

    def on_refresh_tick(self) -> None:
        self.orchestrator.tick()
        self._sync()

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        kind = PanelKind.from_pane_id(event.pane.id)
        self.orchestrator.activate_tab(kind)
        self._sync()
        if self._mounted_ready:
            self._focus_table(kind)

    def on_resize(self, event: events.Resize) -> None:
        self.orchestrator.resize(event.size.width, event.size.height)
        self._sync()

    def _sync(self) -> None:
        """Push orchestrator state into the widgets."""
        if not self._mounted_ready:
            return
        for tab in self.query(PRTableTab):
            tab.sync()
        footer = Text(self.orchestrator.footer_text(max(0, self.size.width - 2)))
        for status_line in self.query("#status-line").results(Static):
            status_line.update(footer)

    def _focus_table(self, kind: PanelKind) -> None:
        self.query_one(f"#{kind.pane_id}-tab", PRTableTab).table.focus()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_dispatch(self, key: str) -> None:
        self.orchestrator.handle_key(key)
        self._sync()

    def action_show_tab(self, tab_id: str) -> None:
        self.query_one(TabbedContent).active = tab_id

    def action_next_tab(self) -> None:
        kind = self.orchestrator.selected
        self.action_show_tab(PanelKind((kind.value + 1) % len(PanelKind)).pane_id)

    def action_previous_tab(self) -> None:
        kind = self.orchestrator.selected
        self.action_show_tab(PanelKind((kind.value - 1) % len(PanelKind)).pane_id)
