"""Panel orchestrator: owns the three tabs and routes every dashboard event.

All methods are called from the host's event loop, one event at a time.
Fetches run elsewhere; their results come back through ``receive``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Protocol

from .columns import ViewColumns
from .exceptions import OpenFailed
from .models import PanelKind, QueryFilters, SearchResults
from .panel import Panel
from .utils import format_interval, utc_now

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "esc", "escape"})
WIDE_KEYS = frozenset({"u", "w"})


class DashboardHost(Protocol):
    """Side effects the orchestrator delegates to the UI shell."""

    def start_fetch(self, kind: PanelKind, filters: QueryFilters) -> None:
        """Run a fetch in the background and deliver its SearchResults later."""

    def open_url(self, url: str) -> None:
        """Open a URL in the browser. May raise OpenFailed."""

    def quit(self) -> None:
        ...

    def schedule_tick(self, seconds: float) -> None:
        """Call back ``tick()`` once after ``seconds``."""


class PanelOrchestrator:
    """Tab selection, global keys, auto-refresh and fetch bookkeeping."""

    def __init__(
        self,
        host: DashboardHost,
        filters: QueryFilters | None = None,
        view_columns: ViewColumns | None = None,
        start_tab: PanelKind = PanelKind.MY_PRS,
        interval: float | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._host = host
        self.filters = filters or QueryFilters()
        self.selected = start_tab
        self.interval = interval
        self.error = ""
        self.last_updated: datetime | None = None
        self.width = 0
        self.height = 0
        self._clock = clock
        # Filters each running fetch was issued with
        self._in_flight: dict[PanelKind, QueryFilters] = {}
        self.panels: dict[PanelKind, Panel] = {
            kind: Panel(kind, self._issue_fetch, view_columns, clock)
            for kind in PanelKind
        }

    @property
    def active_panel(self) -> Panel:
        return self.panels[self.selected]

    def start(self) -> None:
        """Focus the start tab and arm the first refresh tick."""
        self.activate_tab(self.selected)
        self._arm_tick()

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    def activate_tab(self, kind: PanelKind) -> bool:
        """Make ``kind`` the focused tab. Returns True if it started a fetch."""
        self.selected = kind
        for other, panel in self.panels.items():
            if other is not kind:
                panel.blur()
        return self.panels[kind].focus()

    def next_tab(self) -> bool:
        return self.activate_tab(PanelKind((self.selected.value + 1) % len(PanelKind)))

    def previous_tab(self) -> bool:
        return self.activate_tab(PanelKind((self.selected.value - 1) % len(PanelKind)))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Dispatch a key press. Returns False if nobody claimed it."""
        if key == "enter":
            self.open_selected()
            return True
        if key in QUIT_KEYS:
            self._host.quit()
            return True
        if key == "d":
            self.filters = replace(self.filters, include_drafts=not self.filters.include_drafts)
            self.reload_all()
            return True
        if key == "c":
            self.filters = replace(self.filters, include_closed=not self.filters.include_closed)
            self.reload_all()
            return True
        if key in WIDE_KEYS:
            self.active_panel.toggle_wide()
            return True
        return self.active_panel.handle_key(key)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        for panel in self.panels.values():
            panel.set_size(width, height)

    def tick(self) -> None:
        """Auto-refresh the active tab, then re-arm the timer."""
        logger.debug("refresh tick for %s", self.selected.name)
        self.active_panel.request_reload()
        self._arm_tick()

    def receive(self, results: SearchResults) -> None:
        """Apply a finished fetch to the panel it was issued for."""
        kind = results.kind
        issued_with = self._in_flight.pop(kind, self.filters)
        if issued_with != self.filters:
            # Drafts or closed were toggled while this fetch ran
            logger.debug("discarding %s results for outdated filters", kind.name)
            if not self.panels[kind].needs_reload:
                self._issue_fetch(kind)
            return
        if self.panels[kind].receive_result(results):
            self.last_updated = self._clock()
            self.error = ""

    def reload_all(self) -> None:
        for panel in self.panels.values():
            panel.request_reload()

    def open_selected(self) -> None:
        url = self.active_panel.selected_url()
        if not url:
            return
        try:
            self._host.open_url(url)
        except OpenFailed as exc:
            logger.warning("failed to open %s: %s", url, exc)
            self.error = str(exc)

    # ------------------------------------------------------------------
    # Fetches and timers
    # ------------------------------------------------------------------

    def is_fetching(self, kind: PanelKind) -> bool:
        return kind in self._in_flight

    def _issue_fetch(self, kind: PanelKind) -> None:
        if kind in self._in_flight:
            # The running fetch either answers this request or is
            # re-issued by receive() once its filters are outdated
            return
        self._in_flight[kind] = self.filters
        logger.debug("fetching %s with %s", kind.name, self.filters)
        self._host.start_fetch(kind, self.filters)

    def _arm_tick(self) -> None:
        if self.interval:
            self._host.schedule_tick(self.interval)

    # ------------------------------------------------------------------
    # Status line
    # ------------------------------------------------------------------

    def footer_text(self, width: int | None = None) -> str:
        footer = self.active_panel.status
        if self.filters.include_closed:
            footer += " [including closed]"
        if self.filters.include_drafts:
            footer += " [including drafts]"
        footer += " " + self.error

        if self.last_updated is None:
            time_footer = "--:--:-- --"
        else:
            time_footer = self.last_updated.astimezone().strftime("%I:%M:%S %p")
        if self.interval:
            time_footer += f" (🔄{format_interval(self.interval)})"

        if width is None:
            width = self.width
        info_width = max(0, width - len(time_footer))
        return footer.ljust(info_width) + time_footer
