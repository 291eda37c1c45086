"""One dashboard tab: its pull request table and refresh lifecycle.

State transitions::

    NEEDS_RELOAD --focus()--> LOADING --receive_result()--> READY | ERRORED
    READY/ERRORED --request_reload() while focused--> LOADING
    READY/ERRORED --request_reload() while blurred--> NEEDS_RELOAD

A panel never fetches on its own; it calls ``request_fetch(kind)`` and the
result comes back later through ``receive_result``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from .columns import Column, ColumnSet, ViewColumns
from .layout import EMPTY_PAGE, Page, TableLayout, layout_table
from .models import PanelKind, SearchResults
from .utils import utc_now

logger = logging.getLogger(__name__)


class PanelState(Enum):
    NEEDS_RELOAD = "needs_reload"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class Panel:
    """Refresh lifecycle and layout for one tab."""

    def __init__(
        self,
        kind: PanelKind,
        request_fetch: Callable[[PanelKind], None],
        view_columns: ViewColumns | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.kind = kind
        self._request_fetch = request_fetch
        self._view_columns = view_columns or ViewColumns()
        self._clock = clock

        self.state = PanelState.NEEDS_RELOAD
        self.focused = False
        self.wide = False
        self.error: str | None = None
        self.page: Page | None = None
        self.layout: TableLayout = layout_table(EMPTY_PAGE, self.columns)
        self.cursor = 0
        self.refreshed_at: datetime | None = None
        self.width = 0
        self.height = 0
        # Bumped whenever ``layout`` changes
        self.version = 0

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def column_set(self) -> ColumnSet:
        return ColumnSet.WIDE if self.wide else ColumnSet.DEFAULT

    @property
    def columns(self) -> list[Column]:
        return self._view_columns.columns_of(self.column_set)

    @property
    def needs_reload(self) -> bool:
        return self.state is PanelState.NEEDS_RELOAD

    @property
    def loading(self) -> bool:
        return self.state is PanelState.LOADING

    @property
    def row_count(self) -> int:
        return len(self.layout.rows)

    @property
    def status(self) -> str:
        if self.state in (PanelState.NEEDS_RELOAD, PanelState.LOADING):
            return "Loading ..."
        if self.state is PanelState.ERRORED:
            return self.error or ""
        return f"{self.row_count} issues"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def focus(self) -> bool:
        """Focus this panel. Returns True if a lazy reload fetch was issued."""
        self.focused = True
        if self.needs_reload:
            self._start_fetch()
            return True
        return False

    def blur(self) -> None:
        self.focused = False

    def request_reload(self) -> None:
        """Explicit reload: fetch now if focused, else on the next focus.

        A deferred reload drops the displayed rows so stale data is not
        shown when the panel is next brought to the front.
        """
        if self.focused:
            self._start_fetch()
            return
        self.state = PanelState.NEEDS_RELOAD
        self.page = None
        self._relayout()

    def receive_result(self, results: SearchResults) -> bool:
        """Apply a finished fetch. Returns False if it was dropped."""
        if self.needs_reload:
            # Invalidated by request_reload() while the fetch was running
            logger.debug("dropping %s results, reload pending", self.kind.name)
            return False
        if not results.succeeded:
            self.state = PanelState.ERRORED
            self.error = str(results.error)
            logger.warning("%s fetch failed: %s", self.kind.name, self.error)
            return True
        now = self._clock()
        self.page = Page.from_pull_requests(results.pull_requests, now)
        self.state = PanelState.READY
        self.error = None
        self.refreshed_at = now
        self._relayout()
        return True

    def _start_fetch(self) -> None:
        self.state = PanelState.LOADING
        self._request_fetch(self.kind)

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def toggle_wide(self) -> None:
        """Switch between the default and wide column sets without refetching."""
        self.wide = not self.wide
        self._relayout()

    def handle_key(self, key: str) -> bool:
        if key == "r":
            self.request_reload()
            return True
        return False

    def select(self, row: int) -> None:
        self.cursor = row

    def selected_url(self) -> str | None:
        return self.layout.url_at(self.cursor)

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def _relayout(self) -> None:
        page = self.page if self.page is not None else EMPTY_PAGE
        self.layout = layout_table(page, self.columns)
        if self.cursor >= self.row_count:
            self.cursor = max(0, self.row_count - 1)
        self.version += 1
