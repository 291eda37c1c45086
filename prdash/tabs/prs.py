"""PRs tab: one pull request table backed by a Panel."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable

from .base import TabBase


class PRTableTab(TabBase):
    """Pull request table whose columns and widths come from the panel layout."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("g", "cursor_top", "Top", show=False),
        Binding("G", "cursor_bottom", "Bottom", show=False),
    ]

    DEFAULT_CSS = """
    PRTableTab {
        height: 100%;
    }
    PRTableTab DataTable {
        height: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        yield DataTable(classes="pr-table", cursor_type="row", zebra_stripes=True)

    def on_mount(self) -> None:
        self.sync()

    @property
    def table(self) -> DataTable:
        return self.query_one(DataTable)

    def _refresh(self) -> None:
        layout = self.panel.layout
        cursor = self.panel.cursor
        table = self.table
        table.clear(columns=True)
        for header, width in layout.headers:
            table.add_column(header, width=width)
        table.add_rows(tuple(Text(cell) for cell in row) for row in layout.rows)
        if layout.rows:
            table.move_cursor(row=min(cursor, len(layout.rows) - 1))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self.panel.select(event.cursor_row)

    def action_cursor_down(self) -> None:
        self.table.action_cursor_down()

    def action_cursor_up(self) -> None:
        self.table.action_cursor_up()

    def action_cursor_top(self) -> None:
        self.table.move_cursor(row=0)

    def action_cursor_bottom(self) -> None:
        self.table.move_cursor(row=max(0, self.table.row_count - 1))
