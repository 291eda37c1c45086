"""Table layout: turn fetched pull requests into sized, column-filtered rows.

A ``Row`` holds a rendered cell for every ``Column``; which of those cells
are shown is decided later by ``layout_table``. A ``Page`` is the snapshot
from one successful fetch, with the widest cell seen per column. Pages are
rebuilt on every refresh, never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from rich.cells import cell_len

from .columns import Column
from .models import PullRequest
from .utils import (
    approved_glyph,
    checks_glyph,
    draft_glyph,
    format_change,
    mergeable_glyph,
    shorten_repository,
    state_glyph,
    time_ago,
)

Row = dict[Column, str]


def build_row(pr: PullRequest, now: datetime | None = None) -> Row:
    """Render every column's cell for one pull request."""
    return {
        Column.CHECKS: checks_glyph(pr.checks_state),
        Column.MERGEABLE: mergeable_glyph(pr.mergeable, pr.merge_state_status),
        Column.APPROVED: approved_glyph(pr.review_decision),
        Column.DRAFT: draft_glyph(pr.is_draft),
        Column.TITLE: pr.title,
        Column.URL: pr.url,
        Column.AUTHOR: pr.author,
        Column.REPOSITORY: shorten_repository(pr.repository),
        Column.CHANGE: format_change(pr.changed_files, pr.additions, pr.deletions),
        Column.STATE: state_glyph(pr.state),
        Column.COMMENTS: str(pr.comments),
        Column.UPDATED_AT: time_ago(pr.updated_at, now),
    }


@dataclass(frozen=True)
class Page:
    column_widths: Mapping[Column, int]
    rows: tuple[Row, ...] = ()

    @classmethod
    def from_rows(cls, rows: Iterable[Row]) -> Page:
        rows = tuple(rows)
        widths = {column: 0 for column in Column}
        for row in rows:
            for column, value in row.items():
                widths[column] = max(widths[column], cell_len(value))
        return cls(column_widths=MappingProxyType(widths), rows=rows)

    @classmethod
    def from_pull_requests(
        cls, pull_requests: Iterable[PullRequest], now: datetime | None = None
    ) -> Page:
        return cls.from_rows(build_row(pr, now) for pr in pull_requests)

    def __len__(self) -> int:
        return len(self.rows)


EMPTY_PAGE = Page.from_rows(())


@dataclass(frozen=True)
class TableLayout:
    """What a table widget needs to draw one view of a Page."""

    columns: tuple[Column, ...] = ()
    headers: list[tuple[str, int]] = field(default_factory=list)
    rows: list[tuple[str, ...]] = field(default_factory=list)
    # urls[i] is the navigation target of rows[i]
    urls: list[str] = field(default_factory=list)

    def url_at(self, index: int) -> str | None:
        if 0 <= index < len(self.urls):
            return self.urls[index]
        return None


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def column_width(page: Page, column: Column) -> int:
    return clamp(page.column_widths[column], column.min_width, column.max_width)


def layout_table(page: Page, columns: Sequence[Column]) -> TableLayout:
    """Select and size ``columns`` for ``page``.

    Raises:
        KeyError: If a row lacks a cell for a selected column or its URL.
            Rows always carry every column, so this is a row-builder bug.
    """
    columns = tuple(columns)
    headers = [(column.header, column_width(page, column)) for column in columns]
    rows = [tuple(row[column] for column in columns) for row in page.rows]
    urls = [row[Column.URL] for row in page.rows]
    return TableLayout(columns=columns, headers=headers, rows=rows, urls=urls)
