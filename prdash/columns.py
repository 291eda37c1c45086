"""Column registry: identities, headers and width bounds for the PR table."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .exceptions import UnknownColumn


class Column(Enum):
    """A table column. The value is the stable name used in config files."""

    CHECKS = "checks"
    MERGEABLE = "mergeable"
    APPROVED = "approved"
    DRAFT = "draft"
    TITLE = "title"
    URL = "url"
    AUTHOR = "author"
    REPOSITORY = "repository"
    CHANGE = "change"
    STATE = "state"
    COMMENTS = "comments"
    UPDATED_AT = "updatedAt"

    @property
    def header(self) -> str:
        return COLUMN_HEADERS[self]

    @property
    def min_width(self) -> int:
        return COLUMN_MIN_WIDTHS[self]

    @property
    def max_width(self) -> int:
        return COLUMN_MAX_WIDTHS[self]


class ColumnSet(Enum):
    DEFAULT = "default"
    WIDE = "wide"


# Text columns grow to fit their longest cell
UNBOUNDED = sys.maxsize

# ---------------------------------------------------------------------------
# Static lookup tables. Every Column has exactly one entry in each.
# ---------------------------------------------------------------------------

COLUMN_HEADERS: Mapping[Column, str] = MappingProxyType({
    Column.CHECKS: "C",
    Column.MERGEABLE: "M",
    Column.APPROVED: "A",
    Column.DRAFT: "D",
    Column.TITLE: "Title",
    Column.URL: "Url",
    Column.AUTHOR: "Author",
    Column.REPOSITORY: "Repository",
    Column.CHANGE: "Change",
    Column.STATE: "State",
    Column.COMMENTS: "Comments",
    Column.UPDATED_AT: "UpdatedAt",
})

COLUMN_MIN_WIDTHS: Mapping[Column, int] = MappingProxyType({
    Column.CHECKS: 2,
    Column.MERGEABLE: 2,
    Column.APPROVED: 2,
    Column.DRAFT: 2,
    Column.TITLE: 5,
    Column.URL: 5,
    Column.AUTHOR: 6,
    Column.REPOSITORY: 10,
    Column.CHANGE: 6,
    Column.STATE: 5,
    Column.COMMENTS: 5,
    Column.UPDATED_AT: 10,
})

COLUMN_MAX_WIDTHS: Mapping[Column, int] = MappingProxyType({
    Column.CHECKS: 2,
    Column.MERGEABLE: 2,
    Column.APPROVED: 2,
    Column.DRAFT: 2,
    Column.TITLE: UNBOUNDED,
    Column.URL: UNBOUNDED,
    Column.AUTHOR: UNBOUNDED,
    Column.REPOSITORY: UNBOUNDED,
    Column.CHANGE: UNBOUNDED,
    Column.STATE: UNBOUNDED,
    Column.COMMENTS: UNBOUNDED,
    Column.UPDATED_AT: UNBOUNDED,
})

DEFAULT_COLUMNS: tuple[Column, ...] = (
    Column.CHECKS,
    Column.MERGEABLE,
    Column.APPROVED,
    Column.TITLE,
    Column.AUTHOR,
    Column.REPOSITORY,
    Column.CHANGE,
    Column.UPDATED_AT,
)

WIDE_COLUMNS: tuple[Column, ...] = tuple(Column)

_COLUMNS_BY_NAME: Mapping[str, Column] = MappingProxyType(
    {column.value.lower(): column for column in Column}
)


def column_names() -> list[str]:
    """All valid column names, sorted."""
    return sorted(column.value for column in Column)


def parse_column(name: str) -> Column:
    """Resolve a column name. Case-insensitive, surrounding whitespace ignored.

    Raises:
        UnknownColumn: If the name matches no column. The message lists
            every valid name in sorted order.
    """
    key = str(name).strip().lower()
    try:
        return _COLUMNS_BY_NAME[key]
    except KeyError:
        raise UnknownColumn(key, column_names()) from None


def parse_columns(names: Iterable[str]) -> list[Column]:
    return [parse_column(name) for name in names]


@dataclass(frozen=True)
class ViewColumns:
    """The column lists used for the default and wide views."""

    default: tuple[Column, ...] = DEFAULT_COLUMNS
    wide: tuple[Column, ...] = WIDE_COLUMNS

    @classmethod
    def from_names(
        cls,
        default: Iterable[str] | None = None,
        wide: Iterable[str] | None = None,
    ) -> ViewColumns:
        """Build from configured name lists. Empty or missing lists keep the defaults."""
        return cls(
            default=tuple(parse_columns(default)) if default else DEFAULT_COLUMNS,
            wide=tuple(parse_columns(wide)) if wide else WIDE_COLUMNS,
        )

    def columns_of(self, column_set: ColumnSet) -> list[Column]:
        if column_set is ColumnSet.WIDE:
            return list(self.wide)
        return list(self.default)
