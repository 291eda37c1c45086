"""Shared data contracts between the query layer and the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import FetchFailed


class PanelKind(Enum):
    """Which query a panel shows. Values are tab indexes."""

    MY_PRS = 0
    MY_REQUESTS = 1
    ALL_PRS = 2

    @property
    def title(self) -> str:
        return _PANEL_TITLES[self]

    @property
    def pane_id(self) -> str:
        return _PANEL_IDS[self]

    @classmethod
    def from_pane_id(cls, pane_id: str) -> PanelKind:
        for kind, candidate in _PANEL_IDS.items():
            if candidate == pane_id:
                return kind
        raise ValueError(f"unknown pane id: {pane_id}")


_PANEL_TITLES = {
    PanelKind.MY_PRS: "My PRs",
    PanelKind.MY_REQUESTS: "My Requests",
    PanelKind.ALL_PRS: "All PRs",
}

_PANEL_IDS = {
    PanelKind.MY_PRS: "my-prs",
    PanelKind.MY_REQUESTS: "my-requests",
    PanelKind.ALL_PRS: "all-prs",
}


@dataclass(frozen=True)
class QueryFilters:
    include_drafts: bool = False
    include_closed: bool = False
    # Only consulted for PanelKind.ALL_PRS
    repositories: tuple[str, ...] = ()


@dataclass(frozen=True)
class PullRequest:
    """One pull request as returned by the GitHub search API."""

    title: str
    url: str
    author: str = ""
    repository: str = ""
    number: int = 0
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    review_decision: str = ""
    checks_state: str = ""
    mergeable: str = ""
    merge_state_status: str = ""
    is_draft: bool = False
    state: str = ""
    comments: int = 0
    updated_at: str = ""

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> PullRequest:
        """Build from a GraphQL search node.

        Nullable nested objects (a deleted author, a PR with no status
        checks) come back as null and are treated as empty.
        """
        author = node.get("author") or {}
        repository = node.get("repository") or {}
        rollup = node.get("statusCheckRollup") or {}
        return cls(
            title=node.get("title") or "",
            url=node.get("url") or "",
            author=author.get("login") or "",
            repository=repository.get("nameWithOwner") or "",
            number=int(node.get("number") or 0),
            changed_files=int(node.get("changedFiles") or 0),
            additions=int(node.get("additions") or 0),
            deletions=int(node.get("deletions") or 0),
            review_decision=node.get("reviewDecision") or "",
            checks_state=rollup.get("state") or "",
            mergeable=node.get("mergeable") or "",
            merge_state_status=node.get("mergeStateStatus") or "",
            is_draft=bool(node.get("isDraft")),
            state=node.get("state") or "",
            comments=int(node.get("totalCommentsCount") or 0),
            updated_at=node.get("updatedAt") or "",
        )


@dataclass(frozen=True)
class SearchResults:
    """Outcome of one fetch, tagged with the panel it belongs to.

    Exactly one of ``pull_requests`` (success) or ``error`` (failure) is
    meaningful.
    """

    kind: PanelKind
    pull_requests: tuple[PullRequest, ...] = field(default_factory=tuple)
    error: FetchFailed | None = None

    @classmethod
    def ok(cls, kind: PanelKind, pull_requests: list[PullRequest]) -> SearchResults:
        return cls(kind=kind, pull_requests=tuple(pull_requests))

    @classmethod
    def failed(cls, kind: PanelKind, error: FetchFailed) -> SearchResults:
        return cls(kind=kind, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None
