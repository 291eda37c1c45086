"""Pull request searches through the gh CLI's GraphQL endpoint."""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from .exceptions import FetchFailed
from .models import PanelKind, PullRequest, QueryFilters

logger = logging.getLogger(__name__)

GH_TIMEOUT_SECONDS = 60
SEARCH_LIMIT = 100

SEARCH_TEMPLATE = """
{
  search(query: "%(query)s", type: ISSUE, first: %(limit)d) {
    issueCount
    edges {
      node {
        ... on PullRequest {
          statusCheckRollup { state }
          number
          title
          repository { nameWithOwner }
          url
          changedFiles
          additions
          deletions
          reviewDecision
          author { login }
          mergeable
          mergeStateStatus
          isDraft
          state
          updatedAt
          totalCommentsCount
        }
      }
    }
  }
}
"""


def build_search_query(kind: PanelKind, filters: QueryFilters) -> str:
    """Build the GitHub search string for one panel."""
    if kind is PanelKind.MY_PRS:
        terms = ["is:pr", "author:@me"]
    elif kind is PanelKind.MY_REQUESTS:
        terms = ["is:pr", "review-requested:@me"]
    else:
        terms = ["is:pr"] + [f"repo:{repo}" for repo in filters.repositories]
    if not filters.include_drafts:
        terms.append("draft:false")
    if not filters.include_closed:
        terms.append("is:open")
    return " ".join(terms)


def build_graphql(search_query: str, limit: int = SEARCH_LIMIT) -> str:
    return SEARCH_TEMPLATE % {"query": search_query.replace('"', '\\"'), "limit": limit}


def parse_search_response(payload: dict[str, Any]) -> list[PullRequest]:
    """Extract pull requests from a GraphQL search response.

    Raises:
        FetchFailed: If the response carries GraphQL errors or has no
            search data.
    """
    if not isinstance(payload, dict):
        raise FetchFailed("unexpected response: not a JSON object")
    errors = payload.get("errors")
    if errors:
        messages = "; ".join(
            str(e.get("message", e)) if isinstance(e, dict) else str(e)
            for e in errors
        )
        raise FetchFailed(f"GraphQL error: {messages}")
    try:
        edges = payload["data"]["search"]["edges"]
    except (KeyError, TypeError):
        raise FetchFailed("unexpected response: no search data")
    try:
        # Non-PR search hits come back as empty nodes
        return [
            PullRequest.from_node(edge["node"])
            for edge in edges or []
            if edge and edge.get("node")
        ]
    except (AttributeError, TypeError, ValueError) as e:
        raise FetchFailed(f"unexpected response: malformed search results ({e})") from e


class GitHubClient:
    """Runs pull request searches with ``gh api graphql``."""

    def __init__(self, gh_path: str = "gh", timeout: float = GH_TIMEOUT_SECONDS) -> None:
        self.gh_path = gh_path
        self.timeout = timeout

    def fetch(self, kind: PanelKind, filters: QueryFilters) -> list[PullRequest]:
        """Fetch the pull requests for one panel.

        Args:
            kind: Which panel's query to run
            filters: Draft/closed inclusion and, for ALL_PRS, repositories

        Returns:
            Pull requests in search order

        Raises:
            FetchFailed: On any gh, transport or parse failure
        """
        if kind is PanelKind.ALL_PRS and not filters.repositories:
            return []
        search_query = build_search_query(kind, filters)
        payload = self._run_graphql(build_graphql(search_query))
        return parse_search_response(payload)

    def _run_graphql(self, query: str) -> dict[str, Any]:
        cmd = [self.gh_path, "api", "graphql", "-f", f"query={query}"]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise FetchFailed(f"{self.gh_path} not found; install the GitHub CLI")
        except subprocess.TimeoutExpired:
            raise FetchFailed(f"gh timed out after {self.timeout}s")

        if result.returncode != 0:
            output = (result.stderr or result.stdout).strip()
            raise FetchFailed(
                f"gh exited with status {result.returncode}: {output}",
                output=output,
            )

        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise FetchFailed(f"invalid JSON from gh: {e}", output=result.stdout)
