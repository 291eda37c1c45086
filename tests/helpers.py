"""Builders and fakes shared by the prdash tests."""

from datetime import datetime, timezone

from prdash.models import PullRequest

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_pr(n: int = 1, **overrides) -> PullRequest:
    """Build a PullRequest with distinct, predictable field values."""
    fields = dict(
        title=f"Fix thing {n}",
        url=f"https://github.com/octo-org/octo-repo/pull/{n}",
        author="octocat",
        repository="octo-org/octo-repo",
        number=n,
        changed_files=2,
        additions=10,
        deletions=3,
        review_decision="APPROVED",
        checks_state="SUCCESS",
        mergeable="MERGEABLE",
        merge_state_status="CLEAN",
        is_draft=False,
        state="OPEN",
        comments=4,
        updated_at="2024-06-01T10:00:00Z",
    )
    fields.update(overrides)
    return PullRequest(**fields)


class FakeHost:
    """Records the side effects the orchestrator asks for."""

    def __init__(self):
        self.fetches = []
        self.opened = []
        self.ticks = []
        self.quit_called = False
        self.open_error = None

    def start_fetch(self, kind, filters):
        self.fetches.append((kind, filters))

    def open_url(self, url):
        if self.open_error is not None:
            raise self.open_error
        self.opened.append(url)

    def quit(self):
        self.quit_called = True

    def schedule_tick(self, seconds):
        self.ticks.append(seconds)

    def kinds_fetched(self):
        return [kind for kind, _ in self.fetches]
