"""Cell formatting helpers for the pull request table."""

from __future__ import annotations

from datetime import datetime, timezone

BLANK = " "


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def pluralize(count: int, word: str) -> str:
    """'1 hour', '3 hours'."""
    if count == 1:
        return f"{count} {word}"
    return f"{count} {word}s"


def time_ago(iso_str: str | None, now: datetime | None = None) -> str:
    """Convert an ISO timestamp to a relative time string like '5 minutes ago'."""
    if not iso_str:
        return ""
    try:
        dt = datetime.fromisoformat(str(iso_str).replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    secs = (now - dt).total_seconds()
    if secs < 60:
        return "just now"
    if secs < 3600:
        return pluralize(int(secs // 60), "minute") + " ago"
    hours = int(secs // 3600)
    if hours < 24:
        return pluralize(hours, "hour") + " ago"
    days = hours // 24
    if days < 30:
        return pluralize(days, "day") + " ago"
    if days < 365:
        return pluralize(days // 30, "month") + " ago"
    return pluralize(days // 365, "year") + " ago"


def shorten_repository(name_with_owner: str) -> str:
    """Drop the owner segment: 'octo-org/octo-repo' -> 'octo-repo'."""
    _, sep, rest = name_with_owner.partition("/")
    if not sep:
        return name_with_owner
    return rest


def format_change(changed_files: int, additions: int, deletions: int) -> str:
    return f"{changed_files} (+{additions}/-{deletions})"


# ---------------------------------------------------------------------------
# Glyph columns
# ---------------------------------------------------------------------------


def checks_glyph(state: str) -> str:
    return {
        "SUCCESS": "✅",
        "FAILURE": "❌",
        "PENDING": "⏳",
    }.get(state, BLANK)


def approved_glyph(review_decision: str) -> str:
    if review_decision == "APPROVED":
        return "✅"
    return BLANK


def mergeable_glyph(mergeable: str, merge_state_status: str) -> str:
    if mergeable == "CONFLICTING":
        return "❌"
    if mergeable == "MERGEABLE":
        if merge_state_status == "BEHIND":
            return "⬆️"
        return "✅"
    return BLANK


def draft_glyph(is_draft: bool) -> str:
    if is_draft:
        return "📝"
    return BLANK


def state_glyph(state: str) -> str:
    if state == "MERGED":
        return "🚀"
    if state == "CLOSED":
        return "🗑️"
    return BLANK


def format_interval(seconds: float) -> str:
    """90 -> '1m30s', 3600 -> '1h'."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return "".join(parts)
