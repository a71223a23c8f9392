"""Merge request title formatting."""

from __future__ import annotations

from collections.abc import Iterable


def format_title(plain_title: str, target_branch: str, ticket_ids: Iterable[str] = ()) -> str:
    """
    Build the merge request title.

    Each ticket id is wrapped in brackets in the given order, followed by the
    bracketed target branch, a space and the plain title.

    >>> format_title("test MR", "uat", ["ES-123", "ES-234"])
    '[ES-123][ES-234][uat] test MR'
    """
    tickets = "".join(f"[{ticket_id}]" for ticket_id in ticket_ids)
    return f"{tickets}[{target_branch}] {plain_title}"
