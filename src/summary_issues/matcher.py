"""Search query construction for summary and source issues."""

from __future__ import annotations

from typing import Protocol

from .config import SummaryConfig
from .logging import get_logger
from .models import Issue, LabelSet


class Tracker(Protocol):
    """Issue tracker operations a run depends on."""

    def search_summary_issues(self, query: str) -> list[Issue]: ...

    def search_source_issues(self, query: str) -> list[Issue]: ...

    def update_issue_body(self, issue_id: str, body: str) -> None: ...


def summary_issue_query(owner: str, labels: LabelSet) -> str:
    """Query for open summary issues sharing any of ``labels``."""
    return f"is:open user:{owner} label:summary {labels.query_filter()}"


def source_issue_query(owner: str, labels: LabelSet) -> str:
    """Query for every issue (open or closed) sharing any non-summary label.

    Returns ``""`` when there is nothing to match on.
    """
    qf = labels.query_filter()
    if not qf:
        return ""
    return f"user:{owner} {qf}"


def search_link_query(owner: str, labels: LabelSet) -> str:
    qf = labels.query_filter()
    if not qf:
        return ""
    return f"type:issue user:{owner} {qf}"


def find_summary_issues(tracker: Tracker, config: SummaryConfig, labels: LabelSet) -> list[Issue]:
    query = summary_issue_query(config.owner, labels)
    get_logger().log_operation("search_summary_issues", query=query)
    return tracker.search_summary_issues(query)


def find_source_issues(tracker: Tracker, config: SummaryConfig, summary: Issue) -> list[Issue]:
    query = source_issue_query(config.owner, summary.labels)
    if not query:
        return []
    get_logger().log_operation("search_source_issues", query=query, issue_id=summary.id)
    return tracker.search_source_issues(query)


__all__ = [
    "Tracker",
    "find_source_issues",
    "find_summary_issues",
    "search_link_query",
    "source_issue_query",
    "summary_issue_query",
]
