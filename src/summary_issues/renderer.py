"""Markdown rendering of summary issue bodies.

The body is rebuilt from scratch on every run:

    _This is generated from the newest comment on [issues with matching labels](...)._
    ## [Source issue](https://github.com/acme/widgets/issues/7)
    <newest matching comment, headings demoted to h3>

    _Updated 2024-01-02 03:04:05 UTC by @octocat_

Given identical inputs the output is byte-identical.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from urllib.parse import urlencode

from .config import SummaryConfig
from .matcher import Tracker, find_source_issues, search_link_query
from .models import Issue
from .selection import normalize_headings, select_comment

TIMESTAMP_FORMAT = "-%m-%d %H:%M:%S %Z"
NO_UPDATE = "_No update_"
NO_MATCHING_ISSUES = "No matching issues."


def search_url(config: SummaryConfig, query: str) -> str:
    return f"{config.server_url}/search?{urlencode({'q': query})}"


def format_timestamp(value: datetime) -> str:
    # years always render with four digits
    return f"{value.year:04d}" + value.strftime(TIMESTAMP_FORMAT)


def render_preamble(config: SummaryConfig, summary: Issue) -> str:
    target = "issues with matching labels"
    query = search_link_query(config.owner, summary.labels)
    if query:
        target = f"[{target}]({search_url(config, query)})"
    if not config.comment_regex:
        return f"_This is generated from the newest comment on {target}._\n"
    return (
        "_This is generated from the newest comment that matches the regular "
        f"expression `{config.comment_regex}` on {target}._\n"
    )


def render_section(config: SummaryConfig, issue: Issue) -> str:
    parts = [f"## [{issue.title}]({issue.url})\n"]
    comment = select_comment(issue.comments, config.comment_pattern)
    if comment is None:
        parts.append(f"{NO_UPDATE}\n")
    else:
        parts.append(normalize_headings(comment.body) + "\n")
        parts.append(
            f"\n\n_Updated {format_timestamp(comment.updated_at)} by @{comment.author}_\n\n"
        )
    return "".join(parts)


def render_summary(config: SummaryConfig, summary: Issue, sources: Sequence[Issue]) -> str:
    """Render the full body of ``summary`` from its matched source issues.

    Sources keep the order the search returned them in; the summary issue
    itself is skipped even when it matches its own filter.
    """
    body = [render_preamble(config, summary)]
    content = False
    for issue in sources:
        if issue.id == summary.id:
            continue
        content = True
        body.append(render_section(config, issue))
    if not content:
        body.append(f"\n{NO_MATCHING_ISSUES}\n")
    return "".join(body)


def generate_summary(tracker: Tracker, config: SummaryConfig, summary: Issue) -> str:
    sources = find_source_issues(tracker, config, summary)
    return render_summary(config, summary, sources)


__all__ = [
    "NO_MATCHING_ISSUES",
    "NO_UPDATE",
    "format_timestamp",
    "generate_summary",
    "render_preamble",
    "render_section",
    "render_summary",
    "search_url",
]
