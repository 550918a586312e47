"""summary-issues - keep GitHub "summary" issues in sync with related issues.

A summary issue carries the ``summary`` label plus one or more topic labels.
Its body is regenerated from the newest (optionally regex-matching) comment of
every issue sharing a topic label.

from summary_issues import load_config, handle_event, load_event
from summary_issues.github_graphql import GitHubGraphQLClient

cfg = load_config()
event = load_event(cfg.event_name, cfg.event_path)
result = handle_event(GitHubGraphQLClient.from_config(cfg), cfg, event)
print(result.updated)
"""

from __future__ import annotations

from .config import SummaryConfig, load_config
from .events import Event, load_event
from .models import SUMMARY_LABEL, Comment, Issue, Label, LabelSet
from .orchestrator import RunResult, handle_event
from .renderer import render_summary

__version__ = "0.1.0"

__all__ = [
    "SUMMARY_LABEL",
    "Comment",
    "Event",
    "Issue",
    "Label",
    "LabelSet",
    "RunResult",
    "SummaryConfig",
    "handle_event",
    "load_config",
    "load_event",
    "render_summary",
    "__version__",
]
