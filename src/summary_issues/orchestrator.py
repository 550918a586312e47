"""Decide which summary issues an event affects and regenerate them.

Dispatch for a single webhook event:

* ``issues`` on a summary issue (edited/labeled/unlabeled/opened): the issue
  is regenerated directly from its own labels.
* ``issues`` labeled/unlabeled: every open summary issue carrying the changed
  label is regenerated, unless the label is ``summary`` itself.
* ``issues`` opened: every open summary issue sharing a label with the new
  issue is regenerated.
* ``issue_comment``: as for opened, using the commented issue's labels.
* anything else (``schedule`` included): nothing to do.

An issue already regenerated directly is not regenerated again by the label
cascade in the same run. ``unlabeled`` re-resolves summary issues by the
removed label only; summary issues that showed the issue through a different
label are left as they are until their next trigger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .config import SummaryConfig
from .events import (
    ISSUE_COMMENT_EVENT,
    ISSUES_EVENT,
    LABEL_ACTIONS,
    SUMMARY_REFRESH_ACTIONS,
    Event,
)
from .logging import get_logger
from .matcher import Tracker, find_summary_issues
from .models import SUMMARY_LABEL, Issue, LabelSet
from .renderer import generate_summary


@dataclass
class RunResult:
    event: str
    action: str
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    dry_run: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event,
            "action": self.action,
            "updated": list(self.updated),
            "skipped": list(self.skipped),
            "dry_run": self.dry_run,
        }


def update_summary_issue(
    tracker: Tracker, config: SummaryConfig, summary: Issue, result: RunResult
) -> None:
    logger = get_logger()
    logger.log_issue_action("updating", summary.id, summary.title, dry_run=config.dry_run)
    body = generate_summary(tracker, config, summary)
    if config.dry_run:
        logger.log_operation("summary_dry_run", issue_id=summary.id, body=body)
    else:
        tracker.update_issue_body(summary.id, body)
    result.updated.append(summary.id)


def update_summary_issues(
    tracker: Tracker, config: SummaryConfig, labels: LabelSet, result: RunResult
) -> None:
    for summary in find_summary_issues(tracker, config, labels):
        if summary.id in result.updated:
            result.skipped.append(summary.id)
            continue
        update_summary_issue(tracker, config, summary, result)


def _handle_issues_event(
    tracker: Tracker, config: SummaryConfig, event: Event, issue: Issue, result: RunResult
) -> None:
    if issue.is_summary and event.action in SUMMARY_REFRESH_ACTIONS:
        update_summary_issue(tracker, config, issue, result)

    if event.action in LABEL_ACTIONS:
        if event.label is None or event.label.name == SUMMARY_LABEL:
            return
        update_summary_issues(tracker, config, LabelSet((event.label,)), result)
    elif event.action == "opened":
        labels = issue.labels.non_summary_labels()
        if not labels:
            return
        update_summary_issues(tracker, config, labels, result)


def handle_event(tracker: Tracker, config: SummaryConfig, event: Event) -> RunResult:
    logger = get_logger()
    logger.log_operation("event", event=event.name, action=event.action)
    result = RunResult(event=event.name, action=event.action, dry_run=config.dry_run)
    issue = event.issue

    if event.name == ISSUES_EVENT and issue is not None:
        _handle_issues_event(tracker, config, event, issue, result)
    elif event.name == ISSUE_COMMENT_EVENT and issue is not None:
        labels = issue.labels.non_summary_labels()
        if labels:
            update_summary_issues(tracker, config, labels, result)
    else:
        logger.log_operation("nothing_to_update", event=event.name)
    return result


__all__ = ["RunResult", "handle_event", "update_summary_issue", "update_summary_issues"]
