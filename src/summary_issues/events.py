"""Decoding of GitHub Actions webhook event payloads."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .models import Comment, Issue, Label

ISSUES_EVENT = "issues"
ISSUE_COMMENT_EVENT = "issue_comment"
SCHEDULE_EVENT = "schedule"

SUMMARY_REFRESH_ACTIONS = frozenset({"edited", "labeled", "unlabeled", "opened"})
LABEL_ACTIONS = frozenset({"labeled", "unlabeled"})


@dataclass(frozen=True)
class Event:
    """The subset of a webhook payload a run acts on."""

    name: str
    action: str = ""
    issue: Issue | None = None
    label: Label | None = None
    comment: Comment | None = None

    @classmethod
    def from_payload(cls, name: str, payload: Mapping[str, Any]) -> Event:
        issue_obj = payload.get("issue")
        label_obj = payload.get("label")
        comment_obj = payload.get("comment")
        action = payload.get("action")
        return cls(
            name=name,
            action=action if isinstance(action, str) else "",
            issue=Issue.from_webhook(issue_obj) if isinstance(issue_obj, Mapping) else None,
            label=Label.from_payload(label_obj) if isinstance(label_obj, Mapping) else None,
            comment=Comment.from_payload(comment_obj) if isinstance(comment_obj, Mapping) else None,
        )


def parse_event(name: str, data: str) -> Event:
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"unable to decode GitHub event: {exc}\n{data}") from exc
    if not isinstance(payload, Mapping):
        raise ConfigError(f"unable to decode GitHub event: expected object\n{data}")
    return Event.from_payload(name, payload)


def load_event(name: str, path: str | Path) -> Event:
    p = Path(path)
    try:
        data = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"unable to read GitHub event json {p}: {exc}") from exc
    return parse_event(name, data)


__all__ = [
    "Event",
    "ISSUES_EVENT",
    "ISSUE_COMMENT_EVENT",
    "LABEL_ACTIONS",
    "SCHEDULE_EVENT",
    "SUMMARY_REFRESH_ACTIONS",
    "load_event",
    "parse_event",
]
