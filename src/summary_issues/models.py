from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

SUMMARY_LABEL = "summary"

_EPOCH = datetime(1, 1, 1, tzinfo=timezone.utc)


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_login(value: Any) -> str:
    if isinstance(value, Mapping):
        return _as_str(value.get("login"))
    return ""


def _quote(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_timestamp(value: Any) -> datetime:
    """Parse a GitHub ISO-8601 timestamp; missing or malformed values decode to year 1 UTC."""
    if not isinstance(value, str) or not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Label:
    name: str

    @classmethod
    def from_payload(cls, payload: Any) -> Label:
        if isinstance(payload, Mapping):
            return cls(name=_as_str(payload.get("name")))
        return cls(name="")


@dataclass(frozen=True)
class LabelSet:
    """Ordered labels attached to an issue.

    Order is preserved but carries no meaning; duplicates are tolerated.
    """

    labels: tuple[Label, ...] = ()

    @classmethod
    def of(cls, *names: str) -> LabelSet:
        return cls(tuple(Label(name) for name in names))

    @classmethod
    def from_payload(cls, payload: Any) -> LabelSet:
        if not isinstance(payload, list):
            return cls()
        return cls(tuple(Label.from_payload(entry) for entry in payload))

    def __iter__(self) -> Iterator[Label]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)

    def names(self) -> list[str]:
        return [label.name for label in self.labels]

    def contains(self, name: str) -> bool:
        return any(label.name == name for label in self.labels)

    def non_summary_labels(self) -> LabelSet:
        return LabelSet(tuple(label for label in self.labels if label.name != SUMMARY_LABEL))

    def query_filter(self) -> str:
        names = dict.fromkeys(label.name for label in self.non_summary_labels())
        quoted = [_quote(name) for name in names]
        if not quoted:
            return ""
        return "label:" + ",".join(quoted)


@dataclass(frozen=True)
class Comment:
    author: str
    body: str
    updated_at: datetime

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Comment:
        # GraphQL nodes use "author"/"updatedAt", webhook comments "user"/"updated_at"
        author = _as_login(payload.get("author")) or _as_login(payload.get("user"))
        updated = payload.get("updatedAt", payload.get("updated_at"))
        return cls(
            author=author,
            body=_as_str(payload.get("body")),
            updated_at=parse_timestamp(updated),
        )


@dataclass(frozen=True)
class Issue:
    """Canonical issue record shared by webhook payloads and search results."""

    id: str
    title: str
    labels: LabelSet = field(default_factory=LabelSet)
    url: str = ""
    body: str = ""
    author: str = ""
    comments: tuple[Comment, ...] = ()

    @property
    def is_summary(self) -> bool:
        return self.labels.contains(SUMMARY_LABEL)

    @classmethod
    def from_webhook(cls, payload: Mapping[str, Any]) -> Issue:
        return cls(
            id=_as_str(payload.get("node_id")),
            title=_as_str(payload.get("title")),
            labels=LabelSet.from_payload(payload.get("labels")),
            url=_as_str(payload.get("html_url")),
            body=_as_str(payload.get("body")),
            author=_as_login(payload.get("user")),
        )

    @classmethod
    def from_search_node(cls, node: Mapping[str, Any]) -> Issue:
        labels_obj = node.get("labels")
        label_nodes = labels_obj.get("nodes") if isinstance(labels_obj, Mapping) else None
        comments_obj = node.get("comments")
        comment_nodes = comments_obj.get("nodes") if isinstance(comments_obj, Mapping) else None
        comments: list[Comment] = []
        if isinstance(comment_nodes, list):
            for entry in comment_nodes:
                if isinstance(entry, Mapping):
                    comments.append(Comment.from_payload(entry))
        return cls(
            id=_as_str(node.get("id")),
            title=_as_str(node.get("title")),
            labels=LabelSet.from_payload(label_nodes),
            url=_as_str(node.get("url")),
            body=_as_str(node.get("body")),
            author=_as_login(node.get("author")),
            comments=tuple(comments),
        )


def issues_from_search_nodes(nodes: Iterable[Any]) -> list[Issue]:
    # Non-issue search hits (pull requests) come back as empty objects.
    return [
        Issue.from_search_node(node)
        for node in nodes
        if isinstance(node, Mapping) and node.get("id")
    ]


__all__ = [
    "SUMMARY_LABEL",
    "Comment",
    "Issue",
    "Label",
    "LabelSet",
    "issues_from_search_nodes",
    "parse_timestamp",
]
