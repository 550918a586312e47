"""Pytest configuration for summary-issues tests.

Ensures the in-repo `src` directory is on `sys.path` so the package can be
imported without an editable install (`pip install -e .`).
"""

from __future__ import annotations

import re
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from summary_issues.config import SummaryConfig  # noqa: E402
from summary_issues.models import Issue  # noqa: E402


class FakeTracker:
    """In-memory tracker recording every search and update."""

    def __init__(
        self,
        summary_results: dict[str, list[Issue]] | None = None,
        source_results: dict[str, list[Issue]] | None = None,
    ) -> None:
        self.summary_results = summary_results or {}
        self.source_results = source_results or {}
        self.calls: list[tuple[str, str]] = []
        self.updates: list[tuple[str, str]] = []

    def search_summary_issues(self, query: str) -> list[Issue]:
        self.calls.append(("summary", query))
        return list(self.summary_results.get(query, []))

    def search_source_issues(self, query: str) -> list[Issue]:
        self.calls.append(("source", query))
        return list(self.source_results.get(query, []))

    def update_issue_body(self, issue_id: str, body: str) -> None:
        self.updates.append((issue_id, body))


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., SummaryConfig]:
    def _make(**overrides: Any) -> SummaryConfig:
        regex = overrides.pop("comment_regex", "")
        values: dict[str, Any] = {
            "owner": "acme",
            "repository": "acme/widgets",
            "event_name": "issues",
            "event_path": tmp_path / "event.json",
            "comment_regex": regex,
            "comment_pattern": re.compile(regex) if regex else None,
            "graphql_url": "https://api.github.com/graphql",
            "server_url": "https://github.com",
            "token": "tkn",
            "dry_run": False,
            "logging_json_enabled": False,
            "logging_level": "INFO",
        }
        values.update(overrides)
        return SummaryConfig(**values)

    return _make


@pytest.fixture
def tracker_factory() -> Callable[..., FakeTracker]:
    return FakeTracker
