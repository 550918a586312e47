from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from summary_issues.models import Comment
from summary_issues.selection import normalize_headings, select_comment

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _comments(*bodies: str) -> list[Comment]:
    return [
        Comment(author="dev", body=body, updated_at=T0 + timedelta(hours=i))
        for i, body in enumerate(bodies)
    ]


def test_newest_matching_comment_wins_over_newer_unrelated_comment():
    comments = _comments("a", "MATCH-b", "c")
    selected = select_comment(comments, re.compile("MATCH"))
    assert selected is comments[1]


def test_without_pattern_newest_comment_is_selected():
    comments = _comments("a", "b", "c")
    assert select_comment(comments) is comments[2]


def test_no_comments_returns_none():
    assert select_comment([], re.compile("x")) is None
    assert select_comment([]) is None


def test_no_matching_comment_returns_none():
    assert select_comment(_comments("a", "b"), re.compile("^status:")) is None


def test_pattern_is_searched_not_anchored():
    comments = _comments("weekly status: green")
    assert select_comment(comments, re.compile("status:")) is comments[0]


def test_normalize_headings_demotes_h1_and_h2():
    assert normalize_headings("# Title\ntext\n## Sub") == "### Title\ntext\n### Sub"


def test_normalize_headings_leaves_deeper_headings_and_text():
    text = "### Keep\n#### Deep\nplain # not a heading"
    assert normalize_headings(text) == text


def test_normalize_headings_is_per_line():
    assert normalize_headings("# A\n# B\n") == "### A\n### B\n"
