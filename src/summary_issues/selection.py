"""Comment selection and heading normalization for summary sections."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .models import Comment

_H1 = re.compile(r"^#([^#\n]*)$", re.MULTILINE)
_H2 = re.compile(r"^##([^#\n]*)$", re.MULTILINE)


def select_comment(
    comments: Sequence[Comment], pattern: re.Pattern[str] | None = None
) -> Comment | None:
    """Return the newest comment whose body matches ``pattern``.

    ``comments`` must be ordered oldest first. A missing or empty pattern
    matches every comment, so the newest comment wins.
    """
    for comment in reversed(comments):
        if pattern is None or pattern.search(comment.body):
            return comment
    return None


def normalize_headings(text: str) -> str:
    """Demote h1 and h2 lines to h3 so they nest under the per-issue heading."""
    text = _H2.sub(r"###\1", text)
    return _H1.sub(r"###\1", text)


__all__ = ["normalize_headings", "select_comment"]
