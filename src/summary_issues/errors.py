"""Error taxonomy & redaction.

Every failure in a run surfaces as one of three kinds:

- ``ConfigError``: the environment, event payload, or comment pattern is
  unusable. Raised before any API call.
- ``TransportError``: the GraphQL request could not be completed (network
  failure, non-200 status, undecodable body).
- ``QueryError``: the API answered but reported a structured error.

None of them are retried; they propagate to the CLI which exits non-zero.

Public API:
- classify_error(exc) -> ErrorInfo
- redact(text) -> str
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ghp_[A-Za-z0-9]{20,40}"),  # GitHub classic tokens
    re.compile(r"ghs_[A-Za-z0-9]{20,40}"),  # Actions installation tokens
    re.compile(r"github_pat_\w{20,}"),  # GitHub fine-grained tokens
    re.compile(r"(?i)(authorization:\s*(?:bearer|token)\s+)\S+"),
]

_REDACTION_PLACEHOLDER = "<redacted>"


class SummaryIssuesError(RuntimeError):
    """Base class for all errors raised by summary-issues."""


class ConfigError(SummaryIssuesError):
    pass


class TransportError(SummaryIssuesError):
    """Raised when a GraphQL request fails below the API layer."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        request_dump: str | None = None,
        response_dump: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.request_dump = request_dump
        self.response_dump = response_dump


class QueryError(SummaryIssuesError):
    """Raised when the GraphQL response carries an ``errors`` array."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        request_dump: str | None = None,
    ):
        super().__init__(message)
        self.errors = errors or []
        self.request_dump = request_dump


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    transient: bool = False
    details: dict[str, Any] | None = None


def redact(text: str) -> str:
    """Redact tokens and bearer credentials in arbitrary text."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        if pat.groups:
            redacted = pat.sub(lambda m: m.group(1) + _REDACTION_PLACEHOLDER, redacted)
        else:
            redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception for log output.

    - ConfigError -> 'config'
    - TransportError -> 'transport' (rate limits -> 'github.rate_limit')
    - QueryError -> 'api'
    - Fallback -> 'generic'
    """
    msg = str(exc) if exc else ""
    low = msg.lower()
    name = exc.__class__.__name__

    if isinstance(exc, ConfigError):
        return ErrorInfo("config", redact(msg), name)
    if isinstance(exc, TransportError):
        details = {"status": exc.status} if exc.status is not None else None
        if "rate limit" in low or "secondary rate" in low:
            return ErrorInfo("github.rate_limit", redact(msg), name, transient=True, details=details)
        return ErrorInfo(
            "transport",
            redact(msg),
            name,
            transient=exc.status is None or exc.status >= 500,  # noqa: PLR2004
            details=details,
        )
    if isinstance(exc, QueryError):
        return ErrorInfo("api", redact(msg), name, details={"errors": exc.errors} if exc.errors else None)
    return ErrorInfo("generic", redact(msg), name)


__all__ = [
    "ConfigError",
    "ErrorInfo",
    "QueryError",
    "SummaryIssuesError",
    "TransportError",
    "classify_error",
    "redact",
]
