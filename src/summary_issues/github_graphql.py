from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import requests

from .config import DEFAULT_GRAPHQL_URL, SummaryConfig
from .errors import ConfigError, QueryError, TransportError, redact
from .models import Issue, issues_from_search_nodes

USER_AGENT = "summary-issues/0.1.0"
HTTP_OK = 200
REQUEST_TIMEOUT = 30

SUMMARY_ISSUES_QUERY = """
query SummaryIssues ($query: String!) {
  search(type: ISSUE, first: 100, query: $query) {
    nodes {
      ... on Issue {
        id
        url
        title
        body
        author {
          login
        }
        labels(first: 100) {
          nodes {
            name
          }
        }
      }
    }
  }
}
"""

SOURCE_ISSUES_QUERY = """
query SearchIssues ($query: String!) {
  search(type: ISSUE, first: 100, query: $query) {
    nodes {
      ... on Issue {
        id
        url
        title
        body
        author {
          login
        }
        comments(last: 100) {
          nodes {
            author {
              login
            }
            body
            updatedAt
          }
        }
      }
    }
  }
}
"""

UPDATE_ISSUE_MUTATION = """
mutation UpdateIssue ($id: ID!, $body: String!) {
  updateIssue(input: {id: $id, body: $body}) {
    clientMutationId
  }
}
"""


def _dump_request(method: str, url: str, headers: dict[str, str], body: str) -> str:
    lines = [f"{method} {url}"]
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    return redact("\n".join(lines) + "\n\n" + body)


def _dump_response(response: requests.Response) -> str:
    reason = getattr(response, "reason", "") or ""
    lines = [f"HTTP {response.status_code} {reason}".rstrip()]
    headers = getattr(response, "headers", None) or {}
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    return redact("\n".join(lines) + "\n\n" + (response.text or ""))


@dataclass
class GitHubGraphQLClient:
    """Minimal GitHub GraphQL client: one bounded POST per call, no retries."""

    token: str | None
    graphql_url: str = DEFAULT_GRAPHQL_URL
    session: requests.Session | None = None
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = self.session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    @classmethod
    def from_config(cls, config: SummaryConfig, session: requests.Session | None = None) -> GitHubGraphQLClient:
        return cls(token=config.token, graphql_url=config.graphql_url, session=session)

    def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST a GraphQL document and return its ``data`` object."""
        if not self.token:
            raise ConfigError("empty GITHUB_TOKEN")
        payload = {"query": query, "variables": variables or {}}
        body = json.dumps(payload)
        headers = {**self._session.headers, "Authorization": f"bearer {self.token}"}
        request_dump = _dump_request("POST", self.graphql_url, headers, body)

        try:
            response = self._session.request(
                "POST",
                self.graphql_url,
                json=payload,
                headers=headers,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"GraphQL request to {self.graphql_url} failed: {exc}",
                request_dump=request_dump,
            ) from exc

        response_dump = _dump_response(response)
        if response.status_code != HTTP_OK:
            raise TransportError(
                f"non-200 response:\n{response_dump}\n\nrequest:\n{request_dump}",
                status=response.status_code,
                request_dump=request_dump,
                response_dump=response_dump,
            )
        try:
            decoded = response.json()
        except ValueError as exc:
            raise TransportError(
                f"error decoding json response:\n{response_dump}\n{exc}",
                status=response.status_code,
                request_dump=request_dump,
                response_dump=response_dump,
            ) from exc
        if not isinstance(decoded, dict):
            raise TransportError(
                f"unexpected json response:\n{response_dump}",
                status=response.status_code,
                request_dump=request_dump,
                response_dump=response_dump,
            )

        errors = decoded.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0] if isinstance(errors[0], dict) else {}
            message = str(first.get("message", errors[0]))
            raise QueryError(
                f"graphql error: {message}\nrequest:\n{request_dump}",
                errors=[e for e in errors if isinstance(e, dict)],
                request_dump=request_dump,
            )
        data = decoded.get("data")
        return data if isinstance(data, dict) else {}

    # ---- Tracker operations -------------------------------------------
    def _search(self, document: str, query: str) -> list[Issue]:
        data = self.graphql(document, {"query": query})
        search = data.get("search")
        nodes = search.get("nodes") if isinstance(search, dict) else None
        if not isinstance(nodes, list):
            return []
        return issues_from_search_nodes(nodes)

    def search_summary_issues(self, query: str) -> list[Issue]:
        """Search issues, returning them with labels but without comments."""
        return self._search(SUMMARY_ISSUES_QUERY, query)

    def search_source_issues(self, query: str) -> list[Issue]:
        """Search issues, returning them with their last 100 comments."""
        return self._search(SOURCE_ISSUES_QUERY, query)

    def update_issue_body(self, issue_id: str, body: str) -> None:
        self.graphql(UPDATE_ISSUE_MUTATION, {"id": issue_id, "body": body})


__all__ = [
    "GitHubGraphQLClient",
    "SOURCE_ISSUES_QUERY",
    "SUMMARY_ISSUES_QUERY",
    "UPDATE_ISSUE_MUTATION",
]
