"""summary-issues CLI.

Runs one pass for the GitHub Actions event described by ``GITHUB_EVENT_NAME``
and ``GITHUB_EVENT_PATH``: regenerate every summary issue the event affects.

Exit status is 0 on success (including runs with nothing to update) and 1
when configuration, transport, or API errors abort the run.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from summary_issues.config import CONFIG_DEFAULT, SummaryConfig, load_config
from summary_issues.errors import SummaryIssuesError, classify_error, redact
from summary_issues.events import load_event
from summary_issues.github_graphql import GitHubGraphQLClient
from summary_issues.logging import configure_logging, get_logger
from summary_issues.matcher import Tracker
from summary_issues.orchestrator import handle_event

_MAX_HELP_WIDTH = 100


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="summary-issues",
        description="Regenerate summary issues from the newest comments on issues sharing their labels",
        formatter_class=_HelpFormatter,
    )
    p.add_argument(
        "--config",
        help=f"Optional YAML configuration file (default: {CONFIG_DEFAULT} when present)",
    )
    p.add_argument(
        "--summary-comment-regex",
        "-summaryCommentRegex",
        "--summaryCommentRegex",
        dest="summary_comment_regex",
        default=None,
        help=(
            "The newest comment on an issue that matches this regular expression is used "
            "in the summary. If not provided, the most recent comment is always used."
        ),
    )
    p.add_argument("--repo", help="Override repository (owner/repo; env: GITHUB_REPOSITORY)")
    p.add_argument("--event-name", help="Override event name (env: GITHUB_EVENT_NAME)")
    p.add_argument("--event-path", help="Override event payload path (env: GITHUB_EVENT_PATH)")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Render summary bodies and log them instead of updating issues",
    )
    p.add_argument("--json-logs", action="store_true", help="Emit structured JSON log lines")
    p.add_argument("--log-level", help="Logging level (default: INFO)")
    p.add_argument("--summary-json", help="Write the run result (updated issue ids) to this file")
    return p


def _build_tracker(cfg: SummaryConfig) -> Tracker:
    return GitHubGraphQLClient.from_config(cfg)


def _write_summary_json(path: str, payload: dict[str, Any]) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def _run(args: argparse.Namespace) -> int:
    cfg = load_config(
        config_path=args.config,
        comment_regex=args.summary_comment_regex,
        repository=args.repo,
        event_name=args.event_name,
        event_path=args.event_path,
        dry_run=True if args.dry_run else None,
    )
    logger = configure_logging(
        json_logging=args.json_logs or cfg.logging_json_enabled,
        level=args.log_level or cfg.logging_level,
    )
    event = load_event(cfg.event_name, cfg.event_path)
    tracker = _build_tracker(cfg)
    with logger.timed_operation("run", event=event.name):
        result = handle_event(tracker, cfg, event)
    if args.summary_json:
        _write_summary_json(args.summary_json, result.to_dict())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return _run(args)
    except SummaryIssuesError as exc:
        info = classify_error(exc)
        get_logger().log_error("summary-issues run failed", error=info.message, category=info.category)
        print(redact(str(exc)), file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
