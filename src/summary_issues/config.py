from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

from .env_auth import EnvAuthConfig, create_env_auth_manager
from .errors import ConfigError

CONFIG_DEFAULT = "summary_issues.config.yaml"
DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_SERVER_URL = "https://github.com"


@dataclass
class SummaryConfig:
    owner: str
    repository: str
    event_name: str
    event_path: Path
    comment_regex: str
    comment_pattern: re.Pattern[str] | None
    graphql_url: str
    server_url: str
    token: str | None
    dry_run: bool
    # Logging configuration
    logging_json_enabled: bool
    logging_level: str


def parse_owner(repository: str) -> str:
    """Return the owner part of an ``owner/name`` repository slug."""
    index = repository.find("/")
    if index < 1:
        raise ConfigError(f"invalid value for GITHUB_REPOSITORY env var: {repository!r}")
    return repository[:index]


def compile_comment_pattern(expression: str) -> re.Pattern[str] | None:
    if not expression:
        return None
    try:
        return re.compile(expression)
    except re.error as exc:
        raise ConfigError(f"invalid summary comment regex {expression!r}: {exc}") from exc


def _load_file(path: str | Path | None) -> dict[str, Any]:
    if path is None:
        default = Path(CONFIG_DEFAULT)
        if not default.exists():
            return {}
        p = default
    else:
        p = Path(path)
        if not p.exists():
            raise ConfigError(f"Configuration file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"unable to read configuration file {p}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"unable to parse configuration file {p}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"configuration file {p} must contain a mapping")
    return cast(dict[str, Any], raw)


def load_config(
    env: Mapping[str, str] | None = None,
    *,
    config_path: str | Path | None = None,
    comment_regex: str | None = None,
    repository: str | None = None,
    event_name: str | None = None,
    event_path: str | None = None,
    dry_run: bool | None = None,
) -> SummaryConfig:
    """Build the run configuration from the Actions environment.

    Values come from the environment, then an optional YAML file, then the
    explicit keyword overrides (typically CLI flags).
    """
    env = os.environ if env is None else env
    raw = _load_file(config_path)
    behavior = cast(dict[str, Any], raw.get("behavior", {}) or {})
    logging_config = cast(dict[str, Any], raw.get("logging", {}) or {})
    env_auth = cast(dict[str, Any], raw.get("environment", {}) or {})

    repo = repository or env.get("GITHUB_REPOSITORY", "")
    owner = parse_owner(repo)

    path = event_path or env.get("GITHUB_EVENT_PATH", "")
    if not path:
        raise ConfigError("env var GITHUB_EVENT_PATH not set")
    name = event_name or env.get("GITHUB_EVENT_NAME", "")
    if not name:
        raise ConfigError("env var GITHUB_EVENT_NAME not set")

    expression = comment_regex if comment_regex is not None else str(raw.get("comment_regex") or "")

    auth_manager = create_env_auth_manager(
        EnvAuthConfig(
            load_dotenv=bool(env_auth.get("load_dotenv", False)),
            dotenv_path=env_auth.get("dotenv_path"),
        ),
        env=env,
    )

    return SummaryConfig(
        owner=owner,
        repository=repo,
        event_name=name,
        event_path=Path(path),
        comment_regex=expression,
        comment_pattern=compile_comment_pattern(expression),
        graphql_url=env.get("GITHUB_GRAPHQL_URL") or DEFAULT_GRAPHQL_URL,
        server_url=(env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
        token=auth_manager.get_github_token(),
        dry_run=bool(behavior.get("dry_run", False)) if dry_run is None else dry_run,
        logging_json_enabled=bool(logging_config.get("json_enabled", False)),
        logging_level=str(logging_config.get("level", "INFO")),
    )


__all__ = [
    "CONFIG_DEFAULT",
    "DEFAULT_GRAPHQL_URL",
    "DEFAULT_SERVER_URL",
    "SummaryConfig",
    "compile_comment_pattern",
    "load_config",
    "parse_owner",
]
