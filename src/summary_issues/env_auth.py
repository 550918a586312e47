"""Environment-based authentication for summary-issues.

The GitHub Actions runner exposes the workflow token as ``GITHUB_TOKEN``.
Local runs may instead rely on one of the common alternative variables or
on a ``.env`` file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .logging import get_logger

ALTERNATIVE_TOKEN_VARS = ("GH_TOKEN", "GITHUB_ACCESS_TOKEN", "GH_ACCESS_TOKEN", "GITHUB_PAT")
DOTENV_LOCATIONS = (".env", ".env.local")


@dataclass
class EnvAuthConfig:
    """Configuration for environment-based authentication."""

    load_dotenv: bool = False
    dotenv_path: str | None = None
    github_token_var: str = "GITHUB_TOKEN"


class EnvironmentAuthManager:
    """Resolves the GitHub token from an environment mapping and .env files."""

    def __init__(self, config: EnvAuthConfig, env: Mapping[str, str] | None = None):
        self.config = config
        self.logger = get_logger()
        self._env: dict[str, str] = dict(os.environ if env is None else env)
        self._dotenv_loaded = False

        if config.load_dotenv:
            self._load_dotenv()

    def _load_dotenv(self) -> None:
        """Merge .env values underneath the existing environment."""
        candidates = [self.config.dotenv_path] if self.config.dotenv_path else list(DOTENV_LOCATIONS)
        for location in candidates:
            if location is None:
                continue
            env_path = Path(location)
            if not env_path.exists():
                continue
            for key, value in dotenv_values(env_path).items():
                if value is not None and key not in self._env:
                    self._env[key] = value
            self._dotenv_loaded = True
            self.logger.debug(f"Loaded environment variables from {env_path}")
            break

    @property
    def dotenv_loaded(self) -> bool:
        return self._dotenv_loaded

    def get_github_token(self) -> str | None:
        """Get GitHub token from environment variables."""
        token = self._env.get(self.config.github_token_var)
        if token:
            self.logger.debug("Found GitHub token in environment variables")
            return token

        for alt_var in ALTERNATIVE_TOKEN_VARS:
            token = self._env.get(alt_var)
            if token:
                self.logger.debug(f"Found GitHub token in {alt_var}")
                return token

        return None


def create_env_auth_manager(
    config: EnvAuthConfig | None = None, env: Mapping[str, str] | None = None
) -> EnvironmentAuthManager:
    """Factory function to create environment authentication manager."""
    if config is None:
        config = EnvAuthConfig()
    return EnvironmentAuthManager(config, env=env)


__all__ = ["EnvAuthConfig", "EnvironmentAuthManager", "create_env_auth_manager"]
