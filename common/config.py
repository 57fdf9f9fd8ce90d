"""Configuration for the analytics CLI.

Loads from YAML config file with environment variable overrides.
Pattern: CONFIG__{SECTION}__{KEY} overrides nested YAML keys.
Example: CONFIG__OUTPUT__LOCALE=en-US

Dedicated env vars (also read from a local .env file):
  GH_REPO_OWNER, GH_REPO_NAME, GH_AUTH_TOKEN,
  ANALYTICS_DATA_DIR, ANALYTICS_LOCALE
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from common.errors import ConfigError

# Division slash keeps "owner/repo" a single directory level
REPO_SEPARATOR = "∕"


# --- GitHub ---


class GitHubConfig(BaseModel):
    api_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"
    owner: str = ""  # from env: GH_REPO_OWNER
    repo: str = ""  # from env: GH_REPO_NAME
    token: str = ""  # from env: GH_AUTH_TOKEN
    per_page: int = Field(default=100, ge=1, le=100)
    timeout: float = 30.0


# --- Output ---


class OutputConfig(BaseModel):
    locale: str = "de-DE"
    summary_delimiter: str = ";"
    failures_delimiter: str = ";"


class AnalyticsConfig(BaseModel):
    github: GitHubConfig = GitHubConfig()
    output: OutputConfig = OutputConfig()
    data_dir: str = "data"

    @property
    def repo_dir_name(self) -> str:
        return f"{self.github.owner}/{self.github.repo}".replace("/", REPO_SEPARATOR)

    @property
    def repo_path(self) -> Path:
        return Path(self.data_dir) / self.repo_dir_name

    def require(self) -> "AnalyticsConfig":
        """Fail fast when the repository or token is not configured."""
        missing = [
            env
            for env, value in (
                ("GH_REPO_OWNER", self.github.owner),
                ("GH_REPO_NAME", self.github.repo),
                ("GH_AUTH_TOKEN", self.github.token),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Env {', '.join(missing)} is required")
        return self


def _apply_env_overrides(config_dict: dict, prefix: str = "CONFIG") -> dict:
    """Apply environment variable overrides to config dict.

    Pattern: CONFIG__SECTION__KEY=value maps to config[section][key] = value
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        parts = key[len(prefix) + 2 :].lower().split("__")
        target = config_dict
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    return config_dict


def load_config(
    config_path: Optional[str] = None,
    env_file: Optional[str] = ".env",
) -> AnalyticsConfig:
    """Load configuration from YAML file with env overrides.

    Priority: dedicated env vars > CONFIG__ overrides > YAML file > defaults
    """
    if env_file:
        load_dotenv(env_file, override=False)

    config_dict = {}

    # 1. Load YAML if exists
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH", "config/analytics.yml")
    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

    # 2. Apply env overrides
    config_dict = _apply_env_overrides(config_dict)

    # 3. Dedicated env vars
    github = config_dict.setdefault("github", {})
    for key, env in (("owner", "GH_REPO_OWNER"), ("repo", "GH_REPO_NAME"), ("token", "GH_AUTH_TOKEN")):
        if os.getenv(env):
            github[key] = os.environ[env]

    if os.getenv("ANALYTICS_DATA_DIR"):
        config_dict["data_dir"] = os.environ["ANALYTICS_DATA_DIR"]
    if os.getenv("ANALYTICS_LOCALE"):
        config_dict.setdefault("output", {})["locale"] = os.environ["ANALYTICS_LOCALE"]

    return AnalyticsConfig(**config_dict)
