"""Configuration loading for Hookcord.

Follows an env → config file chain: environment variables (and a local
.env file) provide defaults, ~/.hookcord/config.yml overrides them.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Mapping

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists
load_dotenv()

WEBHOOK_ENV_PREFIX = "DISCORD_WEBHOOK_"
"""Prefix of environment variables holding per-repository Discord webhook URLs."""


def get_config_dir() -> Path:
    """Return the configuration directory, honouring HOOKCORD_CONFIG_DIR."""
    override = os.getenv("HOOKCORD_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".hookcord"


def get_config_file() -> Path:
    return get_config_dir() / "config.yml"


class ServerConfig(BaseSettings):
    """Server configuration."""

    port: int = Field(default=3000, description="Server port")
    workers: int = Field(default=1, description="Number of workers")
    host: str = Field(default="0.0.0.0", description="Server host")


class RateLimitConfig(BaseSettings):
    """Rate limit configuration.

    Reads RATE_LIMIT_WINDOW_MS and RATE_LIMIT_MAX from the environment.
    """

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_", extra="ignore")

    window_ms: int = Field(default=900_000, gt=0, description="Window length in milliseconds")
    max: int = Field(default=100, gt=0, description="Requests allowed per window and client")


class DiscordConfig(BaseSettings):
    """Outbound Discord delivery configuration."""

    model_config = SettingsConfigDict(env_prefix="DISCORD_", extra="ignore")

    timeout: float = Field(default=10.0, description="HTTP timeout in seconds")
    username: str | None = Field(default=None, description="Override the webhook's display name")


class Settings(BaseSettings):
    """Main settings class combining all configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOOKCORD_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerConfig = Field(default_factory=ServerConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    discord: DiscordConfig = Field(default_factory=DiscordConfig)

    # Repository name -> Discord webhook URL (empty string = not configured)
    channels: dict[str, str] = Field(default_factory=dict)

    @field_validator("channels")
    @classmethod
    def lowercase_channel_names(cls, channels: dict[str, str]) -> dict[str, str]:
        # GitHub repository names are case-insensitive
        return {repo.lower(): url for repo, url in channels.items()}

    def webhook_url_for(self, repo_name: str | None) -> str | None:
        """Get the Discord webhook URL for a repository.

        Matching ignores case. Returns None when the repository is unknown or
        its URL is empty.
        """
        if not repo_name:
            return None
        return self.channels.get(repo_name.lower()) or None


def load_config_file() -> dict:
    """Load configuration from YAML file."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}

    with open(config_file) as f:
        return yaml.safe_load(f) or {}


def load_channels_from_env(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect DISCORD_WEBHOOK_<REPO> variables into a channel map.

    The repository name is the suffix lowercased with underscores turned
    into hyphens, so DISCORD_WEBHOOK_NG_CORE maps repository "ng-core".
    """
    channels = {}
    for key, value in environ.items():
        if not key.startswith(WEBHOOK_ENV_PREFIX):
            continue
        suffix = key[len(WEBHOOK_ENV_PREFIX):]
        if not suffix:
            continue
        repo_name = suffix.lower().replace("_", "-")
        channels[repo_name] = value.strip()
    return channels


def ensure_config_dir() -> None:
    """Ensure config directory exists."""
    get_config_dir().mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Loads from environment variables first, then config file.
    """
    config_data = load_config_file()

    # Build nested configs from file
    server_config = ServerConfig(**config_data.get("server", {}))
    rate_limit_config = RateLimitConfig(**config_data.get("rate_limit", {}))
    discord_config = DiscordConfig(**config_data.get("discord", {}))

    # Environment channels first so the config file wins on conflicts
    channels = load_channels_from_env(os.environ)
    for repo_name, url in (config_data.get("channels") or {}).items():
        channels[str(repo_name).lower()] = str(url or "")

    return Settings(
        server=server_config,
        rate_limit=rate_limit_config,
        discord=discord_config,
        channels=channels,
    )
