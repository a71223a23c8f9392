"""Configuration system for gitlab-util."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, ClassVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .orchestrator import FailurePolicy

logger = logging.getLogger(__name__)

DEFAULT_GITLAB_URL = "https://gitlab.com"


class GitLabConfig(BaseModel):
    """Connection and behaviour settings."""

    url: str = DEFAULT_GITLAB_URL
    token: str | None = Field(default=None, repr=False)
    timeout: float = Field(default=30.0, gt=0)
    on_error: FailurePolicy = FailurePolicy.ABORT

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"GitLab URL must start with http:// or https://, got '{v}'")
        return v.rstrip("/")

    @field_validator("on_error", mode="before")
    @classmethod
    def validate_on_error(cls, v: Any) -> Any:
        """Accept policy names in any case."""
        if isinstance(v, str):
            return v.lower()
        return v

    def require_token(self) -> str:
        """Return the token or raise if none is configured."""
        if not self.token:
            raise ConfigurationError(
                "No GitLab token configured. Set GITLAB_PRIVATE_TOKEN or add 'token' to the config file"
            )
        return self.token


class ConfigLoader:
    """Loads gitlab-util configuration from files and the environment."""

    DEFAULT_CONFIG_FILES: ClassVar[list[str]] = [
        ".gitlab-util.yml",
        ".gitlab-util.yaml",
        ".gitlab-util.json",
        "pyproject.toml",  # [tool.gitlab-util] section
    ]

    ENV_VARS: ClassVar[dict[str, tuple[str, ...]]] = {
        "url": ("GITLAB_URL",),
        "token": ("GITLAB_PRIVATE_TOKEN", "GITLAB_TOKEN"),
        "timeout": ("GITLAB_TIMEOUT",),
    }

    def __init__(self, load_env_file: bool = True) -> None:
        self.load_env_file = load_env_file
        self.config_path: Path | None = None

    def load_config(self, config_path: str | Path | None = None) -> GitLabConfig:
        """
        Load configuration from file and environment.

        Environment variables take precedence over file values.

        Args:
            config_path: Explicit path to config file, or None to auto-discover

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If the file is missing, unreadable, or has invalid values
        """
        if self.load_env_file:
            load_dotenv()

        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            data = self._load_from_file(config_path)
            self.config_path = config_path
        else:
            data = self._auto_discover_config()

        data.update(self._load_from_env())

        try:
            config = GitLabConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.debug("Loaded configuration: %r", config)
        return config

    def _auto_discover_config(self) -> dict[str, Any]:
        """Auto-discover configuration file in current directory."""
        current_dir = Path.cwd()

        for config_file in self.DEFAULT_CONFIG_FILES:
            config_path = current_dir / config_file
            if config_path.exists():
                data = self._load_from_file(config_path)
                # pyproject.toml without our section does not count as a config file
                if data or config_file != "pyproject.toml":
                    logger.info("Found configuration file: %s", config_path)
                    self.config_path = config_path
                    return data

        logger.info("No configuration file found, using defaults")
        return {}

    def _load_from_file(self, config_path: Path) -> dict[str, Any]:
        """Load raw configuration values from a specific file."""
        try:
            if config_path.name == "pyproject.toml":
                with config_path.open("rb") as toml_file:
                    data = tomllib.load(toml_file).get("tool", {}).get("gitlab-util", {})
            elif config_path.suffix in [".yml", ".yaml"]:
                with config_path.open(encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            elif config_path.suffix == ".json":
                with config_path.open(encoding="utf-8") as f:
                    data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config file format: {config_path.suffix}")
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error("Failed to load config from %s: %s", config_path, e)
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        return dict(data)

    def _load_from_env(self) -> dict[str, Any]:
        """Collect settings from environment variables."""
        values: dict[str, Any] = {}
        for key, names in self.ENV_VARS.items():
            for name in names:
                value = os.environ.get(name)
                if value:
                    values[key] = value
                    break
        return values


def create_default_config() -> str:
    """Create a default configuration file content."""
    header = (
        "# gitlab-util configuration\n"
        "# The token is read from GITLAB_PRIVATE_TOKEN; avoid committing it here.\n"
    )
    config = {
        "url": DEFAULT_GITLAB_URL,
        "timeout": 30.0,
        "on_error": FailurePolicy.ABORT.value,
    }
    return header + yaml.dump(config, default_flow_style=False, indent=2, sort_keys=False)
