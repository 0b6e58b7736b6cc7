"""Runtime configuration read from the process environment."""

import os
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
from pydantic import BaseModel, Field

CLI_NAME = "EventKitCLI"
BINARY_RELATIVE_PATH = Path("bin") / CLI_NAME
PROJECT_MANIFEST = "pyproject.toml"
PROJECT_ROOT_MAX_DEPTH = 10

ENV_CLI_PATH = "EVENTKIT_CLI_PATH"
ENV_TRUSTED_DIRS = "EVENTKIT_CLI_TRUSTED_DIRS"


class Settings(BaseModel):
    """Settings for the server and the EventKit bridge."""

    cli_path: Annotated[str | None, Field(
        default=None, description="Alternate EventKitCLI path, validated like the default")]
    trusted_dirs: Annotated[list[str], Field(
        default_factory=list, description="Extra roots an override binary may live under")]
    environment: Annotated[str, Field(default="production", description="Runtime environment name")]
    debug: Annotated[bool, Field(default=False, description="Show internal error detail to callers")]
    log_level: Annotated[str, Field(default="INFO", description="structlog filtering level")]
    log_file: Annotated[str | None, Field(default=None, description="Optional plain-text log file")]

    @property
    def is_development(self) -> bool:
        return self.environment == "development" or self.debug

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        trusted = os.getenv(ENV_TRUSTED_DIRS, "")
        return cls(
            cli_path=os.getenv(ENV_CLI_PATH) or None,
            trusted_dirs=[p for p in trusted.split(os.pathsep) if p],
            environment=os.getenv("APPLE_EVENTS_ENV", "production"),
            debug=bool(os.getenv("DEBUG")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
        )


def load_settings(dotenv_path: str | Path | None = None) -> Settings:
    """Load a .env file (if any) and return fresh settings."""
    load_dotenv(dotenv_path)
    return Settings.from_env()


def get_settings() -> Settings:
    """Settings for the environment as it is right now."""
    return Settings.from_env()
