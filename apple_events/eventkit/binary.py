"""Secure resolution of the EventKitCLI helper binary."""

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from apple_events.config import BINARY_RELATIVE_PATH, Settings, get_settings
from apple_events.errors import ConfigurationError
from apple_events.eventkit.project import find_project_root
from apple_events.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BinaryLocation:
    """Outcome of a resolution. `path` is None when nothing passed validation."""

    path: str | None
    reason: str | None = None
    source: str = "default"


@dataclass(frozen=True)
class EnvironmentBinaryConfig:
    """Binary override settings taken from the environment."""

    cli_path: str | None = None
    trusted_dirs: list[str] = field(default_factory=list)


def get_environment_binary_config(settings: Settings | None = None) -> EnvironmentBinaryConfig:
    """Read the binary override and its trusted roots."""
    settings = settings or get_settings()
    return EnvironmentBinaryConfig(
        cli_path=settings.cli_path,
        trusted_dirs=list(settings.trusted_dirs),
    )


def validate_binary_path(candidate: str | Path, trusted_roots: Iterable[Path]) -> str | None:
    """
    Check a candidate helper path.

    Returns None when the path exists, is a regular executable file and its
    symlink-free real path lies under one of `trusted_roots`; otherwise a
    human-readable rejection reason. Never raises.
    """
    path = Path(candidate).expanduser()
    try:
        return _check_binary_path(path, trusted_roots)
    except OSError as e:
        return f"{path} cannot be checked: {e}"


def _check_binary_path(path: Path, trusted_roots: Iterable[Path]) -> str | None:
    if not path.exists():
        return f"{path} does not exist"

    real = path.resolve()
    mode = real.stat().st_mode
    if not stat.S_ISREG(mode):
        return f"{path} is not a regular file"
    if not os.access(real, os.X_OK):
        return f"{path} is not executable"

    for root in trusted_roots:
        if real.is_relative_to(Path(root).expanduser().resolve()):
            return None
    return f"{path} resolves to {real}, outside the trusted locations"


class BinaryResolver:
    """Locates the helper for the current installation; read-only and idempotent."""

    def __init__(self, project_root: Path | None = None, settings: Settings | None = None):
        self._project_root = project_root
        self._settings = settings

    def resolve(self) -> BinaryLocation:
        """Resolve the helper path. Never raises."""
        try:
            root = (self._project_root or find_project_root()).resolve()
        except ConfigurationError as e:
            logger.error("binary_root_not_found", error=e.message)
            return BinaryLocation(path=None, reason=e.message)

        env_config = get_environment_binary_config(self._settings)
        rejections: list[str] = []

        if env_config.cli_path:
            trusted = [root, *(Path(d) for d in env_config.trusted_dirs)]
            reason = validate_binary_path(env_config.cli_path, trusted)
            if reason is None:
                resolved = str(Path(env_config.cli_path).expanduser().resolve())
                logger.debug("binary_resolved", path=resolved, source="environment")
                return BinaryLocation(path=resolved, source="environment")
            logger.warning("binary_validation_failed", source="environment", reason=reason)
            rejections.append(reason)

        default_path = root / BINARY_RELATIVE_PATH
        reason = validate_binary_path(default_path, [root])
        if reason is None:
            resolved = str(default_path.resolve())
            logger.debug("binary_resolved", path=resolved, source="default")
            return BinaryLocation(path=resolved)

        logger.warning("binary_validation_failed", source="default", reason=reason)
        rejections.append(reason)
        return BinaryLocation(path=None, reason="; ".join(rejections))


def resolve_binary() -> BinaryLocation:
    """Resolve the helper using the installation root and current environment."""
    return BinaryResolver().resolve()
