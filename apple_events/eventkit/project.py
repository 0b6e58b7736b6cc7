"""Installation root discovery."""

from pathlib import Path

from apple_events.config import PROJECT_MANIFEST, PROJECT_ROOT_MAX_DEPTH
from apple_events.errors import ConfigurationError


def find_project_root(
    start: Path | None = None,
    max_depth: int = PROJECT_ROOT_MAX_DEPTH,
    manifest: str = PROJECT_MANIFEST,
) -> Path:
    """
    Walk upward from `start` to the first directory holding the manifest.

    Args:
        start: Directory to start from (defaults to this package's directory)
        max_depth: Number of parent directories to try after `start`
        manifest: File name marking the installation root

    Returns:
        The installation root

    Raises:
        ConfigurationError: If no manifest is found within `max_depth` levels
    """
    origin = (start or Path(__file__).parent).resolve()
    current = origin
    for _ in range(max_depth + 1):
        if (current / manifest).is_file():
            return current
        if current.parent == current:
            break
        current = current.parent

    raise ConfigurationError(
        f"Could not find {manifest} within {max_depth} levels of {origin}"
    )
