"""Bridge to the EventKitCLI helper binary and the macOS automation surface."""

from apple_events.eventkit.binary import BinaryLocation, BinaryResolver, resolve_binary
from apple_events.eventkit.executor import CliExecutor, execute_cli
from apple_events.eventkit.permissions import (
    PermissionPrompter,
    has_been_prompted,
    reset_prompted_domains,
    trigger_permission_prompt,
)

__all__ = [
    "BinaryLocation",
    "BinaryResolver",
    "resolve_binary",
    "CliExecutor",
    "execute_cli",
    "PermissionPrompter",
    "has_been_prompted",
    "reset_prompted_domains",
    "trigger_permission_prompt",
]
