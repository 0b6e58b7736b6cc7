"""Routing of tool calls to action handlers."""

from collections.abc import Sequence
from typing import Any, Awaitable, Callable

from apple_events.observability.logging import get_logger
from apple_events.tools.base import ToolResponse
from apple_events.tools.calendar import (
    handle_create_calendar_event,
    handle_delete_calendar_event,
    handle_read_calendar_events,
    handle_read_calendars,
    handle_update_calendar_event,
)
from apple_events.tools.lists import (
    handle_create_reminder_list,
    handle_delete_reminder_list,
    handle_read_reminder_lists,
    handle_update_reminder_list,
)
from apple_events.tools.reminders import (
    handle_create_reminder,
    handle_delete_reminder,
    handle_read_reminders,
    handle_update_reminder,
)

logger = get_logger(__name__)

ActionHandler = Callable[[dict[str, Any]], Awaitable[ToolResponse]]

TOOL_ALIASES = {
    "reminders.tasks": "reminders_tasks",
    "reminders.lists": "reminders_lists",
    "calendar.events": "calendar_events",
    "calendar.calendars": "calendar_calendars",
}


class ToolRegistry:
    """Registry of tools, each a map from action name to handler."""

    def __init__(self):
        self._tools: dict[str, dict[str, ActionHandler]] = {}
        self._aliases: dict[str, str] = {}

    def register(self, name: str, actions: dict[str, ActionHandler]) -> None:
        """Register a tool. A `"*"` entry handles every call regardless of `action`."""
        self._tools[name] = actions

    def alias(self, alias: str, name: str) -> None:
        self._aliases[alias] = name

    def normalize(self, name: str) -> str:
        return self._aliases.get(name, name)

    def list_tools(self) -> Sequence[str]:
        return list(self._tools)

    async def execute(self, name: str, arguments: dict[str, Any] | None) -> ToolResponse:
        """Route a tool call to its handler."""
        tool_name = self.normalize(name)
        actions = self._tools.get(tool_name)
        if actions is None:
            return ToolResponse.error(f"Unknown tool: {name}")

        if "*" in actions:
            return await actions["*"](arguments or {})

        if not arguments:
            return ToolResponse.error("No arguments provided")

        action = arguments.get("action")
        handler = actions.get(str(action))
        if handler is None:
            return ToolResponse.error(f"Unknown action for {tool_name}: {action}")

        logger.debug("tool_call", tool=tool_name, action=action)
        return await handler(arguments)


def create_registry() -> ToolRegistry:
    """Registry with the reminders and calendar tools."""
    registry = ToolRegistry()
    registry.register("reminders_tasks", {
        "read": handle_read_reminders,
        "create": handle_create_reminder,
        "update": handle_update_reminder,
        "delete": handle_delete_reminder,
    })
    registry.register("reminders_lists", {
        "read": handle_read_reminder_lists,
        "create": handle_create_reminder_list,
        "update": handle_update_reminder_list,
        "delete": handle_delete_reminder_list,
    })
    registry.register("calendar_events", {
        "read": handle_read_calendar_events,
        "create": handle_create_calendar_event,
        "update": handle_update_calendar_event,
        "delete": handle_delete_calendar_event,
    })
    registry.register("calendar_calendars", {"*": handle_read_calendars})
    for alias, name in TOOL_ALIASES.items():
        registry.alias(alias, name)
    return registry


_registry: ToolRegistry | None = None


async def handle_tool_call(name: str, arguments: dict[str, Any] | None = None) -> ToolResponse:
    """Route a tool call through the default registry."""
    global _registry
    if _registry is None:
        _registry = create_registry()
    return await _registry.execute(name, arguments)
