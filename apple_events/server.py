"""MCP server exposing the reminders and calendar tools over stdio."""

from typing import Any, Literal

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from apple_events.tools.registry import handle_tool_call

mcp = FastMCP("apple-events")

Action = Literal["read", "create", "update", "delete"]


async def _call(tool: str, arguments: dict[str, Any]) -> str:
    response = await handle_tool_call(tool, {k: v for k, v in arguments.items() if v is not None})
    if response.is_error:
        raise ToolError(response.text)
    return response.text


@mcp.tool()
async def reminders_tasks(
    action: Action,
    id: str | None = None,
    title: str | None = None,
    note: str | None = None,
    url: str | None = None,
    targetList: str | None = None,
    dueDate: str | None = None,
    priority: int | None = None,
    flagged: bool | None = None,
    completed: bool | None = None,
    recurrence: dict[str, Any] | None = None,
    clearRecurrence: bool | None = None,
    filterList: str | None = None,
    showCompleted: bool | None = None,
    search: str | None = None,
    dueWithin: str | None = None,
    filterPriority: int | None = None,
    filterFlagged: bool | None = None,
    filterRecurring: bool | None = None,
) -> str:
    """Read, create, update or delete reminders. Reading with `id` returns that reminder only."""
    return await _call("reminders_tasks", dict(locals()))


@mcp.tool()
async def reminders_lists(
    action: Action,
    name: str | None = None,
    newName: str | None = None,
    color: str | None = None,
    emblem: str | None = None,
) -> str:
    """Read, create, update or delete reminder lists."""
    return await _call("reminders_lists", dict(locals()))


@mcp.tool()
async def calendar_events(
    action: Action,
    id: str | None = None,
    title: str | None = None,
    startDate: str | None = None,
    endDate: str | None = None,
    targetCalendar: str | None = None,
    note: str | None = None,
    location: str | None = None,
    url: str | None = None,
    isAllDay: bool | None = None,
    filterCalendar: str | None = None,
    search: str | None = None,
) -> str:
    """Read, create, update or delete calendar events. Reading with `id` returns that event only."""
    return await _call("calendar_events", dict(locals()))


@mcp.tool()
async def calendar_calendars() -> str:
    """List the available calendars."""
    return await _call("calendar_calendars", {})


def run() -> None:
    mcp.run()
