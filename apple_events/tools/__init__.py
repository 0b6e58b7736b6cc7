"""Tool-call surface: validation, handlers, rendering and routing."""

from apple_events.tools.base import ToolResponse, handle_async_operation
from apple_events.tools.registry import ToolRegistry, create_registry, handle_tool_call

__all__ = [
    "ToolResponse",
    "handle_async_operation",
    "ToolRegistry",
    "create_registry",
    "handle_tool_call",
]
