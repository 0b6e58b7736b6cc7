"""MCP server exposing macOS Reminders and Calendar through the EventKitCLI helper."""

__version__ = "1.0.0"
