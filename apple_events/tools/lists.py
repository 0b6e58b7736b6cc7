"""Handlers for reminder list operations."""

from typing import Any

from apple_events.repository.reminders import reminder_repository
from apple_events.tools.base import ToolResponse, handle_async_operation
from apple_events.tools.formatting import (
    format_delete_message,
    format_list_markdown,
    format_reminder_list,
    format_success_message,
)
from apple_events.tools.validation import (
    CreateReminderListSchema,
    DeleteReminderListSchema,
    UpdateReminderListSchema,
    extract_and_validate_args,
)


async def handle_read_reminder_lists(args: dict[str, Any] | None = None) -> ToolResponse:
    async def operation() -> str:
        lists = await reminder_repository.find_all_lists()
        return format_list_markdown(
            "Reminder Lists",
            lists,
            format_reminder_list,
            "No reminder lists found.",
        )

    return await handle_async_operation(operation, "read reminder lists")


async def handle_create_reminder_list(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, CreateReminderListSchema)
        created = await reminder_repository.create_reminder_list(
            validated.name, validated.color, validated.emblem
        )
        return format_success_message("created", "list", created.title, created.id)

    return await handle_async_operation(operation, "create reminder list")


async def handle_update_reminder_list(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, UpdateReminderListSchema)
        updated = await reminder_repository.update_reminder_list(
            validated.name, validated.newName, validated.color, validated.emblem
        )
        return format_success_message("updated", "list", updated.title, updated.id)

    return await handle_async_operation(operation, "update reminder list")


async def handle_delete_reminder_list(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, DeleteReminderListSchema)
        await reminder_repository.delete_reminder_list(validated.name)
        return format_delete_message("list", validated.name, use_quotes=True)

    return await handle_async_operation(operation, "delete reminder list")
