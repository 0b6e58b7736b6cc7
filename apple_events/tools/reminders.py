"""Handlers for reminder task operations."""

from typing import Any

from apple_events.models import (
    CreateReminderData,
    RecurrenceRule,
    ReminderFilters,
    UpdateReminderData,
)
from apple_events.repository.reminders import reminder_repository
from apple_events.tools.base import ToolResponse, handle_async_operation
from apple_events.tools.formatting import (
    format_delete_message,
    format_list_markdown,
    format_reminder,
    format_success_message,
)
from apple_events.tools.validation import (
    CreateReminderSchema,
    DeleteReminderSchema,
    ReadRemindersSchema,
    RecurrenceSchema,
    UpdateReminderSchema,
    extract_and_validate_args,
)


def _recurrence(schema: RecurrenceSchema | None) -> RecurrenceRule | None:
    if schema is None:
        return None
    return RecurrenceRule.model_validate(schema.model_dump(exclude_none=True))


async def handle_read_reminders(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, ReadRemindersSchema)

        # The schema has no `id`; a raw id always wins over the filters.
        reminder_id = args.get("id")
        if reminder_id:
            reminder = await reminder_repository.find_reminder_by_id(str(reminder_id))
            return "\n".join(["### Reminder", "", *format_reminder(reminder)])

        reminders = await reminder_repository.find_reminders(ReminderFilters(
            list=validated.filterList,
            show_completed=validated.showCompleted,
            search=validated.search,
            due_within=validated.dueWithin,
            priority=validated.filterPriority,
            flagged=validated.filterFlagged,
            recurring=validated.filterRecurring,
        ))
        return format_list_markdown(
            "Reminders",
            reminders,
            format_reminder,
            "No reminders found matching the criteria.",
        )

    return await handle_async_operation(operation, "read reminders")


async def handle_create_reminder(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, CreateReminderSchema)
        reminder = await reminder_repository.create_reminder(CreateReminderData(
            title=validated.title,
            notes=validated.note,
            url=validated.url,
            list=validated.targetList,
            due_date=validated.dueDate,
            priority=validated.priority,
            is_flagged=validated.flagged,
            recurrence=_recurrence(validated.recurrence),
        ))
        return format_success_message("created", "reminder", reminder.title, reminder.id)

    return await handle_async_operation(operation, "create reminder")


async def handle_update_reminder(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, UpdateReminderSchema)
        reminder = await reminder_repository.update_reminder(UpdateReminderData(
            id=validated.id,
            new_title=validated.title,
            notes=validated.note,
            url=validated.url,
            is_completed=validated.completed,
            list=validated.targetList,
            due_date=validated.dueDate,
            priority=validated.priority,
            is_flagged=validated.flagged,
            recurrence=_recurrence(validated.recurrence),
            clear_recurrence=validated.clearRecurrence,
        ))
        return format_success_message("updated", "reminder", reminder.title, reminder.id)

    return await handle_async_operation(operation, "update reminder")


async def handle_delete_reminder(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, DeleteReminderSchema)
        await reminder_repository.delete_reminder(validated.id)
        return format_delete_message("reminder", validated.id)

    return await handle_async_operation(operation, "delete reminder")
