"""Handlers for calendar events and calendars."""

from typing import Any

from apple_events.models import CreateEventData, EventFilters, UpdateEventData
from apple_events.repository.calendars import calendar_repository
from apple_events.tools.base import ToolResponse, handle_async_operation
from apple_events.tools.formatting import (
    format_calendar,
    format_delete_message,
    format_event,
    format_list_markdown,
    format_success_message,
)
from apple_events.tools.validation import (
    CreateCalendarEventSchema,
    DeleteCalendarEventSchema,
    ReadCalendarEventsSchema,
    UpdateCalendarEventSchema,
    extract_and_validate_args,
)


async def handle_read_calendar_events(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, ReadCalendarEventsSchema)

        event_id = args.get("id")
        if event_id:
            event = await calendar_repository.find_event_by_id(str(event_id))
            return "\n".join(["### Event", "", *format_event(event)])

        events = await calendar_repository.find_events(EventFilters(
            start_date=validated.startDate,
            end_date=validated.endDate,
            calendar=validated.filterCalendar,
            search=validated.search,
        ))
        return format_list_markdown(
            "Calendar Events",
            events,
            format_event,
            "No calendar events found matching the criteria.",
        )

    return await handle_async_operation(operation, "read calendar events")


async def handle_create_calendar_event(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, CreateCalendarEventSchema)
        event = await calendar_repository.create_event(CreateEventData(
            title=validated.title,
            start_date=validated.startDate,
            end_date=validated.endDate,
            calendar=validated.targetCalendar,
            notes=validated.note,
            location=validated.location,
            url=validated.url,
            is_all_day=validated.isAllDay,
        ))
        return format_success_message("created", "event", event.title, event.id)

    return await handle_async_operation(operation, "create calendar event")


async def handle_update_calendar_event(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, UpdateCalendarEventSchema)
        event = await calendar_repository.update_event(UpdateEventData(
            id=validated.id,
            title=validated.title,
            start_date=validated.startDate,
            end_date=validated.endDate,
            calendar=validated.targetCalendar,
            notes=validated.note,
            location=validated.location,
            url=validated.url,
            is_all_day=validated.isAllDay,
        ))
        return format_success_message("updated", "event", event.title, event.id)

    return await handle_async_operation(operation, "update calendar event")


async def handle_delete_calendar_event(args: dict[str, Any]) -> ToolResponse:
    async def operation() -> str:
        validated = extract_and_validate_args(args, DeleteCalendarEventSchema)
        await calendar_repository.delete_event(validated.id)
        return format_delete_message("event", validated.id)

    return await handle_async_operation(operation, "delete calendar event")


async def handle_read_calendars(args: dict[str, Any] | None = None) -> ToolResponse:
    async def operation() -> str:
        calendars = await calendar_repository.find_calendars()
        return format_list_markdown("Calendars", calendars, format_calendar, "No calendars found.")

    return await handle_async_operation(operation, "read calendars")
