"""Calendar event and calendar operations over EventKitCLI."""

from apple_events.errors import CliUserError
from apple_events.eventkit.executor import CliExecutor, get_executor
from apple_events.models import Calendar, CreateEventData, Event, EventFilters, UpdateEventData
from apple_events.repository.arguments import build_args, map_record, map_records, result_field


class CalendarRepository:
    """Maps calendar requests to helper invocations and results to records."""

    def __init__(self, executor: CliExecutor | None = None):
        self._executor = executor

    async def _execute(self, args: list[str]):
        executor = self._executor or get_executor()
        return await executor.execute(args)

    async def find_events(self, filters: EventFilters | None = None) -> list[Event]:
        filters = filters or EventFilters()
        result = await self._execute(build_args("read-events", [
            ("startDate", filters.start_date),
            ("endDate", filters.end_date),
            ("filterCalendar", filters.calendar),
            ("search", filters.search),
        ]))
        return map_records(Event, result_field(result, "events", "read-events"), "read-events")

    async def find_event_by_id(self, event_id: str) -> Event:
        for event in await self.find_events():
            if event.id == event_id:
                return event
        raise CliUserError(f"Event with ID '{event_id}' not found.")

    async def create_event(self, data: CreateEventData) -> Event:
        result = await self._execute(build_args("create-event", [
            ("title", data.title),
            ("startDate", data.start_date),
            ("endDate", data.end_date),
            ("targetCalendar", data.calendar),
            ("note", data.notes),
            ("location", data.location),
            ("url", data.url),
            ("isAllDay", data.is_all_day),
        ]))
        return map_record(Event, result, "create-event")

    async def update_event(self, data: UpdateEventData) -> Event:
        result = await self._execute(build_args("update-event", [
            ("id", data.id),
            ("title", data.title),
            ("startDate", data.start_date),
            ("endDate", data.end_date),
            ("targetCalendar", data.calendar),
            ("note", data.notes),
            ("location", data.location),
            ("url", data.url),
            ("isAllDay", data.is_all_day),
        ]))
        return map_record(Event, result, "update-event")

    async def delete_event(self, event_id: str) -> None:
        await self._execute(build_args("delete-event", [("id", event_id)]))

    async def find_calendars(self) -> list[Calendar]:
        result = await self._execute(build_args("read-calendars"))
        return map_records(Calendar, result, "read-calendars")


calendar_repository = CalendarRepository()
