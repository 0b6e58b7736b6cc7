"""Reminder and reminder-list operations over EventKitCLI."""

from apple_events.errors import CliUserError, TransportError
from apple_events.eventkit.executor import CliExecutor, get_executor
from apple_events.eventkit.lists import get_list_emblems, set_list_emblem
from apple_events.models import (
    CreateReminderData,
    Reminder,
    ReminderFilters,
    ReminderList,
    UpdateReminderData,
)
from apple_events.observability.logging import get_logger
from apple_events.repository.arguments import build_args, map_record, map_records, result_field

logger = get_logger(__name__)


class ReminderRepository:
    """Maps reminder requests to helper invocations and results to records."""

    def __init__(self, executor: CliExecutor | None = None):
        self._executor = executor

    async def _execute(self, args: list[str]):
        executor = self._executor or get_executor()
        return await executor.execute(args)

    async def _read(self, filters: ReminderFilters) -> list[Reminder]:
        result = await self._execute(build_args("read", [
            ("showCompleted", filters.show_completed),
            ("filterList", filters.list),
            ("search", filters.search),
            ("dueWithin", filters.due_within),
        ]))
        return map_records(Reminder, result_field(result, "reminders", "read"), "read")

    async def find_reminder_by_id(self, reminder_id: str) -> Reminder:
        reminders = await self._read(ReminderFilters(show_completed=True))
        for reminder in reminders:
            if reminder.id == reminder_id:
                return reminder
        raise CliUserError(f"Reminder with ID '{reminder_id}' not found.")

    async def find_reminders(self, filters: ReminderFilters | None = None) -> list[Reminder]:
        """Reminders matching `filters`. Priority, flag and recurrence are filtered locally."""
        filters = filters or ReminderFilters()
        reminders = await self._read(filters)

        if filters.priority is not None:
            reminders = [r for r in reminders if r.priority == filters.priority]
        if filters.flagged is not None:
            reminders = [r for r in reminders if r.is_flagged == filters.flagged]
        if filters.recurring is not None:
            reminders = [r for r in reminders if (r.recurrence is not None) == filters.recurring]
        return reminders

    async def create_reminder(self, data: CreateReminderData) -> Reminder:
        result = await self._execute(build_args("create", [
            ("title", data.title),
            ("targetList", data.list),
            ("note", data.notes),
            ("url", data.url),
            ("dueDate", data.due_date),
            ("priority", data.priority),
            ("isFlagged", data.is_flagged),
            ("recurrence", data.recurrence),
        ]))
        return map_record(Reminder, result, "create")

    async def update_reminder(self, data: UpdateReminderData) -> Reminder:
        result = await self._execute(build_args("update", [
            ("id", data.id),
            ("title", data.new_title),
            ("targetList", data.list),
            ("note", data.notes),
            ("url", data.url),
            ("isCompleted", data.is_completed),
            ("dueDate", data.due_date),
            ("priority", data.priority),
            ("isFlagged", data.is_flagged),
            ("recurrence", data.recurrence),
            ("clearRecurrence", data.clear_recurrence),
        ]))
        return map_record(Reminder, result, "update")

    async def delete_reminder(self, reminder_id: str) -> None:
        await self._execute(build_args("delete", [("id", reminder_id)]))

    async def find_all_lists(self) -> list[ReminderList]:
        result = await self._execute(build_args("read-lists"))
        lists = map_records(ReminderList, result, "read-lists")
        emblems = await get_list_emblems([lst.title for lst in lists])
        return [
            lst.model_copy(update={"emblem": emblems.get(lst.title) or lst.emblem})
            for lst in lists
        ]

    async def _apply_emblem(self, reminder_list: ReminderList, emblem: str | None) -> ReminderList:
        if not emblem:
            return reminder_list
        try:
            await set_list_emblem(reminder_list.title, emblem)
        except TransportError as e:
            logger.warning("applescript_emblem_set_failed", list=reminder_list.title, error=e.message)
            return reminder_list
        return reminder_list.model_copy(update={"emblem": emblem})

    async def create_reminder_list(
        self, name: str, color: str | None = None, emblem: str | None = None
    ) -> ReminderList:
        result = await self._execute(build_args("create-list", [
            ("name", name),
            ("color", color),
        ]))
        return await self._apply_emblem(map_record(ReminderList, result, "create-list"), emblem)

    async def update_reminder_list(
        self,
        name: str,
        new_name: str | None = None,
        color: str | None = None,
        emblem: str | None = None,
    ) -> ReminderList:
        result = await self._execute(build_args("update-list", [
            ("name", name),
            ("newName", new_name),
            ("color", color),
        ]))
        return await self._apply_emblem(map_record(ReminderList, result, "update-list"), emblem)

    async def delete_reminder_list(self, name: str) -> None:
        await self._execute(build_args("delete-list", [("name", name)]))


reminder_repository = ReminderRepository()
