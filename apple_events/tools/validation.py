"""Argument schemas for the tool actions."""

from typing import Any, Annotated, Literal, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator

from apple_events.errors import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

Priority = Literal[0, 1, 5, 9]
DueWithin = Literal["today", "tomorrow", "this-week", "overdue", "no-date"]
NonEmpty = Annotated[str, Field(min_length=1)]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RecurrenceSchema(_Schema):
    frequency: Literal["daily", "weekly", "monthly", "yearly"]
    interval: Annotated[int, Field(default=1, ge=1)]
    endDate: str | None = None
    occurrenceCount: Annotated[int | None, Field(default=None, ge=1)]
    daysOfWeek: list[Annotated[int, Field(ge=1, le=7)]] | None = None
    daysOfMonth: list[Annotated[int, Field(ge=1, le=31)]] | None = None
    monthsOfYear: list[Annotated[int, Field(ge=1, le=12)]] | None = None


class ReadRemindersSchema(_Schema):
    filterList: str | None = None
    showCompleted: bool | None = None
    search: str | None = None
    dueWithin: DueWithin | None = None
    filterPriority: Priority | None = None
    filterFlagged: bool | None = None
    filterRecurring: bool | None = None


class CreateReminderSchema(_Schema):
    title: NonEmpty
    note: str | None = None
    url: str | None = None
    targetList: str | None = None
    dueDate: str | None = None
    priority: Priority | None = None
    flagged: bool | None = None
    recurrence: RecurrenceSchema | None = None


class UpdateReminderSchema(_Schema):
    id: NonEmpty
    title: str | None = None
    note: str | None = None
    url: str | None = None
    completed: bool | None = None
    targetList: str | None = None
    dueDate: str | None = None
    priority: Priority | None = None
    flagged: bool | None = None
    recurrence: RecurrenceSchema | None = None
    clearRecurrence: bool | None = None

    @model_validator(mode="after")
    def recurrence_or_clear(self) -> "UpdateReminderSchema":
        if self.recurrence is not None and self.clearRecurrence:
            raise ValueError("recurrence and clearRecurrence cannot be used together")
        return self


class DeleteReminderSchema(_Schema):
    id: NonEmpty


class CreateReminderListSchema(_Schema):
    name: NonEmpty
    color: str | None = None
    emblem: str | None = None


class UpdateReminderListSchema(_Schema):
    name: NonEmpty
    newName: NonEmpty
    color: str | None = None
    emblem: str | None = None


class DeleteReminderListSchema(_Schema):
    name: NonEmpty


class ReadCalendarEventsSchema(_Schema):
    startDate: str | None = None
    endDate: str | None = None
    filterCalendar: str | None = None
    search: str | None = None


class CreateCalendarEventSchema(_Schema):
    title: NonEmpty
    startDate: NonEmpty
    endDate: NonEmpty
    targetCalendar: str | None = None
    note: str | None = None
    location: str | None = None
    url: str | None = None
    isAllDay: bool | None = None


class UpdateCalendarEventSchema(_Schema):
    id: NonEmpty
    title: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    targetCalendar: str | None = None
    note: str | None = None
    location: str | None = None
    url: str | None = None
    isAllDay: bool | None = None


class DeleteCalendarEventSchema(_Schema):
    id: NonEmpty


def _format_errors(error: pydantic.ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "Validation failed: " + "; ".join(parts)


def extract_and_validate_args(args: dict[str, Any] | None, schema: type[SchemaT]) -> SchemaT:
    """
    Validate raw tool arguments against `schema`.

    Raises:
        ValidationError: If the arguments do not satisfy the schema
    """
    try:
        return schema.model_validate(args or {})
    except pydantic.ValidationError as e:
        raise ValidationError(_format_errors(e)) from e
