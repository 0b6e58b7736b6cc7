"""Domain records returned by EventKitCLI and the requests sent to it."""

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

Frequency = Literal["daily", "weekly", "monthly", "yearly"]

PRIORITY_LABELS = {
    0: "none",
    1: "high",
    5: "medium",
    9: "low",
}


class _Record(BaseModel):
    """Immutable snapshot keyed by the helper's camelCase JSON."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RecurrenceRule(_Record):
    """How a reminder repeats."""

    frequency: Frequency
    interval: Annotated[int, Field(default=1, ge=1)]
    end_date: Annotated[str | None, Field(default=None, alias="endDate")]
    occurrence_count: Annotated[int | None, Field(default=None, alias="occurrenceCount")]
    days_of_week: Annotated[list[int] | None, Field(
        default=None, alias="daysOfWeek", description="1 = Sunday, 7 = Saturday")]
    days_of_month: Annotated[list[int] | None, Field(default=None, alias="daysOfMonth")]
    months_of_year: Annotated[list[int] | None, Field(default=None, alias="monthsOfYear")]

    def to_cli_json(self) -> dict:
        """Helper-side JSON, without unset constraints."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Reminder(_Record):
    id: str
    title: str
    is_completed: Annotated[bool, Field(default=False, alias="isCompleted")]
    list: str | None = None
    notes: str | None = None
    url: str | None = None
    due_date: Annotated[str | None, Field(default=None, alias="dueDate")]
    priority: int = 0
    is_flagged: Annotated[bool, Field(default=False, alias="isFlagged")]
    recurrence: RecurrenceRule | None = None


class ReminderList(_Record):
    id: str
    title: str
    color: str | None = None
    emblem: str | None = None


class Event(_Record):
    id: str
    title: str
    calendar: str | None = None
    start_date: Annotated[str, Field(alias="startDate")]
    end_date: Annotated[str, Field(alias="endDate")]
    notes: str | None = None
    location: str | None = None
    url: str | None = None
    is_all_day: Annotated[bool, Field(default=False, alias="isAllDay")]


class Calendar(_Record):
    id: str
    title: str


@dataclass(frozen=True)
class ReminderFilters:
    list: str | None = None
    show_completed: bool | None = None
    search: str | None = None
    due_within: str | None = None
    priority: int | None = None
    flagged: bool | None = None
    recurring: bool | None = None


@dataclass(frozen=True)
class CreateReminderData:
    title: str
    list: str | None = None
    notes: str | None = None
    url: str | None = None
    due_date: str | None = None
    priority: int | None = None
    is_flagged: bool | None = None
    recurrence: RecurrenceRule | None = None


@dataclass(frozen=True)
class UpdateReminderData:
    id: str
    new_title: str | None = None
    list: str | None = None
    notes: str | None = None
    url: str | None = None
    is_completed: bool | None = None
    due_date: str | None = None
    priority: int | None = None
    is_flagged: bool | None = None
    recurrence: RecurrenceRule | None = None
    clear_recurrence: bool | None = None


@dataclass(frozen=True)
class EventFilters:
    start_date: str | None = None
    end_date: str | None = None
    calendar: str | None = None
    search: str | None = None


@dataclass(frozen=True)
class CreateEventData:
    title: str
    start_date: str
    end_date: str
    calendar: str | None = None
    notes: str | None = None
    location: str | None = None
    url: str | None = None
    is_all_day: bool | None = None


@dataclass(frozen=True)
class UpdateEventData:
    id: str
    title: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    calendar: str | None = None
    notes: str | None = None
    location: str | None = None
    url: str | None = None
    is_all_day: bool | None = None
