"""Markdown rendering of records for tool responses."""

from typing import Callable, Iterable, TypeVar

from apple_events.eventkit.lists import format_list_display
from apple_events.models import PRIORITY_LABELS, Calendar, Event, RecurrenceRule, Reminder, ReminderList
from apple_events.tools.links import extract_links

T = TypeVar("T")

_DAY_NAMES = ["", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
_MONTH_NAMES = ["", "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
_UNITS = {"daily": "day", "weekly": "week", "monthly": "month", "yearly": "year"}


def format_multiline_notes(notes: str) -> str:
    """Indent continuation lines so they stay inside the bullet."""
    return notes.replace("\n", "\n    ")


def format_recurrence(rule: RecurrenceRule) -> str:
    plural = rule.interval > 1
    prefix = f"every {rule.interval} " if plural else ""
    parts = [f"{prefix}{_UNITS[rule.frequency]}{'s' if plural else ''}"]

    if rule.frequency == "weekly" and rule.days_of_week:
        parts.append("on " + ", ".join(_DAY_NAMES[d] for d in rule.days_of_week))
    elif rule.frequency == "monthly" and rule.days_of_month:
        label = "days" if len(rule.days_of_month) > 1 else "day"
        parts.append(f"on {label} " + ", ".join(str(d) for d in rule.days_of_month))
    elif rule.frequency == "yearly" and rule.months_of_year:
        parts.append("in " + ", ".join(_MONTH_NAMES[m] for m in rule.months_of_year))

    if rule.end_date:
        parts.append(f"until {rule.end_date}")
    elif rule.occurrence_count:
        parts.append(f"({rule.occurrence_count} times)")
    return " ".join(parts)


def format_reminder(reminder: Reminder) -> list[str]:
    checkbox = "[x]" if reminder.is_completed else "[ ]"
    flag = " 🚩" if reminder.is_flagged else ""
    repeat = " 🔄" if reminder.recurrence else ""
    lines = [f"- {checkbox} {reminder.title}{flag}{repeat}"]
    if reminder.list:
        lines.append(f"  - List: {reminder.list}")
    lines.append(f"  - ID: {reminder.id}")
    if reminder.priority > 0:
        lines.append(f"  - Priority: {PRIORITY_LABELS.get(reminder.priority, 'unknown')}")
    if reminder.recurrence:
        lines.append(f"  - Repeats: {format_recurrence(reminder.recurrence)}")
    if reminder.notes:
        lines.append(f"  - Notes: {format_multiline_notes(reminder.notes)}")
    if reminder.due_date:
        lines.append(f"  - Due: {reminder.due_date}")
    if reminder.url:
        lines.append(f"  - URL: {reminder.url}")
    links = extract_links(reminder.notes)
    if links:
        lines.append(f"  - Related: {', '.join(links)}")
    return lines


def format_reminder_list(reminder_list: ReminderList) -> list[str]:
    display = format_list_display(reminder_list.title, reminder_list.emblem, reminder_list.color)
    return [f"- {display} (ID: {reminder_list.id})"]


def format_event(event: Event) -> list[str]:
    lines = [f"- {event.title}"]
    if event.calendar:
        lines.append(f"  - Calendar: {event.calendar}")
    lines.append(f"  - ID: {event.id}")
    lines.append(f"  - Start: {event.start_date}")
    lines.append(f"  - End: {event.end_date}")
    if event.is_all_day:
        lines.append("  - All day")
    if event.location:
        lines.append(f"  - Location: {event.location}")
    if event.notes:
        lines.append(f"  - Notes: {format_multiline_notes(event.notes)}")
    if event.url:
        lines.append(f"  - URL: {event.url}")
    return lines


def format_calendar(calendar: Calendar) -> list[str]:
    return [f"- {calendar.title} (ID: {calendar.id})"]


def format_list_markdown(
    title: str,
    items: Iterable[T],
    formatter: Callable[[T], list[str]],
    empty_message: str,
) -> str:
    items = list(items)
    lines = [f"### {title} ({len(items)})", ""]
    if not items:
        lines.append(empty_message)
    for item in items:
        lines.extend(formatter(item))
    return "\n".join(lines)


def format_success_message(action: str, item_type: str, title: str, item_id: str) -> str:
    return f'Successfully {action} {item_type} "{title}".\n- ID: {item_id}'


def format_delete_message(item_type: str, identifier: str, use_quotes: bool = False) -> str:
    target = f'"{identifier}"' if use_quotes else f"with ID: {identifier}"
    return f"Successfully deleted {item_type} {target}."
