"""Argument vectors for EventKitCLI, and mapping of its results back to records."""

import json
from typing import Any, Iterable, TypeVar

import pydantic
from pydantic import BaseModel

from apple_events.config import CLI_NAME
from apple_events.errors import TransportError
from apple_events.models import RecurrenceRule

RecordT = TypeVar("RecordT", bound=BaseModel)


def _cli_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, RecurrenceRule):
        return json.dumps(value.to_cli_json())
    return str(value)


def build_args(action: str, fields: Iterable[tuple[str, Any]] = ()) -> list[str]:
    """
    `--action <action>` followed by `--<flag> <value>` for every present field.

    Fields whose value is None are omitted, never sent empty.
    """
    args = ["--action", action]
    for flag, value in fields:
        if value is None:
            continue
        args.extend([f"--{flag}", _cli_value(value)])
    return args


def map_record(model: type[RecordT], data: Any, what: str) -> RecordT:
    """Validate one JSON object from the helper into a record."""
    if not isinstance(data, dict):
        raise TransportError(f"Unexpected {CLI_NAME} response for {what}: expected an object")
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise TransportError(
            f"Unexpected {CLI_NAME} response for {what}: {e.error_count()} invalid field(s)"
        ) from e


def map_records(model: type[RecordT], data: Any, what: str) -> list[RecordT]:
    """Validate a JSON array from the helper into records."""
    if not isinstance(data, list):
        raise TransportError(f"Unexpected {CLI_NAME} response for {what}: expected an array")
    return [map_record(model, item, what) for item in data]


def result_field(result: Any, key: str, what: str) -> Any:
    """A named member of an object-shaped result."""
    if not isinstance(result, dict) or key not in result:
        raise TransportError(f"Unexpected {CLI_NAME} response for {what}: missing '{key}'")
    return result[key]
