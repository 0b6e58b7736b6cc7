"""Tests for turning classified failures into tool responses."""

import pytest

from apple_events.errors import (
    CliUserError,
    ConfigurationError,
    ErrorKind,
    PermissionDeniedError,
    TransportError,
    ValidationError,
)
from apple_events.tools.base import ToolResponse, create_error_message, handle_async_operation


def failing(error: BaseException):
    async def operation() -> str:
        raise error

    return operation


class TestErrorTaxonomy:
    def test_kinds(self):
        assert ConfigurationError("x").kind is ErrorKind.CONFIGURATION
        assert TransportError("x").kind is ErrorKind.TRANSPORT
        assert CliUserError("x").kind is ErrorKind.CLI_USER
        assert PermissionDeniedError("x", "reminders").kind is ErrorKind.PERMISSION
        assert ValidationError("x").kind is ErrorKind.VALIDATION

    def test_permission_denied_is_a_user_error(self):
        error = PermissionDeniedError("Calendar permission denied.", "calendars")
        assert isinstance(error, CliUserError)
        assert error.domain == "calendars"
        assert error.user_facing

    def test_internal_kinds_are_not_user_facing(self):
        assert not ConfigurationError("x").user_facing
        assert not TransportError("x").user_facing


class TestHandleAsyncOperation:
    @pytest.mark.asyncio
    async def test_success(self):
        async def operation() -> str:
            return "Successfully created reminder"

        response = await handle_async_operation(operation, "create reminder")

        assert not response.is_error
        assert response.text == "Successfully created reminder"
        assert response.to_dict() == {
            "content": [{"type": "text", "text": "Successfully created reminder"}],
            "isError": False,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("Validation failed: title: String should have at least 1 character"),
            CliUserError("Reminder not found."),
            PermissionDeniedError("Reminder permission denied or restricted.", "reminders"),
        ],
    )
    async def test_user_facing_errors_are_verbatim(self, error, monkeypatch):
        monkeypatch.setenv("APPLE_EVENTS_ENV", "development")
        response = await handle_async_operation(failing(error), "read reminders")

        assert response.is_error
        assert response.text == error.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            TransportError("EventKitCLI execution failed: Command failed with exit code 1"),
            ConfigurationError("EventKitCLI binary not found or validation failed"),
            RuntimeError("Database connection failed"),
        ],
    )
    async def test_internal_errors_are_hidden_in_production(self, error):
        response = await handle_async_operation(failing(error), "create reminder")

        assert response.is_error
        assert response.text == "Failed to create reminder: System error occurred"

    @pytest.mark.asyncio
    async def test_internal_error_detail_in_development(self, monkeypatch):
        monkeypatch.setenv("APPLE_EVENTS_ENV", "development")
        response = await handle_async_operation(failing(RuntimeError("Database connection failed")), "create reminder")

        assert response.text == "Failed to create reminder: Database connection failed"

    @pytest.mark.asyncio
    async def test_debug_flag_enables_detail(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        error = TransportError("EventKitCLI execution failed: Empty CLI output")
        response = await handle_async_operation(failing(error), "read calendars")

        assert response.text == "Failed to read calendars: EventKitCLI execution failed: Empty CLI output"

    @pytest.mark.asyncio
    async def test_non_string_errors(self):
        response = await handle_async_operation(failing(KeyError("x")), "delete reminder")
        assert response.text == "Failed to delete reminder: System error occurred"


def test_create_error_message_directly():
    assert create_error_message("read reminders", CliUserError("List not found")) == "List not found"
    assert create_error_message("read reminders", ValueError("bad")) == "Failed to read reminders: System error occurred"


def test_tool_response_constructors():
    assert ToolResponse.error("nope").to_dict()["isError"] is True
    assert ToolResponse.success("ok").content[0].type == "text"
