"""Tests for the EventKitCLI executor."""

import json
from unittest.mock import AsyncMock

import pytest

from apple_events.errors import (
    CliUserError,
    ConfigurationError,
    ErrorKind,
    PermissionDeniedError,
    TransportError,
)
from apple_events.eventkit import permissions
from apple_events.eventkit.binary import BinaryLocation
from apple_events.eventkit.executor import (
    CliExecutor,
    action_for,
    parse_envelope,
    permission_domain_for,
)
from apple_events.eventkit.process import ProcessOutput, to_text

BINARY_PATH = "/test/project/bin/EventKitCLI"


@pytest.fixture
def prompt_spy(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Replaces every route to the permission prompt with one spy."""
    spy = AsyncMock()
    monkeypatch.setattr(permissions, "trigger_permission_prompt", spy)
    monkeypatch.setattr(permissions._prompter, "trigger", spy)
    monkeypatch.setattr(permissions, "run_applescript", spy)
    return spy


@pytest.mark.asyncio
async def test_returns_result_on_success(fake_resolver, make_invoker, make_envelope):
    invoker = make_invoker(make_envelope(status="success", result={"id": "123", "title": "Test reminder"}))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    result = await executor.execute(["--action", "read", "--id", "123"])

    assert result == {"id": "123", "title": "Test reminder"}
    assert invoker.calls == [(BINARY_PATH, ["--action", "read", "--id", "123"])]


@pytest.mark.asyncio
async def test_error_envelope_on_success_exit_is_user_error(fake_resolver, make_invoker, make_envelope):
    invoker = make_invoker(make_envelope(status="error", message="Failed to read reminder"))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(CliUserError) as exc_info:
        await executor.execute(["--action", "read", "--id", "123"])

    assert exc_info.value.message == "Failed to read reminder"
    assert exc_info.value.kind is ErrorKind.CLI_USER


@pytest.mark.asyncio
async def test_unresolved_binary_is_configuration_error(fake_resolver, make_invoker, make_envelope):
    fake_resolver.location = BinaryLocation(path=None, reason="missing")
    invoker = make_invoker(make_envelope(status="success", result={}))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(ConfigurationError, match="EventKitCLI binary not found or validation failed"):
        await executor.execute(["--action", "read"])
    assert invoker.calls == []


@pytest.mark.asyncio
async def test_failed_exit_without_envelope_is_transport_error(fake_resolver, make_invoker):
    invoker = make_invoker(ProcessOutput(returncode=1, stdout=b"", stderr=b""))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(TransportError, match="EventKitCLI execution failed: Command failed with exit code 1"):
        await executor.execute(["--action", "read", "--id", "123"])


@pytest.mark.asyncio
async def test_failed_exit_includes_stderr(fake_resolver, make_invoker):
    invoker = make_invoker(ProcessOutput(returncode=2, stdout=None, stderr=b"dyld: Library not loaded"))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(TransportError) as exc_info:
        await executor.execute(["--action", "read"])

    assert "dyld: Library not loaded" in exc_info.value.message
    assert exc_info.value.message.startswith("EventKitCLI execution failed")


@pytest.mark.asyncio
async def test_spawn_failure_is_transport_error(fake_resolver, make_invoker):
    invoker = make_invoker(PermissionError(13, "Permission denied"))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(TransportError, match="EventKitCLI execution failed"):
        await executor.execute(["--action", "read"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "stdout",
    [b"", None, "", b"   \n", b"invalid json", b"[1, 2]", b'{"status": "success"}', b'{"status": "ok"}'],
)
async def test_unusable_stdout_on_success_exit_is_transport_error(fake_resolver, make_invoker, stdout):
    invoker = make_invoker(ProcessOutput(returncode=0, stdout=stdout, stderr=b""))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(TransportError, match="EventKitCLI execution failed"):
        await executor.execute(["--action", "read", "--id", "123"])


@pytest.mark.asyncio
async def test_empty_stdout_message(fake_resolver, make_invoker):
    invoker = make_invoker(ProcessOutput(returncode=0, stdout=b"", stderr=b""))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(TransportError) as exc_info:
        await executor.execute(["--action", "read"])
    assert exc_info.value.message == "EventKitCLI execution failed: Empty CLI output"


@pytest.mark.asyncio
async def test_success_envelope_with_failed_exit_is_not_accepted(fake_resolver, make_invoker, make_envelope):
    invoker = make_invoker(make_envelope(returncode=1, status="success", result={"ok": True}))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(TransportError):
        await executor.execute(["--action", "read"])


@pytest.mark.asyncio
async def test_string_stdout_is_accepted(fake_resolver, make_invoker):
    stdout = '{"status":"success","result":{"value":123}}'
    invoker = make_invoker(ProcessOutput(returncode=0, stdout=stdout, stderr=""))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    assert await executor.execute(["--action", "read"]) == {"value": 123}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("args", "message", "domain"),
    [
        (["--action", "read"], "Reminder permission denied or restricted.", "reminders"),
        (["--action", "read-events"], "Calendar permission denied or restricted.", "calendars"),
        (["--action", "read"], "Reminder permission denied.", "reminders"),
        (["--action", "create-event", "--title", "Test"], "Authorization denied.", "calendars"),
        (["--title", "Test", "--action", "update-event"], "Permission denied.", "calendars"),
        (["--title", "Test", "--action"], "Permission denied.", "reminders"),
    ],
)
async def test_permission_errors_are_verbatim_and_never_retried(
    fake_resolver, make_invoker, make_envelope, prompt_spy, args, message, domain
):
    success = make_envelope(status="success", result={"ok": True})
    invoker = make_invoker(make_envelope(returncode=1, status="error", message=message), success)
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(PermissionDeniedError) as exc_info:
        await executor.execute(args)

    assert exc_info.value.message == message
    assert exc_info.value.domain == domain
    assert len(invoker.calls) == 1
    prompt_spy.assert_not_called()
    assert not permissions.has_been_prompted("reminders")
    assert not permissions.has_been_prompted("calendars")


@pytest.mark.asyncio
async def test_user_error_message_is_byte_for_byte(fake_resolver, make_invoker, make_envelope, prompt_spy):
    message = 'List "Wörk \\ Ünïcode" not found.\n'
    invoker = make_invoker(make_envelope(returncode=1, status="error", message=message))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    with pytest.raises(CliUserError) as exc_info:
        await executor.execute(["--action", "read", "--filterList", "Wörk"])

    assert str(exc_info.value) == message
    prompt_spy.assert_not_called()


@pytest.mark.asyncio
async def test_successful_resolution_is_reused(fake_resolver, make_invoker, make_envelope):
    invoker = make_invoker(make_envelope(status="success", result=[]))
    executor = CliExecutor(resolver=fake_resolver, invoker=invoker)

    await executor.execute(["--action", "read-lists"])
    await executor.execute(["--action", "read-lists"])

    assert fake_resolver.calls == 1
    assert len(invoker.calls) == 2


@pytest.mark.asyncio
async def test_failed_resolution_is_retried_on_next_call(fake_resolver, make_invoker, make_envelope):
    fake_resolver.location = BinaryLocation(path=None, reason="missing")
    executor = CliExecutor(resolver=fake_resolver, invoker=make_invoker(make_envelope(status="success", result=1)))

    for _ in range(2):
        with pytest.raises(ConfigurationError):
            await executor.execute(["--action", "read"])
    assert fake_resolver.calls == 2


def test_parse_envelope_requires_message_on_error():
    with pytest.raises(ValueError):
        parse_envelope(json.dumps({"status": "error"}))


def test_action_and_domain_inference():
    assert action_for(["--action", "read-events"]) == "read-events"
    assert action_for(["--title", "x", "--action"]) is None
    assert action_for([]) is None
    assert permission_domain_for(["--action", "read-calendars"]) == "calendars"
    assert permission_domain_for(["--action", "delete-list"]) == "reminders"
    assert permission_domain_for(["--action"]) == "reminders"


def test_to_text_normalization():
    assert to_text(b"caf\xc3\xa9") == "café"
    assert to_text(bytearray(b"ok")) == "ok"
    assert to_text(None) == ""
    assert to_text("plain") == "plain"
    assert to_text(123) == "123"


@pytest.mark.asyncio
async def test_unusable_override_is_configuration_error(tmp_path, make_invoker, make_envelope):
    from apple_events.config import Settings
    from apple_events.eventkit.binary import BinaryResolver

    (tmp_path / "pyproject.toml").write_text("")
    settings = Settings(cli_path="/" + "a" * 300 + "/EventKitCLI")
    invoker = make_invoker(make_envelope(status="success", result={}))
    executor = CliExecutor(resolver=BinaryResolver(project_root=tmp_path, settings=settings), invoker=invoker)

    with pytest.raises(ConfigurationError, match="cannot be checked"):
        await executor.execute(["--action", "read"])
    assert invoker.calls == []
