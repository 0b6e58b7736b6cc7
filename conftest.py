"""Shared fixtures: in-process stand-ins for the helper binary and osascript."""

from __future__ import annotations

import json
from typing import Any

import pytest

from apple_events.eventkit import permissions
from apple_events.eventkit.binary import BinaryLocation
from apple_events.eventkit.process import ProcessOutput

BINARY_PATH = "/test/project/bin/EventKitCLI"


class FakeResolver:
    """Resolver returning a fixed location and counting calls."""

    def __init__(self, location: BinaryLocation | None = None):
        self.location = location or BinaryLocation(path=BINARY_PATH)
        self.calls = 0

    def resolve(self) -> BinaryLocation:
        self.calls += 1
        return self.location


class FakeInvoker:
    """Process invoker replaying scripted outputs (the last one repeats)."""

    def __init__(self, *outputs: ProcessOutput | BaseException):
        self.outputs = list(outputs)
        self.calls: list[tuple[str, list[str]]] = []

    async def __call__(self, program: str, args) -> ProcessOutput:
        self.calls.append((program, list(args)))
        output = self.outputs.pop(0) if len(self.outputs) > 1 else self.outputs[0]
        if isinstance(output, BaseException):
            raise output
        return output


def envelope(returncode: int = 0, stderr: Any = b"", **payload: Any) -> ProcessOutput:
    """ProcessOutput whose stdout is the JSON of `payload`."""
    return ProcessOutput(returncode=returncode, stdout=json.dumps(payload).encode(), stderr=stderr)


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def make_invoker():
    return FakeInvoker


@pytest.fixture
def make_envelope():
    return envelope


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Run every test in production mode with no binary override."""
    for name in ("DEBUG", "APPLE_EVENTS_ENV", "EVENTKIT_CLI_PATH", "EVENTKIT_CLI_TRUSTED_DIRS"):
        monkeypatch.delenv(name, raising=False)
    permissions.reset_prompted_domains()
    yield
    permissions.reset_prompted_domains()
