"""Runs EventKitCLI and classifies its outcome.

The helper answers every invocation with one JSON document on stdout:

    {"status": "success", "result": ...}
    {"status": "error", "message": "..."}

Classification happens here, once. A helper-reported error is a CliUserError
(or PermissionDeniedError) carrying the helper's message verbatim; anything
that prevents reading a well-formed envelope is a TransportError. Failures are
never retried and never trigger a permission prompt.
"""

import json
import re
from typing import Any, Sequence

from apple_events.config import CLI_NAME
from apple_events.errors import (
    CliUserError,
    ConfigurationError,
    PermissionDeniedError,
    TransportError,
)
from apple_events.eventkit.binary import BinaryLocation, BinaryResolver
from apple_events.eventkit.process import ProcessInvoker, ProcessOutput, run_process, to_text
from apple_events.observability.logging import get_logger

logger = get_logger(__name__)

_PERMISSION_DENIED_RE = re.compile(
    r"\b(permission|authori[sz]ation|access)\b.*\b(denied|restricted)\b",
    re.IGNORECASE,
)


def parse_envelope(text: str) -> dict[str, Any]:
    """
    Parse and check a helper response envelope.

    Raises:
        ValueError: If the text is empty, not JSON, or not a valid envelope
    """
    if not text.strip():
        raise ValueError("Empty CLI output")

    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("CLI output is not a JSON object")

    status = payload.get("status")
    if status == "success":
        if "result" not in payload:
            raise ValueError("Success response has no 'result'")
    elif status == "error":
        if not isinstance(payload.get("message"), str):
            raise ValueError("Error response has no 'message'")
    else:
        raise ValueError(f"Unknown response status: {status!r}")
    return payload


def action_for(args: Sequence[str]) -> str | None:
    """Value following `--action`, if any."""
    try:
        index = list(args).index("--action")
    except ValueError:
        return None
    if index + 1 >= len(args):
        return None
    return args[index + 1]


def permission_domain_for(args: Sequence[str]) -> str:
    """Capability domain an invocation belongs to, for diagnostics."""
    action = action_for(args) or ""
    if "event" in action or "calendar" in action:
        return "calendars"
    return "reminders"


class CliExecutor:
    """Single-attempt runner for the helper binary."""

    def __init__(self, resolver: BinaryResolver | None = None, invoker: ProcessInvoker | None = None):
        self._resolver = resolver or BinaryResolver()
        self._invoker = invoker or run_process
        self._location: BinaryLocation | None = None

    def binary_location(self) -> BinaryLocation:
        """Resolved helper location; a successful resolution is kept for the process lifetime."""
        if self._location is not None:
            return self._location
        location = self._resolver.resolve()
        if location.path is not None:
            self._location = location
        return location

    async def execute(self, args: Sequence[str]) -> Any:
        """
        Run the helper with `args` and return the envelope's `result` verbatim.

        Raises:
            ConfigurationError: If the binary cannot be resolved
            TransportError: If the helper cannot run or its output is unusable
            CliUserError: If the helper reports an error
        """
        args = list(args)
        location = self.binary_location()
        if location.path is None:
            message = f"{CLI_NAME} binary not found or validation failed"
            if location.reason:
                message += f": {location.reason}"
            raise ConfigurationError(message)

        action = action_for(args)
        logger.debug("cli_execute", action=action, path=location.path)

        try:
            output = await self._invoker(location.path, args)
        except OSError as e:
            logger.error("cli_transport_error", action=action, error=str(e))
            raise TransportError(f"{CLI_NAME} execution failed: {e}") from e

        stdout = to_text(output.stdout)
        stderr = to_text(output.stderr)
        if stderr.strip():
            logger.debug("cli_stderr", action=action, stderr=stderr.strip()[:500])

        if output.failed:
            self._raise_for_failed_exit(args, output, stdout, stderr)

        try:
            envelope = parse_envelope(stdout)
        except ValueError as e:
            logger.error("cli_transport_error", action=action, error=str(e))
            raise TransportError(f"{CLI_NAME} execution failed: {e}") from e

        if envelope["status"] == "error":
            raise self._user_error(envelope["message"], args)

        logger.debug("cli_success", action=action)
        return envelope["result"]

    def _raise_for_failed_exit(
        self, args: list[str], output: ProcessOutput, stdout: str, stderr: str
    ) -> None:
        try:
            envelope = parse_envelope(stdout)
        except ValueError:
            envelope = None

        if envelope is not None and envelope["status"] == "error":
            raise self._user_error(envelope["message"], args)

        detail = f"Command failed with exit code {output.returncode}"
        if stderr.strip():
            detail += f": {stderr.strip()}"
        logger.error("cli_transport_error", action=action_for(args), error=detail)
        raise TransportError(f"{CLI_NAME} execution failed: {detail}")

    def _user_error(self, message: str, args: list[str]) -> CliUserError:
        action = action_for(args)
        if _PERMISSION_DENIED_RE.search(message):
            domain = permission_domain_for(args)
            logger.warning("cli_permission_denied", action=action, domain=domain, message=message)
            return PermissionDeniedError(message, domain)
        logger.info("cli_user_error", action=action, message=message)
        return CliUserError(message)


_default_executor: CliExecutor | None = None


def get_executor() -> CliExecutor:
    """Process-wide executor."""
    global _default_executor
    if _default_executor is None:
        _default_executor = CliExecutor()
    return _default_executor


async def execute_cli(args: Sequence[str]) -> Any:
    """Run the helper with the process-wide executor."""
    return await get_executor().execute(args)
