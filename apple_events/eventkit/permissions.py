"""Session-scoped macOS permission prompting via AppleScript.

The helper's own access request does not always surface the system dialog when
the server runs without a terminal. Running a harmless read against the
Reminders or Calendar app does. Each domain is prompted at most once per
process; a denial still counts as prompted.

Nothing in the request path calls this. It is triggered explicitly, e.g. by
`apple-events-mcp prompt-permissions`.
"""

from typing import Literal

from apple_events.eventkit.applescript import AppleScriptBuilder, run_applescript
from apple_events.eventkit.process import ProcessInvoker
from apple_events.observability.logging import get_logger

logger = get_logger(__name__)

PermissionDomain = Literal["reminders", "calendars"]
PERMISSION_DOMAINS: tuple[PermissionDomain, ...] = ("reminders", "calendars")


class PermissionPrompter:
    """Owns the set of domains already prompted in this process."""

    def __init__(self, invoker: ProcessInvoker | None = None):
        self._invoker = invoker
        self._prompted: set[str] = set()

    async def trigger(self, domain: PermissionDomain) -> None:
        """Show the permission dialog for `domain` unless already done. Never raises."""
        if domain in self._prompted:
            return

        try:
            script = AppleScriptBuilder.permission_probe(domain)
            await run_applescript(script, invoker=self._invoker)
            logger.info("permission_prompt", domain=domain, outcome="ok")
        except Exception as e:
            logger.info("permission_prompt", domain=domain, outcome="failed", error=str(e))
        self._prompted.add(domain)

    def has_been_prompted(self, domain: PermissionDomain) -> bool:
        return domain in self._prompted

    def reset(self) -> None:
        """Forget all prompted domains (tests only)."""
        self._prompted.clear()


_prompter = PermissionPrompter()


async def trigger_permission_prompt(domain: PermissionDomain) -> None:
    await _prompter.trigger(domain)


def has_been_prompted(domain: PermissionDomain) -> bool:
    return _prompter.has_been_prompted(domain)


def reset_prompted_domains() -> None:
    _prompter.reset()
