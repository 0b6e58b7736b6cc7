"""AppleScript snippets for Reminders and Calendar, and the osascript runner.

All string interpolation goes through `escape_applescript_string`.
"""

from apple_events.errors import TransportError
from apple_events.eventkit.process import ProcessInvoker, run_process, to_text
from apple_events.observability.logging import get_logger

logger = get_logger(__name__)

OSASCRIPT = "osascript"


def escape_applescript_string(value: str) -> str:
    """Escape a value for use inside an AppleScript double-quoted string."""
    return (value or "").replace("\\", "\\\\").replace('"', '\\"')


class AppleScriptBuilder:
    """Fixed script skeletons, one per operation kind."""

    @staticmethod
    def permission_probe(domain: str) -> str:
        """Read-only one-liner that makes macOS show the access dialog."""
        if domain == "reminders":
            return 'tell application "Reminders" to get the name of every list'
        if domain == "calendars":
            return 'tell application "Calendar" to get the name of every calendar'
        raise ValueError(f"Unknown permission domain: {domain}")

    @staticmethod
    def list_emblems() -> str:
        """Every list as `name<TAB>emblem`, one per line."""
        return """
tell application "Reminders"
    set allLists to every list
    set resultText to ""
    set tabChar to (ASCII character 9)
    set newlineChar to (ASCII character 10)
    repeat with i from 1 to count of allLists
        set currentList to item i of allLists
        set listName to name of currentList
        set listEmblem to emblem of currentList
        if listEmblem is missing value then
            set listEmblem to ""
        end if
        if i is 1 then
            set resultText to listName & tabChar & listEmblem
        else
            set resultText to resultText & newlineChar & listName & tabChar & listEmblem
        end if
    end repeat
    return resultText
end tell"""

    @staticmethod
    def list_emblem(list_title: str) -> str:
        title = escape_applescript_string(list_title)
        return f"""
tell application "Reminders"
    try
        set theList to list "{title}"
        if emblem of theList is not missing value then
            return emblem of theList
        else
            return ""
        end if
    on error
        return ""
    end try
end tell"""

    @staticmethod
    def set_list_emblem(list_title: str, emblem: str) -> str:
        title = escape_applescript_string(list_title)
        value = escape_applescript_string(emblem)
        return f"""
tell application "Reminders"
    try
        set theList to list "{title}"
        set emblem of theList to "{value}"
    on error errorMessage
        error errorMessage
    end try
end tell"""


async def run_applescript(script: str, invoker: ProcessInvoker | None = None) -> str:
    """
    Run a script with osascript and return its stdout without the trailing newline.

    Raises:
        TransportError: If osascript cannot be spawned or exits non-zero
    """
    invoker = invoker or run_process
    try:
        output = await invoker(OSASCRIPT, ["-e", script])
    except OSError as e:
        raise TransportError(f"AppleScript execution failed: {e}") from e

    if output.failed:
        stderr = to_text(output.stderr).strip()
        logger.debug("applescript_failed", returncode=output.returncode, stderr=stderr[:300])
        raise TransportError(f"AppleScript execution failed: {stderr or f'exit code {output.returncode}'}")

    return to_text(output.stdout).rstrip("\n")
