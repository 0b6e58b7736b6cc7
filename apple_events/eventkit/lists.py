"""Reminder list emblems, which EventKit does not expose, read and written via AppleScript."""

import asyncio

from apple_events.errors import TransportError
from apple_events.eventkit.applescript import AppleScriptBuilder, run_applescript
from apple_events.observability.logging import get_logger

logger = get_logger(__name__)


async def get_list_emblem(list_title: str) -> str | None:
    """Emblem of one list, or None if it has none or cannot be read."""
    try:
        result = await run_applescript(AppleScriptBuilder.list_emblem(list_title))
    except TransportError as e:
        logger.debug("applescript_emblem_read_failed", list=list_title, error=e.message)
        return None
    return result.strip() or None


async def set_list_emblem(list_title: str, emblem: str) -> None:
    """
    Set the emblem of a list.

    Raises:
        TransportError: If the script fails
    """
    await run_applescript(AppleScriptBuilder.set_list_emblem(list_title, emblem))
    logger.debug("applescript_emblem_set", list=list_title)


def _parse_emblem_lines(output: str, wanted: list[str]) -> dict[str, str | None]:
    emblems: dict[str, str | None] = {}
    for line in output.split("\n"):
        name, _, emblem = line.partition("\t")
        if name in wanted:
            emblems[name] = emblem or None
    return emblems


async def get_list_emblems(list_titles: list[str]) -> dict[str, str | None]:
    """
    Emblems for many lists.

    Reads every list in one script. If that script fails, every title is
    looked up individually in parallel. A title absent from a successful batch
    result has no emblem.
    """
    if not list_titles:
        return {}

    try:
        output = await run_applescript(AppleScriptBuilder.list_emblems())
    except TransportError as e:
        logger.info("applescript_emblem_batch_failed", error=e.message, fallback=len(list_titles))
        results = await asyncio.gather(*(get_list_emblem(title) for title in list_titles))
        return dict(zip(list_titles, results))

    emblems = _parse_emblem_lines(output, list_titles)
    return {title: emblems.get(title) for title in list_titles}


def format_list_display(title: str, emblem: str | None = None, color: str | None = None) -> str:
    """`<emblem> <title> [<color>]`, omitting absent parts."""
    display = f"{emblem} " if emblem else ""
    display += title
    if color:
        display += f" [{color}]"
    return display
