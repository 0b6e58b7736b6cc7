"""Structured logging setup.

stdout carries the MCP protocol, so console output always goes to stderr.
"""

import atexit
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Union

import structlog

# ANSI color codes for log categories
_RESET = "\033[0m"
_CATEGORY_COLORS = {
    "cli": "\033[36m",          # Cyan – EventKitCLI invocations
    "applescript": "\033[35m",  # Magenta – osascript calls
    "permission": "\033[31m",   # Red – permission prompts
    "tool": "\033[33m",         # Yellow – tool calls
}

_INTERNAL_KEYS = ("_event_category", "_event_color", "_level", "event", "level")


def _event_category_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """Derive _event_category and _event_color from the event name prefix."""
    event = event_dict.get("event", "")
    category = None
    if isinstance(event, str):
        prefix = event.split("_", 1)[0]
        if prefix in _CATEGORY_COLORS:
            category = prefix
        elif prefix == "binary":
            category = "cli"
    event_dict["_event_category"] = category
    event_dict["_event_color"] = _CATEGORY_COLORS.get(category, "") if category else ""
    return event_dict


def _render(event_dict: dict, colored: bool) -> str:
    """Render as [timestamp] [EVENT] [LEVEL] key=value ..."""
    color = event_dict.get("_event_color", "") if colored else ""
    event = event_dict.get("event", "")
    level = event_dict.get("level", "info").upper()

    render_dict = {k: v for k, v in event_dict.items() if k not in _INTERNAL_KEYS}
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    event_tag = ""
    if event:
        event_tag = f" {color}[{event.upper()}]{_RESET}" if color else f" [{event.upper()}]"

    prefix = f"[{ts}]{event_tag} [{level}]"
    line = " ".join(f"{k}={v}" for k, v in render_dict.items())
    return prefix + (" " + line if line else "")


def _colored_console_renderer(logger: logging.Logger, method_name: str, event_dict: dict) -> str:
    return _render(event_dict, colored=True)


def _plain_console_renderer(logger: logging.Logger, method_name: str, event_dict: dict) -> str:
    return _render(event_dict, colored=False)


class FileOutputProcessor:
    """Writes each event to a file without ANSI codes, then passes it on."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.file_handle = open(file_path, "a", encoding="utf-8")
        atexit.register(self._cleanup)

    def _cleanup(self) -> None:
        if not self.file_handle.closed:
            self.file_handle.close()

    def __call__(self, logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
        self.file_handle.write(_plain_console_renderer(logger, method_name, event_dict) + "\n")
        self.file_handle.flush()
        return event_dict


def setup_logging(
    level: str = "INFO",
    use_colors: bool = True,
    log_file: Union[str, Path, None] = None,
) -> None:
    """Set up structured logging to stderr, optionally mirrored to a file."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _event_category_processor,
    ]

    if log_file is not None:
        path = Path(log_file).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        processors.append(FileOutputProcessor(path))

    processors.append(_colored_console_renderer if use_colors else _plain_console_renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
