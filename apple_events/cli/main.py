"""CLI entry point for apple-events-mcp."""

import argparse
import asyncio
import sys

from apple_events.config import load_settings
from apple_events.errors import ConfigurationError
from apple_events.eventkit.binary import BinaryResolver
from apple_events.eventkit.permissions import (
    PERMISSION_DOMAINS,
    has_been_prompted,
    trigger_permission_prompt,
)
from apple_events.eventkit.project import find_project_root
from apple_events.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apple-events-mcp",
        description="MCP server for macOS Reminders and Calendar",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored log output")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the MCP server on stdio (default)")
    subparsers.add_parser("doctor", help="Show installation root and helper binary resolution")
    prompt = subparsers.add_parser(
        "prompt-permissions", help="Trigger the macOS permission dialogs"
    )
    prompt.add_argument(
        "domains",
        nargs="*",
        metavar="DOMAIN",
        help=f"Domains to prompt for: {', '.join(PERMISSION_DOMAINS)} (default: all)",
    )
    return parser


def doctor() -> int:
    """Print where the helper is expected and whether it validates."""
    root = find_project_root()
    print(f"Installation root: {root}")
    location = BinaryResolver(project_root=root).resolve()
    if location.path is None:
        print(f"EventKitCLI: not usable ({location.reason})")
        return 1
    print(f"EventKitCLI: {location.path} ({location.source})")
    return 0


async def prompt_permissions(domains: list[str]) -> int:
    for domain in domains:
        await trigger_permission_prompt(domain)
        print(f"{domain}: prompted={has_been_prompted(domain)}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "prompt-permissions":
        unknown = [d for d in args.domains if d not in PERMISSION_DOMAINS]
        if unknown:
            parser.error(f"unknown permission domain(s): {', '.join(unknown)}")
    settings = load_settings()
    setup_logging(
        level=args.log_level or settings.log_level,
        use_colors=not args.no_color,
        log_file=settings.log_file,
    )

    try:
        if args.command == "doctor":
            sys.exit(doctor())
        if args.command == "prompt-permissions":
            sys.exit(asyncio.run(prompt_permissions(args.domains or list(PERMISSION_DOMAINS))))

        root = find_project_root()
        logger.info("server_start", root=str(root), environment=settings.environment)
        from apple_events.server import run

        run()
    except ConfigurationError as e:
        logger.error("server_configuration_error", error=e.message)
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("server_stopped")


if __name__ == "__main__":
    main()
