"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys

from dexline import __version__
from dexline.chat import CommandHandler
from dexline.config import get_settings
from dexline.describe import SpeciesDescriber
from dexline.logging_setup import configure_logging
from dexline.renderers.summary import render_summary

CONSOLE_CHANNEL = "#console"
CONSOLE_TAGS = {"badges": {"broadcaster": "1"}}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="dexline",
        description="One-line species summaries from the PokéAPI catalog",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'describe' command - one lookup
    describe_parser = subparsers.add_parser("describe", help="Describe a species")
    describe_parser.add_argument(
        "name",
        nargs="+",
        help="Species name or id (e.g. pikachu, 25, Mr. Mime)",
    )

    subparsers.add_parser("info", help="Show application info")

    # 'console' command - local chat loop
    subparsers.add_parser("console", help="Read chat commands from stdin")

    return parser


def _setup(args: argparse.Namespace) -> None:
    settings = get_settings()
    level = "DEBUG" if args.debug or settings.debug else settings.log_level
    configure_logging(level=level, json_logs=settings.log_json)


def cmd_describe(args: argparse.Namespace) -> int:
    """Handle the 'describe' command."""
    _setup(args)
    describer = SpeciesDescriber.from_settings()
    query = " ".join(args.name)
    try:
        summary = describer.describe(query)
    finally:
        describer.cache.close()

    if summary is None:
        print(f"Could not find pokemon: {query}", file=sys.stderr)
        return 1
    print(render_summary(summary))
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Catalog: {settings.base_url}")
    print(f"Languages: {', '.join(settings.languages)}")
    ttl = settings.cache_ttl_seconds
    print(f"Cache TTL: {'never expires' if ttl is None else f'{ttl:g}s'}")
    print(f"Command: {settings.command_prefix}{settings.command_name}")
    print(f"Channels: {', '.join(settings.channels) or '(none)'}")
    return 0


def cmd_console(args: argparse.Namespace) -> int:
    """Handle the 'console' command: a local stand-in for a chat channel."""
    _setup(args)
    settings = get_settings()
    describer = SpeciesDescriber.from_settings(settings)

    def _print_reply(channel: str, text: str) -> None:
        print(f"[{channel}] {text}")

    handler = CommandHandler(
        describer,
        _print_reply,
        prefix=settings.command_prefix,
        command=settings.command_name,
    )
    print(f"Type '{settings.command_prefix}{settings.command_name} <name>' ('exit' to stop)")

    try:
        for raw in sys.stdin:
            line = raw.strip()
            if line.lower() in ("exit", "quit"):
                break
            if not line:
                continue
            reply = handler.handle(CONSOLE_CHANNEL, CONSOLE_TAGS, line)
            if reply is None and line.startswith(settings.command_prefix):
                print("(no reply)")
    except KeyboardInterrupt:
        print("\nStopped.")
    finally:
        describer.cache.close()

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "describe": cmd_describe,
        "info": cmd_info,
        "console": cmd_console,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
