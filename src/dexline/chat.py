"""
Chat command dispatch.

The chat connection itself is outside this package: a transport hands each
incoming message to :meth:`CommandHandler.handle` and provides a ``send``
callable for replies. Only elevated senders (moderators and the broadcaster)
may trigger a lookup.

Commands look like ``!poke Mr. Mime``: a prefix, a command word, then the
query text.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from dexline.renderers.summary import render_summary

if TYPE_CHECKING:
    from dexline.describe import SpeciesDescriber

logger = structlog.get_logger()

#: ``send(channel, text)``
Sender = Callable[[str, str], None]

ELEVATED_BADGES = ("broadcaster", "moderator")


@dataclass(frozen=True)
class Command:
    """A parsed chat command."""

    name: str
    args: str


def parse_command(text: str, prefix: str = "!") -> Command | None:
    """Split ``!name arg arg`` into a :class:`Command`; None if not a command."""
    if not prefix or not text.startswith(prefix):
        return None
    words = text[len(prefix) :].split()
    if not words:
        return None
    return Command(name=words[0].lower(), args=" ".join(words[1:]))


def is_elevated(tags: Mapping[str, Any] | None) -> bool:
    """True for moderators and the broadcaster."""
    if not tags:
        return False
    if tags.get("mod"):
        return True
    badges = tags.get("badges") or {}
    return any(badges.get(badge) for badge in ELEVATED_BADGES)


class CommandHandler:
    """Routes the describe command from chat to a :class:`SpeciesDescriber`."""

    def __init__(
        self,
        describer: SpeciesDescriber,
        send: Sender,
        *,
        prefix: str = "!",
        command: str = "poke",
    ) -> None:
        self.describer = describer
        self.send = send
        self.prefix = prefix
        self.command = command.lower()

    def handle(
        self,
        channel: str,
        tags: Mapping[str, Any] | None,
        text: str,
        *,
        self_sent: bool = False,
    ) -> str | None:
        """
        Process one chat message.

        Returns:
            The line sent to ``channel``, or None when nothing was sent.
        """
        if self_sent:
            return None
        command = parse_command(text, self.prefix)
        if command is None or command.name != self.command:
            return None
        if not is_elevated(tags):
            logger.debug("command_ignored_unprivileged", channel=channel, command=command.name)
            return None
        if not command.args:
            return None

        summary = self.describer.describe(command.args)
        if summary is None:
            logger.info("pokemon_not_found", channel=channel, query=command.args)
            return None

        line = render_summary(summary)
        self.send(channel, line)
        return line
