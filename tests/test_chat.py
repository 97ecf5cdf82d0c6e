"""Tests for chat command parsing, permissions and dispatch."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
from conftest import StubCatalog

from dexline.chat import Command, CommandHandler, is_elevated, parse_command
from dexline.datasources.pokeapi import ResourceCache, ResourceRef
from dexline.describe import SpeciesDescriber

MOD_TAGS = {"mod": True, "badges": {}}


class TestParseCommand:
    """Prefix, command word, argument text."""

    def test_basic(self) -> None:
        assert parse_command("!poke pikachu") == Command(name="poke", args="pikachu")

    def test_command_lowercased_args_joined(self) -> None:
        assert parse_command("!POKE  Mr.   Mime") == Command(name="poke", args="Mr. Mime")

    def test_no_args(self) -> None:
        assert parse_command("!poke") == Command(name="poke", args="")

    def test_not_a_command(self) -> None:
        assert parse_command("poke pikachu") is None
        assert parse_command("!") is None
        assert parse_command("") is None

    def test_custom_prefix(self) -> None:
        assert parse_command("?dex eevee", prefix="?") == Command(name="dex", args="eevee")
        assert parse_command("!dex eevee", prefix="?") is None


class TestIsElevated:
    """Moderators and broadcasters only."""

    @pytest.mark.parametrize(
        "tags",
        [
            {"mod": True},
            {"badges": {"broadcaster": "1"}},
            {"badges": {"moderator": "1"}},
            {"mod": False, "badges": {"moderator": "1", "subscriber": "12"}},
        ],
    )
    def test_elevated(self, tags: dict) -> None:
        assert is_elevated(tags)

    @pytest.mark.parametrize(
        "tags",
        [
            None,
            {},
            {"mod": False},
            {"badges": None},
            {"badges": {"subscriber": "12", "vip": "1"}},
        ],
    )
    def test_not_elevated(self, tags: dict | None) -> None:
        assert not is_elevated(tags)


class TestCommandHandler:
    """Dispatch against the stub catalog."""

    def test_sends_summary(self, describer: SpeciesDescriber) -> None:
        send = Mock()
        handler = CommandHandler(describer, send)

        line = handler.handle("#channel", MOD_TAGS, "!poke pikachu")

        assert line is not None
        assert line.startswith("Pikachu (Mouse Pokémon) is Electric type")
        send.assert_called_once_with("#channel", line)

    def test_not_found_sends_nothing(self, describer: SpeciesDescriber) -> None:
        send = Mock()
        handler = CommandHandler(describer, send)

        assert handler.handle("#channel", MOD_TAGS, "!poke notapokemon") is None
        send.assert_not_called()

    def test_unprivileged_sender_ignored(self) -> None:
        describer = Mock(spec=SpeciesDescriber)
        send = Mock()
        handler = CommandHandler(describer, send)

        assert handler.handle("#channel", {"badges": {"subscriber": "1"}}, "!poke pikachu") is None
        describer.describe.assert_not_called()
        send.assert_not_called()

    def test_own_messages_ignored(self) -> None:
        describer = Mock(spec=SpeciesDescriber)
        handler = CommandHandler(describer, Mock())

        assert handler.handle("#channel", MOD_TAGS, "!poke pikachu", self_sent=True) is None
        describer.describe.assert_not_called()

    def test_other_commands_ignored(self) -> None:
        describer = Mock(spec=SpeciesDescriber)
        handler = CommandHandler(describer, Mock())

        assert handler.handle("#channel", MOD_TAGS, "!so someone") is None
        assert handler.handle("#channel", MOD_TAGS, "hello chat") is None
        assert handler.handle("#channel", MOD_TAGS, "!poke") is None
        describer.describe.assert_not_called()

    def test_custom_command(self, describer: SpeciesDescriber) -> None:
        send = Mock()
        handler = CommandHandler(describer, send, prefix="?", command="Dex")

        assert handler.handle("#c", MOD_TAGS, "?dex Pikachu") is not None
        send.assert_called_once()


class CrashingCatalog(StubCatalog):
    """Raises a non-HTTP error the first time the electric type is fetched."""

    def __init__(self) -> None:
        super().__init__()
        self.crashed = False

    def __call__(self, ref: ResourceRef) -> dict[str, Any] | None:
        if ref == ResourceRef("type", "13") and not self.crashed:
            self.crashed = True
            msg = "boom"
            raise RuntimeError(msg)
        return super().__call__(ref)


class TestCommandHandlerFailures:
    """An unexpected error fails one query, not the handler."""

    def test_crash_sends_nothing_and_later_commands_work(self) -> None:
        catalog = CrashingCatalog()
        send = Mock()
        with ResourceCache(catalog, max_workers=4) as cache:
            handler = CommandHandler(SpeciesDescriber(cache), send)

            assert handler.handle("#c", MOD_TAGS, "!poke pikachu") is None
            send.assert_not_called()

            line = handler.handle("#c", MOD_TAGS, "!poke pikachu")

        assert catalog.crashed
        assert line is not None
        assert line.startswith("Pikachu (Mouse Pokémon) is Electric type")
        send.assert_called_once_with("#c", line)
