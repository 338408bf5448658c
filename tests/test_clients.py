# -*- coding: utf-8 -*-
# cython: language_level=3
# BSD 3-Clause License
#
# Copyright (c) 2020-2022, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

# pyright: reportUnknownMemberType=none
# pyright: reportPrivateUsage=none
# This leads to too many false-positives around mocks.

import logging
import typing
from unittest import mock

import alluka
import hikari
import pytest

import parley


def _make_command(name: str = "greet", /, **kwargs: typing.Any) -> parley.ChatCommand:
    async def callback(ctx: parley.abc.ChatContext, name: str) -> None:
        ...

    return parley.ChatCommand(callback, name, **kwargs)


def _make_message(
    content: typing.Optional[str], /, *, is_bot: bool = False, webhook_id: typing.Any = None
) -> mock.Mock:
    return mock.Mock(
        hikari.Message,
        content=content,
        author=mock.Mock(is_bot=is_bot, id=hikari.Snowflake(321)),
        webhook_id=webhook_id,
        guild_id=hikari.Snowflake(123),
        channel_id=hikari.Snowflake(456),
    )


def _make_interaction(
    name: str, /, *, command_type: hikari.CommandType = hikari.CommandType.SLASH, **options: typing.Any
) -> mock.Mock:
    interaction_options = []
    for option_name, value in options.items():
        option = mock.Mock(value=value)
        option.name = option_name
        interaction_options.append(option)

    return mock.Mock(
        hikari.CommandInteraction,
        command_name=name,
        command_type=command_type,
        options=interaction_options,
        guild_id=hikari.Snowflake(123),
        channel_id=hikari.Snowflake(456),
    )


@pytest.fixture()
def mock_rest() -> hikari.api.RESTClient:
    return mock.AsyncMock(hikari.api.RESTClient)


@pytest.fixture()
def mock_events() -> hikari.api.EventManager:
    return mock.Mock(hikari.api.EventManager)


class TestClient:
    @pytest.fixture()
    def client(self, mock_rest: mock.Mock, mock_events: mock.Mock) -> parley.Client:
        return parley.Client(mock_rest, events=mock_events, prefixes=["!"])

    def test___init__(self, mock_rest: mock.Mock):
        client = parley.Client(mock_rest)

        assert client.rest is mock_rest
        assert client.cache is None
        assert client.events is None
        assert isinstance(client.injector, alluka.Client)
        assert client.prefixes == []
        assert client.defaults_to_ephemeral is False
        assert client.is_human_only is True
        assert client.is_alive is False
        assert client.prefix_getter is None
        assert list(client.iter_commands()) == []

    def test___init___with_injector(self, mock_rest: mock.Mock):
        mock_injector = mock.Mock(alluka.abc.Client)

        assert parley.Client(mock_rest, injector=mock_injector).injector is mock_injector

    def test_from_gateway_bot(self):
        mock_bot = mock.Mock()

        client = parley.Client.from_gateway_bot(mock_bot)

        assert client.rest is mock_bot.rest
        assert client.cache is mock_bot.cache
        assert client.events is mock_bot.event_manager
        mock_bot.event_manager.subscribe.assert_has_calls(
            [
                mock.call(hikari.StartingEvent, client._on_starting),
                mock.call(hikari.StoppingEvent, client._on_stopping),
            ]
        )

    def test_from_gateway_bot_when_not_event_managed(self):
        mock_bot = mock.Mock()

        parley.Client.from_gateway_bot(mock_bot, event_managed=False)

        mock_bot.event_manager.subscribe.assert_not_called()

    def test_from_gateway_bot_with_config(self):
        mock_bot = mock.Mock()
        config = parley.ClientConfig(prefixes=["!", "?"], default_to_ephemeral=True, human_only=False)

        client = parley.Client.from_gateway_bot(mock_bot, config=config)

        assert client.prefixes == ["!", "?"]
        assert client.defaults_to_ephemeral is True
        assert client.is_human_only is False

    @pytest.mark.asyncio()
    async def test__on_starting(self, client: parley.Client):
        with mock.patch.object(parley.Client, "open", new=mock.AsyncMock()) as open_:
            await client._on_starting(mock.Mock())

        open_.assert_awaited_once_with()

    @pytest.mark.asyncio()
    async def test__on_stopping(self, client: parley.Client):
        with mock.patch.object(parley.Client, "close", new=mock.AsyncMock()) as close:
            await client._on_stopping(mock.Mock())

        close.assert_awaited_once_with()

    def test_add_command(self, client: parley.Client):
        command = _make_command(aliases=["hi"])

        assert client.add_command(command) is client

        assert list(client.iter_commands()) == [command]
        assert client.get_command("greet") is command
        assert client.get_command("hi") is command

    def test_add_command_when_name_conflicts(self, client: parley.Client):
        command = _make_command(aliases=["hi"])
        client.add_command(command)

        with pytest.raises(ValueError, match="Command names already registered: hi"):
            client.add_command(_make_command("hi"))

        assert list(client.iter_commands()) == [command]

    def test_with_command(self, client: parley.Client):
        command = _make_command()

        assert client.with_command(command) is command
        assert client.get_command("greet") is command

    def test_get_command_is_case_insensitive(self, client: parley.Client):
        command = _make_command()
        client.add_command(command)

        assert client.get_command("GREET") is command

    def test_get_command_when_not_found(self, client: parley.Client):
        assert client.get_command("greet") is None

    def test_remove_command(self, client: parley.Client):
        command = _make_command(aliases=["hi"])
        client.add_command(command)

        assert client.remove_command(command) is client

        assert list(client.iter_commands()) == []
        assert client.get_command("greet") is None
        assert client.get_command("hi") is None

    def test_remove_command_when_not_registered(self, client: parley.Client):
        with pytest.raises(ValueError, match="Command 'greet' isn't registered"):
            client.remove_command(_make_command())

    def test_add_prefix(self, client: parley.Client):
        assert client.add_prefix("?") is client

        assert client.prefixes == ["!", "?"]

    def test_add_prefix_when_iterable(self, client: parley.Client):
        client.add_prefix(["?", "!", "$"])

        assert client.prefixes == ["!", "?", "$"]

    def test_add_prefix_when_already_present(self, client: parley.Client):
        client.add_prefix("!")

        assert client.prefixes == ["!"]

    def test_remove_prefix(self, client: parley.Client):
        assert client.remove_prefix("!") is client

        assert client.prefixes == []

    def test_remove_prefix_when_not_present(self, client: parley.Client):
        with pytest.raises(ValueError):
            client.remove_prefix("?")

    def test_set_prefix_getter(self, client: parley.Client):
        mock_getter = mock.AsyncMock()

        assert client.set_prefix_getter(mock_getter) is client

        assert client.prefix_getter is mock_getter

    def test_with_prefix_getter(self, client: parley.Client):
        mock_getter = mock.AsyncMock()

        assert client.with_prefix_getter(mock_getter) is mock_getter

        assert client.prefix_getter is mock_getter

    def test_set_ephemeral_default(self, client: parley.Client):
        assert client.set_ephemeral_default(True) is client

        assert client.defaults_to_ephemeral is True

    def test_set_human_only(self, client: parley.Client):
        assert client.set_human_only(False) is client

        assert client.is_human_only is False

    @pytest.mark.asyncio()
    async def test_open(self, client: parley.Client, mock_events: mock.Mock, mock_rest: mock.Mock):
        await client.open()

        assert client.is_alive is True
        mock_events.subscribe.assert_has_calls(
            [
                mock.call(hikari.MessageCreateEvent, client.on_message_create_event),
                mock.call(hikari.InteractionCreateEvent, client.on_interaction_create_event),
            ]
        )
        mock_rest.set_application_commands.assert_not_called()

    @pytest.mark.asyncio()
    async def test_open_when_already_alive(self, client: parley.Client):
        await client.open()

        with pytest.raises(RuntimeError, match="Client is already alive"):
            await client.open()

    @pytest.mark.asyncio()
    async def test_open_when_mention_prefix_and_cached(self, mock_rest: mock.Mock):
        mock_cache = mock.Mock(hikari.api.Cache)
        mock_cache.get_me.return_value.id = hikari.Snowflake(4321)
        client = parley.Client(mock_rest, cache=mock_cache, mention_prefix=True)

        await client.open()

        assert client.prefixes == ["<@4321>", "<@!4321>"]
        mock_rest.fetch_my_user.assert_not_called()

    @pytest.mark.asyncio()
    async def test_open_when_mention_prefix_and_not_cached(self, mock_rest: mock.Mock):
        mock_cache = mock.Mock(hikari.api.Cache)
        mock_cache.get_me.return_value = None
        mock_rest.fetch_my_user.return_value.id = hikari.Snowflake(1234)
        client = parley.Client(mock_rest, cache=mock_cache, mention_prefix=True)

        await client.open()

        assert client.prefixes == ["<@1234>", "<@!1234>"]
        mock_rest.fetch_my_user.assert_awaited_once_with()

    @pytest.mark.asyncio()
    async def test_open_when_declare_commands(self, mock_rest: mock.Mock):
        client = parley.Client(mock_rest, declare_commands=True)

        with mock.patch.object(parley.Client, "declare_commands", new=mock.AsyncMock()) as declare_commands:
            await client.open()

        declare_commands.assert_awaited_once_with()

    @pytest.mark.asyncio()
    async def test_open_when_declare_commands_for_guild(self, mock_rest: mock.Mock):
        client = parley.Client(mock_rest, declare_commands=hikari.Snowflake(65123))

        with mock.patch.object(parley.Client, "declare_commands", new=mock.AsyncMock()) as declare_commands:
            await client.open()

        declare_commands.assert_awaited_once_with(guild=65123)

    @pytest.mark.asyncio()
    async def test_close(self, client: parley.Client, mock_events: mock.Mock):
        await client.open()

        await client.close()

        assert client.is_alive is False
        mock_events.unsubscribe.assert_has_calls(
            [
                mock.call(hikari.MessageCreateEvent, client.on_message_create_event),
                mock.call(hikari.InteractionCreateEvent, client.on_interaction_create_event),
            ]
        )

    @pytest.mark.asyncio()
    async def test_close_when_listener_already_removed(self, client: parley.Client, mock_events: mock.Mock):
        await client.open()
        mock_events.unsubscribe.side_effect = LookupError

        await client.close()

        assert client.is_alive is False

    @pytest.mark.asyncio()
    async def test_close_when_not_alive(self, client: parley.Client):
        with pytest.raises(RuntimeError, match="Client isn't active"):
            await client.close()

    @pytest.mark.asyncio()
    async def test_declare_commands(self, client: parley.Client, mock_rest: mock.Mock):
        command = _make_command()
        client.add_command(command)

        with mock.patch.object(parley.ChatCommand, "build") as build:
            result = await client.declare_commands()

        assert result is mock_rest.set_application_commands.return_value
        build.assert_called_once_with(mock_rest)
        mock_rest.fetch_application.assert_awaited_once_with()
        mock_rest.set_application_commands.assert_awaited_once_with(
            mock_rest.fetch_application.return_value.id, [build.return_value], guild=hikari.UNDEFINED
        )

    @pytest.mark.asyncio()
    async def test_declare_commands_for_guild(self, client: parley.Client, mock_rest: mock.Mock):
        await client.declare_commands(guild=hikari.Snowflake(65123))

        mock_rest.set_application_commands.assert_awaited_once_with(
            mock_rest.fetch_application.return_value.id, [], guild=65123
        )


class TestClientExecution:
    @pytest.fixture()
    def calls(self) -> list[tuple[typing.Any, ...]]:
        return []

    @pytest.fixture()
    def client(
        self, mock_rest: mock.Mock, mock_events: mock.Mock, calls: list[tuple[typing.Any, ...]]
    ) -> parley.Client:
        client = parley.Client(mock_rest, events=mock_events, prefixes=["!"])

        @client.with_command
        @parley.as_chat_command("greet", "Greet someone", aliases=["hi"])
        async def greet(ctx: parley.abc.ChatContext, name: str, loud: bool = False) -> None:
            calls.append((ctx, name, loud))

        return client

    @pytest.mark.asyncio()
    async def test_execute_message(self, client: parley.Client, calls: list[tuple[typing.Any, ...]]):
        message = _make_message("!greet Bob")

        assert await client.execute_message(message) is True

        [(ctx, name, loud)] = calls
        assert name == "Bob"
        assert loud is False
        assert isinstance(ctx, parley.context.MessageChatContext)
        assert ctx.message is message
        assert ctx.prefix == "!"
        assert ctx.raw_arguments == "Bob"
        assert ctx.triggering_name == "greet"
        assert ctx.arguments == ("Bob", False)

    @pytest.mark.asyncio()
    async def test_execute_message_with_alias(self, client: parley.Client, calls: list[tuple[typing.Any, ...]]):
        assert await client.execute_message(_make_message("  !HI Bob yes")) is True

        [(ctx, name, loud)] = calls
        assert name == "Bob"
        assert loud is True
        assert ctx.triggering_name == "HI"

    @pytest.mark.asyncio()
    async def test_execute_message_with_injected_dependency(self, mock_rest: mock.Mock, mock_events: mock.Mock):
        class Database:
            ...

        database = Database()
        calls: list[tuple[str, Database]] = []
        client = parley.Client(mock_rest, events=mock_events, prefixes=["!"])
        client.injector.set_type_dependency(Database, database)

        @client.with_command
        @parley.as_chat_command("greet")
        async def greet(
            ctx: parley.abc.ChatContext, name: str, db: Database = alluka.inject(type=Database)
        ) -> None:
            calls.append((name, db))

        assert await client.execute_message(_make_message("!greet Bob")) is True

        assert calls == [("Bob", database)]

    @pytest.mark.asyncio()
    async def test_execute_message_with_prefix_getter(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]]
    ):
        message = _make_message("bot, greet Bob")
        mock_getter = mock.AsyncMock(return_value=["bot,"])
        client.set_prefix_getter(mock_getter)

        assert await client.execute_message(message) is True

        mock_getter.assert_awaited_once_with(message)
        [(ctx, _, _)] = calls
        assert ctx.prefix == "bot,"

    @pytest.mark.parametrize("content", [None, "", "greet Bob", "!", "!   ", "!unknown Bob"])
    @pytest.mark.asyncio()
    async def test_execute_message_when_not_triggered(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]], content: typing.Optional[str]
    ):
        assert await client.execute_message(_make_message(content)) is False

        assert calls == []

    @pytest.mark.asyncio()
    async def test_execute_message_when_author_is_bot(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]]
    ):
        assert await client.execute_message(_make_message("!greet Bob", is_bot=True)) is False

        assert calls == []

    @pytest.mark.asyncio()
    async def test_execute_message_when_webhook(self, client: parley.Client, calls: list[tuple[typing.Any, ...]]):
        assert await client.execute_message(_make_message("!greet Bob", webhook_id=hikari.Snowflake(3))) is False

        assert calls == []

    @pytest.mark.asyncio()
    async def test_execute_message_when_author_is_bot_and_not_human_only(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]]
    ):
        client.set_human_only(False)

        assert await client.execute_message(_make_message("!greet Bob", is_bot=True)) is True

        assert len(calls) == 1

    @pytest.mark.asyncio()
    async def test_execute_message_when_parser_error(
        self, client: parley.Client, mock_rest: mock.Mock, calls: list[tuple[typing.Any, ...]]
    ):
        message = _make_message("!greet")

        assert await client.execute_message(message) is True

        assert calls == []
        mock_rest.create_message.assert_awaited_once()
        assert mock_rest.create_message.call_args.args == (
            message.channel_id,
            "Missing value for required argument `name`",
        )

    @pytest.mark.asyncio()
    async def test_execute_message_when_command_error(self, mock_rest: mock.Mock):
        client = parley.Client(mock_rest, prefixes=["!"])

        @client.with_command
        @parley.as_chat_command("fail")
        async def fail(ctx: parley.abc.ChatContext) -> None:
            raise parley.CommandError("Nope", private=True)

        message = _make_message("!fail")

        assert await client.execute_message(message) is True

        mock_rest.create_dm_channel.assert_awaited_once_with(message.author.id)
        assert mock_rest.create_message.call_args.args == (mock_rest.create_dm_channel.return_value.id, "Nope")

    @pytest.mark.asyncio()
    async def test_execute_message_when_unexpected_error(
        self, mock_rest: mock.Mock, caplog: pytest.LogCaptureFixture
    ):
        client = parley.Client(mock_rest, prefixes=["!"])
        error = KeyError("meow")

        @client.with_command
        @parley.as_chat_command("fail")
        async def fail(ctx: parley.abc.ChatContext) -> None:
            raise error

        with caplog.at_level(logging.ERROR, logger="hikari.parley.clients"):
            with pytest.raises(KeyError) as exc_info:
                await client.execute_message(_make_message("!fail"))

        assert exc_info.value is error
        assert "Command 'fail' raised an exception" in caplog.text
        mock_rest.create_message.assert_not_called()

    @pytest.mark.asyncio()
    async def test_execute_interaction(self, client: parley.Client, calls: list[tuple[typing.Any, ...]]):
        interaction = _make_interaction("greet", name="Bob", loud=True)
        mock_event = mock.Mock()

        assert await client.execute_interaction(interaction, event=mock_event) is True

        [(ctx, name, loud)] = calls
        assert name == "Bob"
        assert loud is True
        assert isinstance(ctx, parley.context.InteractionChatContext)
        assert ctx.interaction is interaction
        assert ctx.interaction_event is mock_event
        assert ctx.defaults_to_ephemeral is False

    @pytest.mark.asyncio()
    async def test_execute_interaction_when_ephemeral_default(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]]
    ):
        client.set_ephemeral_default(True)

        await client.execute_interaction(_make_interaction("greet", name="Bob"))

        [(ctx, _, _)] = calls
        assert ctx.defaults_to_ephemeral is True

    @pytest.mark.asyncio()
    async def test_execute_interaction_when_not_slash(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]]
    ):
        interaction = _make_interaction("greet", command_type=hikari.CommandType.USER, name="Bob")

        assert await client.execute_interaction(interaction) is False

        assert calls == []

    @pytest.mark.parametrize("name", ["unknown", "hi"])
    @pytest.mark.asyncio()
    async def test_execute_interaction_when_not_found(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]], name: str
    ):
        assert await client.execute_interaction(_make_interaction(name, name="Bob")) is False

        assert calls == []

    @pytest.mark.asyncio()
    async def test_execute_interaction_when_parser_error(
        self, client: parley.Client, calls: list[tuple[typing.Any, ...]]
    ):
        interaction = _make_interaction("greet", loud="maybe", name="Bob")

        assert await client.execute_interaction(interaction) is True

        assert calls == []
        interaction.create_initial_response.assert_awaited_once()
        message = interaction.create_initial_response.call_args.args[1]
        assert message.startswith("Couldn't convert loud `maybe`: ")

    @pytest.mark.asyncio()
    async def test_on_message_create_event(self, client: parley.Client):
        mock_event = mock.Mock()

        with mock.patch.object(parley.Client, "execute_message", new=mock.AsyncMock()) as execute_message:
            await client.on_message_create_event(mock_event)

        execute_message.assert_awaited_once_with(mock_event.message)

    @pytest.mark.asyncio()
    async def test_on_interaction_create_event(self, client: parley.Client):
        mock_event = mock.Mock(interaction=mock.Mock(hikari.CommandInteraction))

        with mock.patch.object(parley.Client, "execute_interaction", new=mock.AsyncMock()) as execute_interaction:
            await client.on_interaction_create_event(mock_event)

        execute_interaction.assert_awaited_once_with(mock_event.interaction, event=mock_event)

    @pytest.mark.asyncio()
    async def test_on_interaction_create_event_when_not_command(self, client: parley.Client):
        mock_event = mock.Mock(interaction=mock.Mock(hikari.ComponentInteraction))

        with mock.patch.object(parley.Client, "execute_interaction", new=mock.AsyncMock()) as execute_interaction:
            await client.on_interaction_create_event(mock_event)

        execute_interaction.assert_not_called()
