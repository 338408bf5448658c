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
"""Parley's standard command client and dispatcher."""
from __future__ import annotations

__all__: list[str] = ["Client", "PrefixGetterSig", "on_parser_error"]

import logging
import typing
from collections import abc as collections

import alluka
import hikari

from . import abc as parley
from . import context
from . import errors
from . import parsing

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import config as config_

    _PrefixGetterSigT = typing.TypeVar("_PrefixGetterSigT", bound="PrefixGetterSig")


PrefixGetterSig = collections.Callable[[hikari.Message], collections.Awaitable[collections.Iterable[str]]]
"""Type hint of a callable used to get the prefixes valid for a specific message."""

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("hikari.parley.clients")


async def on_parser_error(ctx: parley.ChatContext, error: errors.ParserError) -> None:
    """Handle argument parser errors.

    This is the default parser error handler used by [parley.Client][].
    """
    await ctx.respond(error.message)


def _try_unsubscribe(
    event_manager: hikari.api.EventManager,
    event_type: type[hikari.Event],
    callback: collections.Callable[..., collections.Coroutine[typing.Any, typing.Any, None]],
) -> None:
    try:
        event_manager.unsubscribe(event_type, callback)
    except (ValueError, LookupError):
        _LOGGER.debug("Listener for %s was already unsubscribed", event_type.__name__)


class Client(parley.Client):
    """Parley's standard command client.

    This owns the registered chat commands, decides which command an event
    triggers, builds the relevant context for it and runs it.
    """

    __slots__ = (
        "_cache",
        "_commands",
        "_declare_commands",
        "_defaults_to_ephemeral",
        "_events",
        "_grab_mention_prefix",
        "_human_only",
        "_injector",
        "_is_alive",
        "_names",
        "_prefix_getter",
        "_prefixes",
        "_rest",
    )

    def __init__(
        self,
        rest: hikari.api.RESTClient,
        *,
        cache: typing.Optional[hikari.api.Cache] = None,
        events: typing.Optional[hikari.api.EventManager] = None,
        injector: typing.Optional[alluka.abc.Client] = None,
        prefixes: collections.Iterable[str] = (),
        mention_prefix: bool = False,
        default_to_ephemeral: bool = False,
        human_only: bool = True,
        declare_commands: typing.Union[hikari.SnowflakeishOr[hikari.PartialGuild], bool] = False,
    ) -> None:
        """Initialise a Parley client.

        !!! note
            For a quicker way to initialise this client from a relevant Hikari
            client you can use [Client.from_gateway_bot][parley.Client.from_gateway_bot].

        Parameters
        ----------
        rest
            The Hikari REST client this will use.
        cache
            The Hikari cache client this will use if applicable.
        events
            The Hikari event manager client this will use if applicable.

            This is necessary for message command dispatch and component helpers.
        injector
            The alluka client command callbacks should be called through.

            If not provided then the client will initialise its own DI client.
        prefixes
            The prefixes message commands can be triggered with.
        mention_prefix
            Whether the bot's mention should be accepted as a prefix.

            This is set when the client is first opened.
        default_to_ephemeral
            Whether interaction responses should default to being ephemeral.
        human_only
            Whether messages from bots and webhooks should be ignored.
        declare_commands
            Whether to declare the registered commands as slash commands when
            this client is opened.

            If a guild is passed then the commands are declared for that guild.
        """
        self._cache = cache
        self._commands: dict[str, parley.ChatCommand] = {}
        self._declare_commands = declare_commands
        self._defaults_to_ephemeral = default_to_ephemeral
        self._events = events
        self._grab_mention_prefix = mention_prefix
        self._human_only = human_only
        self._injector = injector or alluka.Client()
        self._is_alive = False
        self._names: dict[str, parley.ChatCommand] = {}
        self._prefix_getter: typing.Optional[PrefixGetterSig] = None
        self._prefixes: list[str] = []
        self._rest = rest
        self.add_prefix(prefixes)

    @classmethod
    def from_gateway_bot(
        cls,
        bot: hikari.GatewayBotAware,
        /,
        *,
        config: typing.Optional[config_.ClientConfig] = None,
        event_managed: bool = True,
        injector: typing.Optional[alluka.abc.Client] = None,
    ) -> Client:
        """Build a [parley.Client][] from a [hikari.traits.GatewayBotAware][] instance.

        Parameters
        ----------
        bot
            The bot client to build from.
        config
            Settings to initialise the client with.
        event_managed
            Whether this client should be opened and closed based on the bot's
            lifetime events.
        injector
            The alluka client command callbacks should be called through.

        Returns
        -------
        Client
            The initialised client.
        """
        kwargs: dict[str, typing.Any] = {}
        if config is not None:
            kwargs.update(
                prefixes=config.prefixes,
                mention_prefix=config.mention_prefix,
                default_to_ephemeral=config.default_to_ephemeral,
                human_only=config.human_only,
                declare_commands=config.declare_commands,
            )

        client = cls(bot.rest, cache=bot.cache, events=bot.event_manager, injector=injector, **kwargs)
        if event_managed:
            bot.event_manager.subscribe(hikari.StartingEvent, client._on_starting)
            bot.event_manager.subscribe(hikari.StoppingEvent, client._on_stopping)

        return client

    def __repr__(self) -> str:
        return f"Client <{self._commands!r}, {self._prefixes!r}>"

    @property
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        # <<inherited docstring from parley.abc.Client>>.
        return self._cache

    @property
    def defaults_to_ephemeral(self) -> bool:
        # <<inherited docstring from parley.abc.Client>>.
        return self._defaults_to_ephemeral

    @property
    def events(self) -> typing.Optional[hikari.api.EventManager]:
        # <<inherited docstring from parley.abc.Client>>.
        return self._events

    @property
    def injector(self) -> alluka.abc.Client:
        # <<inherited docstring from parley.abc.Client>>.
        return self._injector

    @property
    def is_alive(self) -> bool:
        """Whether this client has been opened."""
        return self._is_alive

    @property
    def is_human_only(self) -> bool:
        """Whether messages from bots and webhooks are ignored."""
        return self._human_only

    @property
    def prefix_getter(self) -> typing.Optional[PrefixGetterSig]:
        """The prefix getter method set for this client."""
        return self._prefix_getter

    @property
    def prefixes(self) -> collections.Collection[str]:
        # <<inherited docstring from parley.abc.Client>>.
        return self._prefixes.copy()

    @property
    def rest(self) -> hikari.api.RESTClient:
        # <<inherited docstring from parley.abc.Client>>.
        return self._rest

    async def _on_starting(self, _: hikari.StartingEvent, /) -> None:
        await self.open()

    async def _on_stopping(self, _: hikari.StoppingEvent, /) -> None:
        await self.close()

    def add_command(self, command: parley.ChatCommand, /) -> Self:
        # <<inherited docstring from parley.abc.Client>>.
        if conflicts := [name for name in command.names if name.lower() in self._names]:
            raise ValueError(f"Command names already registered: {', '.join(conflicts)}")

        self._commands[command.name] = command
        for name in command.names:
            self._names[name.lower()] = command

        return self

    def remove_command(self, command: parley.ChatCommand, /) -> Self:
        # <<inherited docstring from parley.abc.Client>>.
        if self._commands.get(command.name) is not command:
            raise ValueError(f"Command {command.name!r} isn't registered")

        del self._commands[command.name]
        for name in command.names:
            del self._names[name.lower()]

        return self

    def with_command(self, command: parley.ChatCommand, /) -> parley.ChatCommand:
        """Add a chat command to this client through a decorator call.

        Examples
        --------
        ```py
        @client.with_command
        @parley.as_chat_command("ping", "Ping the bot")
        async def ping(ctx: parley.abc.ChatContext) -> None:
            await ctx.respond("Pong!")
        ```

        Parameters
        ----------
        command
            The command to add.

        Returns
        -------
        parley.abc.ChatCommand
            The added command.
        """
        self.add_command(command)
        return command

    def get_command(self, name: str, /) -> typing.Optional[parley.ChatCommand]:
        # <<inherited docstring from parley.abc.Client>>.
        return self._names.get(name.lower())

    def iter_commands(self) -> collections.Iterator[parley.ChatCommand]:
        # <<inherited docstring from parley.abc.Client>>.
        return iter(self._commands.copy().values())

    def add_prefix(self, prefixes: typing.Union[collections.Iterable[str], str], /) -> Self:
        """Add a prefix used to filter message command calls.

        Parameters
        ----------
        prefixes
            Either a single string or an iterable of strings to be used as
            prefixes.

        Returns
        -------
        Self
            The client instance to enable chained calls.
        """
        if isinstance(prefixes, str):
            if prefixes not in self._prefixes:
                self._prefixes.append(prefixes)

        else:
            self._prefixes.extend(prefix for prefix in prefixes if prefix not in self._prefixes)

        return self

    def remove_prefix(self, prefix: str, /) -> Self:
        """Remove a message content prefix from the client.

        Parameters
        ----------
        prefix
            The prefix to remove.

        Raises
        ------
        ValueError
            If the prefix is not registered with the client.

        Returns
        -------
        Self
            The client instance to enable chained calls.
        """
        self._prefixes.remove(prefix)
        return self

    def set_prefix_getter(self, getter: typing.Optional[PrefixGetterSig], /) -> Self:
        """Set the callback used to retrieve message prefixes for a specific message.

        Parameters
        ----------
        getter
            The callback which'll be used to retrieve prefixes for the message
            being processed.

            If [None][] is passed here then the callback will be unset.

        Returns
        -------
        Self
            The client instance to enable chained calls.
        """
        self._prefix_getter = getter
        return self

    def with_prefix_getter(self, getter: _PrefixGetterSigT, /) -> _PrefixGetterSigT:
        """Set the prefix getter callback for this client through a decorator call.

        Parameters
        ----------
        getter
            The callback which'll be used to retrieve prefixes for the message
            being processed.

        Returns
        -------
        PrefixGetterSig
            The registered callback.
        """
        self.set_prefix_getter(getter)
        return getter

    def set_ephemeral_default(self, state: bool, /) -> Self:
        """Set whether interaction responses should default to being ephemeral.

        Parameters
        ----------
        state
            Whether interaction responses should default to being ephemeral.

        Returns
        -------
        Self
            This client to enable method chaining.
        """
        self._defaults_to_ephemeral = state
        return self

    def set_human_only(self, value: bool = True) -> Self:
        """Set whether messages from bots and webhooks should be ignored.

        Parameters
        ----------
        value
            Whether to ignore messages from bots and webhooks.

        Returns
        -------
        Self
            This client to enable method chaining.
        """
        self._human_only = value
        return self

    async def _check_prefix(self, message: hikari.Message, content: str, /) -> typing.Optional[str]:
        if self._prefix_getter:
            for prefix in await self._prefix_getter(message):
                if content.startswith(prefix):
                    return prefix

        for prefix in self._prefixes:
            if content.startswith(prefix):
                return prefix

        return None

    async def open(self) -> None:
        """Start the client.

        If `mention_prefix` was passed then this may make a request to Discord
        if it cannot get the current user from the cache.

        Raises
        ------
        RuntimeError
            If the client is already active.
        """
        if self._is_alive:
            raise RuntimeError("Client is already alive")

        if self._grab_mention_prefix:
            user: typing.Optional[hikari.OwnUser] = None
            if self._cache:
                user = self._cache.get_me()

            if not user:
                user = await self._rest.fetch_my_user()

            self.add_prefix((f"<@{user.id}>", f"<@!{user.id}>"))
            self._grab_mention_prefix = False

        if self._events:
            self._events.subscribe(hikari.MessageCreateEvent, self.on_message_create_event)
            self._events.subscribe(hikari.InteractionCreateEvent, self.on_interaction_create_event)

        self._is_alive = True
        if self._declare_commands is True:
            await self.declare_commands()

        elif self._declare_commands is not False:
            await self.declare_commands(guild=self._declare_commands)

    async def close(self) -> None:
        """Close the client.

        Raises
        ------
        RuntimeError
            If the client isn't running.
        """
        if not self._is_alive:
            raise RuntimeError("Client isn't active")

        if self._events:
            _try_unsubscribe(self._events, hikari.MessageCreateEvent, self.on_message_create_event)
            _try_unsubscribe(self._events, hikari.InteractionCreateEvent, self.on_interaction_create_event)

        self._is_alive = False

    async def declare_commands(
        self, *, guild: hikari.UndefinedOr[hikari.SnowflakeishOr[hikari.PartialGuild]] = hikari.UNDEFINED
    ) -> collections.Sequence[hikari.PartialCommand]:
        """Declare this client's commands as slash commands.

        !!! warning
            This overwrites any slash commands already declared in the target.

        Parameters
        ----------
        guild
            The guild to declare the commands in.

            If left as [hikari.undefined.UNDEFINED][] then the commands are
            declared globally.

        Returns
        -------
        collections.abc.Sequence[hikari.commands.PartialCommand]
            API representations of the declared commands.
        """
        application = await self._rest.fetch_application()
        builders = [command.build(self._rest) for command in self._commands.values()]
        target_type = "global" if guild is hikari.UNDEFINED else f"guild {int(guild)}"
        _LOGGER.info("Declaring %s %s slash commands", len(builders), target_type)
        responses = await self._rest.set_application_commands(application.id, builders, guild=guild)
        _LOGGER.info("Successfully declared %s %s slash commands", len(responses), target_type)
        return responses

    async def _execute(self, ctx: parley.ChatContext, /) -> None:
        try:
            parsing.parse_arguments(ctx)

        except errors.ParserError as exc:
            _LOGGER.debug("Failed to parse arguments for %r", ctx.command.name, exc_info=exc)
            await on_parser_error(ctx, exc)
            return

        try:
            await ctx.command.execute(ctx)

        except errors.CommandError as exc:
            await exc.send(ctx)

        except Exception as exc:
            _LOGGER.error("Command %r raised an exception", ctx.command.name, exc_info=exc)
            raise

    async def execute_message(self, message: hikari.Message, /) -> bool:
        """Execute a chat command based on a message.

        Parameters
        ----------
        message
            The message to execute a command based on.

        Returns
        -------
        bool
            Whether a command was found and executed.
        """
        if message.content is None:
            return False

        if self._human_only and (message.author.is_bot or message.webhook_id is not None):
            return False

        content = message.content.lstrip()
        if (prefix := await self._check_prefix(message, content)) is None:
            return False

        parts = content[len(prefix) :].split(maxsplit=1)
        if not parts:
            return False

        name = parts[0]
        if not (command := self.get_command(name)):
            _LOGGER.debug("No command found for message name %r", name)
            return False

        raw_arguments = parts[1] if len(parts) > 1 else ""
        ctx = context.MessageChatContext(
            self, command, message, prefix=prefix, raw_arguments=raw_arguments, triggering_name=name
        )
        await self._execute(ctx)
        return True

    async def execute_interaction(
        self,
        interaction: hikari.CommandInteraction,
        /,
        *,
        event: typing.Optional[hikari.InteractionCreateEvent] = None,
    ) -> bool:
        """Execute a chat command based on a slash command interaction.

        Parameters
        ----------
        interaction
            The interaction to execute a command based on.
        event
            The gateway event which delivered the interaction, if applicable.

        Returns
        -------
        bool
            Whether a command was found and executed.
        """
        if interaction.command_type is not hikari.CommandType.SLASH:
            return False

        if not (command := self._commands.get(interaction.command_name)):
            _LOGGER.debug("No command found for slash command %r", interaction.command_name)
            return False

        ctx = context.InteractionChatContext(
            self,
            command,
            interaction,
            default_to_ephemeral=self._defaults_to_ephemeral,
            interaction_event=event,
        )
        await self._execute(ctx)
        return True

    async def on_message_create_event(self, event: hikari.MessageCreateEvent, /) -> None:
        """Execute a chat command based on a gateway message create event.

        Parameters
        ----------
        event
            The event to handle.
        """
        await self.execute_message(event.message)

    async def on_interaction_create_event(self, event: hikari.InteractionCreateEvent, /) -> None:
        """Execute a chat command based on a gateway interaction create event.

        Parameters
        ----------
        event
            The event to handle.
        """
        if isinstance(event.interaction, hikari.CommandInteraction):
            await self.execute_interaction(event.interaction, event=event)
