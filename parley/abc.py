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
"""Interfaces of the objects and clients used within Parley."""
from __future__ import annotations

__all__: list[str] = [
    "ChatCommand",
    "ChatContext",
    "Client",
    "CommandCallbackSig",
    "CommandContext",
    "Context",
    "InteractionChatContext",
    "MessageChatContext",
    "Parameter",
    "Responder",
    "TriggerType",
]

import abc
import enum
import typing

import hikari

if typing.TYPE_CHECKING:
    import datetime
    from collections import abc as collections

    import alluka
    from typing_extensions import Self


CommandCallbackSig = typing.Callable[..., typing.Coroutine[typing.Any, typing.Any, None]]
"""Type hint of the callback a [ChatCommand][parley.abc.ChatCommand] executes.

The first positional argument will be a [ChatContext][parley.abc.ChatContext]
and the parsed arguments are passed by keyword. Parameters which default to
`alluka.inject(...)` or are annotated with `alluka.Injected[...]` are left for
the client's injector to fill.
"""


class TriggerType(str, enum.Enum):
    """The mechanism a chat command was invoked through."""

    MESSAGE = "message"
    """A message prefixed with the command's name."""

    INTERACTION = "interaction"
    """A slash command interaction."""


class Responder(abc.ABC):
    """Capability of sending a response for a command invocation."""

    __slots__ = ()

    @abc.abstractmethod
    async def respond(
        self,
        content: hikari.UndefinedOr[typing.Any] = hikari.UNDEFINED,
        *,
        private: bool = False,
        mention: bool = True,
        attachment: hikari.UndefinedOr[hikari.Resourceish] = hikari.UNDEFINED,
        attachments: hikari.UndefinedOr[collections.Sequence[hikari.Resourceish]] = hikari.UNDEFINED,
        component: hikari.UndefinedOr[hikari.api.ComponentBuilder] = hikari.UNDEFINED,
        components: hikari.UndefinedOr[collections.Sequence[hikari.api.ComponentBuilder]] = hikari.UNDEFINED,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
        embeds: hikari.UndefinedOr[collections.Sequence[hikari.Embed]] = hikari.UNDEFINED,
        tts: hikari.UndefinedOr[bool] = hikari.UNDEFINED,
        mentions_everyone: hikari.UndefinedOr[bool] = hikari.UNDEFINED,
        mentions_reply: hikari.UndefinedOr[bool] = hikari.UNDEFINED,
        user_mentions: typing.Union[
            hikari.SnowflakeishSequence[hikari.PartialUser], bool, hikari.UndefinedType
        ] = hikari.UNDEFINED,
        role_mentions: typing.Union[
            hikari.SnowflakeishSequence[hikari.PartialRole], bool, hikari.UndefinedType
        ] = hikari.UNDEFINED,
    ) -> hikari.Message:
        """Respond to this invocation.

        Parameters
        ----------
        content
            If provided, the message contents. If
            [hikari.undefined.UNDEFINED][], then nothing will be sent
            in the content. Any other value here will be cast to a
            [str][].

            If this is a [hikari.embeds.Embed][] and no `embed` nor `embeds` kwarg
            is provided, then this will instead update the embed. This allows
            for simpler syntax when sending an embed alone.
        private
            Whether the response should only be delivered to the invoking user.

            For message invocations this sends the response as a direct message
            to the author, for interaction invocations this makes the response
            ephemeral.
        mention
            Whether the response should mention the invocation it's replying to.

            This is only applied when no explicit mention configuration
            (`mentions_everyone`, `mentions_reply`, `user_mentions` or
            `role_mentions`) is passed.
        attachment
            If provided, the message attachment. This can be a resource,
            or string of a path on your computer or a URL.
        attachments
            If provided, the message attachments. These can be resources, or
            strings consisting of paths on your computer or URLs.
        component
            If provided, builder object of the component to include in this message.
        components
            If provided, a sequence of the component builder objects to include
            in this message.
        embed
            If provided, the message embed.
        embeds
            If provided, the message embeds.
        tts
            If provided, whether the message will be sent as a TTS message.
        mentions_everyone
            If provided, whether the message should parse @everyone/@here
            mentions.
        mentions_reply
            If provided, whether to mention the author of the message being
            replied to.
        user_mentions
            If provided, and [True][], all user mentions will be detected.
            If provided, and [False][], all user mentions will be ignored
            if appearing in the message body.

            Alternatively this may be a collection of
            [hikari.snowflakes.Snowflake][], or [hikari.users.PartialUser][]
            derivatives to enforce mentioning specific users.
        role_mentions
            If provided, and [True][], all role mentions will be detected.
            If provided, and [False][], all role mentions will be ignored
            if appearing in the message body.

            Alternatively this may be a collection of
            [hikari.snowflakes.Snowflake][], or [hikari.guilds.PartialRole][]
            derivatives to enforce mentioning specific roles.

        Returns
        -------
        hikari.messages.Message
            The message that has been created.

        Raises
        ------
        hikari.errors.ForbiddenError
            If you are trying to respond somewhere you lack the permissions to.
        hikari.errors.NotFoundError
            If the channel or user being responded to no longer exists.
        hikari.errors.BadRequestError
            This may be raised in several discrete situations, such as messages
            being empty with no attachments or embeds; messages with more than
            2000 characters in them or embeds that exceed one of the many embed
            limits.
        """


class Context(abc.ABC):
    """Interface of the identity of a command invocation.

    This covers who invoked a command and where they invoked it.
    """

    __slots__ = ()

    @property
    @abc.abstractmethod
    def author(self) -> hikari.User:
        """Object of the user who triggered this command."""

    @property
    @abc.abstractmethod
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        """Hikari cache instance this context's client was initialised with."""

    @property
    @abc.abstractmethod
    def channel_id(self) -> hikari.Snowflake:
        """ID of the channel this command was triggered in."""

    @property
    @abc.abstractmethod
    def client(self) -> Client:
        """The [parley.abc.Client][] this context was spawned by."""

    @property
    @abc.abstractmethod
    def created_at(self) -> datetime.datetime:
        """When the invocation this context represents was created."""

    @property
    @abc.abstractmethod
    def events(self) -> typing.Optional[hikari.api.EventManager]:
        """Object of the event manager this context's client was initialised with."""

    @property
    @abc.abstractmethod
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the guild this command was executed in.

        Will be [None][] for all DM command executions.
        """

    @property
    @abc.abstractmethod
    def member(self) -> typing.Optional[hikari.Member]:
        """Guild member object of this command's author.

        Will only ever be set when [parley.abc.Context.guild_id][] is also set.
        """

    @property
    @abc.abstractmethod
    def rest(self) -> hikari.api.RESTClient:
        """Object of the Hikari REST client this context's client was initialised with."""

    @abc.abstractmethod
    async def fetch_channel(self) -> hikari.TextableChannel:
        """Fetch the channel the context was invoked in.

        Returns
        -------
        hikari.channels.TextableChannel
            The textable DM or guild channel the context was invoked in.

        Raises
        ------
        hikari.errors.ForbiddenError
            If the bot doesn't have access to the channel.
        hikari.errors.NotFoundError
            If the channel wasn't found.
        """

    @abc.abstractmethod
    async def fetch_guild(self) -> typing.Optional[hikari.Guild]:
        """Fetch the guild the context was invoked in.

        Returns
        -------
        hikari.guilds.Guild | None
            An object of the guild the context was invoked in.

            If the context was invoked in a DM channel then this will be [None][].

        Raises
        ------
        hikari.errors.ForbiddenError
            If you are not part of the guild.
        hikari.errors.NotFoundError
            If the guild is not found.
        """

    @abc.abstractmethod
    def get_channel(self) -> typing.Optional[hikari.TextableGuildChannel]:
        """Retrieve the channel the context was invoked in from the cache.

        Returns
        -------
        hikari.channels.TextableGuildChannel | None
            The object of the guild channel the context was invoked in.

            This will be [None][] if the channel is a DM channel or if the
            cache isn't enabled.
        """

    @abc.abstractmethod
    def get_guild(self) -> typing.Optional[hikari.Guild]:
        """Fetch the guild that the context was invoked in from the cache.

        Returns
        -------
        hikari.guilds.Guild | None
            An object of the guild the context was invoked in.

            If the context was invoked in a DM channel or the cache isn't
            enabled then this will be [None][].
        """


class CommandContext(Context, Responder, abc.ABC):
    """Interface of the context of a specific command's execution."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def command(self) -> typing.Any:
        """Object of the command this context is bound to.

        This is set when the context is created and never changes.
        """


class ChatContext(CommandContext, abc.ABC):
    """Interface of the context of a chat command's execution.

    This is the shared contract message and interaction triggered
    invocations are both handed to command callbacks through.
    """

    __slots__ = ()

    @property
    @abc.abstractmethod
    def arguments(self) -> collections.Sequence[typing.Any]:
        """The arguments parsed from the user input.

        These are ordered by the order in which the command's callback declared
        them. Optional parameters which weren't provided are set to their default.

        Raises
        ------
        RuntimeError
            If this is accessed before the arguments have been set.
        """

    @property
    @abc.abstractmethod
    def command(self) -> ChatCommand:
        """Object of the chat command this context is bound to."""

    @property
    @abc.abstractmethod
    def has_arguments(self) -> bool:
        """Whether the parsed arguments have been set for this context yet."""

    @property
    @abc.abstractmethod
    def trigger_type(self) -> TriggerType:
        """The mechanism this command was invoked through."""

    @abc.abstractmethod
    def set_arguments(self, arguments: collections.Iterable[typing.Any], /) -> Self:
        """Set the parsed arguments for this context.

        This should only be called by the argument parser before the command's
        callback is called.

        Parameters
        ----------
        arguments
            The arguments in the order the command's callback declares them.

        Returns
        -------
        Self
            The context to allow chaining.

        Raises
        ------
        RuntimeError
            If the arguments have already been set for this context.
        """


class MessageChatContext(ChatContext, abc.ABC):
    """Interface of a chat command context triggered by a text message."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def message(self) -> hikari.Message:
        """Object of the message which triggered this command."""

    @property
    @abc.abstractmethod
    def prefix(self) -> str:
        """The prefix that was used to invoke this command."""

    @property
    @abc.abstractmethod
    def raw_arguments(self) -> str:
        """The unparsed arguments from the message.

        This is the content of the message stripped of the
        [prefix][parley.abc.MessageChatContext.prefix] and the command name.
        """

    @property
    @abc.abstractmethod
    def triggering_name(self) -> str:
        """The command name or alias this command was triggered with."""


class InteractionChatContext(ChatContext, abc.ABC):
    """Interface of a chat command context triggered by a slash command interaction."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def defaults_to_ephemeral(self) -> bool:
        """Whether responses made without an explicit `private` are ephemeral."""

    @property
    @abc.abstractmethod
    def has_been_deferred(self) -> bool:
        """Whether the initial response has been deferred."""

    @property
    @abc.abstractmethod
    def has_responded(self) -> bool:
        """Whether an initial response has been made for this context."""

    @property
    @abc.abstractmethod
    def interaction(self) -> hikari.CommandInteraction:
        """Object of the interaction this context is for."""

    @property
    @abc.abstractmethod
    def interaction_event(self) -> typing.Optional[hikari.InteractionCreateEvent]:
        """The gateway event which delivered the interaction.

        Will be [None][] when the interaction was received over the REST
        interaction server.
        """

    @property
    @abc.abstractmethod
    def raw_arguments(self) -> collections.Mapping[str, typing.Any]:
        """Mapping of option names to the unparsed values provided for them."""

    @abc.abstractmethod
    async def defer(self, *, private: typing.Optional[bool] = None) -> None:
        """Defer the initial response for this context.

        !!! note
            If the first response after deferring asks for a different
            ephemeral state then the deferred response is deleted and the
            response is sent as a followup instead.

        Parameters
        ----------
        private
            Whether the deferred response should be ephemeral.

            Defaults to [InteractionChatContext.defaults_to_ephemeral][parley.abc.InteractionChatContext.defaults_to_ephemeral].

        Raises
        ------
        RuntimeError
            If the interaction has already been responded to or deferred.
        """


class Parameter(abc.ABC):
    """Interface of a parameter declared by a chat command's callback."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def converter(self) -> collections.Callable[[typing.Any], typing.Any]:
        """Callback used to convert raw values for this parameter."""

    @property
    @abc.abstractmethod
    def default(self) -> typing.Any:
        """Default value of this parameter.

        This will be [inspect.Parameter.empty][] for required parameters.
        """

    @property
    @abc.abstractmethod
    def is_required(self) -> bool:
        """Whether a value must be provided for this parameter."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Name of the parameter."""

    @property
    @abc.abstractmethod
    def option_type(self) -> hikari.OptionType:
        """The slash command option type used to declare this parameter."""

    @abc.abstractmethod
    def convert(self, value: typing.Any, /) -> typing.Any:
        """Convert a raw value for this parameter.

        Parameters
        ----------
        value
            The raw value to convert.

        Returns
        -------
        typing.Any
            The converted value.

        Raises
        ------
        parley.errors.ConversionError
            If the value couldn't be converted.
        """


class ChatCommand(abc.ABC):
    """Interface of a command which may be invoked by a message or a slash command."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def aliases(self) -> collections.Collection[str]:
        """Alternative names this command may be triggered by in messages."""

    @property
    @abc.abstractmethod
    def callback(self) -> CommandCallbackSig:
        """The callback this command executes."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Description of the command."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """The command's main name."""

    @property
    @abc.abstractmethod
    def names(self) -> collections.Collection[str]:
        """Every name this command may be triggered by, including aliases."""

    @property
    @abc.abstractmethod
    def parameters(self) -> collections.Sequence[Parameter]:
        """The parameters declared by this command's callback, in declaration order."""

    @abc.abstractmethod
    def build(self, rest: hikari.api.RESTClient, /) -> hikari.api.SlashCommandBuilder:
        """Get a builder object for declaring this command as a slash command.

        Parameters
        ----------
        rest
            REST client used to create the builder.

        Returns
        -------
        hikari.api.special_endpoints.SlashCommandBuilder
            The builder object for this command.
        """

    @abc.abstractmethod
    async def execute(self, ctx: ChatContext, /) -> None:
        """Execute this command's callback with the context's parsed arguments.

        Parameters
        ----------
        ctx
            The context to execute the command with.

        Raises
        ------
        RuntimeError
            If the context's arguments haven't been set yet.
        """


class Client(abc.ABC):
    """Interface of the client which owns the registered chat commands."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        """Hikari cache instance this client was initialised with."""

    @property
    @abc.abstractmethod
    def defaults_to_ephemeral(self) -> bool:
        """Whether interaction responses default to being ephemeral."""

    @property
    @abc.abstractmethod
    def events(self) -> typing.Optional[hikari.api.EventManager]:
        """Object of the event manager this client was initialised with."""

    @property
    @abc.abstractmethod
    def injector(self) -> alluka.abc.Client:
        """The dependency injection client command callbacks are called through."""

    @property
    @abc.abstractmethod
    def prefixes(self) -> collections.Collection[str]:
        """Collection of the standard prefixes set for this client."""

    @property
    @abc.abstractmethod
    def rest(self) -> hikari.api.RESTClient:
        """Object of the Hikari REST client this client was initialised with."""

    @abc.abstractmethod
    def add_command(self, command: ChatCommand, /) -> Self:
        """Add a chat command to this client.

        Parameters
        ----------
        command
            The command to add.

        Returns
        -------
        Self
            The client to allow chaining.

        Raises
        ------
        ValueError
            If one of the command's names is already registered.
        """

    @abc.abstractmethod
    def get_command(self, name: str, /) -> typing.Optional[ChatCommand]:
        """Get a registered command by one of its names.

        Parameters
        ----------
        name
            The case-insensitive name or alias of the command.

        Returns
        -------
        ChatCommand | None
            The found command, if any.
        """

    @abc.abstractmethod
    def iter_commands(self) -> collections.Iterator[ChatCommand]:
        """Iterate over the chat commands registered to this client."""

    @abc.abstractmethod
    def remove_command(self, command: ChatCommand, /) -> Self:
        """Remove a chat command from this client.

        Parameters
        ----------
        command
            The command to remove.

        Returns
        -------
        Self
            The client to allow chaining.

        Raises
        ------
        ValueError
            If the command isn't registered.
        """
