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
"""Interaction triggered chat command context implementation."""
from __future__ import annotations

__all__: list[str] = ["InteractionChatContext"]

import asyncio
import typing

import hikari

from .. import abc as parley
from . import chat

if typing.TYPE_CHECKING:
    from collections import abc as collections


def _options_to_mapping(
    options: typing.Optional[collections.Sequence[hikari.CommandInteractionOption]], /
) -> dict[str, typing.Any]:
    return {option.name: option.value for option in options or ()}


class InteractionChatContext(chat.ChatContext, parley.InteractionChatContext):
    """Standard implementation of a chat command context triggered by a slash command."""

    __slots__ = (
        "_defaults_to_ephemeral",
        "_deferred_flags",
        "_has_been_deferred",
        "_has_responded",
        "_interaction",
        "_interaction_event",
        "_raw_arguments",
        "_response_lock",
    )

    def __init__(
        self,
        client: parley.Client,
        command: parley.ChatCommand,
        interaction: hikari.CommandInteraction,
        /,
        *,
        default_to_ephemeral: bool = False,
        interaction_event: typing.Optional[hikari.InteractionCreateEvent] = None,
        raw_arguments: typing.Optional[collections.Mapping[str, typing.Any]] = None,
    ) -> None:
        """Initialise an interaction chat command context.

        Parameters
        ----------
        client
            The Parley client this context is bound to.
        command
            The command being invoked.
        interaction
            The command interaction this context is for.
        default_to_ephemeral
            Whether responses made without an explicit `private` should be ephemeral.
        interaction_event
            The gateway event which delivered the interaction, if applicable.
        raw_arguments
            Mapping of option names to raw values.

            Defaults to the top-level options provided with the interaction.
        """
        super().__init__(
            client,
            command,
            author=interaction.user,
            channel_id=interaction.channel_id,
            created_at=interaction.created_at,
            guild_id=interaction.guild_id,
            member=interaction.member,
        )
        self._defaults_to_ephemeral = default_to_ephemeral
        self._deferred_flags = hikari.MessageFlag.NONE
        self._has_been_deferred = False
        self._has_responded = False
        self._interaction = interaction
        self._interaction_event = interaction_event
        self._raw_arguments = (
            dict(raw_arguments) if raw_arguments is not None else _options_to_mapping(interaction.options)
        )
        self._response_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"InteractionChatContext <{self._interaction!r}, {self._command!r}>"

    @property
    def defaults_to_ephemeral(self) -> bool:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        return self._defaults_to_ephemeral

    @property
    def has_been_deferred(self) -> bool:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        return self._has_been_deferred

    @property
    def has_responded(self) -> bool:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        return self._has_responded

    @property
    def interaction(self) -> hikari.CommandInteraction:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        return self._interaction

    @property
    def interaction_event(self) -> typing.Optional[hikari.InteractionCreateEvent]:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        return self._interaction_event

    @property
    def raw_arguments(self) -> collections.Mapping[str, typing.Any]:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        return self._raw_arguments.copy()

    @property
    def trigger_type(self) -> typing.Literal[parley.TriggerType.INTERACTION]:
        # <<inherited docstring from parley.abc.ChatContext>>.
        return parley.TriggerType.INTERACTION

    def _get_flags(self, private: typing.Optional[bool], /) -> hikari.MessageFlag:
        if private is None:
            private = self._defaults_to_ephemeral

        return hikari.MessageFlag.EPHEMERAL if private else hikari.MessageFlag.NONE

    async def defer(self, *, private: typing.Optional[bool] = None) -> None:
        # <<inherited docstring from parley.abc.InteractionChatContext>>.
        async with self._response_lock:
            if self._has_responded or self._has_been_deferred:
                raise RuntimeError("Context has already been responded to")

            flags = self._get_flags(private)
            await self._interaction.create_initial_response(hikari.ResponseType.DEFERRED_MESSAGE_CREATE, flags=flags)
            self._deferred_flags = flags
            self._has_been_deferred = True

    async def respond(
        self,
        content: hikari.UndefinedOr[typing.Any] = hikari.UNDEFINED,
        *,
        private: typing.Optional[bool] = None,
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
        # <<inherited docstring from parley.abc.Responder>>.
        # Interaction responses aren't replies so `mentions_reply` has nothing to apply to.
        if (
            not mention
            and mentions_everyone is hikari.UNDEFINED
            and mentions_reply is hikari.UNDEFINED
            and user_mentions is hikari.UNDEFINED
            and role_mentions is hikari.UNDEFINED
        ):
            user_mentions = False

        flags = self._get_flags(private)
        async with self._response_lock:
            # A deferred response's ephemeral state can't be changed by editing it.
            if not self._has_responded and self._has_been_deferred and flags != self._deferred_flags:
                await self._interaction.delete_initial_response()
                self._has_responded = True

            if self._has_responded:
                return await self._interaction.execute(
                    content,
                    attachment=attachment,
                    attachments=attachments,
                    component=component,
                    components=components,
                    embed=embed,
                    embeds=embeds,
                    tts=tts,
                    flags=flags,
                    mentions_everyone=mentions_everyone,
                    user_mentions=user_mentions,
                    role_mentions=role_mentions,
                )

            if self._has_been_deferred:
                message = await self._interaction.edit_initial_response(
                    content,
                    attachment=attachment,
                    attachments=attachments,
                    component=component,
                    components=components,
                    embed=embed,
                    embeds=embeds,
                    mentions_everyone=mentions_everyone,
                    user_mentions=user_mentions,
                    role_mentions=role_mentions,
                )
                self._has_responded = True
                return message

            await self._interaction.create_initial_response(
                hikari.ResponseType.MESSAGE_CREATE,
                content,
                attachment=attachment,
                attachments=attachments,
                component=component,
                components=components,
                embed=embed,
                embeds=embeds,
                tts=tts,
                flags=flags,
                mentions_everyone=mentions_everyone,
                user_mentions=user_mentions,
                role_mentions=role_mentions,
            )
            self._has_responded = True
            return await self._interaction.fetch_initial_response()
