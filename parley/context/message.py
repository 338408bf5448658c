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
"""Message triggered chat command context implementation."""
from __future__ import annotations

__all__: list[str] = ["MessageChatContext"]

import typing

import hikari

from .. import abc as parley
from . import chat

if typing.TYPE_CHECKING:
    from collections import abc as collections


class MessageChatContext(chat.ChatContext, parley.MessageChatContext):
    """Standard implementation of a chat command context triggered by a message."""

    __slots__ = ("_message", "_prefix", "_raw_arguments", "_triggering_name")

    def __init__(
        self,
        client: parley.Client,
        command: parley.ChatCommand,
        message: hikari.Message,
        /,
        *,
        prefix: str,
        raw_arguments: str,
        triggering_name: typing.Optional[str] = None,
    ) -> None:
        """Initialise a message chat command context.

        Parameters
        ----------
        client
            The Parley client this context is bound to.
        command
            The command being invoked.
        message
            The message that triggered the command.
        prefix
            The prefix that triggered this context.
        raw_arguments
            The content of the message minus the matched prefix and name.
        triggering_name
            The name or alias the command was triggered with.

            Defaults to the command's main name.

        Raises
        ------
        ValueError
            If the message has no content.
        """
        if message.content is None:
            raise ValueError("Cannot spawn context with a content-less message.")

        super().__init__(
            client,
            command,
            author=message.author,
            channel_id=message.channel_id,
            created_at=message.created_at,
            guild_id=message.guild_id,
            member=message.member,
        )
        self._message = message
        self._prefix = prefix
        self._raw_arguments = raw_arguments
        self._triggering_name = command.name if triggering_name is None else triggering_name

    def __repr__(self) -> str:
        return f"MessageChatContext <{self._message!r}, {self._command!r}>"

    @property
    def message(self) -> hikari.Message:
        # <<inherited docstring from parley.abc.MessageChatContext>>.
        return self._message

    @property
    def prefix(self) -> str:
        # <<inherited docstring from parley.abc.MessageChatContext>>.
        return self._prefix

    @property
    def raw_arguments(self) -> str:
        # <<inherited docstring from parley.abc.MessageChatContext>>.
        return self._raw_arguments

    @property
    def trigger_type(self) -> typing.Literal[parley.TriggerType.MESSAGE]:
        # <<inherited docstring from parley.abc.ChatContext>>.
        return parley.TriggerType.MESSAGE

    @property
    def triggering_name(self) -> str:
        # <<inherited docstring from parley.abc.MessageChatContext>>.
        return self._triggering_name

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
        # <<inherited docstring from parley.abc.Responder>>.
        if private:
            channel = await self._client.rest.create_dm_channel(self._message.author.id)
            return await self._client.rest.create_message(
                channel.id,
                content,
                attachment=attachment,
                attachments=attachments,
                component=component,
                components=components,
                embed=embed,
                embeds=embeds,
                tts=tts,
                mentions_everyone=mentions_everyone,
                user_mentions=user_mentions,
                role_mentions=role_mentions,
            )

        # Explicit mention configuration from the caller is passed through untouched.
        if (
            mentions_everyone is hikari.UNDEFINED
            and mentions_reply is hikari.UNDEFINED
            and user_mentions is hikari.UNDEFINED
            and role_mentions is hikari.UNDEFINED
        ):
            mentions_everyone = True
            mentions_reply = mention
            user_mentions = True
            role_mentions = True

        return await self._client.rest.create_message(
            self._message.channel_id,
            content,
            attachment=attachment,
            attachments=attachments,
            component=component,
            components=components,
            embed=embed,
            embeds=embeds,
            tts=tts,
            reply=self._message,
            mentions_everyone=mentions_everyone,
            mentions_reply=mentions_reply,
            user_mentions=user_mentions,
            role_mentions=role_mentions,
        )
