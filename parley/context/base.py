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
"""Base command context implementation."""
from __future__ import annotations

__all__: list[str] = ["BaseContext"]

import typing

import hikari

from .. import abc as parley

if typing.TYPE_CHECKING:
    import datetime


class BaseContext(parley.Context):
    """Base class for the standard command context implementations.

    This holds the immutable identity of an invocation: who invoked it,
    where they invoked it and which client it was spawned by.
    """

    __slots__ = ("_author", "_channel_id", "_client", "_created_at", "_guild_id", "_member")

    def __init__(
        self,
        client: parley.Client,
        /,
        *,
        author: hikari.User,
        channel_id: hikari.Snowflake,
        created_at: datetime.datetime,
        guild_id: typing.Optional[hikari.Snowflake] = None,
        member: typing.Optional[hikari.Member] = None,
    ) -> None:
        """Initialise a command context.

        Parameters
        ----------
        client
            The Parley client this context is bound to.
        author
            The user who invoked the command.
        channel_id
            ID of the channel the command was invoked in.
        created_at
            When the invocation was created.
        guild_id
            ID of the guild the command was invoked in, if applicable.
        member
            Guild member object of the user who invoked the command, if applicable.

        Raises
        ------
        ValueError
            If `member` is passed without `guild_id`.
        """
        if member is not None and guild_id is None:
            raise ValueError("Cannot spawn a context with a member but no guild")

        self._author = author
        self._channel_id = channel_id
        self._client = client
        self._created_at = created_at
        self._guild_id = guild_id
        self._member = member

    @property
    def author(self) -> hikari.User:
        # <<inherited docstring from parley.abc.Context>>.
        return self._author

    @property
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        # <<inherited docstring from parley.abc.Context>>.
        return self._client.cache

    @property
    def channel_id(self) -> hikari.Snowflake:
        # <<inherited docstring from parley.abc.Context>>.
        return self._channel_id

    @property
    def client(self) -> parley.Client:
        # <<inherited docstring from parley.abc.Context>>.
        return self._client

    @property
    def created_at(self) -> datetime.datetime:
        # <<inherited docstring from parley.abc.Context>>.
        return self._created_at

    @property
    def events(self) -> typing.Optional[hikari.api.EventManager]:
        # <<inherited docstring from parley.abc.Context>>.
        return self._client.events

    @property
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        # <<inherited docstring from parley.abc.Context>>.
        return self._guild_id

    @property
    def member(self) -> typing.Optional[hikari.Member]:
        # <<inherited docstring from parley.abc.Context>>.
        return self._member

    @property
    def rest(self) -> hikari.api.RESTClient:
        # <<inherited docstring from parley.abc.Context>>.
        return self._client.rest

    def get_channel(self) -> typing.Optional[hikari.TextableGuildChannel]:
        # <<inherited docstring from parley.abc.Context>>.
        if self._client.cache:
            channel = self._client.cache.get_guild_channel(self._channel_id)
            assert channel is None or isinstance(channel, hikari.TextableGuildChannel)
            return channel

        return None  # MyPy compat

    def get_guild(self) -> typing.Optional[hikari.Guild]:
        # <<inherited docstring from parley.abc.Context>>.
        if self._guild_id is not None and self._client.cache:
            return self._client.cache.get_guild(self._guild_id)

        return None  # MyPy compat

    async def fetch_channel(self) -> hikari.TextableChannel:
        # <<inherited docstring from parley.abc.Context>>.
        channel = await self._client.rest.fetch_channel(self._channel_id)
        assert isinstance(channel, hikari.TextableChannel)
        return channel

    async def fetch_guild(self) -> typing.Optional[hikari.Guild]:
        # <<inherited docstring from parley.abc.Context>>.
        if self._guild_id is not None:
            return await self._client.rest.fetch_guild(self._guild_id)

        return None  # MyPy compat
