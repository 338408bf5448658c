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
"""Helpers for waiting on message component interactions.

These are composed over a [parley.abc.Responder][] rather than being part of
the context hierarchy, so they work with both message and interaction
triggered contexts.
"""
from __future__ import annotations

__all__: list[str] = ["ComponentHelper"]

import logging
import typing
import uuid
from collections import abc as collections

import hikari

from . import abc as parley

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("hikari.parley.components")
_SELECT_MENU_TYPES = frozenset(
    (
        hikari.ComponentType.TEXT_SELECT_MENU,
        hikari.ComponentType.USER_SELECT_MENU,
        hikari.ComponentType.ROLE_SELECT_MENU,
        hikari.ComponentType.MENTIONABLE_SELECT_MENU,
        hikari.ComponentType.CHANNEL_SELECT_MENU,
    )
)

DEFAULT_TIMEOUT: typing.Final[float] = 60 * 5
"""Default time in seconds to wait for a component interaction."""


def _to_id(value: hikari.SnowflakeishOr[hikari.Unique], /) -> hikari.Snowflake:
    return value.id if isinstance(value, hikari.Unique) else hikari.Snowflake(value)


def _make_custom_id() -> str:
    return f"parley:{uuid.uuid4().hex}"


class ComponentHelper:
    """Utility for sending components and waiting for them to be used.

    Examples
    --------
    ```py
    @parley.as_chat_command("delete", "Delete everything")
    async def delete(ctx: parley.abc.ChatContext) -> None:
        helper = parley.ComponentHelper.from_context(ctx)
        if await helper.confirm("Are you sure?"):
            ...
    ```
    """

    __slots__ = ("_author_id", "_events", "_responder", "_timeout")

    def __init__(
        self,
        responder: parley.Responder,
        events: hikari.api.EventManager,
        /,
        *,
        author: typing.Optional[hikari.SnowflakeishOr[hikari.PartialUser]] = None,
        timeout: typing.Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise a component helper.

        Parameters
        ----------
        responder
            The responder used to send messages with components.
        events
            The event manager used to wait for component interactions.
        author
            If provided, only component interactions triggered by this user
            will be accepted.
        timeout
            The default time in seconds to wait for a component interaction.

            If [None][] then this will wait forever.
        """
        self._author_id = _to_id(author) if author is not None else None
        self._events = events
        self._responder = responder
        self._timeout = timeout

    @classmethod
    def from_context(
        cls, ctx: parley.CommandContext, /, *, timeout: typing.Optional[float] = DEFAULT_TIMEOUT
    ) -> ComponentHelper:
        """Build a component helper which responds through and is locked to a context's author.

        Parameters
        ----------
        ctx
            The command context to build the helper for.
        timeout
            The default time in seconds to wait for a component interaction.

        Returns
        -------
        ComponentHelper
            The built helper.

        Raises
        ------
        RuntimeError
            If the context's client has no event manager.
        """
        if ctx.events is None:
            raise RuntimeError("Component helpers require an event manager")

        return cls(ctx, ctx.events, author=ctx.author, timeout=timeout)

    @property
    def responder(self) -> parley.Responder:
        """The responder used to send messages with components."""
        return self._responder

    def _make_predicate(
        self,
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        custom_ids: typing.Optional[collections.Collection[str]],
        component_types: typing.Optional[collections.Collection[hikari.ComponentType]],
        /,
    ) -> collections.Callable[[hikari.InteractionCreateEvent], bool]:
        message_id = _to_id(message)

        def predicate(event: hikari.InteractionCreateEvent, /) -> bool:
            interaction = event.interaction
            if not isinstance(interaction, hikari.ComponentInteraction) or interaction.message.id != message_id:
                return False

            if custom_ids is not None and interaction.custom_id not in custom_ids:
                return False

            if component_types is not None and interaction.component_type not in component_types:
                return False

            if self._author_id is not None and interaction.user.id != self._author_id:
                _LOGGER.debug("Ignoring component interaction from user %s", interaction.user.id)
                return False

            return True

        return predicate

    async def wait_for_component(
        self,
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
        *,
        custom_ids: typing.Optional[collections.Collection[str]] = None,
        timeout: hikari.UndefinedNoneOr[float] = hikari.UNDEFINED,
        component_types: typing.Optional[collections.Collection[hikari.ComponentType]] = None,
    ) -> hikari.ComponentInteraction:
        """Wait for a component on a message to be used.

        !!! note
            The returned interaction isn't acknowledged.

        Parameters
        ----------
        message
            The message to wait for a component interaction on.
        custom_ids
            If provided, only components with these custom IDs will be accepted.
        timeout
            Time in seconds to wait for.

            Defaults to this helper's timeout.
        component_types
            If provided, only these component types will be accepted.

        Returns
        -------
        hikari.interactions.component_interactions.ComponentInteraction
            The component interaction which was received.

        Raises
        ------
        asyncio.TimeoutError
            If the timeout is reached.
        """
        if timeout is hikari.UNDEFINED:
            timeout = self._timeout

        event = await self._events.wait_for(
            hikari.InteractionCreateEvent,
            timeout=timeout,
            predicate=self._make_predicate(message, custom_ids, component_types),
        )
        assert isinstance(event.interaction, hikari.ComponentInteraction)
        return event.interaction

    async def wait_for_button(
        self,
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
        *,
        custom_ids: typing.Optional[collections.Collection[str]] = None,
        timeout: hikari.UndefinedNoneOr[float] = hikari.UNDEFINED,
    ) -> hikari.ComponentInteraction:
        """Wait for a button on a message to be pressed.

        Parameters
        ----------
        message
            The message to wait for a button press on.
        custom_ids
            If provided, only buttons with these custom IDs will be accepted.
        timeout
            Time in seconds to wait for.

            Defaults to this helper's timeout.

        Returns
        -------
        hikari.interactions.component_interactions.ComponentInteraction
            The button interaction which was received.

        Raises
        ------
        asyncio.TimeoutError
            If the timeout is reached.
        """
        return await self.wait_for_component(
            message, custom_ids=custom_ids, timeout=timeout, component_types=(hikari.ComponentType.BUTTON,)
        )

    async def wait_for_selection(
        self,
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
        *,
        custom_ids: typing.Optional[collections.Collection[str]] = None,
        timeout: hikari.UndefinedNoneOr[float] = hikari.UNDEFINED,
    ) -> tuple[hikari.ComponentInteraction, collections.Sequence[str]]:
        """Wait for a select menu on a message to be used.

        Parameters
        ----------
        message
            The message to wait for a selection on.
        custom_ids
            If provided, only select menus with these custom IDs will be accepted.
        timeout
            Time in seconds to wait for.

            Defaults to this helper's timeout.

        Returns
        -------
        tuple[hikari.interactions.component_interactions.ComponentInteraction, collections.abc.Sequence[str]]
            The select menu interaction which was received and the selected values.

        Raises
        ------
        asyncio.TimeoutError
            If the timeout is reached.
        """
        interaction = await self.wait_for_component(
            message, custom_ids=custom_ids, timeout=timeout, component_types=_SELECT_MENU_TYPES
        )
        return interaction, interaction.values

    async def confirm(
        self,
        content: hikari.UndefinedOr[typing.Any] = hikari.UNDEFINED,
        /,
        *,
        confirm_label: str = "Yes",
        deny_label: str = "No",
        private: bool = False,
        timeout: hikari.UndefinedNoneOr[float] = hikari.UNDEFINED,
    ) -> bool:
        """Ask the user to confirm something using two buttons.

        Parameters
        ----------
        content
            Content of the message to send with the buttons.
        confirm_label
            Label of the confirm button.
        deny_label
            Label of the deny button.
        private
            Whether the message should only be delivered to the invoking user.
        timeout
            Time in seconds to wait for.

            Defaults to this helper's timeout.

        Returns
        -------
        bool
            Whether the confirm button was pressed.

        Raises
        ------
        asyncio.TimeoutError
            If the timeout is reached.
        """
        confirm_id = _make_custom_id()
        deny_id = _make_custom_id()
        row = hikari.impl.MessageActionRowBuilder()
        row.add_interactive_button(hikari.ButtonStyle.SUCCESS, confirm_id, label=confirm_label)
        row.add_interactive_button(hikari.ButtonStyle.DANGER, deny_id, label=deny_label)

        message = await self._responder.respond(content, component=row, private=private)
        interaction = await self.wait_for_button(message, custom_ids=(confirm_id, deny_id), timeout=timeout)
        await interaction.create_initial_response(hikari.ResponseType.DEFERRED_MESSAGE_UPDATE)
        return interaction.custom_id == confirm_id

    async def choose(
        self,
        content: hikari.UndefinedOr[typing.Any],
        choices: typing.Union[collections.Mapping[str, str], collections.Iterable[str]],
        /,
        *,
        placeholder: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        private: bool = False,
        timeout: hikari.UndefinedNoneOr[float] = hikari.UNDEFINED,
    ) -> str:
        """Ask the user to pick one of several choices using a select menu.

        Parameters
        ----------
        content
            Content of the message to send with the select menu.
        choices
            Either a mapping of labels to values or an iterable of values to
            use as their own labels.

            This must contain between 1 and 25 choices.
        placeholder
            Placeholder text shown in the select menu.
        private
            Whether the message should only be delivered to the invoking user.
        timeout
            Time in seconds to wait for.

            Defaults to this helper's timeout.

        Returns
        -------
        str
            The value of the selected choice.

        Raises
        ------
        ValueError
            If less than 1 or more than 25 choices are passed.
        asyncio.TimeoutError
            If the timeout is reached.
        """
        if not isinstance(choices, collections.Mapping):
            choices = {choice: choice for choice in choices}

        if not 1 <= len(choices) <= 25:
            raise ValueError("Between 1 and 25 choices must be provided")

        custom_id = _make_custom_id()
        row = hikari.impl.MessageActionRowBuilder()
        menu = row.add_text_menu(custom_id, placeholder=placeholder)
        for label, value in choices.items():
            menu.add_option(label, value)

        message = await self._responder.respond(content, component=row, private=private)
        interaction, values = await self.wait_for_selection(message, custom_ids=(custom_id,), timeout=timeout)
        await interaction.create_initial_response(hikari.ResponseType.DEFERRED_MESSAGE_UPDATE)
        return values[0]
