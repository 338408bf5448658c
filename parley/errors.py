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
"""The errors raised within and by Parley."""
from __future__ import annotations

__all__: list[str] = [
    "CommandError",
    "ConversionError",
    "NotEnoughArgumentsError",
    "ParleyError",
    "ParserError",
    "TooManyArgumentsError",
]

import typing

import hikari

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from . import abc as parley


class ParleyError(Exception):
    """The base class for all errors raised by Parley."""


class CommandError(ParleyError):
    """An error which is sent as a response to the command call.

    Raising this from a command callback ends execution and sends `content`
    to the user through the context's [parley.abc.Responder.respond][].
    """

    content: str
    """The response error message's content."""

    private: bool
    """Whether the error message should only be shown to the command's author."""

    def __init__(self, content: str, /, *, private: bool = False) -> None:
        """Initialise a command error.

        Parameters
        ----------
        content
            String content of the error message to send to the user.
        private
            Whether the error message should only be shown to the command's author.

        Raises
        ------
        ValueError
            If an empty string is passed for `content`.
        """
        if not content:
            raise ValueError("Response content must be at least 1 character long")

        self.content = content
        self.private = private

    def __str__(self) -> str:
        return self.content

    async def send(self, ctx: parley.CommandContext, /) -> hikari.Message:
        """Send this error as a command response.

        Parameters
        ----------
        ctx
            The command call context to respond to.

        Returns
        -------
        hikari.messages.Message
            The message that was sent.
        """
        return await ctx.respond(self.content, private=self.private)


class ParserError(ParleyError, ValueError):
    """Base error raised by a parser or parameter during parsing.

    !!! note
        Expected errors raised by the parser will subclass this error.
    """

    message: str
    """String message for this error.

    !!! note
        This may be used as a command response message.
    """

    parameter: typing.Optional[str]
    """Name of the parameter which caused this error, should be [None][] if not applicable."""

    def __init__(self, message: str, parameter: typing.Optional[str], /) -> None:
        """Initialise a parser error.

        Parameters
        ----------
        message
            String message for this error.
        parameter
            Name of the parameter which caused this error.
        """
        self.message = message
        self.parameter = parameter

    def __str__(self) -> str:
        return self.message


class ConversionError(ParserError):
    """Error raised by a parser parameter when it failed to convert a value."""

    errors: collections.Sequence[ValueError]
    """Sequence of the errors that were caught during conversion for this parameter."""

    parameter: str
    """Name of the parameter this error was raised for."""

    def __init__(self, message: str, parameter: str, /, errors: collections.Iterable[ValueError] = ()) -> None:
        """Initialise a conversion error.

        Parameters
        ----------
        message
            The error message.
        parameter
            The parameter this error was raised for.
        errors
            An iterable of the source value errors which were raised during conversion.
        """
        super().__init__(message, parameter)
        self.errors = tuple(errors)


class NotEnoughArgumentsError(ParserError):
    """Error raised by the parser when not enough arguments are found for a parameter."""

    parameter: str
    """Name of the parameter this error was raised for."""

    def __init__(self, message: str, parameter: str, /) -> None:
        """Initialise a not enough arguments error.

        Parameters
        ----------
        message
            The error message.
        parameter
            The parameter this error was raised for.
        """
        super().__init__(message, parameter)


class TooManyArgumentsError(ParserError):
    """Error raised by the parser when too many arguments are found."""

    def __init__(self, message: str, /) -> None:
        """Initialise a too many arguments error.

        Parameters
        ----------
        message
            The error message.
        """
        super().__init__(message, None)
