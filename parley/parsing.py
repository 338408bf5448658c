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
"""Standard chat command argument parsing.

Message invocations provide a raw string which is split into positional
arguments, while interaction invocations provide a mapping of option names to
values which are matched against the command's parameters by name.
"""
from __future__ import annotations

__all__: list[str] = ["parse_arguments", "parse_interaction_arguments", "parse_message_arguments"]

import shlex
import typing

from . import abc as parley
from . import errors

if typing.TYPE_CHECKING:
    from collections import abc as collections


def _tokenize(content: str, /) -> list[str]:
    lexer = shlex.shlex(content, posix=True)
    lexer.commenters = ""
    lexer.quotes = '"'
    lexer.whitespace = " "
    lexer.whitespace_split = True

    try:
        return list(lexer)

    except ValueError as exc:
        raise errors.ParserError(str(exc), None) from exc


def _missing(parameter: parley.Parameter, /) -> typing.Any:
    if parameter.is_required:
        raise errors.NotEnoughArgumentsError(f"Missing value for required argument `{parameter.name}`", parameter.name)

    return parameter.default


def parse_message_arguments(command: parley.ChatCommand, raw_arguments: str, /) -> list[typing.Any]:
    """Parse the raw content of a message invocation.

    Double quotes may be used to group multiple words into one argument.

    Parameters
    ----------
    command
        The command to parse arguments for.
    raw_arguments
        The message content minus the matched prefix and command name.

    Returns
    -------
    list[typing.Any]
        The converted arguments in the order the command declares them.

    Raises
    ------
    parley.errors.ParserError
        If the content has unclosed quotes.
    parley.errors.NotEnoughArgumentsError
        If a required argument wasn't provided.
    parley.errors.TooManyArgumentsError
        If more arguments were provided than the command declares.
    parley.errors.ConversionError
        If an argument couldn't be converted.
    """
    tokens = _tokenize(raw_arguments)
    parameters = command.parameters
    if len(tokens) > len(parameters):
        raise errors.TooManyArgumentsError(
            f"Too many arguments provided, expected at most {len(parameters)} but got {len(tokens)}"
        )

    results: list[typing.Any] = []
    for index, parameter in enumerate(parameters):
        if index < len(tokens):
            results.append(parameter.convert(tokens[index]))

        else:
            results.append(_missing(parameter))

    return results


def parse_interaction_arguments(
    command: parley.ChatCommand, raw_arguments: collections.Mapping[str, typing.Any], /
) -> list[typing.Any]:
    """Parse the raw options of an interaction invocation.

    Since slash commands can provide optional arguments in any order, the
    order of `raw_arguments` is irrelevant and any optional parameter which
    wasn't provided is set to its default.

    Parameters
    ----------
    command
        The command to parse arguments for.
    raw_arguments
        Mapping of option names to raw values.

    Returns
    -------
    list[typing.Any]
        The converted arguments in the order the command declares them.

    Raises
    ------
    parley.errors.NotEnoughArgumentsError
        If a required argument wasn't provided.
    parley.errors.TooManyArgumentsError
        If an option was provided which the command doesn't declare.
    parley.errors.ConversionError
        If an argument couldn't be converted.
    """
    parameters = command.parameters
    if unknown := set(raw_arguments).difference(parameter.name for parameter in parameters):
        names = ", ".join(sorted(unknown))
        raise errors.TooManyArgumentsError(f"Unexpected arguments provided: {names}")

    results: list[typing.Any] = []
    for parameter in parameters:
        if parameter.name in raw_arguments:
            results.append(parameter.convert(raw_arguments[parameter.name]))

        else:
            results.append(_missing(parameter))

    return results


def parse_arguments(ctx: parley.ChatContext, /) -> collections.Sequence[typing.Any]:
    """Parse a context's raw arguments and set them on the context.

    Parameters
    ----------
    ctx
        The context to parse arguments for.

    Returns
    -------
    collections.abc.Sequence[typing.Any]
        The parsed arguments.

    Raises
    ------
    parley.errors.ParserError
        If the raw arguments couldn't be parsed.
    RuntimeError
        If the context's arguments have already been set.
    """
    if ctx.trigger_type is parley.TriggerType.MESSAGE:
        assert isinstance(ctx, parley.MessageChatContext)
        arguments = parse_message_arguments(ctx.command, ctx.raw_arguments)

    elif ctx.trigger_type is parley.TriggerType.INTERACTION:
        assert isinstance(ctx, parley.InteractionChatContext)
        arguments = parse_interaction_arguments(ctx.command, ctx.raw_arguments)

    else:
        raise RuntimeError(f"Unknown trigger type {ctx.trigger_type}")

    ctx.set_arguments(arguments)
    return ctx.arguments
