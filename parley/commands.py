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
"""Standard chat command implementation."""
from __future__ import annotations

__all__: list[str] = ["ChatCommand", "Parameter", "as_chat_command"]

import inspect
import types
import typing
import unicodedata

import alluka
import hikari

from . import abc as parley
from . import conversion
from . import errors

if typing.TYPE_CHECKING:
    from collections import abc as collections

_CommandCallbackSigT = typing.TypeVar("_CommandCallbackSigT", bound=parley.CommandCallbackSig)

_VALID_NAME_UNICODE_CATEGORIES = frozenset(("Lu", "Ll", "Lt", "Lm", "Lo", "Nd", "Nl", "No"))
_VALID_NAME_CHARACTERS = frozenset(("-", "_"))
_INJECTED_MARKERS = typing.get_args(alluka.Injected[int])[1:]


def _check_name_char(character: str) -> bool:
    # `^[-_\p{L}\p{N}]{1,32}$`
    return character in _VALID_NAME_CHARACTERS or unicodedata.category(character) in _VALID_NAME_UNICODE_CATEGORIES


def _validate_name(name: str, /) -> str:
    if not 1 <= len(name) <= 32:
        raise ValueError(f"Name must be between 1 and 32 characters long, not {len(name)}: {name!r}")

    if name != name.lower():
        raise ValueError(f"Name must be lowercase: {name!r}")

    if not all(map(_check_name_char, name)):
        raise ValueError(
            f"Invalid name provided, {name!r} doesn't match the required regex `^[-_\\p{{L}}\\p{{N}}]{{1,32}}$`"
        )

    return name


def _unwrap_optional(annotation: typing.Any, /) -> typing.Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is getattr(types, "UnionType", None):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]

    return annotation


def _is_injected(parameter: inspect.Parameter, annotation: typing.Any, /) -> bool:
    if isinstance(parameter.default, alluka.InjectedDescriptor):
        return True

    if typing.get_origin(annotation) is typing.Annotated:
        return any(marker in _INJECTED_MARKERS for marker in typing.get_args(annotation)[1:])

    return False


class Parameter(parley.Parameter):
    """Standard implementation of a chat command parameter."""

    __slots__ = ("_converter", "_default", "_name", "_option_type")

    def __init__(
        self,
        name: str,
        /,
        *,
        converter: collections.Callable[[typing.Any], typing.Any] = str,
        default: typing.Any = inspect.Parameter.empty,
        option_type: hikari.OptionType = hikari.OptionType.STRING,
    ) -> None:
        """Initialise a chat command parameter.

        Parameters
        ----------
        name
            Name of the parameter.
        converter
            Callback used to convert raw values for this parameter.
        default
            Default value used when no value is provided.

            If left as [inspect.Parameter.empty][] then this parameter is required.
        option_type
            The slash command option type to declare this parameter with.
        """
        self._converter = converter
        self._default = default
        self._name = name
        self._option_type = option_type

    @classmethod
    def from_signature(cls, parameter: inspect.Parameter, annotation: typing.Any, /) -> Parameter:
        """Build a parameter from a callback's signature parameter.

        Parameters
        ----------
        parameter
            The signature parameter.
        annotation
            The parameter's resolved type annotation.

        Returns
        -------
        Parameter
            The built parameter.

        Raises
        ------
        ValueError
            If the parameter isn't positional-or-keyword or if its name isn't
            a valid slash command option name.
        TypeError
            If the parameter's annotation can't be used as a converter.
        """
        if parameter.kind is not inspect.Parameter.POSITIONAL_OR_KEYWORD:
            raise ValueError(f"Chat command parameter {parameter.name!r} must be positional-or-keyword")

        _validate_name(parameter.name)
        if annotation is inspect.Parameter.empty:
            annotation = str

        converter, option_type = conversion.get_converter(_unwrap_optional(annotation))
        return cls(parameter.name, converter=converter, default=parameter.default, option_type=option_type)

    def __repr__(self) -> str:
        return f"Parameter <{self._name!r}, {self._option_type.name}>"

    @property
    def converter(self) -> collections.Callable[[typing.Any], typing.Any]:
        # <<inherited docstring from parley.abc.Parameter>>.
        return self._converter

    @property
    def default(self) -> typing.Any:
        # <<inherited docstring from parley.abc.Parameter>>.
        return self._default

    @property
    def is_required(self) -> bool:
        # <<inherited docstring from parley.abc.Parameter>>.
        return self._default is inspect.Parameter.empty

    @property
    def name(self) -> str:
        # <<inherited docstring from parley.abc.Parameter>>.
        return self._name

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from parley.abc.Parameter>>.
        return self._option_type

    def convert(self, value: typing.Any, /) -> typing.Any:
        # <<inherited docstring from parley.abc.Parameter>>.
        try:
            return self._converter(value)

        except ValueError as exc:
            raise errors.ConversionError(f"Couldn't convert {self._name} `{value}`: {exc}", self._name, [exc]) from exc


def as_chat_command(
    name: str, description: str = "", /, *, aliases: collections.Iterable[str] = ()
) -> collections.Callable[[parley.CommandCallbackSig], ChatCommand]:
    """Build a [parley.ChatCommand][] by decorating a function.

    Examples
    --------
    ```py
    @parley.as_chat_command("greet", "Greet someone")
    async def greet(ctx: parley.abc.ChatContext, name: str) -> None:
        await ctx.respond(f"Hello, {name}!")
    ```

    Parameters
    ----------
    name
        The command's name.
    description
        The command's description.
    aliases
        Alternative names the command may be triggered by in messages.

    Returns
    -------
    collections.abc.Callable[[parley.abc.CommandCallbackSig], ChatCommand]
        The decorator callback used to make a [parley.ChatCommand][].
    """

    def decorator(callback: parley.CommandCallbackSig, /) -> ChatCommand:
        return ChatCommand(callback, name, description, aliases=aliases)

    return decorator


class ChatCommand(parley.ChatCommand):
    """Standard implementation of a chat command.

    The command's parameters are taken from its callback's signature, with
    the first positional parameter being reserved for the context. Parameters
    injected through alluka aren't treated as command parameters.
    """

    __slots__ = ("_aliases", "_callback", "_description", "_name", "_parameters")

    def __init__(
        self,
        callback: parley.CommandCallbackSig,
        name: str,
        description: str = "",
        /,
        *,
        aliases: collections.Iterable[str] = (),
    ) -> None:
        """Initialise a chat command.

        Parameters
        ----------
        callback
            Callback to execute when the command is invoked.

            This should be an asynchronous callback which takes one positional
            argument of type [parley.abc.ChatContext][] followed by the
            command's parameters and returns [None][].
        name
            The command's name.

            This must be lowercase and between 1 and 32 characters long.
        description
            The command's description.

            This may be up to 100 characters long.
        aliases
            Alternative names the command may be triggered by in messages.

        Raises
        ------
        ValueError
            If the name or description are invalid or if the callback has
            parameters which aren't positional-or-keyword.
        """
        if len(description) > 100:
            raise ValueError("The command description cannot be over 100 characters in length")

        self._aliases = tuple(_validate_name(alias) for alias in aliases)
        self._callback = callback
        self._description = description
        self._name = _validate_name(name)
        self._parameters = self._load_parameters(callback)

    def __repr__(self) -> str:
        return f"ChatCommand <{self._name!r}, {self._parameters!r}>"

    @staticmethod
    def _load_parameters(callback: parley.CommandCallbackSig, /) -> tuple[Parameter, ...]:
        signature = inspect.signature(callback)
        hints = typing.get_type_hints(callback)
        raw_hints = typing.get_type_hints(callback, include_extras=True)
        # The first parameter is always the context.
        parameters = list(signature.parameters.values())[1:]
        return tuple(
            Parameter.from_signature(parameter, hints.get(parameter.name, inspect.Parameter.empty))
            for parameter in parameters
            # Injected parameters are left for the injector to fill.
            if not _is_injected(parameter, raw_hints.get(parameter.name))
        )

    @property
    def aliases(self) -> collections.Collection[str]:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        return self._aliases

    @property
    def callback(self) -> parley.CommandCallbackSig:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        return self._callback

    @property
    def description(self) -> str:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        return self._description

    @property
    def name(self) -> str:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        return self._name

    @property
    def names(self) -> collections.Collection[str]:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        return (self._name, *self._aliases)

    @property
    def parameters(self) -> collections.Sequence[Parameter]:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        return self._parameters

    def build(self, rest: hikari.api.RESTClient, /) -> hikari.api.SlashCommandBuilder:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        builder = rest.slash_command_builder(self._name, self._description or self._name)
        for parameter in self._parameters:
            builder.add_option(
                hikari.CommandOption(
                    type=parameter.option_type,
                    name=parameter.name,
                    description=parameter.name,
                    is_required=parameter.is_required,
                )
            )

        return builder

    async def execute(self, ctx: parley.ChatContext, /) -> None:
        # <<inherited docstring from parley.abc.ChatCommand>>.
        arguments = {parameter.name: value for parameter, value in zip(self._parameters, ctx.arguments)}
        await ctx.client.injector.call_with_async_di(self._callback, ctx, **arguments)
