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
"""Functions and classes used to convert raw argument values."""
from __future__ import annotations

__all__: list[str] = ["get_converter", "to_bool", "to_snowflake"]

import typing

import hikari

if typing.TYPE_CHECKING:
    from collections import abc as collections

_YES_VALUES = frozenset(("y", "yes", "t", "true", "on", "1"))
_NO_VALUES = frozenset(("n", "no", "f", "false", "off", "0"))


def to_bool(value: typing.Union[str, bool], /) -> bool:
    """Convert user string input into a boolean value.

    Parameters
    ----------
    value
        The value to convert.

    Returns
    -------
    bool
        The converted value.

    Raises
    ------
    ValueError
        If the value cannot be converted.
    """
    if isinstance(value, bool):
        return value

    value = value.lower().strip()
    if value in _YES_VALUES:
        return True

    if value in _NO_VALUES:
        return False

    raise ValueError(f"Invalid bool value `{value}`")


def to_snowflake(value: typing.Union[str, int, hikari.Unique], /) -> hikari.Snowflake:
    """Convert user input to a snowflake ID.

    This accepts raw IDs and user, role and channel mentions.

    Parameters
    ----------
    value
        The value to convert.

    Returns
    -------
    hikari.snowflakes.Snowflake
        The converted ID.

    Raises
    ------
    ValueError
        If the value cannot be converted.
    """
    if isinstance(value, hikari.Unique):
        return value.id

    if isinstance(value, int):
        return hikari.Snowflake(value)

    value = value.strip()
    if value.startswith("<") and value.endswith(">"):
        value = value[1:-1].lstrip("@#!&")

    if not value.isdigit():
        raise ValueError(f"Invalid ID `{value}`")

    return hikari.Snowflake(value)


_CONVERTERS: dict[typing.Any, tuple[collections.Callable[[typing.Any], typing.Any], hikari.OptionType]] = {
    str: (str, hikari.OptionType.STRING),
    int: (int, hikari.OptionType.INTEGER),
    float: (float, hikari.OptionType.FLOAT),
    bool: (to_bool, hikari.OptionType.BOOLEAN),
    hikari.Snowflake: (to_snowflake, hikari.OptionType.STRING),
}


def get_converter(
    annotation: typing.Any, /
) -> tuple[collections.Callable[[typing.Any], typing.Any], hikari.OptionType]:
    """Get the converter and slash option type for a parameter annotation.

    Unannotated parameters are treated as strings and unknown callables are
    used as their own converter with string input.

    Parameters
    ----------
    annotation
        The parameter's resolved type annotation.

    Returns
    -------
    tuple[collections.abc.Callable[[typing.Any], typing.Any], hikari.commands.OptionType]
        The converter and option type for the annotation.

    Raises
    ------
    TypeError
        If the annotation isn't callable.
    """
    if annotation is typing.Any:
        return str, hikari.OptionType.STRING

    if result := _CONVERTERS.get(annotation):
        return result

    if not callable(annotation):
        raise TypeError(f"Cannot use {annotation!r} as an argument converter")

    return annotation, hikari.OptionType.STRING
