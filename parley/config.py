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
"""Configuration used to initialise a Parley client."""
from __future__ import annotations

__all__: list[str] = ["ClientConfig"]

import json
import pathlib
import typing

import attrs

if typing.TYPE_CHECKING:
    from collections import abc as collections


def _prefixes_converter(value: collections.Iterable[str]) -> tuple[str, ...]:
    return tuple(value)


@attrs.frozen(kw_only=True)
class ClientConfig:
    """Settings for a [parley.Client][].

    Examples
    --------
    A config can be loaded from a JSON file with the settings under a
    top-level `"parley"` key:

    ```json
    {"parley": {"prefixes": ["!"], "mention_prefix": true, "declare_commands": 123}}
    ```
    """

    declare_commands: typing.Union[bool, int] = False
    """Whether to declare the client's slash commands on startup.

    If this is a guild ID then the commands are declared for that guild only.
    """

    default_to_ephemeral: bool = False
    """Whether interaction responses default to being ephemeral."""

    human_only: bool = True
    """Whether messages from bots and webhooks should be ignored."""

    mention_prefix: bool = False
    """Whether the bot's mention should be accepted as a message prefix."""

    prefixes: tuple[str, ...] = attrs.field(factory=tuple, converter=_prefixes_converter)
    """The prefixes message commands can be triggered with."""

    @classmethod
    def from_mapping(cls, data: collections.Mapping[str, typing.Any], /) -> ClientConfig:
        """Load a config from a mapping.

        Parameters
        ----------
        data
            The raw config mapping.

            The settings are read from the `"parley"` key if present, otherwise
            from the top level.

        Returns
        -------
        ClientConfig
            The loaded config.

        Raises
        ------
        TypeError
            If any of the settings are of the wrong type.
        ValueError
            If an unknown setting is provided.
        """
        parley_data = data.get("parley", data)
        if not isinstance(parley_data, dict):
            raise TypeError(f"parley must be a dict, not {type(parley_data)}")

        parley_data = parley_data.copy()
        if unknown := set(parley_data).difference(field.name for field in attrs.fields(cls)):
            raise ValueError(f"Unknown config options: {', '.join(sorted(unknown))}")

        prefixes = parley_data.pop("prefixes", None) or []
        if isinstance(prefixes, str):
            prefixes = [prefixes]

        if not isinstance(prefixes, list):
            raise TypeError(f"prefixes must be a list of strings, not {type(prefixes)}")

        for prefix in prefixes:
            if not isinstance(prefix, str):
                raise TypeError(f"Expected strings in prefixes, got {type(prefix)}")

        for name in ("default_to_ephemeral", "human_only", "mention_prefix"):
            if name in parley_data and not isinstance(parley_data[name], bool):
                raise TypeError(f"{name} must be a bool, not {type(parley_data[name])}")

        declare_commands = parley_data.get("declare_commands", False)
        if isinstance(declare_commands, str) and declare_commands.isdigit():
            parley_data["declare_commands"] = int(declare_commands)

        elif not isinstance(declare_commands, (bool, int)):
            raise TypeError(f"declare_commands must be a bool or guild ID, not {type(declare_commands)}")

        return cls(**parley_data, prefixes=prefixes)

    @classmethod
    def from_file(cls, path: typing.Union[str, pathlib.Path], /) -> ClientConfig:
        """Load a config from a JSON file.

        Parameters
        ----------
        path
            Path of the JSON file to load.

        Returns
        -------
        ClientConfig
            The loaded config.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        json.JSONDecodeError
            If the file isn't valid JSON.
        TypeError
            If any of the settings are of the wrong type.
        ValueError
            If an unknown setting is provided.
        """
        with pathlib.Path(path).open("r", encoding="utf-8") as file:
            data = json.load(file)

        if not isinstance(data, dict):
            raise TypeError(f"Config file must contain an object, not {type(data)}")

        return cls.from_mapping(data)
