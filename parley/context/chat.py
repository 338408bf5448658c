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
"""Base chat command context implementation."""
from __future__ import annotations

__all__: list[str] = ["ChatContext"]

import typing

from .. import abc as parley
from . import base

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from typing_extensions import Self


class ChatContext(base.BaseContext, parley.ChatContext):
    """Base class for the standard chat command context implementations.

    The parsed arguments are a write-once cell: they must be set exactly once
    before the command's callback is called.
    """

    __slots__ = ("_arguments", "_command")

    def __init__(self, client: parley.Client, command: parley.ChatCommand, /, **kwargs: typing.Any) -> None:
        super().__init__(client, **kwargs)
        self._arguments: typing.Optional[tuple[typing.Any, ...]] = None
        self._command = command

    @property
    def arguments(self) -> collections.Sequence[typing.Any]:
        # <<inherited docstring from parley.abc.ChatContext>>.
        if self._arguments is None:
            raise RuntimeError("Arguments have not been set for this context yet")

        return self._arguments

    @property
    def command(self) -> parley.ChatCommand:
        # <<inherited docstring from parley.abc.ChatContext>>.
        return self._command

    @property
    def has_arguments(self) -> bool:
        # <<inherited docstring from parley.abc.ChatContext>>.
        return self._arguments is not None

    def set_arguments(self, arguments: collections.Iterable[typing.Any], /) -> Self:
        # <<inherited docstring from parley.abc.ChatContext>>.
        if self._arguments is not None:
            raise RuntimeError("Arguments have already been set for this context")

        self._arguments = tuple(arguments)
        return self
