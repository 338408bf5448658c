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
"""A command framework for Hikari which runs one command callback for both messages and slash commands.

Examples
--------
A Parley client can be quickly initialised from a Hikari gateway bot through
[parley.Client.from_gateway_bot][], this enables both message and slash command
execution:

```py
bot = hikari.GatewayBot("BOT_TOKEN")
client = parley.Client.from_gateway_bot(bot, config=parley.ClientConfig(prefixes=["!"], declare_commands=True))

@client.with_command
@parley.as_chat_command("greet", "Greet someone")
async def greet(ctx: parley.abc.ChatContext, name: str, loud: bool = False) -> None:
    message = f"Hello, {name}!"
    await ctx.respond(message.upper() if loud else message)

bot.run()
```

Both `!greet Bob` and `/greet name:Bob` will call `greet` with `name="Bob"`.
"""
from __future__ import annotations

__all__: list[str] = [
    "ChatCommand",
    "Client",
    "ClientConfig",
    "CommandError",
    "ComponentHelper",
    "ConversionError",
    "NotEnoughArgumentsError",
    "ParleyError",
    "ParserError",
    "TooManyArgumentsError",
    "abc",
    "as_chat_command",
    "context",
    "parsing",
]

from . import abc
from . import context
from . import parsing
from ._about import __author__
from ._about import __ci__
from ._about import __copyright__
from ._about import __docs__
from ._about import __email__
from ._about import __issue_tracker__
from ._about import __license__
from ._about import __url__
from ._about import __version__
from .clients import Client
from .commands import ChatCommand
from .commands import as_chat_command
from .components import ComponentHelper
from .config import ClientConfig
from .errors import CommandError
from .errors import ConversionError
from .errors import NotEnoughArgumentsError
from .errors import ParleyError
from .errors import ParserError
from .errors import TooManyArgumentsError
