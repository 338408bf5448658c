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

# pyright: reportUnknownMemberType=none
# pyright: reportPrivateUsage=none
# This leads to too many false-positives around mocks.

import inspect
import typing
from unittest import mock

import alluka
import hikari
import pytest

import parley
from parley import commands
from parley import conversion


class TestParameter:
    def test_properties(self):
        converter = mock.Mock()

        parameter = commands.Parameter(
            "name", converter=converter, default="Bob", option_type=hikari.OptionType.INTEGER
        )

        assert parameter.name == "name"
        assert parameter.converter is converter
        assert parameter.default == "Bob"
        assert parameter.option_type is hikari.OptionType.INTEGER
        assert parameter.is_required is False

    def test_is_required_property(self):
        assert commands.Parameter("name").is_required is True

    def test_from_signature(self):
        signature_parameter = inspect.Parameter("count", inspect.Parameter.POSITIONAL_OR_KEYWORD, default=5)

        parameter = commands.Parameter.from_signature(signature_parameter, int)

        assert parameter.name == "count"
        assert parameter.converter is int
        assert parameter.default == 5
        assert parameter.option_type is hikari.OptionType.INTEGER

    def test_from_signature_when_unannotated(self):
        signature_parameter = inspect.Parameter("name", inspect.Parameter.POSITIONAL_OR_KEYWORD)

        parameter = commands.Parameter.from_signature(signature_parameter, inspect.Parameter.empty)

        assert parameter.converter is str
        assert parameter.option_type is hikari.OptionType.STRING
        assert parameter.is_required is True

    def test_from_signature_when_optional(self):
        signature_parameter = inspect.Parameter("loud", inspect.Parameter.POSITIONAL_OR_KEYWORD, default=None)

        parameter = commands.Parameter.from_signature(signature_parameter, typing.Optional[bool])

        assert parameter.converter is conversion.to_bool
        assert parameter.option_type is hikari.OptionType.BOOLEAN
        assert parameter.default is None

    @pytest.mark.parametrize(
        "kind",
        [inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.KEYWORD_ONLY, inspect.Parameter.VAR_POSITIONAL],
    )
    def test_from_signature_when_not_positional_or_keyword(self, kind: typing.Any):
        signature_parameter = inspect.Parameter("name", kind)

        with pytest.raises(ValueError, match="Chat command parameter 'name' must be positional-or-keyword"):
            commands.Parameter.from_signature(signature_parameter, str)

    def test_from_signature_when_name_not_lowercase(self):
        signature_parameter = inspect.Parameter("userName", inspect.Parameter.POSITIONAL_OR_KEYWORD)

        with pytest.raises(ValueError, match="Name must be lowercase: 'userName'"):
            commands.Parameter.from_signature(signature_parameter, str)

    def test_from_signature_when_name_too_long(self):
        signature_parameter = inspect.Parameter("a" * 33, inspect.Parameter.POSITIONAL_OR_KEYWORD)

        with pytest.raises(ValueError, match="Name must be between 1 and 32 characters long, not 33"):
            commands.Parameter.from_signature(signature_parameter, str)

    def test_convert(self):
        parameter = commands.Parameter("count", converter=int)

        assert parameter.convert("42") == 42

    def test_convert_when_fails(self):
        parameter = commands.Parameter("count", converter=int)

        with pytest.raises(parley.ConversionError) as exc_info:
            parameter.convert("meow")

        assert exc_info.value.parameter == "count"
        assert exc_info.value.message.startswith("Couldn't convert count `meow`: ")
        assert len(exc_info.value.errors) == 1
        assert isinstance(exc_info.value.errors[0], ValueError)

    def test_convert_doesnt_catch_other_errors(self):
        parameter = commands.Parameter("count", converter=mock.Mock(side_effect=TypeError("meow")))

        with pytest.raises(TypeError, match="meow"):
            parameter.convert("42")


def test_as_chat_command():
    async def mock_callback(ctx: parley.abc.ChatContext, name: str) -> None:
        ...

    command = parley.as_chat_command("greet", "Greet someone", aliases=["hi", "hello"])(mock_callback)

    assert isinstance(command, parley.ChatCommand)
    assert command.callback is mock_callback
    assert command.name == "greet"
    assert command.description == "Greet someone"
    assert command.aliases == ("hi", "hello")


class TestChatCommand:
    @pytest.fixture()
    def command(self) -> parley.ChatCommand:
        async def callback(ctx: parley.abc.ChatContext, name: str, count: int = 1, loud: bool = False) -> None:
            ...

        return parley.ChatCommand(callback, "greet", "Greet someone", aliases=["hi"])

    def test___init___when_description_too_long(self):
        with pytest.raises(ValueError, match="The command description cannot be over 100 characters in length"):
            parley.ChatCommand(mock.AsyncMock(), "greet", "x" * 101)

    @pytest.mark.parametrize("name", ["", "a" * 33, "Greet", "greet!", "greet me"])
    def test___init___when_invalid_name(self, name: str):
        async def callback(ctx: parley.abc.ChatContext) -> None:
            ...

        with pytest.raises(ValueError):
            parley.ChatCommand(callback, name)

    def test___init___when_invalid_alias(self):
        async def callback(ctx: parley.abc.ChatContext) -> None:
            ...

        with pytest.raises(ValueError, match="Name must be lowercase: 'Hi'"):
            parley.ChatCommand(callback, "greet", aliases=["Hi"])

    @pytest.mark.parametrize("name", ["a", "a" * 32, "greet-me", "greet_me", "héllo", "123"])
    def test___init___when_valid_name(self, name: str):
        async def callback(ctx: parley.abc.ChatContext) -> None:
            ...

        assert parley.ChatCommand(callback, name).name == name

    def test___init___when_keyword_only_parameter(self):
        async def callback(ctx: parley.abc.ChatContext, *, name: str) -> None:
            ...

        with pytest.raises(ValueError, match="Chat command parameter 'name' must be positional-or-keyword"):
            parley.ChatCommand(callback, "greet")

    def test___init___when_no_parameters(self):
        async def callback(ctx: parley.abc.ChatContext) -> None:
            ...

        assert parley.ChatCommand(callback, "ping").parameters == ()

    def test___init___when_invalid_parameter_name(self):
        async def callback(ctx: parley.abc.ChatContext, userName: str) -> None:  # noqa: N803
            ...

        with pytest.raises(ValueError, match="Name must be lowercase: 'userName'"):
            parley.ChatCommand(callback, "greet")

    def test___init___skips_injected_parameters(self):
        class Database:
            ...

        async def callback(
            ctx: parley.abc.ChatContext,
            cache: alluka.Injected[Database],
            name: str,
            database: Database = alluka.inject(type=Database),
        ) -> None:
            ...

        command = parley.ChatCommand(callback, "greet")

        assert [parameter.name for parameter in command.parameters] == ["name"]

    def test_names_property(self, command: parley.ChatCommand):
        assert command.names == ("greet", "hi")

    def test_parameters_property(self, command: parley.ChatCommand):
        name, count, loud = command.parameters

        assert name.name == "name"
        assert name.converter is str
        assert name.is_required is True
        assert count.name == "count"
        assert count.converter is int
        assert count.option_type is hikari.OptionType.INTEGER
        assert count.default == 1
        assert loud.name == "loud"
        assert loud.converter is conversion.to_bool
        assert loud.option_type is hikari.OptionType.BOOLEAN
        assert loud.default is False

    def test_build(self, command: parley.ChatCommand):
        mock_rest = mock.Mock(hikari.api.RESTClient)

        result = command.build(mock_rest)

        mock_builder = mock_rest.slash_command_builder.return_value
        assert result is mock_builder
        mock_rest.slash_command_builder.assert_called_once_with("greet", "Greet someone")
        mock_builder.add_option.assert_has_calls(
            [
                mock.call(
                    hikari.CommandOption(
                        type=hikari.OptionType.STRING, name="name", description="name", is_required=True
                    )
                ),
                mock.call(
                    hikari.CommandOption(
                        type=hikari.OptionType.INTEGER, name="count", description="count", is_required=False
                    )
                ),
                mock.call(
                    hikari.CommandOption(
                        type=hikari.OptionType.BOOLEAN, name="loud", description="loud", is_required=False
                    )
                ),
            ]
        )

    def test_build_when_no_description(self):
        async def callback(ctx: parley.abc.ChatContext) -> None:
            ...

        mock_rest = mock.Mock(hikari.api.RESTClient)

        parley.ChatCommand(callback, "ping").build(mock_rest)

        mock_rest.slash_command_builder.assert_called_once_with("ping", "ping")

    @pytest.mark.asyncio()
    async def test_execute(self):
        mock_callback = mock.AsyncMock()
        mock_ctx = mock.Mock(arguments=("Bob", 3))
        mock_ctx.client.injector.call_with_async_di = mock.AsyncMock()

        parameters = (commands.Parameter("name"), commands.Parameter("count", converter=int))

        with mock.patch.object(commands.ChatCommand, "_load_parameters", return_value=parameters):
            command = parley.ChatCommand(mock_callback, "greet")

        await command.execute(mock_ctx)

        mock_ctx.client.injector.call_with_async_di.assert_awaited_once_with(
            mock_callback, mock_ctx, name="Bob", count=3
        )

    @pytest.mark.asyncio()
    async def test_execute_with_injected_parameters(self):
        class Database:
            ...

        database = Database()
        calls: list[tuple[typing.Any, ...]] = []

        async def callback(
            ctx: parley.abc.ChatContext,
            name: str,
            cache: alluka.Injected[Database],
            count: int = 1,
            database: Database = alluka.inject(type=Database),
        ) -> None:
            calls.append((ctx, name, cache, count, database))

        injector = alluka.Client()
        injector.set_type_dependency(Database, database)
        mock_ctx = mock.Mock(arguments=("Bob", 3))
        mock_ctx.client.injector = injector
        command = parley.ChatCommand(callback, "greet")

        await command.execute(mock_ctx)

        assert calls == [(mock_ctx, "Bob", database, 3, database)]
