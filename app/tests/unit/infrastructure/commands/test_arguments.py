"""Unit tests for the argument parser registry and built-in parsers."""

import math

import pytest

from infrastructure.commands.arguments import (
    ArgumentsRegistry,
    create_arguments_registry,
    parse_number,
)
from infrastructure.commands.errors import (
    ConfigurationError,
    InvalidNumberError,
    UnknownTypeError,
    UserNotFoundError,
)
from infrastructure.commands.mentions import MENTION_PLACEHOLDER
from infrastructure.commands.models import ArgumentType
from tests.factories import make_command_message


@pytest.mark.unit
class TestArgumentsRegistry:
    """Tests for parser registration and lookup."""

    def test_builtin_types_registered(self):
        registry = create_arguments_registry()
        for tag in ["string", "number", "user", "user-optional"]:
            assert registry.has(tag)

    def test_get_unknown_type_raises(self):
        registry = ArgumentsRegistry()

        with pytest.raises(UnknownTypeError, match='arg type "product"') as exc:
            registry.get("product")

        assert isinstance(exc.value, ConfigurationError)
        assert exc.value.type_name == "product"

    def test_has_does_not_raise(self):
        registry = ArgumentsRegistry()
        assert registry.has("product") is False
        registry.register("product", lambda raw, ctx: raw)
        assert registry.has("product") is True

    def test_enum_and_string_tags_are_equivalent(self, arguments):
        assert arguments.get(ArgumentType.NUMBER) is arguments.get("number")
        assert arguments.has("user-optional")

    def test_register_overwrites_silently(self):
        registry = ArgumentsRegistry()
        registry.register("color", lambda raw, ctx: "first")
        registry.register("color", lambda raw, ctx: "second")

        assert registry.get("color").parse("x", None) == "second"

    @pytest.mark.asyncio
    async def test_sync_and_async_parsers_are_awaited_uniformly(self):
        async def parse_async(raw, ctx):
            return raw.upper()

        registry = ArgumentsRegistry()
        registry.register("sync", lambda raw, ctx: raw * 2)
        registry.register("async", parse_async)

        assert await registry.get("sync")("ab", None) == "abab"
        assert await registry.get("async")("ab", None) == "AB"

    @pytest.mark.asyncio
    async def test_default_without_fallback_is_none(self):
        registry = ArgumentsRegistry()
        registry.register("plain", lambda raw, ctx: raw)

        assert await registry.get("plain").default(None) is None


@pytest.mark.unit
class TestNumberParser:
    """Tests for the number parser."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("42", 42),
            ("-7", -7),
            ("+5", 5),
            ("0", 0),
            ("3.5", 3.5),
            (".5", 0.5),
            ("1e3", 1000.0),
        ],
    )
    def test_valid_numbers(self, raw, expected):
        assert parse_number(raw, None) == expected

    def test_integers_stay_integers(self):
        assert isinstance(parse_number("42", None), int)

    @pytest.mark.parametrize(
        "raw",
        [
            "abc",
            "",
            "12abc",
            "nan",
            "inf",
            "-inf",
            "1_000",
            "\u0663",
            "\uff11\uff12",
            "1e400",
        ],
    )
    def test_invalid_numbers_raise(self, raw):
        with pytest.raises(InvalidNumberError) as exc:
            parse_number(raw, None)

        assert str(exc.value) == f"Not a valid number: {raw}"

    def test_result_is_finite(self):
        assert math.isfinite(parse_number("1e308", None))


@pytest.mark.unit
class TestUserParsers:
    """Tests for the user and user-optional parsers."""

    @pytest.mark.asyncio
    async def test_user_resolves_mention(self, arguments, parser_context_factory):
        message = make_command_message(
            "user", MENTION_PLACEHOLDER, mentioned=["bob-uuid"]
        )
        context = parser_context_factory(message)
        tokens = [MENTION_PLACEHOLDER]

        user = await arguments.get("user")(
            MENTION_PLACEHOLDER, context(MENTION_PLACEHOLDER, 0, tokens)
        )

        assert user.uuid == "bob-uuid"

    @pytest.mark.asyncio
    async def test_user_resolves_linked_id(self, arguments, parser_context_factory):
        message = make_command_message("user", "42")
        context = parser_context_factory(message)

        user = await arguments.get("user")("42", context("42", 0, ["42"]))

        assert user.uuid == "alice-uuid"

    @pytest.mark.asyncio
    async def test_user_resolves_uuid(self, arguments, parser_context_factory):
        message = make_command_message("user", "carol-uuid")
        context = parser_context_factory(message)

        user = await arguments.get("user")(
            "carol-uuid", context("carol-uuid", 0, ["carol-uuid"])
        )

        assert user.uuid == "carol-uuid"

    @pytest.mark.asyncio
    async def test_user_unknown_raises(self, arguments, parser_context_factory):
        message = make_command_message("user", "nobody")
        context = parser_context_factory(message)

        with pytest.raises(UserNotFoundError, match="User not found: nobody"):
            await arguments.get("user")("nobody", context("nobody", 0, ["nobody"]))

    @pytest.mark.asyncio
    async def test_user_optional_empty_token_is_caller(
        self, arguments, parser_context_factory
    ):
        message = make_command_message("whoami", sender_id="dave-uuid")
        context = parser_context_factory(message)

        user = await arguments.get("user-optional")("", context("", 0, []))

        assert user.uuid == "dave-uuid"

    @pytest.mark.asyncio
    async def test_user_optional_fallback_is_caller(
        self, arguments, parser_context_factory
    ):
        message = make_command_message("whoami", sender_id="bob-uuid")
        context = parser_context_factory(message)

        user = await arguments.get("user-optional").default(context("", 0, []))

        assert user.uuid == "bob-uuid"

    @pytest.mark.asyncio
    async def test_user_optional_fallback_for_unregistered_caller_raises(
        self, arguments, parser_context_factory
    ):
        message = make_command_message("whoami", sender_id="stranger-uuid")
        context = parser_context_factory(message)

        with pytest.raises(UserNotFoundError):
            await arguments.get("user-optional").default(context("", 0, []))

    @pytest.mark.asyncio
    async def test_user_optional_with_token_behaves_like_user(
        self, arguments, parser_context_factory
    ):
        message = make_command_message("whoami", "42", sender_id="bob-uuid")
        context = parser_context_factory(message)

        user = await arguments.get("user-optional")("42", context("42", 0, ["42"]))

        assert user.uuid == "alice-uuid"
