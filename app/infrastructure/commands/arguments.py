"""Argument parser registry and built-in argument types."""

import inspect
import math
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from infrastructure.commands.context import ParserContext
from infrastructure.commands.errors import (
    InvalidNumberError,
    UnknownTypeError,
    UserNotFoundError,
)
from infrastructure.commands.mentions import MentionResolver
from infrastructure.commands.models import ArgumentType, type_name
from infrastructure.logging import get_module_logger
from infrastructure.users import StoredUser

logger = get_module_logger()

ParseFunction = Callable[[str, ParserContext], Union[Any, Awaitable[Any]]]
FallbackFunction = Callable[[ParserContext], Union[Any, Awaitable[Any]]]

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class ArgParser:
    """A registered argument parser.

    Attributes:
        type: Type tag the parser is registered under
        parse: Converts a raw token, sync or async
        fallback: Produces the value of an optional slot with no raw token
    """

    type: str
    parse: ParseFunction
    fallback: Optional[FallbackFunction] = None

    async def __call__(self, raw: str, ctx: ParserContext) -> Any:
        return await _maybe_await(self.parse(raw, ctx))

    async def default(self, ctx: ParserContext) -> Any:
        """Value for a missing optional slot, None without a fallback."""
        if self.fallback is None:
            return None
        return await _maybe_await(self.fallback(ctx))


class ArgumentsRegistry:
    """Maps type tags to argument parsers.

    Example:
        registry = create_arguments_registry()
        registry.register("product", parse_product)
        parser = registry.get(ArgumentType.NUMBER)
    """

    def __init__(self):
        self._parsers: Dict[str, ArgParser] = {}

    def register(
        self,
        type_tag: Union[ArgumentType, str],
        parser: ParseFunction,
        fallback: Optional[FallbackFunction] = None,
    ) -> None:
        """Register a parser, replacing any parser for the same tag."""
        key = type_name(type_tag)
        if key in self._parsers:
            logger.debug("argument_parser_replaced", type=key)
        self._parsers[key] = ArgParser(type=key, parse=parser, fallback=fallback)

    def get(self, type_tag: Union[ArgumentType, str]) -> ArgParser:
        """Get the parser for a type tag.

        Raises:
            UnknownTypeError: If no parser is registered for the tag
        """
        key = type_name(type_tag)
        parser = self._parsers.get(key)
        if parser is None:
            raise UnknownTypeError(key)
        return parser

    def has(self, type_tag: Union[ArgumentType, str]) -> bool:
        return type_name(type_tag) in self._parsers


def parse_string(raw: str, ctx: ParserContext) -> str:
    return raw


def parse_number(raw: str, ctx: ParserContext) -> Union[int, float]:
    """Parse an ASCII integer or a finite decimal number."""
    text = raw.strip()
    if _INTEGER.fullmatch(text):
        return int(text)
    if not _DECIMAL.fullmatch(text):
        raise InvalidNumberError(raw)
    value = float(text)
    if not math.isfinite(value):
        raise InvalidNumberError(raw)
    return value


def parse_user(raw: str, ctx: ParserContext) -> StoredUser:
    resolver = MentionResolver(ctx.tokens, ctx.message.mentions)
    return resolver.resolve_user(ctx.index, raw, ctx.users)


def caller_user(ctx: ParserContext) -> StoredUser:
    """The stored record of the invoking user."""
    user = ctx.users.get_user(ctx.caller_id)
    if user is None:
        raise UserNotFoundError(ctx.caller_id)
    return user


def parse_optional_user(raw: str, ctx: ParserContext) -> StoredUser:
    if not raw.strip():
        return caller_user(ctx)
    return parse_user(raw, ctx)


def register_builtin_parsers(registry: ArgumentsRegistry) -> ArgumentsRegistry:
    """Install the string, number, user and user-optional parsers."""
    registry.register(ArgumentType.STRING, parse_string)
    registry.register(ArgumentType.NUMBER, parse_number)
    registry.register(ArgumentType.USER, parse_user)
    registry.register(
        ArgumentType.USER_OPTIONAL, parse_optional_user, fallback=caller_user
    )
    return registry


def create_arguments_registry() -> ArgumentsRegistry:
    """Create a registry with the built-in parsers installed."""
    return register_builtin_parsers(ArgumentsRegistry())
