"""Typed argument parsing."""

from typing import Any, Callable, List, Sequence, Tuple

from infrastructure.commands.arguments import ArgParser, ArgumentsRegistry
from infrastructure.commands.context import ParserContext
from infrastructure.commands.errors import (
    ArgParseError,
    ConfigurationError,
    InvalidArgumentError,
    MissingArgumentError,
)
from infrastructure.commands.models import ArgSpec, CommandDescriptor

ContextFactory = Callable[[str, int, Sequence[str]], ParserContext]


async def _parse_token(
    parser: ArgParser, spec: ArgSpec, raw: str, ctx: ParserContext
) -> Any:
    try:
        return await parser(raw, ctx)
    except ArgParseError:
        raise
    except Exception as e:  # pylint: disable=broad-except
        raise InvalidArgumentError(spec.name, e) from e


async def parse_arguments(
    specs: Sequence[ArgSpec],
    tokens: Sequence[str],
    registry: ArgumentsRegistry,
    context_factory: ContextFactory,
) -> Tuple[Any, ...]:
    """Convert raw tokens into typed values, one per argument spec.

    Specs are walked in order with a cursor over the tokens:
        - a rest spec consumes every remaining token into a list, and a
          required rest spec with nothing left is missing;
        - a positional spec past the end of the tokens is missing when
          required, otherwise takes the parser fallback (or None);
        - otherwise the token at the cursor is parsed and the cursor
          advances.
    Tokens beyond the last spec are ignored.

    Args:
        specs: Argument definitions, rest spec last if any
        tokens: Raw argument tokens
        registry: Parser registry
        context_factory: Builds the ParserContext for (raw, index, tokens)

    Returns:
        One value per spec, in spec order

    Raises:
        MissingArgumentError: A required argument has no token
        InvalidArgumentError: A parser rejected its token
        UnknownTypeError: A spec references an unregistered type
    """
    values: List[Any] = []
    cursor = 0

    for spec in specs:
        parser = registry.get(spec.type_name)

        if spec.rest:
            if cursor >= len(tokens) and spec.required:
                raise MissingArgumentError(spec.name)
            collected = []
            for index in range(cursor, len(tokens)):
                ctx = context_factory(tokens[index], index, tokens)
                collected.append(await _parse_token(parser, spec, tokens[index], ctx))
            cursor = len(tokens)
            values.append(collected)
            continue

        if cursor >= len(tokens):
            if spec.required:
                raise MissingArgumentError(spec.name)
            ctx = context_factory("", cursor, tokens)
            try:
                values.append(await parser.default(ctx))
            except Exception as e:  # pylint: disable=broad-except
                raise InvalidArgumentError(spec.name, e) from e
            continue

        raw = tokens[cursor]
        values.append(
            await _parse_token(parser, spec, raw, context_factory(raw, cursor, tokens))
        )
        cursor += 1

    if len(values) != len(specs):
        raise ConfigurationError(
            f"Parsed {len(values)} values for {len(specs)} argument specs"
        )
    return tuple(values)


def format_usage(descriptor: CommandDescriptor) -> str:
    """Usage line, e.g. "link <user> <id>" or "whoami [user]".

    Required arguments are shown in angle brackets, optional ones in square
    brackets, and rest arguments are suffixed with "...".
    """
    parts = [descriptor.name]
    for arg in descriptor.args:
        label = f"{arg.name}..." if arg.rest else arg.name
        parts.append(f"<{label}>" if arg.required else f"[{label}]")
    return " ".join(parts)
