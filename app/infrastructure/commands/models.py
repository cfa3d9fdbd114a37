"""Command framework data models."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Tuple, Union

from infrastructure.commands.errors import ConfigurationError

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

CommandHandler = Callable[["CommandContext"], Awaitable[None]]
CommandPolicy = Callable[["CommandContext"], Awaitable[bool]]


class ArgumentType(str, Enum):
    """Built-in argument type tags.

    Custom parsers may be registered under any other string tag.
    """

    STRING = "string"
    NUMBER = "number"
    USER = "user"
    USER_OPTIONAL = "user-optional"


class Reaction(str, Enum):
    """Emoji indicators the bot reacts with."""

    SUCCESS = "✅"
    FAILURE = "❌"
    REJECTED = "🚫"
    UNKNOWN = "❓"
    WORKING = "🔄"


def type_name(type_tag: Union[ArgumentType, str]) -> str:
    """Normalize a type tag to its registry key."""
    if isinstance(type_tag, ArgumentType):
        return type_tag.value
    return str(type_tag)


@dataclass(frozen=True)
class ArgSpec:
    """Command argument definition.

    Attributes:
        name: Argument name shown in usage and error messages
        type: Type tag, a key into the ArgumentsRegistry
        required: Whether a raw token must be present
        description: Human-readable description
        rest: Consume every remaining token as a list (last argument only)

    Examples:
        Positional: ArgSpec("amount", ArgumentType.NUMBER)
        Optional: ArgSpec("user", ArgumentType.USER_OPTIONAL, required=False)
        Rest: ArgSpec("users", ArgumentType.USER, rest=True)
    """

    name: str
    type: Union[ArgumentType, str] = ArgumentType.STRING
    required: bool = True
    description: str = ""
    rest: bool = False

    @property
    def type_name(self) -> str:
        return type_name(self.type)


@dataclass(frozen=True)
class CommandDescriptor:
    """Immutable definition of a command.

    Attributes:
        name: Canonical name, unique and case-insensitive
        args: Ordered argument definitions
        description: Human-readable description
        aliases: Alternate names resolving to this command

    Raises:
        ConfigurationError: If the name is empty or a rest argument is not
            the single final argument
    """

    name: str
    args: Tuple[ArgSpec, ...] = ()
    description: str = ""
    aliases: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "aliases", tuple(self.aliases))

        if not self.name or not self.name.strip():
            raise ConfigurationError("Command name must not be empty")

        rest_positions = [i for i, arg in enumerate(self.args) if arg.rest]
        if len(rest_positions) > 1:
            raise ConfigurationError(
                f"Command '{self.name}' declares more than one rest argument"
            )
        if rest_positions and rest_positions[0] != len(self.args) - 1:
            raise ConfigurationError(
                f"Rest argument '{self.args[rest_positions[0]].name}' of command "
                f"'{self.name}' must be the last argument"
            )


@dataclass(frozen=True)
class Command:
    """A registered command.

    Attributes:
        descriptor: Command definition
        handler: Async callable executed with the CommandContext
        policy: Optional async predicate evaluated after the trust gate
        registered: False for open commands that bypass the trust gate
            and the policy (e.g. self-registration)
    """

    descriptor: CommandDescriptor
    handler: CommandHandler
    policy: Optional[CommandPolicy] = None
    registered: bool = True

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def aliases(self) -> Tuple[str, ...]:
        return self.descriptor.aliases

    @property
    def description(self) -> str:
        return self.descriptor.description

    @property
    def args(self) -> Tuple[ArgSpec, ...]:
        return self.descriptor.args
