"""Command framework errors.

Hierarchy:
    CommandError
    ├── ConfigurationError      startup wiring mistakes, abort initialization
    │   └── UnknownTypeError
    ├── ArgParseError           user input errors, reported as usage messages
    │   ├── MissingArgumentError
    │   └── InvalidArgumentError
    └── ArgumentValueError      raised by individual argument parsers
        ├── InvalidNumberError
        └── UserNotFoundError
"""


class CommandError(Exception):
    """Base class for command framework errors."""


class ConfigurationError(CommandError):
    """Invalid command or parser wiring detected at registration time."""


class UnknownTypeError(ConfigurationError):
    """No parser is registered for an argument type tag."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f'No parser registered for arg type "{type_name}"')


class ArgParseError(CommandError):
    """Error during argument parsing, reported to the caller with usage."""


class MissingArgumentError(ArgParseError):
    """A required argument has no corresponding raw token."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing required argument: {argument}")


class InvalidArgumentError(ArgParseError):
    """A parser rejected the raw token of an argument."""

    def __init__(self, argument: str, cause: object):
        self.argument = argument
        self.cause = cause
        super().__init__(f"Invalid value for {argument}: {cause}")


class ArgumentValueError(CommandError, ValueError):
    """Base class for errors raised by argument parsers."""


class InvalidNumberError(ArgumentValueError):
    """Token does not parse as a finite number."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Not a valid number: {raw}")


class UserNotFoundError(ArgumentValueError):
    """Neither the mention nor the raw identifier resolves to a stored user."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"User not found: {identifier}")
