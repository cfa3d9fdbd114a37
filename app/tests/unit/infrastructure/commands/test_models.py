"""Unit tests for command framework models."""

import dataclasses

import pytest

from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.models import ArgSpec, ArgumentType, CommandDescriptor
from tests.factories import make_arg_spec, make_command


@pytest.mark.unit
class TestArgSpec:
    """Tests for ArgSpec."""

    def test_defaults(self):
        spec = ArgSpec("name")

        assert spec.type_name == "string"
        assert spec.required is True
        assert spec.rest is False

    def test_custom_type_name(self):
        assert ArgSpec("product", "product").type_name == "product"

    def test_builtin_type_name(self):
        assert ArgSpec("who", ArgumentType.USER_OPTIONAL).type_name == "user-optional"


@pytest.mark.unit
class TestCommandDescriptor:
    """Tests for CommandDescriptor validation."""

    def test_lists_are_stored_as_tuples(self):
        descriptor = CommandDescriptor(
            name="x", args=[make_arg_spec("a")], aliases=["y"]
        )

        assert descriptor.args == (make_arg_spec("a"),)
        assert descriptor.aliases == ("y",)

    def test_is_immutable(self):
        descriptor = CommandDescriptor(name="x")

        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.name = "y"

    def test_empty_name_rejected(self):
        with pytest.raises(ConfigurationError):
            CommandDescriptor(name=" ")

    def test_rest_must_be_last(self):
        with pytest.raises(ConfigurationError, match="must be the last argument"):
            CommandDescriptor(
                name="x",
                args=(make_arg_spec("users", rest=True), make_arg_spec("amount")),
            )

    def test_single_rest_argument(self):
        with pytest.raises(ConfigurationError, match="more than one rest"):
            CommandDescriptor(
                name="x",
                args=(
                    make_arg_spec("a", rest=True),
                    make_arg_spec("b", rest=True),
                ),
            )


@pytest.mark.unit
class TestCommand:
    """Tests for Command accessors."""

    def test_properties_delegate_to_descriptor(self):
        command = make_command(
            "ping", args=[make_arg_spec("x")], description="Ping", aliases=["p"]
        )

        assert command.name == "ping"
        assert command.aliases == ("p",)
        assert command.description == "Ping"
        assert command.args == (make_arg_spec("x"),)
        assert command.registered is True
        assert command.policy is None
