"""User management commands.

Everything except self-registration and whoami is admin only.
"""

from typing import Optional, Union

from infrastructure.commands import (
    ArgSpec,
    ArgumentType,
    Command,
    CommandContext,
    CommandDescriptor,
    CommandRegistry,
    Reaction,
    allow_all,
    is_admin,
    is_guest,
)
from infrastructure.commands.models import CommandHandler
from infrastructure.logging import get_module_logger
from infrastructure.users import StoredUser, Team, UserStore

logger = get_module_logger()


def to_identifier(value: Union[int, float]) -> Optional[int]:
    """Positive integer id, or None."""
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    return value if value > 0 else None


def to_team(value: Union[int, float]) -> Optional[Team]:
    try:
        return Team(int(value)) if float(value).is_integer() else None
    except ValueError:
        return None


def describe_user(user: StoredUser, users: UserStore) -> str:
    """One-line summary, e.g. "[👑] Alice [ABC, CBC] → 42"."""
    admin = "[👑] " if users.is_admin(user.uuid) else ""
    linked = f" → {user.linked_id}" if user.linked_id is not None else ""
    return f"{admin}{user.name} [{user.team_labels()}]{linked}"


def make_register(users: UserStore) -> CommandHandler:
    async def register_self(ctx: CommandContext) -> None:
        await users.register_user(
            ctx.caller_id, ctx.msg.sender_name, ctx.msg.sender_number
        )
        await ctx.react(Reaction.SUCCESS)

    return register_self


def make_set_trust(users: UserStore, trusted: bool) -> CommandHandler:
    async def set_trust(ctx: CommandContext) -> None:
        (targets,) = ctx.parsed_args
        for user in targets:
            if trusted:
                await users.trust(user.uuid)
            else:
                await users.untrust(user.uuid)
        await ctx.react(Reaction.SUCCESS)

    return set_trust


def make_trusted(users: UserStore) -> CommandHandler:
    async def trusted(ctx: CommandContext) -> None:
        listing = "\n".join(describe_user(user, users) for user in users.trusted())
        await ctx.reply(f"Trusted:\n{listing or '(none)'}")

    return trusted


def make_link(users: UserStore) -> CommandHandler:
    async def link(ctx: CommandContext) -> None:
        user, value = ctx.parsed_args
        linked_id = to_identifier(value)
        if linked_id is None:
            await ctx.reply("Missing or invalid user ID.")
            return
        await users.link(user.uuid, linked_id)
        await ctx.react(Reaction.SUCCESS)

    return link


def make_self_link(users: UserStore) -> CommandHandler:
    async def self_link(ctx: CommandContext) -> None:
        (value,) = ctx.parsed_args
        linked_id = to_identifier(value)
        if linked_id is None:
            await ctx.reply("Missing or invalid user ID.")
            return
        if not await users.link(ctx.caller_id, linked_id):
            await ctx.reply("You are not registered.")
            return
        await ctx.react(Reaction.SUCCESS)

    return self_link


def make_unlink(users: UserStore) -> CommandHandler:
    async def unlink(ctx: CommandContext) -> None:
        (user,) = ctx.parsed_args
        await users.unlink(user.uuid)
        await ctx.react(Reaction.SUCCESS)

    return unlink


def make_team_update(users: UserStore, add: bool) -> CommandHandler:
    async def team_update(ctx: CommandContext) -> None:
        user, value = ctx.parsed_args
        team = to_team(value)
        if team is None:
            await ctx.reply("Invalid team ID.")
            return
        if add:
            await users.add_team(user.uuid, team)
        else:
            await users.remove_team(user.uuid, team)
        await ctx.react(Reaction.SUCCESS)

    return team_update


async def user_info(ctx: CommandContext) -> None:
    (user,) = ctx.parsed_args
    await ctx.reply(f"{user.name} ({user.number}) → {user.linked_id}")


def make_guest(users: UserStore) -> CommandHandler:
    async def guest(ctx: CommandContext) -> None:
        (targets,) = ctx.parsed_args
        for user in targets:
            await users.trust(user.uuid)
            await users.add_team(user.uuid, Team.GUEST)
        await ctx.react(Reaction.SUCCESS)

    return guest


def make_whoami(users: UserStore) -> CommandHandler:
    async def whoami(ctx: CommandContext) -> None:
        (user,) = ctx.parsed_args
        await ctx.reply(describe_user(user, users))

    return whoami


def register_commands(commands: CommandRegistry, users: UserStore) -> None:
    """Register user management commands.

    Args:
        commands: Command registry
        users: User store the commands operate on
    """
    user_arg = ArgSpec("user", ArgumentType.USER, description="Mentioned user")
    users_arg = ArgSpec(
        "users", ArgumentType.USER, description="Mentioned user(s)", rest=True
    )
    id_arg = ArgSpec("id", ArgumentType.NUMBER, description="Linked user ID")
    team_arg = ArgSpec(
        "team",
        ArgumentType.NUMBER,
        description=", ".join(f"{team.value}={team.label}" for team in Team),
    )

    commands.register(
        Command(
            descriptor=CommandDescriptor(
                name="register", description="Register yourself as a known user"
            ),
            handler=make_register(users),
            policy=allow_all,
            registered=False,
        )
    )

    commands.register_typed(
        CommandDescriptor(
            name="trust",
            args=(users_arg,),
            description="Trust mentioned registered users",
        ),
        make_set_trust(users, trusted=True),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="untrust",
            args=(users_arg,),
            description="Untrust mentioned registered users",
        ),
        make_set_trust(users, trusted=False),
        policy=is_admin,
    )

    commands.register(
        Command(
            descriptor=CommandDescriptor(
                name="trusted",
                description="List all trusted registered users",
                aliases=("list",),
            ),
            handler=make_trusted(users),
            policy=is_admin,
        )
    )

    commands.register_typed(
        CommandDescriptor(
            name="link",
            args=(user_arg, id_arg),
            description="Link a user to an external user ID",
        ),
        make_link(users),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="self-link",
            args=(id_arg,),
            description="Link yourself to an external user ID",
        ),
        make_self_link(users),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="unlink",
            args=(user_arg,),
            description="Remove the external user ID link of a user",
        ),
        make_unlink(users),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="team-add",
            args=(user_arg, team_arg),
            description="Add a user to a team",
        ),
        make_team_update(users, add=True),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="team-remove",
            args=(user_arg, team_arg),
            description="Remove a user from a team",
        ),
        make_team_update(users, add=False),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="user", args=(user_arg,), description="Get info about a user"
        ),
        user_info,
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="guest",
            args=(users_arg,),
            description="Trust user(s) and give role guest",
        ),
        make_guest(users),
        policy=is_admin,
    )

    commands.register_typed(
        CommandDescriptor(
            name="whoami",
            args=(
                ArgSpec(
                    "user",
                    ArgumentType.USER_OPTIONAL,
                    required=False,
                    description="User to describe, yourself if omitted",
                ),
            ),
            description="Show what the bot knows about a user",
        ),
        make_whoami(users),
        policy=is_guest,
    )

    logger.info("module_commands_registered", module="users")
