"""Authorization policies.

A policy is an async predicate over the CommandContext, evaluated after the
trust gate. Admins satisfy every team policy.
"""

from infrastructure.commands.context import CommandContext
from infrastructure.commands.models import CommandPolicy
from infrastructure.users import Team


async def allow_all(ctx: CommandContext) -> bool:
    return True


async def is_admin(ctx: CommandContext) -> bool:
    return ctx.users.is_admin(ctx.caller_id)


async def is_team(ctx: CommandContext, team: Team) -> bool:
    """Admin or member of team."""
    if await is_admin(ctx):
        return True
    user = ctx.user or ctx.users.get_user(ctx.caller_id)
    return user is not None and team in user.teams


async def is_abc(ctx: CommandContext) -> bool:
    return await is_team(ctx, Team.ABC)


async def is_cbc(ctx: CommandContext) -> bool:
    return await is_team(ctx, Team.CBC)


async def is_guest(ctx: CommandContext) -> bool:
    """Guests, CBC and ABC members (and admins)."""
    return (
        await is_team(ctx, Team.GUEST)
        or await is_cbc(ctx)
        or await is_abc(ctx)
    )


def any_of(*policies: CommandPolicy) -> CommandPolicy:
    """Policy satisfied when at least one of policies is."""

    async def _policy(ctx: CommandContext) -> bool:
        for policy in policies:
            if await policy(ctx):
                return True
        return False

    return _policy
