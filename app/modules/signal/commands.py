"""Signal transport commands."""

from infrastructure.commands import (
    Command,
    CommandContext,
    CommandDescriptor,
    CommandRegistry,
    is_admin,
)
from infrastructure.commands.models import CommandHandler
from infrastructure.logging import get_module_logger
from infrastructure.messaging.signal import SignalMessageSource

logger = get_module_logger()


def make_reload_groups(source: SignalMessageSource) -> CommandHandler:
    """Handler refreshing the group cache of the receiving account."""

    async def reload_groups(ctx: CommandContext) -> None:
        await source.load_groups(ctx.msg.account)
        logger.info("groups_reloaded", account=ctx.msg.account)
        await ctx.reply("Groups reloaded.")

    return reload_groups


def register_commands(commands: CommandRegistry, source: SignalMessageSource) -> None:
    commands.register(
        Command(
            descriptor=CommandDescriptor(name="reload-groups", description="Reload groups"),
            handler=make_reload_groups(source),
            policy=is_admin,
        )
    )

    logger.info("module_commands_registered", module="signal")
