"""General purpose commands: help, ping, version and friends."""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

import requests

from infrastructure.commands import (
    ArgSpec,
    ArgumentType,
    Command,
    CommandContext,
    CommandDescriptor,
    CommandRegistry,
    Reaction,
    format_usage,
    is_admin,
    is_guest,
)
from infrastructure.commands.models import CommandHandler
from infrastructure.configuration import Settings
from infrastructure.logging import LOG_LEVELS, get_module_logger, set_log_level
from modules.general.releases import (
    UNKNOWN_VERSION,
    fetch_latest_release,
    fetch_latest_version,
    is_latest,
)

logger = get_module_logger()

CHANGELOG_LIMIT = 1900
LOGS_USAGE = "Usage: logs <n> (n is a positive number of lines)"


async def ping(ctx: CommandContext) -> None:
    await ctx.reply(f"Pong! [{' '.join(ctx.expanded_args())}]")


async def add(ctx: CommandContext) -> None:
    a, b = ctx.parsed_args
    await ctx.reply(f"{a} + {b} = {a + b}")


async def log_level(ctx: CommandContext) -> None:
    (level,) = ctx.parsed_args
    if not set_log_level(level):
        valid = ", ".join(LOG_LEVELS)
        await ctx.reply(f"Invalid log level. Valid levels: {valid}")
        return
    logger.info("log_level_changed", level=level.lower())
    await ctx.react(Reaction.SUCCESS)


async def _is_visible(command: Command, ctx: CommandContext) -> bool:
    if not command.registered or command.policy is None:
        return True
    return bool(await command.policy(ctx))


def describe_command(command: Command) -> str:
    """Detailed help text for one command."""
    descriptor = command.descriptor
    message = f"**{descriptor.name}**\n"
    if descriptor.aliases:
        message += f"*{', '.join(descriptor.aliases)}*\n\n"
    if descriptor.description:
        message += f"{descriptor.description}\n"
    if not descriptor.args:
        return message + "No arguments."

    message += f"Usage: {format_usage(descriptor)}\n\nArguments:\n"
    for arg in descriptor.args:
        required = " (required)" if arg.required else ""
        message += f"• **{arg.name}**{required} — {arg.description}\n"
    return message


def make_help(commands: CommandRegistry) -> CommandHandler:
    """Help handler listing the commands of a registry."""

    async def help_command(ctx: CommandContext) -> None:
        (name,) = ctx.parsed_args
        if name:
            command = commands.get_command(name)
            if command is None:
                await ctx.reply(f'Command "{name.lower()}" not found.')
                return
            await ctx.reply(describe_command(command))
            return

        lines = ["Available commands:", ""]
        for command in commands.list_commands():
            if await _is_visible(command, ctx):
                description = command.description or "No description"
                lines.append(f"• **{command.name}** — {description}")
        await ctx.reply("\n".join(lines))

    return help_command


def format_uptime(seconds: float) -> str:
    """Format a duration as e.g. "2d 3h 4m 5s"."""
    remaining = int(seconds)
    days, remaining = divmod(remaining, 86400)
    hours, remaining = divmod(remaining, 3600)
    minutes, secs = divmod(remaining, 60)
    parts = [f"{days}d"] if days else []
    if days or hours:
        parts.append(f"{hours}h")
    if days or hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")
    return " ".join(parts)


def make_uptime(started_at: datetime) -> CommandHandler:
    async def uptime(ctx: CommandContext) -> None:
        elapsed = datetime.now(timezone.utc) - started_at
        await ctx.reply(f"Uptime: {format_uptime(elapsed.total_seconds())}")

    return uptime


def make_version(settings: Settings) -> CommandHandler:
    async def version(ctx: CommandContext) -> None:
        await ctx.react(Reaction.WORKING)
        current = f"{settings.DOCKER_VERSION} ({settings.GIT_SHA})"
        latest = await fetch_latest_version(settings.github)
        if is_latest(latest, settings.DOCKER_VERSION):
            await ctx.reply(f"[✅] Current Version: {current}")
        elif latest == UNKNOWN_VERSION:
            await ctx.reply(f"[❔] Current Version: {current}, Latest Version: unknown")
        else:
            await ctx.reply(f"[❌] Current Version: {current}, Latest Version: {latest}")

    return version


def make_changelog(settings: Settings) -> CommandHandler:
    async def changelog(ctx: CommandContext) -> None:
        if not settings.github.REPOSITORY:
            await ctx.reply("Repository not configured.")
            return

        try:
            release = await fetch_latest_release(settings.github)
        except requests.HTTPError as e:
            status: Optional[int] = (
                e.response.status_code if e.response is not None else None
            )
            logger.warning("changelog_fetch_failed", status_code=status)
            await ctx.reply(f"Could not fetch release info ({status})")
            return

        body = (release.body or "(No description)").strip()[:CHANGELOG_LIMIT]
        message = f"**{release.title}**\n\n{body}"
        if len(body) >= CHANGELOG_LIMIT:
            message += "\n\n...truncated"
        await ctx.reply(message)

    return changelog


def read_last_lines(path: str, count: int) -> List[str]:
    """Last count lines of a text file, ignoring surrounding blank lines."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        lines = handle.read().strip().splitlines()
    return lines[-count:]


def make_logs(settings: Settings) -> CommandHandler:
    async def logs(ctx: CommandContext) -> None:
        (n,) = ctx.parsed_args
        if n <= 0 or not float(n).is_integer():
            await ctx.reply(LOGS_USAGE)
            return
        if not settings.LOG_FILE:
            await ctx.reply("Log file not configured.")
            return

        try:
            lines = await asyncio.to_thread(read_last_lines, settings.LOG_FILE, int(n))
        except OSError as e:
            logger.warning("log_file_unreadable", path=settings.LOG_FILE, error=str(e))
            await ctx.reply("Could not read log file.")
            return

        await ctx.reply(f"Last {len(lines)} log lines:\n\n" + "\n".join(lines))

    return logs


def register_commands(
    commands: CommandRegistry, settings: Settings, started_at: datetime
) -> None:
    """Register the general commands.

    Args:
        commands: Command registry
        settings: Application settings (versions, GitHub repository)
        started_at: Process start time, timezone aware
    """
    commands.register_typed(
        CommandDescriptor(
            name="help",
            args=(
                ArgSpec(
                    "command",
                    ArgumentType.STRING,
                    required=False,
                    description="Command to get detailed help for",
                ),
            ),
            description="Show help for commands",
            aliases=("h",),
        ),
        make_help(commands),
    )

    commands.register(
        Command(
            descriptor=CommandDescriptor(
                name="ping",
                description="Send a ping to the bot",
                aliases=("p",),
            ),
            handler=ping,
        )
    )

    commands.register(
        Command(
            descriptor=CommandDescriptor(
                name="uptime", description="Show how long the bot has been running"
            ),
            handler=make_uptime(started_at),
        )
    )

    commands.register_typed(
        CommandDescriptor(
            name="add",
            args=(
                ArgSpec("a", ArgumentType.NUMBER, description="First number"),
                ArgSpec("b", ArgumentType.NUMBER, description="Second number"),
            ),
            description="Add two numbers",
            aliases=("a",),
        ),
        add,
        policy=is_guest,
    )

    commands.register_typed(
        CommandDescriptor(
            name="log-level",
            args=(
                ArgSpec(
                    "level",
                    ArgumentType.STRING,
                    description="Log level (trace, debug, info, warn, error)",
                ),
            ),
            description="Set the log level",
            aliases=("ll",),
        ),
        log_level,
        policy=is_admin,
    )

    commands.register(
        Command(
            descriptor=CommandDescriptor(
                name="version", description="Show version", aliases=("v",)
            ),
            handler=make_version(settings),
            policy=is_admin,
        )
    )

    commands.register_typed(
        CommandDescriptor(
            name="logs",
            args=(
                ArgSpec("n", ArgumentType.NUMBER, description="Number of lines to show"),
            ),
            description="Show the last n lines of the log file",
            aliases=("log",),
        ),
        make_logs(settings),
        policy=is_admin,
    )

    commands.register(
        Command(
            descriptor=CommandDescriptor(
                name="changelog",
                description="Show the latest changelog",
                aliases=("ch",),
            ),
            handler=make_changelog(settings),
            registered=False,
        )
    )

    logger.info("module_commands_registered", module="general")
