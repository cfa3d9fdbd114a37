import asyncio
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

from infrastructure.commands import (
    CommandPipeline,
    CommandRegistry,
    create_arguments_registry,
)
from infrastructure.configuration import Settings
from infrastructure.logging import configure_logging, get_module_logger
from infrastructure.messaging.signal import SignalMessageSource
from infrastructure.services import get_settings, get_signal_client, get_user_store
from infrastructure.users import UserStore
from modules import general, users
from modules import signal as signal_module

load_dotenv()

logger = get_module_logger()


def build_pipeline(
    settings: Settings,
    user_store: UserStore,
    started_at: datetime,
    source: Optional[SignalMessageSource] = None,
) -> CommandPipeline:
    """Create the registries and register every enabled feature module.

    Transport commands are registered only when a message source is given.
    """
    commands = CommandRegistry(create_arguments_registry())

    if settings.commands.is_enabled("general"):
        general.register(commands, settings, started_at)
    if settings.commands.is_enabled("users"):
        users.register(commands, user_store)
    if source is not None and settings.commands.is_enabled("signal"):
        signal_module.register(commands, source)

    logger.info(
        "commands_registered",
        count=len(commands.list_commands()),
        disabled_modules=settings.commands.disabled_modules,
    )
    return CommandPipeline(commands, user_store)


def list_configs(settings: Settings) -> None:
    """List all configuration settings keys"""
    config_settings = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


async def main() -> None:
    """Main function to start the application."""
    started_at = datetime.now(timezone.utc)
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.is_production, settings.LOG_FILE)

    logger.info("application_startup", version=settings.DOCKER_VERSION)
    list_configs(settings)

    user_store = get_user_store()
    await user_store.load()

    source = SignalMessageSource(
        get_signal_client(), poll_interval=settings.signal.SIGNAL_POLL_INTERVAL
    )
    pipeline = build_pipeline(settings, user_store, started_at, source)
    source.on_message(pipeline.execute)
    try:
        await source.start()
    finally:
        source.stop()
        logger.info("application_shutdown")


if __name__ == "__main__":
    asyncio.run(main())
