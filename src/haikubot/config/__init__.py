"""Haiku bot configuration loading."""

from haikubot.config.bot_config import (
    GUILD_ID_ENV_VAR,
    BotConfigError,
    DiscordSettings,
    HaikuBotConfig,
    LoggingSettings,
    LogLevel,
    PagerSettings,
    StoreSettings,
    load_bot_config,
)

__all__ = [
    "GUILD_ID_ENV_VAR",
    "BotConfigError",
    "DiscordSettings",
    "HaikuBotConfig",
    "LogLevel",
    "LoggingSettings",
    "PagerSettings",
    "StoreSettings",
    "load_bot_config",
]
