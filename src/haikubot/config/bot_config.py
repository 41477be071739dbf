"""Haiku bot config models and loading helpers."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

GUILD_ID_ENV_VAR = "HAIKUBOT_GUILD_ID"


class LogLevel(StrEnum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DiscordSettings(BaseModel):
    """Discord connection settings."""

    model_config = ConfigDict(extra="forbid")

    token_env: str = "DISCORD_TOKEN"  # nosec B105
    guild_id: int | None = None


class StoreSettings(BaseModel):
    """Haiku store settings."""

    model_config = ConfigDict(extra="forbid")

    sqlite_path: str = ".haikubot/haikus.sqlite"


class PagerSettings(BaseModel):
    """Search result pager settings."""

    model_config = ConfigDict(extra="forbid")

    ttl_seconds: float = Field(default=300.0, gt=0, le=900)


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = LogLevel.INFO


class HaikuBotConfig(BaseModel):
    """Root haiku bot configuration model."""

    model_config = ConfigDict(extra="forbid")

    discord: DiscordSettings = DiscordSettings()
    store: StoreSettings = StoreSettings()
    pager: PagerSettings = PagerSettings()
    logging: LoggingSettings = LoggingSettings()

    def resolve_token(self, environ: Mapping[str, str] | None = None) -> str | None:
        """Read the bot token from the configured environment variable.

        Args:
            environ: Environment mapping, defaulting to the process environment.

        Returns:
            Token when set and non-blank.
        """
        env = os.environ if environ is None else environ
        token = env.get(self.discord.token_env, "").strip()
        return token or None


class BotConfigError(RuntimeError):
    """Raised when bot config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        BotConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise BotConfigError(f"Invalid bot config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise BotConfigError(f"Invalid bot config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BotConfigError("Invalid bot config payload: root must be an object")
    return payload


def _apply_env_overrides(
    config: HaikuBotConfig, environ: Mapping[str, str]
) -> HaikuBotConfig:
    raw_guild = environ.get(GUILD_ID_ENV_VAR, "").strip()
    if not raw_guild:
        return config
    try:
        guild_id = int(raw_guild)
    except ValueError as exc:
        raise BotConfigError(
            f"Invalid {GUILD_ID_ENV_VAR} value '{raw_guild}': expected an integer"
        ) from exc
    discord = config.discord.model_copy(update={"guild_id": guild_id})
    return config.model_copy(update={"discord": discord})


def load_bot_config(
    path: Path, *, environ: Mapping[str, str] | None = None
) -> HaikuBotConfig:
    """Load bot config from disk, defaulting when missing.

    Args:
        path: Config file path.
        environ: Environment used for overrides, defaulting to the process one.

    Returns:
        Parsed config with environment overrides applied.

    Raises:
        BotConfigError: If payload decode, validation or overrides fail.
    """
    config = HaikuBotConfig()
    if path.exists():
        payload = _decode_config_payload(path)
        try:
            config = HaikuBotConfig.model_validate(payload)
        except ValidationError as exc:
            raise BotConfigError(f"Invalid bot config payload: {exc}") from exc
    return _apply_env_overrides(config, os.environ if environ is None else environ)
