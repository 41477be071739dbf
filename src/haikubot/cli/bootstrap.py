"""CLI bootstrap/runtime lifecycle helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler

from haikubot.config import (
    BotConfigError,
    HaikuBotConfig,
    LogLevel,
    load_bot_config,
)
from haikubot.store import SqliteHaikuStore

_LOGGING_CONFIGURED = False


def configure_logging(level: LogLevel = LogLevel.INFO) -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=level.value,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def default_config_file() -> Path:
    """Return default config path for the current working directory.

    Returns:
        Existing YAML or JSON config path, YAML when neither exists.
    """
    root = Path.cwd() / ".haikubot"
    yaml_path = root / "config.yaml"
    json_path = root / "config.json"
    if yaml_path.exists():
        return yaml_path
    if json_path.exists():
        return json_path
    return yaml_path


def bootstrap_config(config_file: Path, *, overwrite: bool = False) -> str:
    """Write default config payload.

    Args:
        config_file: Target config path.
        overwrite: Whether to replace an existing file.

    Returns:
        Action label: `created`, `overwritten` or `exists`.
    """
    existed = config_file.exists()
    if existed and not overwrite:
        return "exists"
    config_file.parent.mkdir(parents=True, exist_ok=True)
    payload = HaikuBotConfig().model_dump(mode="json")
    config_file.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return "overwritten" if existed else "created"


def load_config_or_defaults(config_file: Path, *, console: Console) -> HaikuBotConfig:
    """Load config, falling back to defaults with a visible warning.

    Args:
        config_file: Config path.
        console: Rich console for config warnings.

    Returns:
        Loaded or default config.
    """
    try:
        return load_bot_config(config_file)
    except BotConfigError as exc:
        console.print(
            f"[yellow]Bot config at {config_file} is invalid; "
            "falling back to defaults.[/yellow]"
        )
        console.print(f"[yellow]Reason: {exc}[/yellow]")
        return HaikuBotConfig()


def build_store(config: HaikuBotConfig) -> SqliteHaikuStore:
    """Open the configured SQLite haiku store."""
    return SqliteHaikuStore(Path(config.store.sqlite_path))
