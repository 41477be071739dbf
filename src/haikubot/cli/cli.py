"""Typer CLI entrypoint for the haiku bot."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from haikubot.cli.bootstrap import (
    bootstrap_config,
    build_store,
    configure_logging,
    default_config_file,
    load_config_or_defaults,
)
from haikubot.commands.registry import RegistrationError
from haikubot.commands.schema import builtin_command_specs
from haikubot.counting import SyllableCountError, count_line

app = typer.Typer(help="Haiku bot CLI")
_CONSOLE = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML or JSON bot config."),
]


@app.command("init")
def init_command(
    config: ConfigOption = None,
    overwrite: Annotated[
        bool, typer.Option("--overwrite", help="Replace an existing config file.")
    ] = False,
) -> None:
    """Write a default bot config file."""
    config_file = config or default_config_file()
    action = bootstrap_config(config_file, overwrite=overwrite)
    _CONSOLE.print(f"config_file: {action} ({config_file})")


@app.command("commands")
def commands_command() -> None:
    """List the slash commands the bot registers."""
    table = Table(title="Commands")
    table.add_column("Name", style="bold cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Options")
    for spec in builtin_command_specs():
        options = ", ".join(
            f"{parameter.name}:{parameter.kind.value}"
            + ("" if parameter.required else "?")
            for parameter in spec.parameters
        )
        table.add_row(f"/{spec.name}", spec.description, options or "-")
    _CONSOLE.print(table)


@app.command("count")
def count_command(
    phrase: Annotated[str, typer.Argument(help="Phrase to count.")],
) -> None:
    """Count syllables in a phrase."""
    try:
        syllables = count_line(phrase)
    except SyllableCountError as exc:
        _CONSOLE.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1) from exc
    _CONSOLE.print(f"The phrase '{phrase}' has {syllables} syllables")


@app.command("run")
def run_command(config: ConfigOption = None) -> None:
    """Connect to Discord and serve slash commands."""
    config_file = config or default_config_file()
    bot_config = load_config_or_defaults(config_file, console=_CONSOLE)
    configure_logging(bot_config.logging.level)
    token = bot_config.resolve_token()
    if token is None:
        env_var = bot_config.discord.token_env
        _CONSOLE.print(f"[bold red]Missing bot token in ${env_var}.[/bold red]")
        raise typer.Exit(code=2)

    from haikubot.platform.discord_client import HaikuBotClient

    client = HaikuBotClient(store=build_store(bot_config), config=bot_config)
    try:
        client.run(token, log_handler=None)
    except RegistrationError as exc:
        _CONSOLE.print(f"[bold red]Command registration failed: {exc}[/bold red]")
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Run the Typer app."""
    app()


if __name__ == "__main__":
    main()
