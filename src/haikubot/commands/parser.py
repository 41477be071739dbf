"""Interaction-to-command parser."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from haikubot.commands import schema
from haikubot.commands.schema import (
    COUNT_COMMAND_NAME,
    GET_HAIKU_COMMAND_NAME,
    RANDOM_HAIKU_COMMAND_NAME,
    SEARCH_COMMAND_NAME,
    UPTIME_COMMAND_NAME,
    ParameterKind,
)


class ParseErrorCode(StrEnum):
    """Stable parse failure codes."""

    MISSING_OPTION = "missing_option"
    INVALID_OPTION = "invalid_option"
    UNKNOWN_COMMAND = "unknown_command"


class CommandParseError(ValueError):
    """Raised when an interaction cannot become a typed command."""

    def __init__(
        self,
        code: ParseErrorCode,
        message: str,
        *,
        command: str,
        option: str | None = None,
    ) -> None:
        """Create parse failure.

        Args:
            code: Stable parse error code.
            message: Human-readable diagnostic.
            command: Command name from the interaction.
            option: Offending option name, when applicable.
        """
        super().__init__(message)
        self.code = code
        self.command = command
        self.option = option


class RawOption(BaseModel):
    """One option value as delivered by the platform."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    kind: ParameterKind
    value: Any = None


class RawInteraction(BaseModel):
    """Platform-neutral command invocation event."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    interaction_id: str
    command_name: str
    options: tuple[RawOption, ...] = ()
    server_id: int | None = None
    user_id: int | None = None

    def option(self, name: str) -> RawOption | None:
        """Return option by name, if delivered."""
        for option in self.options:
            if option.name == name:
                return option
        return None


class UptimeCommand(BaseModel):
    """Parsed `/uptime`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Literal["uptime"] = UPTIME_COMMAND_NAME


class CountCommand(BaseModel):
    """Parsed `/count`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Literal["count"] = COUNT_COMMAND_NAME
    phrase: str


class GetHaikuCommand(BaseModel):
    """Parsed `/gethaiku`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Literal["gethaiku"] = GET_HAIKU_COMMAND_NAME
    haiku_id: int


class RandomHaikuCommand(BaseModel):
    """Parsed `/randomhaiku`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Literal["randomhaiku"] = RANDOM_HAIKU_COMMAND_NAME


class SearchCommand(BaseModel):
    """Parsed `/search` with a non-empty keyword list."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Literal["search"] = SEARCH_COMMAND_NAME
    keywords: tuple[str, ...] = Field(min_length=1)


ParsedCommand: TypeAlias = (
    UptimeCommand | CountCommand | GetHaikuCommand | RandomHaikuCommand | SearchCommand
)


def _required_value(raw: RawInteraction, name: str, kind: ParameterKind) -> Any:
    """Extract one required option and check its declared type.

    Args:
        raw: Incoming interaction.
        name: Declared option name.
        kind: Declared option kind.

    Returns:
        Option value.

    Raises:
        CommandParseError: If the option is missing or wrongly typed.
    """
    option = raw.option(name)
    if option is None or option.value is None:
        raise CommandParseError(
            ParseErrorCode.MISSING_OPTION,
            f"Error: /{raw.command_name} requires option '{name}'.",
            command=raw.command_name,
            option=name,
        )
    if option.kind != kind or not _value_matches(option.value, kind):
        raise CommandParseError(
            ParseErrorCode.INVALID_OPTION,
            f"Error: option '{name}' of /{raw.command_name} must be {kind.value}.",
            command=raw.command_name,
            option=name,
        )
    return option.value


def _value_matches(value: object, kind: ParameterKind) -> bool:
    if kind == ParameterKind.STRING:
        return isinstance(value, str)
    if kind == ParameterKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == ParameterKind.BOOLEAN:
        return isinstance(value, bool)
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_search(raw: RawInteraction) -> SearchCommand:
    keywords = tuple(
        str(_required_value(raw, "keywords", ParameterKind.STRING)).split()
    )
    if not keywords:
        raise CommandParseError(
            ParseErrorCode.INVALID_OPTION,
            "Error: /search requires at least one keyword.",
            command=raw.command_name,
            option="keywords",
        )
    return SearchCommand(keywords=keywords)


def parse_interaction(raw: RawInteraction) -> ParsedCommand:
    """Classify one interaction into exactly one typed command.

    Pure: performs no I/O.

    Args:
        raw: Incoming platform interaction.

    Returns:
        Parsed command variant.

    Raises:
        CommandParseError: With `MISSING_OPTION`, `INVALID_OPTION` or
            `UNKNOWN_COMMAND`.
    """
    match raw.command_name:
        case schema.UPTIME_COMMAND_NAME:
            return UptimeCommand()
        case schema.COUNT_COMMAND_NAME:
            return CountCommand(
                phrase=_required_value(raw, "phrase", ParameterKind.STRING)
            )
        case schema.GET_HAIKU_COMMAND_NAME:
            return GetHaikuCommand(
                haiku_id=_required_value(raw, "id", ParameterKind.INTEGER)
            )
        case schema.RANDOM_HAIKU_COMMAND_NAME:
            return RandomHaikuCommand()
        case schema.SEARCH_COMMAND_NAME:
            return _parse_search(raw)
    raise CommandParseError(
        ParseErrorCode.UNKNOWN_COMMAND,
        f"Error: unknown command '/{raw.command_name}'.",
        command=raw.command_name,
    )
