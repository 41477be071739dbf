"""Command option schemas published to the chat platform."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

UPTIME_COMMAND_NAME = "uptime"
COUNT_COMMAND_NAME = "count"
GET_HAIKU_COMMAND_NAME = "gethaiku"
RANDOM_HAIKU_COMMAND_NAME = "randomhaiku"
SEARCH_COMMAND_NAME = "search"


class ParameterKind(StrEnum):
    """Supported command parameter kinds."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NUMBER = "number"


class ParameterSpec(BaseModel):
    """One typed command parameter."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1, max_length=32)
    description: str = Field(min_length=1, max_length=100)
    kind: ParameterKind
    required: bool = False


class CommandSpec(BaseModel):
    """Immutable command schema: name, description and ordered parameters."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1, max_length=32)
    description: str = Field(min_length=1, max_length=100)
    parameters: tuple[ParameterSpec, ...] = ()

    @model_validator(mode="after")
    def _validate_parameter_names(self) -> CommandSpec:
        """Reject duplicate parameter names.

        Returns:
            Validated spec.

        Raises:
            ValueError: If two parameters share a name.
        """
        seen: set[str] = set()
        for parameter in self.parameters:
            if parameter.name in seen:
                raise ValueError(
                    f"duplicate parameter '{parameter.name}' in command '{self.name}'"
                )
            seen.add(parameter.name)
        return self

    def parameter(self, name: str) -> ParameterSpec | None:
        """Return declared parameter by name, if any."""
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None


def builtin_command_specs() -> tuple[CommandSpec, ...]:
    """Return the catalog of commands served by the bot.

    Returns:
        Command specs in registration order.
    """
    return (
        CommandSpec(
            name=UPTIME_COMMAND_NAME,
            description="Show how long since the bot was last restarted",
        ),
        CommandSpec(
            name=COUNT_COMMAND_NAME,
            description="Count the number of syllables in a given phrase",
            parameters=(
                ParameterSpec(
                    name="phrase",
                    description="The phrase to count",
                    kind=ParameterKind.STRING,
                    required=True,
                ),
            ),
        ),
        CommandSpec(
            name=GET_HAIKU_COMMAND_NAME,
            description="Fetch a specific haiku from this server by its id",
            parameters=(
                ParameterSpec(
                    name="id",
                    description="Id of the haiku to fetch",
                    kind=ParameterKind.INTEGER,
                    required=True,
                ),
            ),
        ),
        CommandSpec(
            name=RANDOM_HAIKU_COMMAND_NAME,
            description="Fetch a random haiku from this server",
        ),
        CommandSpec(
            name=SEARCH_COMMAND_NAME,
            description="Search for a haiku",
            parameters=(
                ParameterSpec(
                    name="keywords",
                    description="A set of keywords to search for, separated by spaces",
                    kind=ParameterKind.STRING,
                    required=True,
                ),
            ),
        ),
    )
