"""Unit tests for command schema registration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from haikubot.commands.registry import CommandRegistry, RegistrationError
from haikubot.commands.schema import (
    CommandSpec,
    ParameterKind,
    ParameterSpec,
    builtin_command_specs,
)
from tests.unit.fakes import FakePlatformClient


@pytest.mark.unit
def test_builtin_catalog_matches_served_commands() -> None:
    """Catalog lists every served command with its required options."""
    specs = {spec.name: spec for spec in builtin_command_specs()}

    assert list(specs) == ["uptime", "count", "gethaiku", "randomhaiku", "search"]
    id_option = specs["gethaiku"].parameter("id")
    assert id_option is not None
    assert id_option.kind == ParameterKind.INTEGER
    assert id_option.required is True
    assert specs["uptime"].parameters == ()


@pytest.mark.unit
def test_command_spec_rejects_duplicate_parameter_names() -> None:
    """Specs are never constructed with duplicate parameter names."""
    option = ParameterSpec(
        name="id", description="Id", kind=ParameterKind.INTEGER, required=True
    )

    with pytest.raises(ValidationError):
        CommandSpec(name="gethaiku", description="Fetch", parameters=(option, option))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_register_publishes_specs_and_returns_ids() -> None:
    """Registration returns platform identifiers for every spec."""
    client = FakePlatformClient()
    registry = CommandRegistry(client)

    ids = await registry.register(builtin_command_specs())

    assert ids == [
        "cmd-uptime",
        "cmd-count",
        "cmd-gethaiku",
        "cmd-randomhaiku",
        "cmd-search",
    ]
    assert len(registry.specs) == 5


@pytest.mark.unit
@pytest.mark.asyncio
async def test_register_same_name_replaces_prior_schema() -> None:
    """Re-registering a name replaces its schema instead of duplicating it."""
    client = FakePlatformClient()
    registry = CommandRegistry(client)
    await registry.register(builtin_command_specs())
    replacement = CommandSpec(name="uptime", description="How long the bot has run")

    await registry.register([replacement])

    assert len(registry.specs) == 5
    assert registry.get("uptime") == replacement
    published = {spec.name: spec for spec in client.registered[-1]}
    assert published["uptime"].description == "How long the bot has run"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_register_rejection_raises_registration_error() -> None:
    """Platform rejection surfaces as RegistrationError and keeps prior state."""
    client = FakePlatformClient(reject_registration=True)
    registry = CommandRegistry(client)

    with pytest.raises(RegistrationError) as exc_info:
        await registry.register(builtin_command_specs())

    assert "Invalid Form Body" in str(exc_info.value)
    assert "search" in exc_info.value.command_names
    assert registry.specs == ()
