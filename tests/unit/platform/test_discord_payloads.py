"""Unit tests for Discord payload conversion."""

from __future__ import annotations

import pytest

from haikubot.commands.parser import GetHaikuCommand, parse_interaction
from haikubot.commands.schema import ParameterKind, builtin_command_specs
from haikubot.platform.discord_client import (
    CHAT_INPUT_COMMAND_TYPE,
    command_payload,
    raw_interaction_from_payload,
)


@pytest.mark.unit
def test_command_payload_maps_option_types() -> None:
    """Specs become chat-input command payloads with Discord option types."""
    specs = {spec.name: spec for spec in builtin_command_specs()}

    payload = command_payload(specs["gethaiku"])

    assert payload["type"] == CHAT_INPUT_COMMAND_TYPE
    assert payload["name"] == "gethaiku"
    assert payload["options"] == [
        {
            "name": "id",
            "description": "Id of the haiku to fetch",
            "type": 4,
            "required": True,
        }
    ]
    assert command_payload(specs["uptime"])["options"] == []


@pytest.mark.unit
def test_raw_interaction_from_payload_types_options() -> None:
    """Interaction data options carry kinds derived from their Discord type."""
    raw = raw_interaction_from_payload(
        {"name": "gethaiku", "options": [{"name": "id", "type": 4, "value": 3}]},
        interaction_id="111",
        server_id=222,
        user_id=333,
    )

    assert raw.command_name == "gethaiku"
    assert raw.server_id == 222
    option = raw.option("id")
    assert option is not None
    assert option.kind == ParameterKind.INTEGER
    assert parse_interaction(raw) == GetHaikuCommand(haiku_id=3)


@pytest.mark.unit
def test_raw_interaction_drops_undeclared_option_types() -> None:
    """Options of types the bot never declares (e.g. users) are dropped."""
    raw = raw_interaction_from_payload(
        {"name": "search", "options": [{"name": "who", "type": 6, "value": "9"}]},
        interaction_id="111",
        server_id=None,
    )

    assert raw.options == ()
    assert raw.server_id is None


@pytest.mark.unit
def test_raw_interaction_without_options() -> None:
    """Commands without options convert to an empty option tuple."""
    raw = raw_interaction_from_payload(
        {"name": "uptime"}, interaction_id="1", server_id=2
    )

    assert raw.options == ()
