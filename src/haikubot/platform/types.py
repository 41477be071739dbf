"""Platform-facing contracts consumed by the command core."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from haikubot.commands.schema import CommandSpec


class PlatformError(RuntimeError):
    """Raised when the platform rejects or fails an outgoing request."""


class NavigationControl(BaseModel):
    """One clickable control attached to a response."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    custom_id: str
    label: str
    disabled: bool = False


class EmbedPayload(BaseModel):
    """Platform-neutral embed card."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    description: str
    footer: str | None = None
    color: int | None = None


class DisplayPayload(BaseModel):
    """Full visual content of one response message."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str | None = None
    embeds: tuple[EmbedPayload, ...] = ()
    controls: tuple[NavigationControl, ...] = ()

    def with_content(self, content: str | None) -> DisplayPayload:
        """Return copy with replaced text content."""
        return self.model_copy(update={"content": content})

    def with_controls(self, controls: Sequence[NavigationControl]) -> DisplayPayload:
        """Return copy with replaced controls."""
        return self.model_copy(update={"controls": tuple(controls)})


class Responder(Protocol):
    """Single-use initial response channel for one interaction."""

    async def send(self, payload: DisplayPayload) -> str:
        """Send the initial response.

        Args:
            payload: Response content.

        Returns:
            Platform identifier of the response message.

        Raises:
            PlatformError: If the platform rejects the response.
        """


class PlatformClient(Protocol):
    """Operations the core issues against the host platform."""

    async def register_commands(self, specs: Sequence[CommandSpec]) -> list[str]:
        """Publish command schemas and return their platform identifiers."""

    async def edit_response(self, response_id: str, payload: DisplayPayload) -> None:
        """Replace the content of an existing response in place."""

    async def disable_controls(self, response_id: str) -> None:
        """Disable every control attached to an existing response."""
