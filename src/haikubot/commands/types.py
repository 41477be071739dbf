"""Shared command-domain types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from haikubot.platform.types import DisplayPayload, PlatformError, Responder


class InvocationError(RuntimeError):
    """Raised when a handler could not deliver its response or update."""

    def __init__(self, message: str, *, command: str | None = None) -> None:
        """Create invocation failure.

        Args:
            message: Human-readable diagnostic.
            command: Command or session the failure belongs to.
        """
        super().__init__(message)
        self.command = command


@dataclass(frozen=True)
class InvocationContext:
    """Facts needed to act on one command invocation."""

    interaction_id: str
    server_id: int | None
    responder: Responder
    user_id: int | None = None

    async def respond(self, payload: DisplayPayload, *, command: str) -> str:
        """Send the single initial response for this interaction.

        Args:
            payload: Response content.
            command: Command name, for diagnostics.

        Returns:
            Platform identifier of the response message.

        Raises:
            InvocationError: If the platform rejects the response.
        """
        try:
            return await self.responder.send(payload)
        except PlatformError as exc:
            raise InvocationError(
                f"Could not send response for /{command}: {exc}", command=command
            ) from exc


C = TypeVar("C", contravariant=True)


class CommandHandler(Protocol[C]):
    """Protocol implemented by async command handlers."""

    async def execute(self, command: C, ctx: InvocationContext) -> None:
        """Produce the first response for one parsed command.

        Args:
            command: Parsed command variant.
            ctx: Invocation context.
        """
