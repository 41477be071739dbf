"""Command schema registration with the host platform."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from haikubot.commands.schema import CommandSpec
from haikubot.platform.types import PlatformClient, PlatformError

_LOGGER = logging.getLogger(__name__)


class RegistrationError(RuntimeError):
    """Raised when the platform rejects a command schema."""

    def __init__(self, message: str, *, command_names: tuple[str, ...] = ()) -> None:
        """Create registration failure.

        Args:
            message: Human-readable diagnostic.
            command_names: Names of the commands in the rejected batch.
        """
        super().__init__(message)
        self.command_names = command_names


class CommandRegistry:
    """Owns the published command schemas, keyed by command name."""

    def __init__(self, client: PlatformClient) -> None:
        """Store platform dependency.

        Args:
            client: Platform client used to publish schemas.
        """
        self._client = client
        self._specs: dict[str, CommandSpec] = {}

    @property
    def specs(self) -> tuple[CommandSpec, ...]:
        """Currently registered specs in registration order."""
        return tuple(self._specs.values())

    def get(self, name: str) -> CommandSpec | None:
        """Return registered spec by name."""
        return self._specs.get(name)

    async def register(self, specs: Sequence[CommandSpec]) -> list[str]:
        """Publish specs, replacing any prior schema with the same name.

        The full merged set is published in one call so the platform view
        always equals the registry view. Rejections are not retried.

        Args:
            specs: Command specs to register.

        Returns:
            Platform identifiers of the registered commands.

        Raises:
            RegistrationError: If the platform rejects the batch.
        """
        merged = dict(self._specs)
        for spec in specs:
            merged[spec.name] = spec
        names = tuple(merged)
        try:
            identifiers = await self._client.register_commands(tuple(merged.values()))
        except PlatformError as exc:
            raise RegistrationError(
                f"Platform rejected command registration: {exc}",
                command_names=names,
            ) from exc
        self._specs = merged
        _LOGGER.info("Registered %d commands: %s", len(names), ", ".join(names))
        return identifiers
