"""Bot runtime wiring command events and follow-up events to the core."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from datetime import datetime

from haikubot.commands.dispatcher import CommandDispatcher
from haikubot.commands.handlers.messages import (
    UNPARSEABLE_REQUEST_MESSAGE,
    text_payload,
)
from haikubot.commands.parser import (
    CommandParseError,
    RawInteraction,
    parse_interaction,
)
from haikubot.commands.registry import CommandRegistry
from haikubot.commands.schema import CommandSpec, builtin_command_specs
from haikubot.commands.types import InvocationContext, InvocationError
from haikubot.pager import (
    DEFAULT_SESSION_TTL_SECONDS,
    NavigationAction,
    NavigationDirection,
    NavigationOutcome,
    ResultPager,
)
from haikubot.platform.types import PlatformClient, Responder
from haikubot.store import HaikuStore

_LOGGER = logging.getLogger(__name__)


def navigation_action(
    response_id: str, custom_id: str, *, action_id: str | None = None
) -> NavigationAction | None:
    """Build a navigation action from a control click.

    Args:
        response_id: Id of the response message the control belongs to.
        custom_id: Control identifier, `previous` or `next`.
        action_id: Unique id of the follow-up interaction.

    Returns:
        Navigation action, or None for controls the pager does not own.
    """
    try:
        direction = NavigationDirection(custom_id)
    except ValueError:
        return None
    return NavigationAction(
        session_id=response_id, direction=direction, action_id=action_id
    )


class BotRuntime:
    """Composition root for registry, dispatcher and pager."""

    def __init__(
        self,
        *,
        client: PlatformClient,
        store: HaikuStore,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        started_at: datetime | None = None,
    ) -> None:
        """Build runtime collaborators around one platform client.

        Args:
            client: Platform client.
            store: Haiku store.
            ttl_seconds: Search session lifetime.
            clock: Monotonic clock for pager deadlines.
            started_at: Start time reported by `/uptime`.
        """
        self.registry = CommandRegistry(client)
        self.pager = ResultPager(client, ttl_seconds=ttl_seconds, clock=clock)
        self.dispatcher = CommandDispatcher(
            store=store, pager=self.pager, started_at=started_at
        )

    async def start(self, specs: Sequence[CommandSpec] | None = None) -> list[str]:
        """Register command schemas.

        Raises:
            RegistrationError: If the platform rejects the schemas.
        """
        return await self.registry.register(
            builtin_command_specs() if specs is None else specs
        )

    async def handle_command(self, raw: RawInteraction, responder: Responder) -> bool:
        """Parse and dispatch one command interaction.

        Parse failures get the generic "could not understand" reply. Handler
        failures are logged and not retried.

        Args:
            raw: Incoming command interaction.
            responder: Initial response channel for the interaction.

        Returns:
            Whether the command was dispatched and answered.
        """
        ctx = InvocationContext(
            interaction_id=raw.interaction_id,
            server_id=raw.server_id,
            responder=responder,
            user_id=raw.user_id,
        )
        try:
            command = parse_interaction(raw)
        except CommandParseError as exc:
            _LOGGER.info(
                "Could not parse /%s (%s): %s", exc.command, exc.code.value, exc
            )
            try:
                await ctx.respond(
                    text_payload(UNPARSEABLE_REQUEST_MESSAGE), command=raw.command_name
                )
            except InvocationError as send_exc:
                _LOGGER.error("%s", send_exc)
            return False
        try:
            await self.dispatcher.dispatch(command, ctx)
        except InvocationError as exc:
            _LOGGER.error("Command /%s failed: %s", command.name, exc)
            return False
        return True

    async def handle_navigation(
        self, action: NavigationAction
    ) -> NavigationOutcome | None:
        """Apply one follow-up click to the pager.

        Args:
            action: Navigation action.

        Returns:
            Pager outcome, or None when the page could not be displayed.
        """
        try:
            return await self.pager.navigate(action)
        except InvocationError as exc:
            _LOGGER.error("Navigation on %s failed: %s", action.session_id, exc)
            return None

    async def shutdown(self) -> None:
        """Expire all live search sessions."""
        await self.pager.close()
