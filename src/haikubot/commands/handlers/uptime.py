"""Handler for /uptime."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from haikubot.commands.handlers.messages import text_payload
from haikubot.commands.parser import UptimeCommand
from haikubot.commands.types import InvocationContext


def format_uptime(started_at: datetime, now: datetime) -> str:
    """Format elapsed time as whole days, hours and minutes."""
    elapsed = now - started_at
    days = elapsed.days
    hours, remainder = divmod(elapsed.seconds, 3600)
    minutes = remainder // 60
    return f"Uptime: {days} days, {hours} hours, {minutes} minutes"


class UptimeHandler:
    """Reports time since the bot started."""

    def __init__(
        self,
        started_at: datetime,
        *,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._started_at = started_at
        self._now = now

    async def execute(self, command: UptimeCommand, ctx: InvocationContext) -> None:
        message = format_uptime(self._started_at, self._now())
        await ctx.respond(text_payload(message), command=command.name)
