"""Parsed command dispatch."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import assert_never

from haikubot.commands.handlers.count import CountHandler
from haikubot.commands.handlers.gethaiku import GetHaikuHandler
from haikubot.commands.handlers.randomhaiku import RandomHaikuHandler
from haikubot.commands.handlers.search import SearchHandler
from haikubot.commands.handlers.uptime import UptimeHandler
from haikubot.commands.parser import (
    CountCommand,
    GetHaikuCommand,
    ParsedCommand,
    RandomHaikuCommand,
    SearchCommand,
    UptimeCommand,
)
from haikubot.commands.types import CommandHandler, InvocationContext
from haikubot.pager import ResultPager
from haikubot.store import HaikuStore


class CommandDispatcher:
    """Routes each parsed command variant to exactly one handler."""

    def __init__(
        self,
        *,
        store: HaikuStore,
        pager: ResultPager,
        started_at: datetime | None = None,
    ) -> None:
        """Construct built-in handlers.

        Args:
            store: Haiku store dependency.
            pager: Result pager used by `/search`.
            started_at: Process start time reported by `/uptime`.
        """
        self._uptime: CommandHandler[UptimeCommand] = UptimeHandler(
            started_at or datetime.now(UTC)
        )
        self._count: CommandHandler[CountCommand] = CountHandler()
        self._get_haiku: CommandHandler[GetHaikuCommand] = GetHaikuHandler(store)
        self._random_haiku: CommandHandler[RandomHaikuCommand] = (
            RandomHaikuHandler(store)
        )
        self._search: CommandHandler[SearchCommand] = SearchHandler(store, pager)

    async def dispatch(self, command: ParsedCommand, ctx: InvocationContext) -> None:
        """Run the handler for one parsed command.

        Args:
            command: Parsed command variant.
            ctx: Invocation context.

        Raises:
            InvocationError: If the handler could not deliver its response.
        """
        match command:
            case UptimeCommand():
                await self._uptime.execute(command, ctx)
            case CountCommand():
                await self._count.execute(command, ctx)
            case GetHaikuCommand():
                await self._get_haiku.execute(command, ctx)
            case RandomHaikuCommand():
                await self._random_haiku.execute(command, ctx)
            case SearchCommand():
                await self._search.execute(command, ctx)
            case _:
                assert_never(command)
