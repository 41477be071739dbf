"""Handler for /search."""

from __future__ import annotations

import logging

from haikubot.commands.handlers.messages import (
    NO_SEARCH_RESULTS_MESSAGE,
    SEARCH_NEEDS_SERVER_MESSAGE,
    text_payload,
)
from haikubot.commands.parser import SearchCommand
from haikubot.commands.types import InvocationContext
from haikubot.pager import HaikuRef, ResultPager, render_search_page
from haikubot.store import HaikuStore

_LOGGER = logging.getLogger(__name__)


class SearchHandler:
    """Searches server haikus and hands multi-item results to the pager."""

    def __init__(self, store: HaikuStore, pager: ResultPager) -> None:
        """Store dependencies.

        Args:
            store: Haiku store to search.
            pager: Pager that owns navigation of multi-item results.
        """
        self._store = store
        self._pager = pager

    async def execute(self, command: SearchCommand, ctx: InvocationContext) -> None:
        """Reply with the first result and arm paging for two or more results.

        Args:
            command: Parsed `/search` command.
            ctx: Invocation context.

        Raises:
            InvocationError: If the initial response cannot be sent.
        """
        if ctx.server_id is None:
            await ctx.respond(
                text_payload(SEARCH_NEEDS_SERVER_MESSAGE), command=command.name
            )
            return
        records = self._store.search_haikus(ctx.server_id, command.keywords)
        if not records:
            await ctx.respond(
                text_payload(NO_SEARCH_RESULTS_MESSAGE), command=command.name
            )
            return
        items = tuple(
            HaikuRef(id=record.id, content=record.content, authors=record.authors)
            for record in records
        )
        response_id = await ctx.respond(
            render_search_page(items, 0), command=command.name
        )
        _LOGGER.debug(
            "Search %s in server %s matched %d haikus",
            " ".join(command.keywords),
            ctx.server_id,
            len(items),
        )
        if len(items) >= 2:
            self._pager.start_session(response_id, items)
