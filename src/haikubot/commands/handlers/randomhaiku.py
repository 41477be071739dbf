"""Handler for /randomhaiku."""

from __future__ import annotations

from haikubot.commands.handlers.messages import NO_HAIKU_MESSAGE, text_payload
from haikubot.commands.parser import RandomHaikuCommand
from haikubot.commands.types import InvocationContext
from haikubot.formatting import render_haiku
from haikubot.store import HaikuStore


class RandomHaikuHandler:
    """Fetches a random haiku from the invoking server."""

    def __init__(self, store: HaikuStore) -> None:
        self._store = store

    async def execute(
        self, command: RandomHaikuCommand, ctx: InvocationContext
    ) -> None:
        record = None
        if ctx.server_id is not None:
            record = self._store.get_random_haiku(ctx.server_id)
        if record is None:
            payload = text_payload(NO_HAIKU_MESSAGE)
        else:
            payload = render_haiku(record.id, record.content, authors=record.authors)
        await ctx.respond(payload, command=command.name)
