"""Handler for /gethaiku."""

from __future__ import annotations

from haikubot.commands.handlers.messages import NO_HAIKU_MESSAGE, text_payload
from haikubot.commands.parser import GetHaikuCommand
from haikubot.commands.types import InvocationContext
from haikubot.formatting import render_haiku
from haikubot.store import HaikuStore


class GetHaikuHandler:
    """Fetches one haiku by its server-scoped id."""

    def __init__(self, store: HaikuStore) -> None:
        self._store = store

    async def execute(self, command: GetHaikuCommand, ctx: InvocationContext) -> None:
        """Render the requested haiku, or an informational reply when absent.

        Args:
            command: Parsed `/gethaiku` command.
            ctx: Invocation context.
        """
        record = None
        if ctx.server_id is not None:
            record = self._store.get_haiku(ctx.server_id, command.haiku_id)
        if record is None:
            payload = text_payload(NO_HAIKU_MESSAGE)
        else:
            payload = render_haiku(record.id, record.content, authors=record.authors)
        await ctx.respond(payload, command=command.name)
