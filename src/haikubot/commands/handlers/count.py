"""Handler for /count."""

from __future__ import annotations

from haikubot.commands.handlers.messages import text_payload
from haikubot.commands.parser import CountCommand
from haikubot.commands.types import InvocationContext
from haikubot.counting import SyllableCountError, count_line


class CountHandler:
    """Counts syllables in a user-supplied phrase."""

    async def execute(self, command: CountCommand, ctx: InvocationContext) -> None:
        """Reply with the syllable count, or a notice when it cannot be counted.

        Args:
            command: Parsed `/count` command.
            ctx: Invocation context.
        """
        try:
            syllables = count_line(command.phrase)
        except SyllableCountError:
            message = "Could not count this phrase"
        else:
            message = f"The phrase '{command.phrase}' has {syllables} syllables"
        await ctx.respond(text_payload(message), command=command.name)
