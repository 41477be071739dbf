"""User-facing reply texts shared by handlers."""

from __future__ import annotations

from haikubot.platform.types import DisplayPayload

NO_HAIKU_MESSAGE = "No haiku found."
NO_SEARCH_RESULTS_MESSAGE = "No haikus found for search terms."
SEARCH_NEEDS_SERVER_MESSAGE = "Haikus can only be searched inside a server."
UNPARSEABLE_REQUEST_MESSAGE = "Sorry, I could not understand that request."


def text_payload(message: str) -> DisplayPayload:
    """Wrap plain text as a display payload."""
    return DisplayPayload(content=message)
