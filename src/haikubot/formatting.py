"""Haiku embed formatting."""

from __future__ import annotations

from collections.abc import Sequence

from haikubot.platform.types import DisplayPayload, EmbedPayload

HAIKU_EMBED_COLOR = 0x7289DA


def render_haiku(
    haiku_id: int, content: str, *, authors: Sequence[str] = ()
) -> DisplayPayload:
    """Render one haiku as a single-embed display payload.

    Args:
        haiku_id: Server-scoped haiku id.
        content: Haiku text, one line per verse.
        authors: Display names credited in the footer.

    Returns:
        Display payload with one embed and no controls.
    """
    footer = f"By {', '.join(authors)}" if authors else None
    return DisplayPayload(
        embeds=(
            EmbedPayload(
                title=f"Haiku #{haiku_id}",
                description=content.strip(),
                footer=footer,
                color=HAIKU_EMBED_COLOR,
            ),
        )
    )
