"""Search session models and page rendering."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from haikubot.formatting import render_haiku
from haikubot.platform.types import DisplayPayload, NavigationControl


class NavigationDirection(StrEnum):
    """Follow-up control identifiers attached to paged responses."""

    PREVIOUS = "previous"
    NEXT = "next"


class PagerState(StrEnum):
    """Lifecycle state of one response from the pager's view."""

    NO_SESSION = "no_session"
    ACTIVE = "active"
    EXPIRED = "expired"


class NavigationOutcome(StrEnum):
    """Result of applying one navigation action."""

    MOVED = "moved"
    BOUNDARY = "boundary"
    DUPLICATE = "duplicate"
    NOT_ROUTABLE = "not_routable"


class HaikuRef(BaseModel):
    """Haiku snapshot captured when the search ran."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    content: str
    authors: tuple[str, ...] = ()


class NavigationAction(BaseModel):
    """One follow-up click addressed to a session."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    session_id: str
    direction: NavigationDirection
    action_id: str | None = None


@dataclass
class SearchSession:
    """Navigable multi-item result attached to one response message."""

    session_id: str
    items: tuple[HaikuRef, ...]
    created_at: float
    ttl: float
    cursor: int = 0
    applied_action_ids: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if len(self.items) < 2:
            raise ValueError("search sessions require at least two items")
        if not 0 <= self.cursor < len(self.items):
            raise ValueError(f"cursor {self.cursor} out of range")

    @property
    def deadline(self) -> float:
        """Monotonic time after which the session is expired."""
        return self.created_at + self.ttl

    def is_expired(self, now: float) -> bool:
        """Return whether the hard deadline has passed."""
        return now >= self.deadline

    def step(self, direction: NavigationDirection) -> bool:
        """Move the cursor one item, clamping silently at both ends.

        Args:
            direction: Requested direction.

        Returns:
            Whether the cursor moved.
        """
        target = self.cursor + (1 if direction == NavigationDirection.NEXT else -1)
        if not 0 <= target < len(self.items):
            return False
        self.cursor = target
        return True


def navigation_controls() -> tuple[NavigationControl, ...]:
    """Return the previous/next control pair."""
    return (
        NavigationControl(
            custom_id=NavigationDirection.PREVIOUS.value, label="Previous"
        ),
        NavigationControl(custom_id=NavigationDirection.NEXT.value, label="Next"),
    )


def render_search_page(items: Sequence[HaikuRef], index: int) -> DisplayPayload:
    """Render one page of search results.

    Controls are attached only when there is more than one item.

    Args:
        items: Ordered search results.
        index: Zero-based page index.

    Returns:
        Display payload for the page.
    """
    item = items[index]
    payload = render_haiku(item.id, item.content, authors=item.authors).with_content(
        f"Search result {index + 1}/{len(items)}"
    )
    if len(items) < 2:
        return payload
    return payload.with_controls(navigation_controls())
