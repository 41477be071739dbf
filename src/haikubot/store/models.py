"""Haiku store contracts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class StoreError(RuntimeError):
    """Raised when the backing store cannot serve a request."""


class HaikuRecord(BaseModel):
    """One stored haiku, numbered per server."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    server_id: int
    id: int
    content: str
    authors: tuple[str, ...] = ()


class HaikuStore(Protocol):
    """Lookup operations consumed by command handlers."""

    def get_haiku(self, server_id: int, haiku_id: int) -> HaikuRecord | None:
        """Return one haiku by server-scoped id."""

    def get_random_haiku(self, server_id: int) -> HaikuRecord | None:
        """Return a random haiku from the server."""

    def search_haikus(
        self, server_id: int, keywords: Sequence[str]
    ) -> list[HaikuRecord]:
        """Return haikus containing every keyword, ordered by id."""


def matches_keywords(content: str, keywords: Sequence[str]) -> bool:
    """Return whether content contains every keyword, case-insensitively."""
    lowered = content.casefold()
    return all(keyword.casefold() in lowered for keyword in keywords)
