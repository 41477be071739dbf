"""In-process haiku store."""

from __future__ import annotations

import random
from collections.abc import Sequence
from threading import Lock

from haikubot.store.models import HaikuRecord, matches_keywords


class InMemoryHaikuStore:
    """Dictionary-backed store used for local runs and tests."""

    def __init__(self, *, rng: random.Random | None = None) -> None:
        """Create empty store.

        Args:
            rng: Optional random source for `get_random_haiku`.
        """
        self._rng = rng or random.Random()
        self._lock = Lock()
        self._records: dict[int, dict[int, HaikuRecord]] = {}

    def add_haiku(
        self,
        server_id: int,
        content: str,
        *,
        authors: Sequence[str] = (),
        haiku_id: int | None = None,
    ) -> HaikuRecord:
        """Store one haiku, assigning the next server-scoped id by default.

        Args:
            server_id: Owning server.
            content: Haiku text.
            authors: Display names of contributing authors.
            haiku_id: Explicit id to store under.

        Returns:
            Stored record.
        """
        with self._lock:
            server = self._records.setdefault(server_id, {})
            next_id = haiku_id if haiku_id is not None else max(server, default=0) + 1
            record = HaikuRecord(
                server_id=server_id,
                id=next_id,
                content=content,
                authors=tuple(authors),
            )
            server[next_id] = record
            return record

    def get_haiku(self, server_id: int, haiku_id: int) -> HaikuRecord | None:
        return self._records.get(server_id, {}).get(haiku_id)

    def get_random_haiku(self, server_id: int) -> HaikuRecord | None:
        server = self._records.get(server_id)
        if not server:
            return None
        return server[self._rng.choice(sorted(server))]

    def search_haikus(
        self, server_id: int, keywords: Sequence[str]
    ) -> list[HaikuRecord]:
        server = self._records.get(server_id, {})
        return [
            server[key]
            for key in sorted(server)
            if matches_keywords(server[key].content, keywords)
        ]
