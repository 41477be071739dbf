"""Interactive paginated result browser."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Sequence

from haikubot.commands.types import InvocationError
from haikubot.pager.models import (
    HaikuRef,
    NavigationAction,
    NavigationOutcome,
    PagerState,
    SearchSession,
    render_search_page,
)
from haikubot.platform.types import PlatformClient, PlatformError

_LOGGER = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 300.0
_EXPIRED_HISTORY_LIMIT = 1024


class ResultPager:
    """Owns live search sessions keyed by response message id.

    Actions on one session run under that session's lane lock, so cursor
    read-modify-write and the following edit happen in arrival order.
    Different sessions never share a lane.
    """

    def __init__(
        self,
        client: PlatformClient,
        *,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Create pager with no live sessions.

        Args:
            client: Platform client used to edit responses and disable controls.
            ttl_seconds: Hard session lifetime measured from creation.
            clock: Monotonic clock used for deadline checks.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._client = client
        self._ttl = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, SearchSession] = {}
        self._lanes: dict[str, asyncio.Lock] = {}
        self._timers: dict[str, asyncio.Task[None]] = {}
        self._expired: OrderedDict[str, None] = OrderedDict()

    def state(self, session_id: str) -> PagerState:
        """Report lifecycle state for a response id."""
        session = self._sessions.get(session_id)
        if session is not None:
            if session.is_expired(self._clock()):
                return PagerState.EXPIRED
            return PagerState.ACTIVE
        if session_id in self._expired:
            return PagerState.EXPIRED
        return PagerState.NO_SESSION

    def session(self, session_id: str) -> SearchSession | None:
        """Return the live session for a response id, if any."""
        return self._sessions.get(session_id)

    def start_session(
        self, session_id: str, items: Sequence[HaikuRef]
    ) -> SearchSession:
        """Create an active session at cursor 0 and arm its expiry timer.

        Must be called from a running event loop. A live session already
        attached to the same response is replaced.

        Args:
            session_id: Response message id the results are attached to.
            items: Ordered results; snapshot is kept for the session lifetime.

        Returns:
            Newly created session.

        Raises:
            ValueError: If fewer than two items are supplied.
        """
        session = SearchSession(
            session_id=session_id,
            items=tuple(items),
            created_at=self._clock(),
            ttl=self._ttl,
        )
        previous = self._timers.pop(session_id, None)
        if previous is not None:
            previous.cancel()
        self._expired.pop(session_id, None)
        self._sessions[session_id] = session
        self._lanes[session_id] = asyncio.Lock()
        self._timers[session_id] = asyncio.create_task(
            self._expire_after(session_id, session)
        )
        _LOGGER.debug(
            "Search session %s started with %d items", session_id, len(session.items)
        )
        return session

    async def navigate(self, action: NavigationAction) -> NavigationOutcome:
        """Apply one navigation action to its session.

        Boundary moves, duplicate deliveries and actions on unknown or
        expired sessions are no-ops reported through the outcome.

        Args:
            action: Follow-up action addressed to a session id.

        Returns:
            What the action did.

        Raises:
            InvocationError: If the moved page could not be displayed. The
                cursor move stays committed.
        """
        session = self._sessions.get(action.session_id)
        lane = self._lanes.get(action.session_id)
        if session is None or lane is None:
            _LOGGER.debug("Discarding action for unroutable %s", action.session_id)
            return NavigationOutcome.NOT_ROUTABLE
        async with lane:
            if self._sessions.get(action.session_id) is not session:
                return NavigationOutcome.NOT_ROUTABLE
            if session.is_expired(self._clock()):
                await self._expire_locked(action.session_id)
                return NavigationOutcome.NOT_ROUTABLE
            if action.action_id is not None:
                if action.action_id in session.applied_action_ids:
                    return NavigationOutcome.DUPLICATE
                session.applied_action_ids.add(action.action_id)
            if not session.step(action.direction):
                _LOGGER.debug(
                    "Session %s at boundary for %s",
                    action.session_id,
                    action.direction.value,
                )
                return NavigationOutcome.BOUNDARY
            payload = render_search_page(session.items, session.cursor)
            try:
                await self._client.edit_response(action.session_id, payload)
            except PlatformError as exc:
                raise InvocationError(
                    f"Could not update search session {action.session_id}: {exc}",
                    command="search",
                ) from exc
            return NavigationOutcome.MOVED

    async def expire(self, session_id: str) -> bool:
        """Expire a session now, disabling its controls.

        Args:
            session_id: Response message id.

        Returns:
            Whether a live session was expired.
        """
        lane = self._lanes.get(session_id)
        if lane is None:
            return False
        async with lane:
            return await self._expire_locked(session_id)

    async def close(self) -> None:
        """Expire every live session."""
        for session_id in list(self._sessions):
            await self.expire(session_id)

    async def _expire_after(self, session_id: str, session: SearchSession) -> None:
        await asyncio.sleep(session.ttl)
        if self._sessions.get(session_id) is session:
            await self.expire(session_id)

    async def _expire_locked(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        self._lanes.pop(session_id, None)
        timer = self._timers.pop(session_id, None)
        if timer is not None and timer is not asyncio.current_task():
            timer.cancel()
        self._expired[session_id] = None
        while len(self._expired) > _EXPIRED_HISTORY_LIMIT:
            self._expired.popitem(last=False)
        _LOGGER.debug("Search session %s expired", session_id)
        try:
            await self._client.disable_controls(session_id)
        except PlatformError as exc:
            _LOGGER.warning(
                "Could not disable controls for expired session %s: %s",
                session_id,
                exc,
            )
        return True
