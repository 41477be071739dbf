"""Unit tests for command dispatch and handlers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from haikubot.commands.dispatcher import CommandDispatcher
from haikubot.commands.handlers.messages import (
    NO_HAIKU_MESSAGE,
    NO_SEARCH_RESULTS_MESSAGE,
    SEARCH_NEEDS_SERVER_MESSAGE,
)
from haikubot.commands.handlers.uptime import format_uptime
from haikubot.commands.parser import (
    CountCommand,
    GetHaikuCommand,
    RandomHaikuCommand,
    SearchCommand,
    UptimeCommand,
)
from haikubot.commands.types import InvocationContext, InvocationError
from haikubot.pager import PagerState, ResultPager
from haikubot.store import InMemoryHaikuStore
from tests.unit.fakes import FakeClock, FakePlatformClient, FakeResponder

SERVER_ID = 42


def _ctx(
    responder: FakeResponder, server_id: int | None = SERVER_ID
) -> InvocationContext:
    return InvocationContext(
        interaction_id="int-1", server_id=server_id, responder=responder
    )


@pytest.fixture
def store() -> InMemoryHaikuStore:
    """Store with three moon haikus and one frog haiku in server 42."""
    haikus = InMemoryHaikuStore()
    haikus.add_haiku(SERVER_ID, "the moon rises\nover quiet hills\nnight", haiku_id=5)
    haikus.add_haiku(SERVER_ID, "an old silent pond\na frog jumps\nsplash", haiku_id=7)
    haikus.add_haiku(SERVER_ID, "harvest moon glows\nfields sleep\nstill", haiku_id=9)
    haikus.add_haiku(SERVER_ID, "moon on the water\nripples fade\ndawn", haiku_id=12)
    return haikus


@pytest_asyncio.fixture
async def pager() -> AsyncIterator[ResultPager]:
    """Pager over a fake platform client, closed after each test."""
    result_pager = ResultPager(FakePlatformClient(), clock=FakeClock())
    yield result_pager
    await result_pager.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_gethaiku_renders_one_embed(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """Fetch-by-id sends one embed and no controls."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(GetHaikuCommand(haiku_id=7), _ctx(responder))

    (payload,) = responder.sent
    assert payload.embeds[0].title == "Haiku #7"
    assert "silent pond" in payload.embeds[0].description
    assert payload.controls == ()


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(("haiku_id", "server_id"), [(99, SERVER_ID), (7, None)])
async def test_gethaiku_without_match_sends_notice(
    store: InMemoryHaikuStore,
    pager: ResultPager,
    haiku_id: int,
    server_id: int | None,
) -> None:
    """Missing ids and direct messages get the informational reply."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(
        GetHaikuCommand(haiku_id=haiku_id), _ctx(responder, server_id)
    )

    assert [payload.content for payload in responder.sent] == [NO_HAIKU_MESSAGE]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_randomhaiku_renders_without_session(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """Fetch-random renders a stored haiku and creates no session."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(RandomHaikuCommand(), _ctx(responder))

    (payload,) = responder.sent
    assert payload.embeds[0].title in {"Haiku #5", "Haiku #7", "Haiku #9", "Haiku #12"}
    assert pager.state(responder.response_id) == PagerState.NO_SESSION


@pytest.mark.unit
@pytest.mark.asyncio
async def test_randomhaiku_on_empty_server_sends_notice(pager: ResultPager) -> None:
    """Fetch-random on a server without haikus gets the informational reply."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=InMemoryHaikuStore(), pager=pager)

    await dispatcher.dispatch(RandomHaikuCommand(), _ctx(responder))

    assert responder.sent[0].content == NO_HAIKU_MESSAGE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_search_with_zero_results_creates_no_session(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """Zero results send the fixed notice and create no session."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(SearchCommand(keywords=("sun",)), _ctx(responder))

    assert [payload.content for payload in responder.sent] == [
        NO_SEARCH_RESULTS_MESSAGE
    ]
    assert pager.state(responder.response_id) == PagerState.NO_SESSION


@pytest.mark.unit
@pytest.mark.asyncio
async def test_search_with_one_result_has_no_controls(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """A single result renders without controls and without a session."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(SearchCommand(keywords=("frog",)), _ctx(responder))

    (payload,) = responder.sent
    assert payload.content == "Search result 1/1"
    assert payload.embeds[0].title == "Haiku #7"
    assert payload.controls == ()
    assert pager.state(responder.response_id) == PagerState.NO_SESSION


@pytest.mark.unit
@pytest.mark.asyncio
async def test_search_with_many_results_arms_session(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """Two or more results render item 0 with controls and start a session."""
    responder = FakeResponder(response_id="msg-search")
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(SearchCommand(keywords=("moon",)), _ctx(responder))

    (payload,) = responder.sent
    assert payload.content == "Search result 1/3"
    assert payload.embeds[0].title == "Haiku #5"
    assert [control.custom_id for control in payload.controls] == ["previous", "next"]
    session = pager.session("msg-search")
    assert session is not None
    assert session.cursor == 0
    assert [item.id for item in session.items] == [5, 9, 12]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_search_in_direct_message_sends_notice(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """Search outside a server replies with a notice."""
    responder = FakeResponder()
    dispatcher = CommandDispatcher(store=store, pager=pager)

    await dispatcher.dispatch(
        SearchCommand(keywords=("moon",)), _ctx(responder, server_id=None)
    )

    assert responder.sent[0].content == SEARCH_NEEDS_SERVER_MESSAGE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_initial_response_raises_and_creates_no_session(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """Rejected first responses surface as InvocationError without a session."""
    responder = FakeResponder(response_id="msg-search", fail=True)
    dispatcher = CommandDispatcher(store=store, pager=pager)

    with pytest.raises(InvocationError) as exc_info:
        await dispatcher.dispatch(SearchCommand(keywords=("moon",)), _ctx(responder))

    assert exc_info.value.command == "search"
    assert pager.state("msg-search") == PagerState.NO_SESSION


@pytest.mark.unit
@pytest.mark.asyncio
async def test_count_replies_with_syllables(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """`/count` replies with the syllable total or a notice."""
    dispatcher = CommandDispatcher(store=store, pager=pager)
    counted = FakeResponder()
    uncounted = FakeResponder()

    await dispatcher.dispatch(CountCommand(phrase="an old silent pond"), _ctx(counted))
    await dispatcher.dispatch(CountCommand(phrase="404"), _ctx(uncounted))

    assert counted.sent[0].content == (
        "The phrase 'an old silent pond' has 5 syllables"
    )
    assert uncounted.sent[0].content == "Could not count this phrase"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_uptime_replies_with_elapsed_time(
    store: InMemoryHaikuStore, pager: ResultPager
) -> None:
    """`/uptime` reports time since the dispatcher's start time."""
    started_at = datetime.now(UTC) - timedelta(days=1, hours=2, minutes=3, seconds=30)
    dispatcher = CommandDispatcher(store=store, pager=pager, started_at=started_at)
    responder = FakeResponder()

    await dispatcher.dispatch(UptimeCommand(), _ctx(responder))

    assert responder.sent[0].content == "Uptime: 1 days, 2 hours, 3 minutes"


@pytest.mark.unit
def test_format_uptime_truncates_to_minutes() -> None:
    """Uptime drops seconds and carries whole days."""
    start = datetime(2024, 1, 1, tzinfo=UTC)

    assert format_uptime(start, start + timedelta(seconds=59)) == (
        "Uptime: 0 days, 0 hours, 0 minutes"
    )
    assert format_uptime(start, start + timedelta(days=3, minutes=61)) == (
        "Uptime: 3 days, 1 hours, 1 minutes"
    )
