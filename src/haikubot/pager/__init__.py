"""Paginated search result browsing."""

from haikubot.pager.models import (
    HaikuRef,
    NavigationAction,
    NavigationDirection,
    NavigationOutcome,
    PagerState,
    SearchSession,
    navigation_controls,
    render_search_page,
)
from haikubot.pager.pager import DEFAULT_SESSION_TTL_SECONDS, ResultPager

__all__ = [
    "DEFAULT_SESSION_TTL_SECONDS",
    "HaikuRef",
    "NavigationAction",
    "NavigationDirection",
    "NavigationOutcome",
    "PagerState",
    "ResultPager",
    "SearchSession",
    "navigation_controls",
    "render_search_page",
]
