"""vlr.gg HTTP client built on httpx.

Fetches pages with a single ``httpx.AsyncClient`` session, paces requests
through the adaptive RateLimiter and hands the HTML to the pure parsers.
There are no retries: every failed request is surfaced to the caller as a
``VlrError`` (HTTP, UNEXPECTED_STATUS or RESPONSE_BODY) after the rate
limiter has backed off for the next one.

Usage::

    async with VlrClient() as client:
        events = await client.get_events(EventType.UPCOMING, Region.EUROPE, page=1)
        match = await client.get_match(events.items[0].id)
"""

import logging
from typing import Any

import httpx

from vlr_scraper.config import ScraperConfig
from vlr_scraper.event_matchlist_parser import parse_event_matchlist
from vlr_scraper.events_parser import parse_events
from vlr_scraper.exceptions import ErrorKind, VlrError
from vlr_scraper.history_parser import parse_player_matchlist, parse_team_matchlist
from vlr_scraper.match_parser import (
    parse_match,
    parse_match_economy,
    parse_match_performance,
    roster_name_index,
)
from vlr_scraper.models import (
    AgentStatsTimespan,
    Event,
    EventMatchListItem,
    EventType,
    Match,
    MatchEconomy,
    MatchPerformance,
    MatchTab,
    PaginatedResult,
    Player,
    PlayerMatchListItem,
    Region,
    Team,
    TeamMatchListItem,
    TeamTransaction,
)
from vlr_scraper.player_parser import parse_player
from vlr_scraper.rate_limiter import RateLimiter
from vlr_scraper.team_parser import parse_team
from vlr_scraper.transactions_parser import parse_team_transactions
from vlr_scraper.urls import (
    event_matchlist_url,
    events_url,
    match_url,
    player_matchlist_url,
    player_url,
    team_matchlist_url,
    team_transactions_url,
    team_url,
)
from vlr_scraper.user_agents import UserAgentRotator

logger = logging.getLogger(__name__)

# Statuses after which the next request should be slowed down.
_BACKOFF_STATUSES = frozenset({429, 500, 502, 503, 504})


class VlrClient:
    """Async client for vlr.gg pages.

    One method per logical operation. Each builds the page URL, fetches it
    and returns the parsed, immutable result. Pass ``client`` to reuse an
    existing ``httpx.AsyncClient`` (tests inject one backed by
    ``httpx.MockTransport``); it is then left open on close().
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if config is None:
            config = ScraperConfig()

        self._config = config
        self.rate_limiter = RateLimiter(config)
        self._user_agents = UserAgentRotator(config.browser_family)
        self._client = client
        self._owns_client = client is None
        self._headers: dict[str, str] = {}

        # Request counters
        self._request_count = 0
        self._success_count = 0
        self._failure_count = 0

    async def start(self) -> None:
        """Open the HTTP session and pick the session's User-Agent."""
        self._headers = self._user_agents.get_headers()
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                follow_redirects=self._config.follow_redirects,
                proxy=self._config.proxy_url,
            )
            self._owns_client = True
        logger.debug("Session User-Agent: %s", self._headers.get("User-Agent"))

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "VlrClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def stats(self) -> dict:
        """Return current client statistics."""
        total = self._request_count
        return {
            "requests": total,
            "successes": self._success_count,
            "failures": self._failure_count,
            "success_rate": (self._success_count / total) if total > 0 else 0.0,
            "current_delay": self.rate_limiter.current_delay,
        }

    # -- fetch boundary --------------------------------------------------

    async def fetch(self, url: str) -> str:
        """Fetch a page and return its decoded body.

        Raises:
            VlrError: HTTP on transport failure, UNEXPECTED_STATUS on any
                non-2xx response, RESPONSE_BODY if the body cannot be read.
            RuntimeError: If the client was not started.
        """
        if self._client is None:
            raise RuntimeError("Client not started. Use 'async with VlrClient()' or call start().")

        await self.rate_limiter.wait()
        self._request_count += 1
        logger.debug("Fetching %s", url)

        try:
            async with self._client.stream("GET", url, headers=self._headers) as response:
                if not response.is_success:
                    if response.status_code in _BACKOFF_STATUSES:
                        self.rate_limiter.backoff()
                    raise VlrError(
                        ErrorKind.UNEXPECTED_STATUS,
                        response.reason_phrase,
                        url=url,
                        status_code=response.status_code,
                    )
                try:
                    await response.aread()
                except httpx.HTTPError as exc:
                    raise VlrError(
                        ErrorKind.RESPONSE_BODY, str(exc), url=url, cause=exc
                    ) from exc
                html = response.text
        except VlrError:
            self._failure_count += 1
            raise
        except httpx.HTTPError as exc:
            self._failure_count += 1
            self.rate_limiter.backoff()
            raise VlrError(ErrorKind.HTTP, str(exc), url=url, cause=exc) from exc

        self._success_count += 1
        self.rate_limiter.recover()
        logger.debug("Fetched %s (%d chars)", url, len(html))
        return html

    # -- operations ------------------------------------------------------

    async def get_events(
        self,
        event_type: EventType = EventType.UPCOMING,
        region: Region = Region.ALL,
        page: int = 1,
    ) -> PaginatedResult[Event]:
        url = events_url(event_type, region, page, base_url=self._config.base_url)
        return parse_events(await self.fetch(url), url, event_type, page)

    async def get_event_matchlist(self, event_id: int) -> list[EventMatchListItem]:
        url = event_matchlist_url(event_id, base_url=self._config.base_url)
        return parse_event_matchlist(await self.fetch(url), url)

    async def get_match(self, match_id: int) -> Match:
        url = match_url(match_id, base_url=self._config.base_url)
        return parse_match(await self.fetch(url), url, match_id)

    async def get_match_performance(
        self, match_id: int, match: Match | None = None
    ) -> MatchPerformance:
        """Performance tab; pass the parsed ``match`` to resolve player ids."""
        url = match_url(match_id, MatchTab.PERFORMANCE, base_url=self._config.base_url)
        player_ids = roster_name_index(match) if match is not None else None
        return parse_match_performance(await self.fetch(url), url, player_ids)

    async def get_match_economy(self, match_id: int) -> MatchEconomy:
        url = match_url(match_id, MatchTab.ECONOMY, base_url=self._config.base_url)
        return parse_match_economy(await self.fetch(url), url)

    async def get_player(
        self,
        player_id: int,
        timespan: AgentStatsTimespan = AgentStatsTimespan.DAYS_90,
    ) -> Player:
        url = player_url(player_id, timespan, base_url=self._config.base_url)
        return parse_player(await self.fetch(url), url, player_id)

    async def get_player_matchlist(
        self, player_id: int, page: int = 1
    ) -> PaginatedResult[PlayerMatchListItem]:
        url = player_matchlist_url(player_id, page, base_url=self._config.base_url)
        return parse_player_matchlist(await self.fetch(url), url, page)

    async def get_team(self, team_id: int) -> Team:
        url = team_url(team_id, base_url=self._config.base_url)
        return parse_team(await self.fetch(url), url, team_id)

    async def get_team_matchlist(
        self, team_id: int, page: int = 1
    ) -> PaginatedResult[TeamMatchListItem]:
        url = team_matchlist_url(team_id, page, base_url=self._config.base_url)
        return parse_team_matchlist(await self.fetch(url), url, page)

    async def get_team_transactions(self, team_id: int) -> list[TeamTransaction]:
        url = team_transactions_url(team_id, base_url=self._config.base_url)
        return parse_team_transactions(await self.fetch(url), url)
