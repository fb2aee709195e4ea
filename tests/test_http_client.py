"""Unit tests for VlrClient with httpx.MockTransport.

Tests cover: fetch success and failure mapping, request statistics,
rate limiter feedback, URL construction per operation and the
end-to-end parse through each operation.
"""

from pathlib import Path

import httpx
import pytest

from vlr_scraper.config import ScraperConfig
from vlr_scraper.exceptions import ErrorKind, VlrError
from vlr_scraper.http_client import VlrClient
from vlr_scraper.models import EventType, Region

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

# Request path -> fixture page.
PAGES = {
    "/events/europe": "events.html",
    "/event/matches/1921/": "event_matches.html",
    "/295610": "match.html",
    "/295610/": "match_performance.html",
    "/player/9/": "player.html",
    "/player/matches/9/": "player_matches.html",
    "/team/2": "team.html",
    "/team/matches/2/": "team_matches.html",
    "/team/transactions/2/": "team_transactions.html",
}


def load_fixture(filename: str) -> str:
    """Load an HTML fixture page."""
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


def _make_client(handler) -> VlrClient:
    transport = httpx.MockTransport(handler)
    return VlrClient(
        ScraperConfig(min_delay=0.0),
        client=httpx.AsyncClient(transport=transport),
    )


def _site(requests: list):
    """Handler serving fixture pages by path; records every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == "/295610/" and request.url.params.get("tab") == "economy":
            return httpx.Response(200, text=load_fixture("match_economy.html"))
        if path in PAGES:
            return httpx.Response(200, text=load_fixture(PAGES[path]))
        return httpx.Response(404)

    return handler


class TestFetch:

    @pytest.mark.asyncio
    async def test_returns_body(self):
        async with _make_client(lambda r: httpx.Response(200, text="<html>ok</html>")) as client:
            html = await client.fetch("https://www.vlr.gg/1")
        assert html == "<html>ok</html>"

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self):
        requests = []
        async with _make_client(_site(requests)) as client:
            await client.fetch("https://www.vlr.gg/team/2")
        headers = requests[0].headers
        assert "Chrome/" in headers["User-Agent"]
        assert headers["Accept-Language"].startswith("en")

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        async with _make_client(lambda r: httpx.Response(404)) as client:
            with pytest.raises(VlrError) as exc_info:
                await client.fetch("https://www.vlr.gg/missing")
        err = exc_info.value
        assert err.kind is ErrorKind.UNEXPECTED_STATUS
        assert err.status_code == 404
        assert err.url == "https://www.vlr.gg/missing"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _make_client(handler) as client:
            with pytest.raises(VlrError) as exc_info:
                await client.fetch("https://www.vlr.gg/1")
        err = exc_info.value
        assert err.kind is ErrorKind.HTTP
        assert isinstance(err.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_not_started(self):
        client = _make_client(lambda r: httpx.Response(200))
        client._client = None
        with pytest.raises(RuntimeError):
            await client.fetch("https://www.vlr.gg/1")


class TestStats:

    @pytest.mark.asyncio
    async def test_counts_successes_and_failures(self):
        statuses = iter([200, 404, 200])

        def handler(request):
            return httpx.Response(next(statuses), text="<html></html>")

        async with _make_client(handler) as client:
            await client.fetch("https://www.vlr.gg/1")
            with pytest.raises(VlrError):
                await client.fetch("https://www.vlr.gg/2")
            await client.fetch("https://www.vlr.gg/3")
            stats = client.stats

        assert stats["requests"] == 3
        assert stats["successes"] == 2
        assert stats["failures"] == 1
        assert stats["success_rate"] == pytest.approx(2 / 3)

    @pytest.mark.asyncio
    async def test_server_error_backs_off(self):
        async with _make_client(lambda r: httpx.Response(503)) as client:
            with pytest.raises(VlrError):
                await client.fetch("https://www.vlr.gg/1")
            assert client.rate_limiter.current_delay > 0.0

    @pytest.mark.asyncio
    async def test_not_found_does_not_back_off(self):
        async with _make_client(lambda r: httpx.Response(404)) as client:
            with pytest.raises(VlrError):
                await client.fetch("https://www.vlr.gg/1")
            assert client.rate_limiter.current_delay == 0.0


class TestOperations:
    """Each operation builds its URL, fetches and parses."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.requests = []
        self.client = _make_client(_site(self.requests))

    @pytest.mark.asyncio
    async def test_get_events(self):
        async with self.client as client:
            result = await client.get_events(EventType.COMPLETED, Region.EUROPE, page=1)
        assert str(self.requests[0].url) == "https://www.vlr.gg/events/europe?page=1"
        assert [e.id for e in result.items] == [1921, 1923]

    @pytest.mark.asyncio
    async def test_invalid_page_never_fetches(self):
        async with self.client as client:
            with pytest.raises(ValueError):
                await client.get_events(page=0)
            with pytest.raises(ValueError):
                await client.get_team_matchlist(2, page=-1)
        assert self.requests == []

    @pytest.mark.asyncio
    async def test_get_event_matchlist(self):
        async with self.client as client:
            result = await client.get_event_matchlist(1921)
        assert len(result) == 3

    @pytest.mark.asyncio
    async def test_get_match_and_tabs(self):
        async with self.client as client:
            match = await client.get_match(295610)
            performance = await client.get_match_performance(295610, match)
            economy = await client.get_match_economy(295610)
        assert match.header.teams[0].name == "Sentinels"
        assert all(p.player_id is not None for p in performance.player_performances)
        assert [t.team_name for t in economy.teams] == ["Sentinels", "Gen.G"]
        assert self.requests[1].url.params["tab"] == "performance"

    @pytest.mark.asyncio
    async def test_get_player(self):
        async with self.client as client:
            player = await client.get_player(9)
        assert player.info.name == "TenZ"
        assert self.requests[0].url.params["timespan"] == "90d"

    @pytest.mark.asyncio
    async def test_get_histories(self):
        async with self.client as client:
            player_matches = await client.get_player_matchlist(9)
            team_matches = await client.get_team_matchlist(2, page=1)
        assert player_matches.total_pages == 4
        assert len(team_matches.items) == 2

    @pytest.mark.asyncio
    async def test_get_team_and_transactions(self):
        async with self.client as client:
            team = await client.get_team(2)
            transactions = await client.get_team_transactions(2)
        assert team.info.tag == "SEN"
        assert len(transactions) == 3

    @pytest.mark.asyncio
    async def test_missing_page_surfaces_status(self):
        async with self.client as client:
            with pytest.raises(VlrError) as exc_info:
                await client.get_team(404)
        assert exc_info.value.status_code == 404
