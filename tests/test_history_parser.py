"""Tests for player and team match history parsers."""

from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from vlr_scraper.exceptions import ErrorKind, VlrError
from vlr_scraper.history_parser import parse_player_matchlist, parse_team_matchlist

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
PLAYER_URL = "https://www.vlr.gg/player/matches/9/?page=1"
TEAM_URL = "https://www.vlr.gg/team/matches/2/?page=1"


def load_fixture(filename: str) -> str:
    """Load an HTML fixture page."""
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


class TestPlayerMatchList:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.result = parse_player_matchlist(load_fixture("player_matches.html"), PLAYER_URL, 1)

    def test_items_and_pages(self):
        assert [i.match.id for i in self.result.items] == [295610, 295605, 295600]
        assert self.result.total_pages == 4
        assert self.result.has_next

    def test_row_fields(self):
        match = self.result.items[0].match
        assert match.slug == "sentinels-vs-gen-g-champions-tour-2024-masters-madrid-gf"
        assert match.league_name == "Champions Tour 2024: Masters Madrid"
        assert match.league_series_name == "Playoffs ⋅ GF"
        assert match.league_icon == "https://owcdn.net/img/63067806d167d.png"
        assert match.vods == ("Map 1", "Map 2")
        assert match.match_start == datetime(2024, 3, 24, 14, 0)

    def test_teams(self):
        sen, gen = self.result.items[0].match.teams
        assert (sen.name, sen.tag, sen.score) == ("Sentinels", "SEN", 2)
        assert (gen.name, gen.tag, gen.score) == ("Gen.G", "GEN", 0)
        assert gen.logo_url == "https://owcdn.net/img/634be9a09d87e.png"

    def test_player_team_is_first_team(self):
        assert all(i.team.name == "Sentinels" for i in self.result.items)

    def test_morning_times(self):
        assert self.result.items[1].match.match_start == datetime(2024, 3, 22, 11, 0)
        assert self.result.items[2].match.match_start == datetime(2024, 3, 23, 9, 0)

    def test_no_vods(self):
        assert self.result.items[1].match.vods == ()
        assert self.result.items[2].match.vods == ()

    def test_page_past_last(self):
        result = parse_player_matchlist(load_fixture("player_matches.html"), PLAYER_URL, 5)
        assert result.items == ()
        assert result.page == 5
        assert result.total_pages == 4


class TestTeamMatchList:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.result = parse_team_matchlist(load_fixture("team_matches.html"), TEAM_URL, 1)

    def test_single_page_without_pager(self):
        assert self.result.total_pages == 1
        assert not self.result.has_next
        assert len(self.result.items) == 2

    def test_upcoming_match(self):
        item = self.result.items[0]
        assert item.match.id == 312785
        assert item.opponent.name == "100 Thieves"
        assert [t.score for t in item.match.teams] == [None, None]
        assert item.match.match_start is None

    def test_completed_match(self):
        item = self.result.items[1]
        assert item.match.id == 295610
        assert item.opponent.name == "Gen.G"
        assert [t.score for t in item.match.teams] == [2, 0]


class TestMalformedRows:

    def test_bad_match_date(self):
        html = load_fixture("player_matches.html").replace("2024/03/24", "24th of March", 1)
        with pytest.raises(VlrError) as exc_info:
            parse_player_matchlist(html, PLAYER_URL)
        err = exc_info.value
        assert err.kind is ErrorKind.DATE_PARSE
        assert err.field == "player match history > match row 1 > match date"
        assert err.url == PLAYER_URL

    def test_bad_score(self):
        html = load_fixture("team_matches.html").replace("<span>2</span>", "<span>two</span>", 1)
        with pytest.raises(VlrError) as exc_info:
            parse_team_matchlist(html, TEAM_URL)
        assert exc_info.value.kind is ErrorKind.INT_PARSE
        assert exc_info.value.field == "team match history > match row 2"

    def test_empty_page(self):
        result = parse_team_matchlist("<html></html>", TEAM_URL)
        assert result.items == ()
        assert result.total_pages == 1

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_below_one_rejected_before_parsing(self, page):
        with pytest.raises(ValueError, match="page must be >= 1") as exc_info:
            parse_player_matchlist(load_fixture("player_matches.html"), PLAYER_URL, page)
        assert not isinstance(exc_info.value, ValidationError)
        with pytest.raises(ValueError, match="page must be >= 1") as exc_info:
            parse_team_matchlist(load_fixture("team_matches.html"), TEAM_URL, page)
        assert not isinstance(exc_info.value, ValidationError)


class TestIdempotence:

    def test_player_history(self):
        html = load_fixture("player_matches.html")
        assert parse_player_matchlist(html, PLAYER_URL, 2) == parse_player_matchlist(
            html, PLAYER_URL, 2
        )

    def test_team_history(self):
        html = load_fixture("team_matches.html")
        assert parse_team_matchlist(html, TEAM_URL) == parse_team_matchlist(html, TEAM_URL)
