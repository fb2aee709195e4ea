"""Tests for the event match list parser."""

import logging
from datetime import datetime
from pathlib import Path

import pytest

from vlr_scraper.event_matchlist_parser import parse_event_matchlist
from vlr_scraper.exceptions import ErrorKind, VlrError

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
URL = "https://www.vlr.gg/event/matches/1921/"


def load_fixture(filename: str) -> str:
    """Load an HTML fixture page."""
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


class TestEventMatchList:
    """Masters Madrid match list."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.result = parse_event_matchlist(load_fixture("event_matches.html"), URL)

    def test_duplicates_and_placeholders_dropped(self):
        assert [m.id for m in self.result] == [295588, 295589, 295610]

    def test_completed_match(self):
        match = self.result[0]
        assert match.slug == "fnatic-vs-team-heretics-champions-tour-2024-masters-madrid-r1"
        assert match.href.startswith("https://www.vlr.gg/295588/")
        assert match.date_time == datetime(2024, 3, 14, 10, 0)
        assert match.status == "Completed"
        assert match.tags == ("Map 1", "Map 2")
        assert match.event_text == "Champions Tour 2024: Masters Madrid"
        assert match.event_series_text == "Swiss Stage–Round 1"

    def test_teams(self):
        fnatic, heretics = self.result[0].teams
        assert fnatic.name == "FNATIC"
        assert fnatic.score == 2
        assert fnatic.is_winner
        assert heretics.name == "Team Heretics"
        assert heretics.score == 0
        assert not heretics.is_winner
        assert fnatic.id is None

    def test_second_team_can_win(self):
        geng, prx = self.result[1].teams
        assert not geng.is_winner
        assert prx.is_winner
        assert self.result[1].date_time == datetime(2024, 3, 14, 13, 0)
        assert len(self.result[1].tags) == 3

    def test_unscheduled_match(self):
        match = self.result[2]
        assert match.date_time is None
        assert match.status == "Upcoming"
        assert [t.score for t in match.teams] == [None, None]
        assert match.tags == ()
        assert match.event_series_text == "Playoffs–Grand Final"


class TestEdgeCases:

    def test_placeholder_row_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="vlr_scraper.event_matchlist_parser"):
            parse_event_matchlist(load_fixture("event_matches.html"), URL)
        assert any("placeholder" in r.getMessage() for r in caplog.records)

    def test_row_before_any_label_has_no_date(self):
        html = """
        <div id="wrapper"><div class="wf-card">
          <a href="/1/a-vs-b" class="match-item">
            <div class="match-item-time">1:00 PM</div>
            <div class="match-item-vs">
              <div class="match-item-vs-team"><div class="match-item-vs-team-name"><div class="text-of">A</div></div></div>
              <div class="match-item-vs-team"><div class="match-item-vs-team-name"><div class="text-of">B</div></div></div>
            </div>
          </a>
        </div></div>
        """
        [match] = parse_event_matchlist(html, URL)
        assert match.date_time is None
        assert match.status == ""

    def test_one_team_row_raises(self):
        html = """
        <div id="wrapper">
          <div class="wf-label mod-large">Thu, March 14, 2024</div>
          <div class="wf-card">
            <a href="/295588/x" class="match-item">
              <div class="match-item-vs">
                <div class="match-item-vs-team"><div class="match-item-vs-team-name"><div class="text-of">A</div></div></div>
              </div>
            </a>
          </div>
        </div>
        """
        with pytest.raises(VlrError) as exc_info:
            parse_event_matchlist(html, URL)
        err = exc_info.value
        assert err.kind is ErrorKind.ELEMENT_NOT_FOUND
        assert err.field.endswith("match row 295588 > team summaries")
        assert err.url == URL

    def test_bad_date_label_raises(self):
        html = '<div id="wrapper"><div class="wf-label mod-large">Someday</div></div>'
        with pytest.raises(VlrError) as exc_info:
            parse_event_matchlist(html, URL)
        assert exc_info.value.kind is ErrorKind.DATE_PARSE
        assert "date label" in exc_info.value.field

    def test_empty_page(self):
        assert parse_event_matchlist("<html></html>", URL) == []

    def test_idempotent(self):
        html = load_fixture("event_matches.html")
        assert parse_event_matchlist(html, URL) == parse_event_matchlist(html, URL)
