"""Unit tests for the pydantic result models.

Tests field constraints, cross-field validators, immutability and the
small helpers (has_next, EventStatus.from_text) defined in
vlr_scraper.models.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from vlr_scraper.models import (
    Event,
    EventMatchListItem,
    EventMatchListTeam,
    EventStatus,
    HeadToHeadMatch,
    MatchEvent,
    MatchHeader,
    MatchHeaderTeam,
    MatchPlayerRef,
    PaginatedResult,
    PlayerGameStats,
    Round,
    StatLine,
    TeamInfo,
)

# ---------------------------------------------------------------------------
# Fixtures: minimal valid dicts
# ---------------------------------------------------------------------------

HEADER_TEAM = {"id": 2, "slug": "sentinels", "href": "/team/2/sentinels", "name": "Sentinels"}

HEADER = {
    "event": {"id": 1921, "slug": "champions-tour-2024-masters-madrid", "title": "Masters Madrid"},
    "date": datetime(2024, 3, 24, 14, 0),
    "teams": (HEADER_TEAM, {**HEADER_TEAM, "id": 17, "slug": "gen-g", "name": "Gen.G"}),
}

EVENT_TEAM = {"name": "Sentinels"}


class TestFrozen:

    def test_assignment_rejected(self):
        info = TeamInfo(id=2, name="Sentinels")
        with pytest.raises(ValidationError):
            info.name = "SEN"

    def test_equal_by_value(self):
        assert TeamInfo(id=2, name="Sentinels") == TeamInfo(id=2, name="Sentinels")

    def test_list_input_stored_as_tuple(self):
        header = MatchHeader(**{**HEADER, "teams": list(HEADER["teams"])})
        assert isinstance(header.teams, tuple)


class TestTwoTeams:

    def test_header_accepts_two(self):
        header = MatchHeader(**HEADER)
        assert [t.name for t in header.teams] == ["Sentinels", "Gen.G"]
        assert isinstance(header.event, MatchEvent)

    @pytest.mark.parametrize("count", [0, 1, 3])
    def test_header_rejects_other_counts(self, count):
        with pytest.raises(ValidationError, match="expected 2 header teams"):
            MatchHeader(**{**HEADER, "teams": (HEADER_TEAM,) * count})

    def test_header_rejects_same_team_twice(self):
        with pytest.raises(ValidationError, match="both header teams have id 2"):
            MatchHeader(**{**HEADER, "teams": (HEADER_TEAM, HEADER_TEAM)})

    def test_event_match_rejects_one_team(self):
        with pytest.raises(ValidationError, match="expected 2 teams"):
            EventMatchListItem(
                id=295588, slug="a-vs-b", href="/295588/a-vs-b", teams=(EVENT_TEAM,)
            )

    def test_event_match_defaults(self):
        item = EventMatchListItem(
            id=295588, slug="a-vs-b", href="/295588/a-vs-b", teams=(EVENT_TEAM, EVENT_TEAM)
        )
        assert item.date_time is None
        assert item.tags == ()
        assert item.teams[0] == EventMatchListTeam(name="Sentinels")


class TestRound:

    @pytest.mark.parametrize("side", ["t", "ct"])
    def test_valid_sides(self, side):
        rnd = Round(number=1, winning_team_id=2, winning_side=side, win_condition="defuse")
        assert rnd.winning_side == side

    def test_invalid_side(self):
        with pytest.raises(ValidationError, match="winning_side"):
            Round(number=1, winning_team_id=2, winning_side="attack", win_condition="time")

    def test_round_number_starts_at_one(self):
        with pytest.raises(ValidationError):
            Round(number=0, winning_team_id=2, winning_side="t", win_condition="time")


class TestFieldConstraints:

    def test_ids_positive(self):
        with pytest.raises(ValidationError):
            TeamInfo(id=0, name="Sentinels")
        with pytest.raises(ValidationError):
            MatchHeaderTeam(**{**HEADER_TEAM, "id": -1})

    def test_roster_ref_allows_zero_id(self):
        assert MatchPlayerRef(id=0, name="unknown").id == 0

    def test_names_not_empty(self):
        with pytest.raises(ValidationError):
            TeamInfo(id=2, name="")
        with pytest.raises(ValidationError):
            Event(id=1921, slug="x", href="/event/1921/x", title="")

    def test_winner_index(self):
        h2h = {
            "match_id": 1, "match_slug": "a", "event_name": "e", "event_series": "s",
            "team1_score": 2, "team2_score": 1, "date": "2024/01/01",
        }
        assert HeadToHeadMatch(**h2h, winner_index=1).winner_index == 1
        with pytest.raises(ValidationError):
            HeadToHeadMatch(**h2h, winner_index=2)

    def test_stat_defaults(self):
        row = PlayerGameStats(player=MatchPlayerRef(id=9, name="TenZ"))
        assert row.both == StatLine()
        assert row.attack.kills is None
        assert row.agents == ()


class TestPaginatedResult:

    def test_has_next(self):
        assert PaginatedResult[int](items=(1, 2), page=1, total_pages=3).has_next
        assert not PaginatedResult[int](items=(1,), page=3, total_pages=3).has_next

    def test_page_past_last(self):
        result = PaginatedResult[int](page=5, total_pages=3)
        assert result.items == ()
        assert not result.has_next

    def test_page_at_least_one(self):
        with pytest.raises(ValidationError):
            PaginatedResult[int](page=0, total_pages=1)
        with pytest.raises(ValidationError):
            PaginatedResult[int](page=1, total_pages=0)


class TestEventStatus:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("upcoming", EventStatus.UPCOMING),
            (" Ongoing ", EventStatus.ONGOING),
            ("COMPLETED", EventStatus.COMPLETED),
            ("postponed", EventStatus.UNKNOWN),
            ("", EventStatus.UNKNOWN),
        ],
    )
    def test_from_text(self, text, expected):
        assert EventStatus.from_text(text) is expected

    def test_event_default_status(self):
        event = Event(id=1921, slug="x", href="/event/1921/x", title="Masters Madrid")
        assert event.status is EventStatus.UNKNOWN
