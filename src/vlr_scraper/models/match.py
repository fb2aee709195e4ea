"""Result types for a match detail page and its performance/economy tabs.

Nesting: Match -> games -> (teams -> player stat rows, rounds). Every stat
row points at a ``MatchPlayerRef`` taken from the header roster.
"""

from datetime import datetime

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from .common import FrozenModel


class MatchPlayerRef(FrozenModel):
    """A player as listed on the match roster."""

    id: int = Field(ge=0)
    slug: str = ""
    name: str
    nation: str = ""


class MatchHeaderTeam(FrozenModel):
    """A team as shown in the match header, with its roster for the match."""

    id: int = Field(gt=0)
    slug: str
    href: str
    name: str = Field(min_length=1)
    score: int | None = None
    icon: str | None = None
    roster: tuple[MatchPlayerRef, ...] = ()


class MatchEvent(FrozenModel):
    """Event reference in the match header."""

    id: int = Field(gt=0)
    slug: str
    title: str
    series: str = ""
    icon: str | None = None


class MatchHeader(FrozenModel):
    """Header metadata for a match (event, date, teams)."""

    event: MatchEvent
    date: datetime
    patch: str = ""
    format: str = ""
    status: str = ""
    note: str = ""
    teams: tuple[MatchHeaderTeam, ...]

    @field_validator("teams")
    @classmethod
    def validate_two_teams(cls, v: tuple) -> tuple:
        if len(v) != 2:
            raise ValueError(f"expected 2 header teams, got {len(v)}")
        return v

    @model_validator(mode="after")
    def check_teams_different(self) -> Self:
        """The two header teams should have different ids."""
        if self.teams[0].id == self.teams[1].id:
            raise ValueError(f"both header teams have id {self.teams[0].id}")
        return self


class StatLine(FrozenModel):
    """One side's numbers for a player in a game (all, attack, or defense)."""

    rating: float | None = None
    acs: int | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    kd_diff: int | None = None
    kast: float | None = None  # percent, e.g. 75.0
    adr: float | None = None
    hs_pct: float | None = None  # percent
    first_kills: int | None = None
    first_deaths: int | None = None
    fk_diff: int | None = None


class PlayerGameStats(FrozenModel):
    """A player's stat row for one game, split by side."""

    player: MatchPlayerRef
    agent: str = ""
    agents: tuple[str, ...] = ()
    both: StatLine = StatLine()
    attack: StatLine = StatLine()
    defense: StatLine = StatLine()


class GameTeam(FrozenModel):
    """Per-team result for a single game."""

    team_id: int = Field(gt=0)
    name: str
    score: int | None = None
    score_t: int | None = None
    score_ct: int | None = None
    is_winner: bool = False
    players: tuple[PlayerGameStats, ...] = ()


class Round(FrozenModel):
    """Outcome of a single round."""

    number: int = Field(ge=1)
    winning_team_id: int = Field(gt=0)
    winning_side: str  # "t" (attack) or "ct" (defense)
    win_condition: str  # elimination, spike_exploded, defuse, time, unknown

    @field_validator("winning_side")
    @classmethod
    def validate_side(cls, v: str) -> str:
        if v not in ("t", "ct"):
            raise ValueError(f"winning_side must be 't' or 'ct', got {v!r}")
        return v


class Game(FrozenModel):
    """A single map played within a match."""

    map: str
    picked_by: int | None = None  # team id
    duration: str | None = None
    teams: tuple[GameTeam, ...]
    rounds: tuple[Round, ...] = ()


class MatchStream(FrozenModel):
    """A stream or VOD link."""

    name: str
    link: str


class HeadToHeadMatch(FrozenModel):
    """A previous meeting of the two teams."""

    match_id: int = Field(gt=0)
    match_slug: str
    event_name: str
    event_series: str
    event_icon: str | None = None
    team1_score: int
    team2_score: int
    winner_index: int = Field(ge=0, le=1)
    date: str


class PastMatch(FrozenModel):
    """One of a team's recent results."""

    match_id: int = Field(gt=0)
    match_slug: str
    score_for: int
    score_against: int
    is_win: bool
    opponent_name: str
    opponent_logo: str | None = None
    date: str


class TeamPastMatches(FrozenModel):
    team_id: int
    matches: tuple[PastMatch, ...] = ()


class Match(FrozenModel):
    """Full detail of a match."""

    id: int = Field(gt=0)
    header: MatchHeader
    streams: tuple[MatchStream, ...] = ()
    vods: tuple[MatchStream, ...] = ()
    games: tuple[Game, ...] = ()
    head_to_head: tuple[HeadToHeadMatch, ...] = ()
    past_matches: tuple[TeamPastMatches, ...] = ()


class KillMatrixEntry(FrozenModel):
    """Kills a player traded against one opponent across the match."""

    killer_id: int | None = None  # None when the name is not on the roster
    killer_name: str
    victim_id: int | None = None
    victim_name: str
    kills: int
    deaths: int


class PlayerPerformance(FrozenModel):
    """Multi-kill, clutch and utility counts for a player across the match."""

    player_id: int | None = None
    player_name: str
    multi_kills_2k: int = 0
    multi_kills_3k: int = 0
    multi_kills_4k: int = 0
    multi_kills_5k: int = 0
    clutch_1v1: int = 0
    clutch_1v2: int = 0
    clutch_1v3: int = 0
    clutch_1v4: int = 0
    clutch_1v5: int = 0
    econ_rating: int = 0
    plants: int = 0
    defuses: int = 0


class MatchPerformance(FrozenModel):
    """Performance tab of a match."""

    kill_matrix: tuple[KillMatrixEntry, ...] = ()
    player_performances: tuple[PlayerPerformance, ...] = ()


class TeamEconomy(FrozenModel):
    """Buy-type breakdown for one team across the match."""

    team_name: str
    pistol_won: int = 0
    eco_rounds: int = 0
    eco_won: int = 0
    semi_eco_rounds: int = 0
    semi_eco_won: int = 0
    semi_buy_rounds: int = 0
    semi_buy_won: int = 0
    full_buy_rounds: int = 0
    full_buy_won: int = 0


class MatchEconomy(FrozenModel):
    """Economy tab of a match."""

    teams: tuple[TeamEconomy, ...] = ()
