"""Result types for player and team match histories.

Both histories share the ``MatchItem`` row shape; each wraps it with the
per-row context that differs between the two pages.
"""

from datetime import datetime

from pydantic import Field

from .common import FrozenModel


class MatchItemTeam(FrozenModel):
    """Team information as shown in a match history row."""

    name: str
    tag: str = ""
    logo_url: str | None = None
    score: int | None = None


class MatchItem(FrozenModel):
    """A single row of a match history."""

    id: int = Field(gt=0)
    slug: str
    league_icon: str | None = None
    league_name: str = ""
    league_series_name: str = ""
    teams: tuple[MatchItemTeam, ...] = ()
    vods: tuple[str, ...] = ()
    match_start: datetime | None = None


class PlayerMatchListItem(FrozenModel):
    """A match from a player's history with the team they played for."""

    match: MatchItem
    team: MatchItemTeam | None = None


class TeamMatchListItem(FrozenModel):
    """A match from a team's history with the opponent faced."""

    match: MatchItem
    opponent: MatchItemTeam | None = None
