"""Result types for a player profile page."""

import datetime as dt

from pydantic import Field

from .common import EventPlacement, FrozenModel, Social


class PlayerTeam(FrozenModel):
    """A current or past team affiliation."""

    id: int = Field(gt=0)
    slug: str
    name: str
    logo_url: str | None = None
    info: str = ""  # e.g. "joined in April 2021" or "Jan 2022 – Mar 2023"
    is_current: bool = False


class PlayerInfo(FrozenModel):
    """Identity block of a player profile."""

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    real_name: str | None = None
    country: str | None = None
    country_code: str | None = None
    avatar_url: str | None = None
    socials: tuple[Social, ...] = ()
    current_team: PlayerTeam | None = None  # None for free agents


class AgentStats(FrozenModel):
    """Aggregate numbers for one agent over the requested timespan."""

    agent: str
    usage_count: int | None = None
    usage_pct: float | None = None
    rounds: int | None = None
    rating: float | None = None
    acs: float | None = None
    kd: float | None = None
    adr: float | None = None
    kast: float | None = None
    kpr: float | None = None
    apr: float | None = None
    fkpr: float | None = None
    fdpr: float | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    first_kills: int | None = None
    first_deaths: int | None = None


class NewsItem(FrozenModel):
    """A news article mentioning the player."""

    href: str
    title: str
    date: dt.date | None = None


class Player(FrozenModel):
    """Complete player profile."""

    info: PlayerInfo
    current_teams: tuple[PlayerTeam, ...] = ()
    past_teams: tuple[PlayerTeam, ...] = ()
    agent_stats: tuple[AgentStats, ...] = ()
    news: tuple[NewsItem, ...] = ()
    event_placements: tuple[EventPlacement, ...] = ()
    total_winnings: str | None = None
