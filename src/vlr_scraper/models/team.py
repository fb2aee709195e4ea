"""Result types for a team profile and its roster transactions."""

import datetime as dt

from pydantic import Field

from .common import EventPlacement, FrozenModel, Social


class TeamInfo(FrozenModel):
    """Basic profile information for a team."""

    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    tag: str | None = None
    logo_url: str | None = None
    country: str | None = None
    country_code: str | None = None
    socials: tuple[Social, ...] = ()


class TeamRosterMember(FrozenModel):
    """A member of a team's roster (player or staff)."""

    id: int = Field(gt=0)
    slug: str
    href: str
    alias: str
    real_name: str | None = None
    country_code: str | None = None
    avatar_url: str | None = None
    role: str = "player"
    is_captain: bool = False
    tag: str | None = None  # roster badge such as "Sub" or "Inactive"


class Team(FrozenModel):
    """Complete team profile."""

    info: TeamInfo
    roster: tuple[TeamRosterMember, ...] = ()
    event_placements: tuple[EventPlacement, ...] = ()
    total_winnings: str | None = None


class TeamTransaction(FrozenModel):
    """A single roster transaction (join, leave, inactive...)."""

    date: dt.date | None = None
    action: str
    player_id: int = Field(gt=0)
    player_slug: str
    player_alias: str
    player_real_name: str | None = None
    player_country_code: str | None = None
    position: str = ""
    reference_url: str | None = None
