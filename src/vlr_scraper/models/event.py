"""Result types for the events listing and an event's match list."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import FrozenModel
from .enums import EventStatus


class Event(FrozenModel):
    """A single esports event (tournament or league)."""

    id: int = Field(gt=0)
    slug: str
    href: str
    title: str = Field(min_length=1)
    status: EventStatus = EventStatus.UNKNOWN
    region: str = ""
    icon_url: str | None = None
    prize: str = ""
    dates: str = ""  # date range as published, e.g. "Mar 1—Apr 13"


class EventMatchListTeam(FrozenModel):
    """Team summary as shown in an event's match list."""

    name: str
    id: int | None = None
    score: int | None = None
    is_winner: bool = False


class EventMatchListItem(FrozenModel):
    """Summary of one match within an event."""

    id: int = Field(gt=0)
    slug: str
    href: str
    date_time: datetime | None = None
    status: str = ""
    teams: tuple[EventMatchListTeam, ...]
    tags: tuple[str, ...] = ()
    event_text: str = ""
    event_series_text: str = ""

    @field_validator("teams")
    @classmethod
    def validate_two_teams(cls, v: tuple) -> tuple:
        """A match always lists exactly two team summaries."""
        if len(v) != 2:
            raise ValueError(f"expected 2 teams, got {len(v)}")
        return v
