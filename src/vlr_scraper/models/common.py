"""Shared pydantic v2 result types: base config, links, placements, pagination."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FrozenModel(BaseModel):
    """Immutable snapshot produced by a single parse call."""

    model_config = ConfigDict(frozen=True)


class Social(FrozenModel):
    """A social media link from a profile header."""

    platform: str
    url: str
    display_text: str


class PlacementEntry(FrozenModel):
    """A single placement within an event (stage + result)."""

    stage: str
    placement: str
    prize: str | None = None
    team_name: str | None = None


class EventPlacement(FrozenModel):
    """Placement history at a single event."""

    event_id: int = Field(gt=0)
    event_slug: str
    event_href: str
    event_name: str
    year: str
    placements: tuple[PlacementEntry, ...] = ()


class PaginatedResult(FrozenModel, Generic[T]):
    """One requested page of a listing.

    Pages are 1-based. A page past the last one holds no items.
    """

    items: tuple[T, ...] = ()
    page: int = Field(ge=1)
    total_pages: int = Field(ge=1)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
