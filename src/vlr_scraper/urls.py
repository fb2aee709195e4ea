"""URL builders for every vlr.gg page the parsers understand.

One builder per logical operation. Page numbers are 1-based and are
validated here, before anything is fetched or parsed.
"""

from vlr_scraper.config import VLR_BASE_URL
from vlr_scraper.models.enums import AgentStatsTimespan, EventType, MatchTab, Region


def validate_page(page: int) -> int:
    """Reject page numbers below 1.

    Raises:
        ValueError: If ``page`` is zero or negative.
    """
    if isinstance(page, bool) or not isinstance(page, int):
        raise ValueError(f"page must be an integer, got {page!r}")
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    return page


def events_url(
    event_type: EventType = EventType.UPCOMING,
    region: Region = Region.ALL,
    page: int = 1,
    base_url: str = VLR_BASE_URL,
) -> str:
    # Both columns live on the same page; event_type only selects the column.
    validate_page(page)
    return f"{base_url}/events/{Region(region).value}?page={page}"


def event_matchlist_url(event_id: int, base_url: str = VLR_BASE_URL) -> str:
    return f"{base_url}/event/matches/{event_id}/"


def match_url(
    match_id: int, tab: MatchTab = MatchTab.OVERVIEW, base_url: str = VLR_BASE_URL
) -> str:
    tab = MatchTab(tab)
    if tab is MatchTab.OVERVIEW:
        return f"{base_url}/{match_id}"
    return f"{base_url}/{match_id}/?game=all&tab={tab.value}"


def player_url(
    player_id: int,
    timespan: AgentStatsTimespan = AgentStatsTimespan.DAYS_90,
    base_url: str = VLR_BASE_URL,
) -> str:
    return f"{base_url}/player/{player_id}/?timespan={AgentStatsTimespan(timespan).value}"


def player_matchlist_url(player_id: int, page: int = 1, base_url: str = VLR_BASE_URL) -> str:
    validate_page(page)
    return f"{base_url}/player/matches/{player_id}/?page={page}"


def team_url(team_id: int, base_url: str = VLR_BASE_URL) -> str:
    return f"{base_url}/team/{team_id}"


def team_matchlist_url(team_id: int, page: int = 1, base_url: str = VLR_BASE_URL) -> str:
    validate_page(page)
    return f"{base_url}/team/matches/{team_id}/?page={page}"


def team_transactions_url(team_id: int, base_url: str = VLR_BASE_URL) -> str:
    return f"{base_url}/team/transactions/{team_id}/"
