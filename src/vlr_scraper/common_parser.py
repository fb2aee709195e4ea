"""Sub-parsers shared by several vlr.gg pages.

Provides:
- parse_match_items: the ``a.m-item`` match-history row (player and team history)
- parse_page_count / paginate: pagination indicator and page slicing policy
- parse_socials: social-link blocks in profile headers
- parse_event_placements / parse_total_winnings: placement summaries
"""

import logging
from datetime import datetime
from typing import Optional, Sequence, TypeVar

from vlr_scraper.document import Node
from vlr_scraper.exceptions import error_context
from vlr_scraper.extract import (
    EVENT_HREF,
    MATCH_HREF,
    FieldSpec,
    date_of,
    first_text_of,
    id_from_href,
    image_of,
    infer_platform,
    int_or_none,
    last_text_of,
    optional,
    optional_text,
    time_of,
)
from vlr_scraper.models import (
    EventPlacement,
    MatchItem,
    MatchItemTeam,
    PaginatedResult,
    PlacementEntry,
    Social,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MATCH_ITEM_ROW = "div#wrapper div.col a.m-item"

LEAGUE_ICON = FieldSpec("league icon", "div.m-item-thumb img", image_of)
LEAGUE_NAME = FieldSpec("league name", "div.m-item-event div", first_text_of)
LEAGUE_SERIES = FieldSpec("league series", "div.m-item-event", last_text_of)
MATCH_DATE = FieldSpec("match date", "div.m-item-date div", first_text_of)
MATCH_TIME = FieldSpec("match time", "div.m-item-date", last_text_of)
TEAM_NAME = FieldSpec("team name", "span.m-item-team-name", first_text_of)
TEAM_TAG = FieldSpec("team tag", "span.m-item-team-tag", first_text_of)

PAGE_LABELS = "div#wrapper div.action-container div.action-container-pages :is(span, a)"


# ---------------------------------------------------------------------------
# Match-history rows
# ---------------------------------------------------------------------------


def parse_match_items(root: Node) -> list[MatchItem]:
    items = []
    for index, row in enumerate(root.select_all(MATCH_ITEM_ROW), start=1):
        with error_context(f"match row {index}"):
            items.append(parse_match_item(row))
    return items


def parse_match_item(row: Node) -> MatchItem:
    ref = id_from_href(row.attr("href"), MATCH_HREF)

    # Team blocks, logos and result spans line up one-to-one.
    teams = []
    for team, logo, score in zip(
        row.select_all("div.m-item-team"),
        row.select_all("div.m-item-logo img"),
        row.select_all("div.m-item-result span"),
    ):
        teams.append(
            MatchItemTeam(
                name=optional(team, TEAM_NAME, ""),
                tag=optional(team, TEAM_TAG, ""),
                logo_url=image_of(logo),
                score=int_or_none(score.last_text),
            )
        )

    vods = tuple(
        node.last_text
        for node in row.select_all("div.m-item-vods div.wf-tag span.full")
        if node.last_text
    )

    return MatchItem(
        id=ref.id,
        slug=ref.slug,
        league_icon=optional(row, LEAGUE_ICON),
        league_name=optional(row, LEAGUE_NAME, ""),
        league_series_name=optional(row, LEAGUE_SERIES, ""),
        teams=tuple(teams),
        vods=vods,
        match_start=_match_start(row),
    )


def _match_start(row: Node) -> Optional[datetime]:
    date_text = optional_text(row, MATCH_DATE)
    time_text = optional_text(row, MATCH_TIME)
    if not date_text or not time_text or time_text == date_text:
        return None
    # Unscheduled matches show "TBD" in place of the time.
    if not time_text[0].isdigit():
        return None
    with error_context(MATCH_DATE.description):
        day = date_of(date_text)
    with error_context(MATCH_TIME.description):
        clock = time_of(time_text)
    return datetime.combine(day, clock)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def parse_page_count(root: Node, selector: str = PAGE_LABELS) -> int:
    """Highest page number shown in the pager, or 1 when there is no pager."""
    numbers = [int(label.text) for label in root.select_all(selector) if label.text.isdigit()]
    return max(numbers, default=1)


def paginate(items: Sequence[T], page: int, total_pages: int) -> PaginatedResult[T]:
    """Wrap one page of items; a page past the last one is always empty."""
    total_pages = max(total_pages, 1)
    if page > total_pages:
        logger.debug("Page %d is past the last page (%d)", page, total_pages)
        items = ()
    return PaginatedResult(items=tuple(items), page=page, total_pages=total_pages)


# ---------------------------------------------------------------------------
# Socials and placements
# ---------------------------------------------------------------------------


def parse_socials(root: Node, selector: str) -> tuple[Social, ...]:
    socials = []
    for link in root.select_all(selector):
        href = (link.attr("href") or "").strip()
        display_text = link.text
        if not href or not display_text:
            continue
        socials.append(
            Social(platform=infer_platform(href), url=href, display_text=display_text)
        )
    return tuple(socials)


def parse_total_winnings(root: Node) -> Optional[str]:
    for label in root.select_all("div.wf-module-label"):
        if "Total Winnings" in label.text:
            value = label.next_element_sibling
            return (value.text or None) if value is not None else None
    return None


def _split_stage(text: str) -> tuple[str, str]:
    stage, sep, placement = text.partition("–")
    if not sep:
        return text.strip(), ""
    return stage.strip(), placement.strip()


def _prize_of(item: Node) -> Optional[str]:
    for span in item.select_all("span[style]"):
        if "font-weight" in (span.attr("style") or "") and span.text:
            return span.text
    return None


EVENT_NAME = FieldSpec("event name", "div.text-of", first_text_of)


def parse_event_placements(root: Node, kind: str) -> tuple[EventPlacement, ...]:
    """Placement list on a profile page.

    Args:
        root: Page or section to search.
        kind: ``"team"`` or ``"player"``; selects the ``a.{kind}-event-item``
            rows and their ``span.{kind}-event-item-series`` lines.
    """
    placements = []
    for index, item in enumerate(root.select_all(f"a.{kind}-event-item"), start=1):
        with error_context(f"event placement {index}"):
            placements.append(_parse_event_placement(item, kind))
    return tuple(placements)


def _parse_event_placement(item: Node, kind: str) -> EventPlacement:
    href = item.attr("href")
    ref = id_from_href(href, EVENT_HREF)
    children = item.element_children
    year = children[-1].text if children else ""
    prize = _prize_of(item)
    team_names = [n.text for n in item.select_all(f"span.{kind}-event-item-team")]

    entries = []
    for i, series in enumerate(item.select_all(f"span.{kind}-event-item-series")):
        stage, placement = _split_stage(series.text)
        entries.append(
            PlacementEntry(
                stage=stage,
                placement=placement,
                # One prize per event row; it belongs to the first line.
                prize=prize if i == 0 else None,
                team_name=team_names[i] if i < len(team_names) else None,
            )
        )

    return EventPlacement(
        event_id=ref.id,
        event_slug=ref.slug,
        event_href=href.strip(),
        event_name=optional(item, EVENT_NAME, ""),
        year=year,
        placements=tuple(entries),
    )
