"""Events listing parser for vlr.gg /events pages.

Provides:
- parse_events: pure function extracting one page of events for a column

The listing page carries both the upcoming and the completed column, each
with its own pager. ``event_type`` picks the column.
"""

import logging

from vlr_scraper.common_parser import paginate, parse_page_count
from vlr_scraper.document import Node, parse_document
from vlr_scraper.exceptions import error_context
from vlr_scraper.extract import (
    EVENT_HREF,
    FieldSpec,
    absolute_url,
    country_code_of,
    first_text_of,
    id_from_href,
    image_of,
    optional,
    required,
)
from vlr_scraper.models import Event, EventStatus, EventType, PaginatedResult
from vlr_scraper.urls import validate_page

logger = logging.getLogger(__name__)

_COLUMN = {
    EventType.UPCOMING: ":first-child",
    EventType.COMPLETED: ":last-child",
}

ROWS = "div#wrapper div.events-container div.events-container-col{col} a.event-item"
PAGER = "div#wrapper div.action-container div.action-container-pages{col} :is(span, a)"

TITLE = FieldSpec("event title", "div.event-item-inner div.event-item-title", first_text_of)
ICON = FieldSpec("event icon", "div.event-item-thumb img", image_of)
STATUS = FieldSpec(
    "event status",
    "div.event-item-inner div.event-item-desc-item span.event-item-desc-item-status",
    first_text_of,
)
PRIZE = FieldSpec(
    "event prize", "div.event-item-inner div.event-item-desc-item.mod-prize", first_text_of
)
DATES = FieldSpec(
    "event dates", "div.event-item-inner div.event-item-desc-item.mod-dates", first_text_of
)
REGION = FieldSpec(
    "event region",
    "div.event-item-inner div.event-item-desc-item.mod-location i",
    country_code_of,
)


def parse_events(
    html: str,
    url: str,
    event_type: EventType = EventType.UPCOMING,
    page: int = 1,
) -> PaginatedResult[Event]:
    """Parse one page of the events listing.

    Pure function: HTML string in, PaginatedResult out. No side effects.

    Args:
        html: Raw HTML of an ``/events/{region}?page=N`` page.
        url: URL the page was fetched from (for error context).
        event_type: Which column to read.
        page: The requested 1-based page number.

    Raises:
        VlrError: If an event row is missing its link or title.
        ValueError: If ``page`` is below 1; raised before any parsing.
    """
    validate_page(page)
    col = _COLUMN[EventType(event_type)]
    with error_context("events listing", url=url):
        doc = parse_document(html)
        events = []
        for index, row in enumerate(doc.select_all(ROWS.format(col=col)), start=1):
            with error_context(f"event row {index}"):
                events.append(_parse_event(row))
        total_pages = parse_page_count(doc, PAGER.format(col=col))
        result = paginate(events, page, total_pages)

    logger.debug(
        "Parsed %d %s events (page %d/%d)",
        len(events), EventType(event_type).value, page, total_pages,
    )
    return result


def _parse_event(row: Node) -> Event:
    href = row.attr("href")
    ref = id_from_href(href, EVENT_HREF)
    return Event(
        id=ref.id,
        slug=ref.slug,
        href=absolute_url(href),
        title=required(row, TITLE),
        status=EventStatus.from_text(optional(row, STATUS, "")),
        region=optional(row, REGION) or "",
        icon_url=optional(row, ICON),
        prize=optional(row, PRIZE, ""),
        dates=optional(row, DATES, ""),
    )
