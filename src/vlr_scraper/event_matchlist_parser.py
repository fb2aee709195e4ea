"""Event match list parser for vlr.gg /event/matches pages.

Provides:
- parse_event_matchlist: pure function extracting every match of an event

Rows are grouped under date labels (``div.wf-label.mod-large``); each label
sets the date for the match cards that follow it until the next label.
"""

import logging
from datetime import date, datetime
from typing import Optional

from vlr_scraper.document import Node, parse_document
from vlr_scraper.exceptions import VlrError, error_context
from vlr_scraper.extract import (
    MATCH_HREF,
    FieldSpec,
    absolute_url,
    date_of,
    first_text_of,
    id_from_href,
    int_or_none,
    last_text_of,
    optional,
    optional_text,
    time_of,
)
from vlr_scraper.models import EventMatchListItem, EventMatchListTeam

logger = logging.getLogger(__name__)

ROWS = "div#wrapper :is(div.wf-label.mod-large, div.wf-card a.match-item)"

TIME = FieldSpec("match time", "div.match-item-time", first_text_of)
STATUS = FieldSpec("match status", "div.ml-status", first_text_of)
EVENT_TEXT = FieldSpec("event text", "div.match-item-event.text-of", last_text_of)
EVENT_SERIES = FieldSpec(
    "event series", "div.match-item-event div.match-item-event-series", first_text_of
)
TEAM_NAME = FieldSpec("team name", "div.match-item-vs-team-name div.text-of", first_text_of)
TEAM_SCORE = FieldSpec("team score", "div.match-item-vs-team-score", first_text_of)


def parse_event_matchlist(html: str, url: str) -> list[EventMatchListItem]:
    """Parse all matches listed for an event.

    Placeholder rows without a numeric match link are skipped and a match
    that appears twice is kept once, in first-seen order.

    Raises:
        VlrError: If a date label is unparseable or a row's team block is malformed.
    """
    with error_context("event match list", url=url):
        doc = parse_document(html)
        matches: list[EventMatchListItem] = []
        seen: set[int] = set()
        current_date: Optional[date] = None
        for row in doc.select_all(ROWS):
            if row.has_class("wf-label"):
                current_date = _label_date(row)
                continue

            href = row.attr("href") or ""
            if not MATCH_HREF.match(href):
                logger.warning("Skipping placeholder match row (href=%r) on %s", href, url)
                continue

            ref = id_from_href(href, MATCH_HREF)
            if ref.id in seen:
                continue
            seen.add(ref.id)
            with error_context(f"match row {ref.id}"):
                matches.append(_parse_row(row, current_date))

    logger.debug("Parsed %d matches from %s", len(matches), url)
    return matches


def _label_date(label: Node) -> Optional[date]:
    text = label.first_text
    if not text:
        return None
    with error_context("date label"):
        return date_of(text)


def _parse_row(row: Node, day: Optional[date]) -> EventMatchListItem:
    href = row.attr("href")
    ref = id_from_href(href, MATCH_HREF)

    date_time: Optional[datetime] = None
    time_text = optional_text(row, TIME)
    # "TBD" or an empty cell means the time is not scheduled yet.
    if day is not None and time_text and time_text[0].isdigit():
        with error_context(TIME.description):
            date_time = datetime.combine(day, time_of(time_text))

    teams = []
    for index, team in enumerate(
        row.select_all("div.match-item-vs div.match-item-vs-team"), start=1
    ):
        with error_context(f"team {index}"):
            teams.append(
                EventMatchListTeam(
                    name=optional(team, TEAM_NAME, ""),
                    score=int_or_none(optional(team, TEAM_SCORE, "")),
                    is_winner=team.has_class("mod-winner"),
                )
            )
    if len(teams) != 2:
        raise VlrError.not_found("team summaries", f"expected 2 teams, found {len(teams)}")

    tags = tuple(
        tag.last_text for tag in row.select_all("div.match-item-vod div.wf-tag") if tag.last_text
    )

    return EventMatchListItem(
        id=ref.id,
        slug=ref.slug,
        href=absolute_url(href),
        date_time=date_time,
        status=optional(row, STATUS, ""),
        teams=tuple(teams),
        tags=tags,
        event_text=optional(row, EVENT_TEXT, ""),
        event_series_text=optional(row, EVENT_SERIES, ""),
    )
