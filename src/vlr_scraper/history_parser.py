"""Match history parsers for player and team match pages.

Provides:
- parse_player_matchlist: /player/matches/{id}/?page=N
- parse_team_matchlist: /team/matches/{id}/?page=N

Both pages list the same ``a.m-item`` rows (see ``common_parser``). The
subject of the page is always the first team of a row: on a player page
that is the team the player played for, on a team page the second team
is the opponent. A page number below 1 raises ``ValueError`` before the
HTML is touched.
"""

import logging

from vlr_scraper.common_parser import paginate, parse_match_items, parse_page_count
from vlr_scraper.document import parse_document
from vlr_scraper.exceptions import error_context
from vlr_scraper.models import PaginatedResult, PlayerMatchListItem, TeamMatchListItem
from vlr_scraper.urls import validate_page

logger = logging.getLogger(__name__)


def parse_player_matchlist(
    html: str, url: str, page: int = 1
) -> PaginatedResult[PlayerMatchListItem]:
    """Parse one page of a player's match history."""
    validate_page(page)
    with error_context("player match history", url=url):
        doc = parse_document(html)
        rows = parse_match_items(doc)
        total_pages = parse_page_count(doc)
        items = [
            PlayerMatchListItem(match=row, team=row.teams[0] if row.teams else None)
            for row in rows
        ]
        result = paginate(items, page, total_pages)

    logger.debug("Parsed %d player matches (page %d/%d)", len(items), page, total_pages)
    return result


def parse_team_matchlist(
    html: str, url: str, page: int = 1
) -> PaginatedResult[TeamMatchListItem]:
    """Parse one page of a team's match history."""
    validate_page(page)
    with error_context("team match history", url=url):
        doc = parse_document(html)
        rows = parse_match_items(doc)
        total_pages = parse_page_count(doc)
        items = [
            TeamMatchListItem(match=row, opponent=row.teams[1] if len(row.teams) > 1 else None)
            for row in rows
        ]
        result = paginate(items, page, total_pages)

    logger.debug("Parsed %d team matches (page %d/%d)", len(items), page, total_pages)
    return result
