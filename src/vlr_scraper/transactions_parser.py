"""Roster transaction parser for vlr.gg /team/transactions/{id} pages.

Provides:
- parse_team_transactions: pure function extracting TeamTransaction rows

Row cells: date, action, player (flag, alias, real name), position, ...,
reference link in the last cell.
"""

import logging
from typing import Optional

from vlr_scraper.document import Node, parse_document
from vlr_scraper.exceptions import error_context
from vlr_scraper.extract import (
    PLAYER_HREF,
    FieldSpec,
    country_code_of,
    date_of,
    id_from_href,
    node_of,
    optional,
    optional_text,
    required,
    text_of,
)
from vlr_scraper.models import TeamTransaction

logger = logging.getLogger(__name__)

ROWS = "tr.txn-item"
ACTION = FieldSpec("transaction action", "td.txn-item-action", text_of)
FLAG = FieldSpec("player flag", "i.flag", country_code_of)
PLAYER_LINK = FieldSpec("player link", "a[href^='/player/']", node_of)
REAL_NAME = FieldSpec("player real name", "div.ge-text-light", text_of)


def parse_team_transactions(html: str, url: str) -> list[TeamTransaction]:
    """Parse a team's roster transaction log, newest first as published."""
    with error_context("team transactions", url=url):
        doc = parse_document(html)
        transactions = []
        for index, row in enumerate(doc.select_all(ROWS), start=1):
            with error_context(f"transaction {index}"):
                transactions.append(_parse_row(row))

    logger.debug("Parsed %d transactions from %s", len(transactions), url)
    return transactions


def _cell_date(cell: Optional[Node]):
    text = cell.text if cell is not None else ""
    # Old entries carry "Unknown" instead of a date.
    if not text or text.lower() == "unknown":
        return None
    with error_context("transaction date"):
        return date_of(text)


def _parse_row(row: Node) -> TeamTransaction:
    cells = row.select_all("td")
    link = required(row, PLAYER_LINK)
    ref = id_from_href(link.attr("href"), PLAYER_HREF)

    reference_url = None
    if cells:
        ref_link = cells[-1].select_one("a[href]")
        if ref_link is not None:
            reference_url = (ref_link.attr("href") or "").strip() or None

    return TeamTransaction(
        date=_cell_date(cells[0] if cells else None),
        action=optional(row, ACTION, ""),
        player_id=ref.id,
        player_slug=ref.slug,
        player_alias=link.first_text,
        player_real_name=optional_text(row, REAL_NAME),
        player_country_code=optional(row, FLAG),
        position=cells[4].text if len(cells) > 4 else "",
        reference_url=reference_url,
    )
