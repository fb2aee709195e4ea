"""Player profile parser for vlr.gg /player/{id} pages.

Provides:
- parse_player: pure function extracting a Player from profile HTML

The profile is a header block followed by labelled cards
(``h2.wf-label.mod-large`` then ``div.wf-card``). Every card is optional:
a missing section yields an empty tuple rather than an error.
"""

import logging
import re
from typing import Optional

from vlr_scraper.common_parser import (
    parse_event_placements,
    parse_socials,
    parse_total_winnings,
)
from vlr_scraper.document import Node, parse_document
from vlr_scraper.exceptions import error_context
from vlr_scraper.extract import (
    TEAM_HREF,
    FieldSpec,
    absolute_url,
    attr,
    country_code_of,
    date_of,
    first_text_of,
    float_or_none,
    id_from_href,
    image_of,
    int_or_none,
    node_of,
    optional,
    optional_text,
    required,
    text_of,
)
from vlr_scraper.models import AgentStats, NewsItem, Player, PlayerInfo, PlayerTeam

logger = logging.getLogger(__name__)

HEADER = FieldSpec("player header", "div.player-header", node_of)
ALIAS = FieldSpec("player name", "h1.wf-title", first_text_of)
REAL_NAME = FieldSpec("real name", "h2.player-real-name", text_of)
AVATAR = FieldSpec("avatar", "div.wf-avatar img", image_of)
COUNTRY = FieldSpec("country", "div.ge-text-light:has(i.flag)", text_of)
COUNTRY_FLAG = FieldSpec("country flag", "i.flag", country_code_of)
SOCIAL_LINKS = "div.player-header a[href]:not([href^='/'])"

SECTION_LABELS = "h2.wf-label.mod-large"

TEAM_ITEMS = "a.wf-module-item[href^='/team/']"
TEAM_NAME = FieldSpec("team name", "div[style*='font-weight: 500']", first_text_of)
TEAM_LOGO = FieldSpec("team logo", "img", image_of)

AGENT_ROWS = "table.wf-table tbody tr"
AGENT_NAME = FieldSpec("agent name", "td img[title]", attr("title"))

NEWS_ITEMS = "a.wf-module-item"
NEWS_DATE = FieldSpec("news date", "div.ge-text-light", text_of)
NEWS_TITLE = FieldSpec("news title", "div[style*='font-weight']", text_of)

# "(12) 31%": times picked, then share of games.
_USAGE = re.compile(r"\((?P<count>[\d,]+)\)\s*(?P<pct>[\d.]+)?")

# td order after the agent icon and usage cells.
AGENT_COLUMNS = (
    ("rounds", int_or_none),
    ("rating", float_or_none),
    ("acs", float_or_none),
    ("kd", float_or_none),
    ("adr", float_or_none),
    ("kast", float_or_none),
    ("kpr", float_or_none),
    ("apr", float_or_none),
    ("fkpr", float_or_none),
    ("fdpr", float_or_none),
    ("kills", int_or_none),
    ("deaths", int_or_none),
    ("assists", int_or_none),
    ("first_kills", int_or_none),
    ("first_deaths", int_or_none),
)


def parse_player(html: str, url: str, player_id: int) -> Player:
    """Parse a player profile page.

    Pure function: HTML string in, Player out. No side effects.

    Raises:
        VlrError: ELEMENT_NOT_FOUND if the header or player name is missing.
    """
    with error_context(url=url):
        doc = parse_document(html)

        with error_context("current teams"):
            current_teams = _parse_teams(_section(doc, "Current Teams"), is_current=True)
        with error_context("past teams"):
            past_teams = _parse_teams(_section(doc, "Past Teams"), is_current=False)
        with error_context("player info"):
            info = _parse_info(
                required(doc, HEADER),
                player_id,
                current_teams[0] if current_teams else None,
            )
        with error_context("agent stats"):
            agent_stats = _parse_agent_stats(doc)
        with error_context("news"):
            news = _parse_news(_section(doc, "Latest News"))

        placements_card = _section(doc, "Event Placements")
        event_placements = (
            parse_event_placements(placements_card, "player")
            if placements_card is not None
            else ()
        )

        player = Player(
            info=info,
            current_teams=current_teams,
            past_teams=past_teams,
            agent_stats=agent_stats,
            news=news,
            event_placements=event_placements,
            total_winnings=parse_total_winnings(doc),
        )

    logger.debug(
        "Parsed player %d (%s): %d teams, %d agents",
        player_id, info.name, len(current_teams) + len(past_teams), len(agent_stats),
    )
    return player


def _section(doc: Node, label: str) -> Optional[Node]:
    """The card following the section label that starts with ``label``."""
    for heading in doc.select_all(SECTION_LABELS):
        if heading.text.lower().startswith(label.lower()):
            card = heading.next_element_sibling
            if card is not None and card.has_class("wf-card"):
                return card
            return None
    return None


def _parse_info(
    header: Node, player_id: int, current_team: Optional[PlayerTeam]
) -> PlayerInfo:
    country_node = header.select_one(COUNTRY.selector)
    return PlayerInfo(
        id=player_id,
        name=required(header, ALIAS),
        real_name=optional_text(header, REAL_NAME),
        country=(country_node.text or None) if country_node is not None else None,
        country_code=optional(country_node, COUNTRY_FLAG) if country_node is not None else None,
        avatar_url=optional(header, AVATAR),
        socials=parse_socials(header, SOCIAL_LINKS),
        current_team=current_team,
    )


def _parse_teams(card: Optional[Node], is_current: bool) -> tuple[PlayerTeam, ...]:
    if card is None:
        return ()
    teams = []
    for index, item in enumerate(card.select_all(TEAM_ITEMS), start=1):
        with error_context(f"team {index}"):
            href = item.attr("href")
            ref = id_from_href(href, TEAM_HREF)
            info = " ".join(n.text for n in item.select_all("div.ge-text-light") if n.text)
            teams.append(
                PlayerTeam(
                    id=ref.id,
                    slug=ref.slug,
                    name=required(item, TEAM_NAME),
                    logo_url=optional(item, TEAM_LOGO),
                    info=info,
                    is_current=is_current,
                )
            )
    return tuple(teams)


def _parse_usage(text: str) -> tuple[Optional[int], Optional[float]]:
    m = _USAGE.search(text)
    if not m:
        return None, None
    pct = m.group("pct")
    return int_or_none(m.group("count")), float(pct) if pct else None


def _parse_agent_stats(doc: Node) -> tuple[AgentStats, ...]:
    stats = []
    for index, row in enumerate(doc.select_all(AGENT_ROWS), start=1):
        cells = row.select_all("td")
        if len(cells) < 2:
            continue
        with error_context(f"agent row {index}"):
            agent = required(row, AGENT_NAME)
            usage_count, usage_pct = _parse_usage(cells[1].text)
            values = {}
            for (name, parse), cell in zip(AGENT_COLUMNS, cells[2:]):
                with error_context(name):
                    values[name] = parse(cell.text)
        stats.append(
            AgentStats(agent=agent, usage_count=usage_count, usage_pct=usage_pct, **values)
        )
    return tuple(stats)


def _parse_news(card: Optional[Node]) -> tuple[NewsItem, ...]:
    if card is None:
        return ()
    news = []
    for index, item in enumerate(card.select_all(NEWS_ITEMS), start=1):
        href = item.attr("href")
        if not href:
            continue
        with error_context(f"news item {index}"):
            date_text = optional_text(item, NEWS_DATE)
            news.append(
                NewsItem(
                    href=absolute_url(href),
                    title=optional(item, NEWS_TITLE) or item.text,
                    date=date_of(date_text) if date_text else None,
                )
            )
    return tuple(news)
