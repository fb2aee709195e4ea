"""Team profile parser for vlr.gg /team/{id} pages.

Provides:
- parse_team: pure function extracting a Team (info, roster, placements)
"""

import logging

from vlr_scraper.common_parser import (
    parse_event_placements,
    parse_socials,
    parse_total_winnings,
)
from vlr_scraper.document import Node, parse_document
from vlr_scraper.exceptions import error_context
from vlr_scraper.extract import (
    PLAYER_HREF,
    FieldSpec,
    country_code_of,
    first_text_of,
    id_from_href,
    image_of,
    node_of,
    optional,
    optional_text,
    required,
    text_of,
)
from vlr_scraper.models import Team, TeamInfo, TeamRosterMember

logger = logging.getLogger(__name__)

HEADER = FieldSpec("team header", ".team-header", node_of)
NAME = FieldSpec("team name", "h1.wf-title", first_text_of)
TAG = FieldSpec("team tag", "h2.wf-title.team-header-tag", text_of)
LOGO = FieldSpec("team logo", ".team-header-logo img", image_of)
COUNTRY = FieldSpec("country", ".team-header-country", text_of)
COUNTRY_FLAG = FieldSpec("country flag", ".team-header-country i.flag", country_code_of)
SOCIAL_LINKS = ".team-header-links a"

# Roster items, their group labels and the section headings, in page order.
ROSTER_WALK = ".team-roster-item, div.wf-module-label, h2.wf-label"
MEMBER_LINK = FieldSpec("member link", "a[href]", node_of)
ALIAS = FieldSpec("member alias", ".team-roster-item-name-alias", text_of)
REAL_NAME = FieldSpec("member real name", ".team-roster-item-name-real", text_of)
FLAG = FieldSpec("member flag", "i.flag", country_code_of)
AVATAR = FieldSpec("member avatar", ".team-roster-item-img img", image_of)
ROLE = FieldSpec("member role", ".team-roster-item-name-role", text_of)
BADGE = FieldSpec("member badge", ".wf-tag:not(.team-roster-item-name-role)", text_of)


def parse_team(html: str, url: str, team_id: int) -> Team:
    """Parse a team profile page.

    Pure function: HTML string in, Team out. No side effects.

    Raises:
        VlrError: ELEMENT_NOT_FOUND if the header or team name is missing, or
            a roster entry has no player link.
    """
    with error_context(url=url):
        doc = parse_document(html)
        with error_context("team info"):
            info = _parse_info(required(doc, HEADER), team_id)
        with error_context("roster"):
            roster = _parse_roster(doc)
        team = Team(
            info=info,
            roster=roster,
            event_placements=parse_event_placements(doc, "team"),
            total_winnings=parse_total_winnings(doc),
        )

    logger.debug(
        "Parsed team %d (%s): %d roster members, %d placements",
        team_id, info.name, len(roster), len(team.event_placements),
    )
    return team


def _parse_info(header: Node, team_id: int) -> TeamInfo:
    return TeamInfo(
        id=team_id,
        name=required(header, NAME),
        tag=optional_text(header, TAG),
        logo_url=optional(header, LOGO),
        country=optional_text(header, COUNTRY),
        country_code=optional(header, COUNTRY_FLAG),
        socials=parse_socials(header, SOCIAL_LINKS),
    )


def _parse_roster(doc: Node) -> tuple[TeamRosterMember, ...]:
    """Roster members in page order, stopping at the first section heading
    that follows the roster."""
    members = []
    group = "player"
    for node in doc.select_all(ROSTER_WALK):
        if node.name == "h2":
            if members:
                break
            continue
        if node.has_class("wf-module-label"):
            label = node.text.lower()
            if label.startswith("staff"):
                group = "staff"
            elif label.startswith("player"):
                group = "player"
            continue
        with error_context(f"member {len(members) + 1}"):
            members.append(_parse_member(node, group))
    return tuple(members)


def _parse_member(item: Node, group: str) -> TeamRosterMember:
    link = required(item, MEMBER_LINK)
    href = link.attr("href").strip()
    ref = id_from_href(href, PLAYER_HREF)
    return TeamRosterMember(
        id=ref.id,
        slug=ref.slug,
        href=href,
        alias=optional(item, ALIAS, ""),
        real_name=optional_text(item, REAL_NAME),
        country_code=optional(item, FLAG),
        avatar_url=optional(item, AVATAR),
        role=optional_text(item, ROLE) or group,
        is_captain=item.select_one("i.fa-star") is not None,
        tag=optional_text(item, BADGE),
    )
