"""Match page parser for vlr.gg match detail pages.

Provides:
- parse_match: overview tab -> Match (header, games, rounds, stat rows, history)
- parse_match_performance: performance tab -> MatchPerformance
- parse_match_economy: economy tab -> MatchEconomy
- roster_name_index: player name -> id lookup built from a parsed Match

Page layout (overview tab)::

    div.col.mod-3
      div.match-header                       event, date, teams, series score
      div.match-streams / div.match-vods     links
      div.vm-stats div.vm-stats-container
        div.vm-stats-game[data-game-id=all]  aggregate tables (match roster)
        div.vm-stats-game[data-game-id=N]    one per map:
          div.vm-stats-game-header           map, pick, duration, team scores
          div.vlr-rounds                     round columns
          table.wf-table-inset.mod-overview  x2, one per team
      div.match-h2h / div.match-histories    head-to-head, recent results

Stat rows are published per game and per side (all / attack / defense),
not per round; each row is resolved against the header roster of its team.
"""

import logging
from pathlib import PurePosixPath
from typing import Mapping, Optional
from urllib.parse import urlparse

from vlr_scraper.document import Node, parse_document
from vlr_scraper.exceptions import VlrError, error_context
from vlr_scraper.extract import (
    EVENT_HREF,
    MATCH_HREF,
    PLAYER_HREF,
    TEAM_HREF,
    FieldSpec,
    absolute_url,
    attr,
    datetime_of,
    first_text_of,
    float_or_none,
    id_from_href,
    image_of,
    int_or_none,
    int_or_zero,
    node_of,
    optional,
    optional_text,
    required,
    required_attr,
    text_of,
)
from vlr_scraper.models import (
    Game,
    GameTeam,
    HeadToHeadMatch,
    KillMatrixEntry,
    Match,
    MatchEconomy,
    MatchEvent,
    MatchHeader,
    MatchHeaderTeam,
    MatchPerformance,
    MatchPlayerRef,
    MatchStream,
    PastMatch,
    PlayerGameStats,
    PlayerPerformance,
    Round,
    StatLine,
    TeamEconomy,
    TeamPastMatches,
)

logger = logging.getLogger(__name__)

COLUMN = FieldSpec("match page column", "div.col.mod-3", node_of)
HEADER = FieldSpec("match header", "div.match-header", node_of)

# -- header ------------------------------------------------------------------

EVENT_LINK = FieldSpec(
    "event link", "div.match-header-super a.match-header-event", required_attr("href")
)
EVENT_TITLE = FieldSpec(
    "event title", "a.match-header-event div div:first-child", first_text_of
)
EVENT_SERIES = FieldSpec("event series", "a.match-header-event div.match-header-event-series", text_of)
EVENT_ICON = FieldSpec("event icon", "a.match-header-event img", image_of)
MATCH_DATE = FieldSpec(
    "match date",
    "div.match-header-date div.moment-tz-convert[data-utc-ts]",
    required_attr("data-utc-ts"),
)
PATCH = FieldSpec("patch", "div.match-header-date > div:nth-child(3)", text_of)
NOTE = FieldSpec("match note", "div.match-header-note", text_of)
HEADER_TEAMS = "div.match-header-vs a.match-header-link"
HEADER_NOTES = "div.match-header-vs-note"
HEADER_SCORES = (
    "div.match-header-vs-score div.match-header-vs-score "
    "span:not(.match-header-vs-score-colon)"
)
TEAM_NAME = FieldSpec("team name", "div.wf-title-med", first_text_of)
TEAM_ICON = FieldSpec("team logo", "img", image_of)

# -- games -------------------------------------------------------------------

GAMES = "div.vm-stats div.vm-stats-container div.vm-stats-game:not([data-game-id='all'])"
ALL_GAME = "div.vm-stats div.vm-stats-game[data-game-id='all']"
GAME_HEADER = "div.vm-stats-game-header"
MAP_NAME = FieldSpec("map name", "div.vm-stats-game-header div.map div:first-child span", first_text_of)
MAP_PICK = FieldSpec("map pick", "div.vm-stats-game-header div.map span.picked", node_of)
DURATION = FieldSpec("map duration", "div.vm-stats-game-header div.map-duration", text_of)
GAME_TEAMS = "div.vm-stats-game-header div.team"
GAME_TEAM_NAME = FieldSpec("team name", "div.team-name", first_text_of)
GAME_SCORE = FieldSpec("team score", "div.score", node_of)
SCORE_T = FieldSpec("attack rounds", "span.mod-t", first_text_of)
SCORE_CT = FieldSpec("defense rounds", "span.mod-ct", first_text_of)
STAT_TABLES = "table.wf-table-inset.mod-overview"
STAT_ROWS = "tbody tr:has(td.mod-player)"
ROUND_COLUMNS = "div.vlr-rounds div.vlr-rounds-row-col:not(:first-child):not(.mod-spacing)"

# -- stat rows ---------------------------------------------------------------

PLAYER_CELL = FieldSpec("player cell", "td.mod-player", node_of)
PLAYER_LINK = FieldSpec("player link", "a", attr("href"))
PLAYER_NAME = FieldSpec("player name", "a div:first-child", first_text_of)
PLAYER_NATION = FieldSpec("player nation", "i.flag", attr("title"))

# Column order of td.mod-stat cells.
STAT_COLUMNS = (
    ("rating", float_or_none),
    ("acs", int_or_none),
    ("kills", int_or_none),
    ("deaths", int_or_none),
    ("assists", int_or_none),
    ("kd_diff", int_or_none),
    ("kast", float_or_none),
    ("adr", float_or_none),
    ("hs_pct", float_or_none),
    ("first_kills", int_or_none),
    ("first_deaths", int_or_none),
    ("fk_diff", int_or_none),
)
SIDES = (("both", "mod-both"), ("attack", "mod-t"), ("defense", "mod-ct"))

# Round outcome icon file stem -> win condition.
WIN_CONDITIONS = {
    "elim": "elimination",
    "boom": "spike_exploded",
    "defuse": "defuse",
    "time": "time",
}


# ---------------------------------------------------------------------------
# Overview tab
# ---------------------------------------------------------------------------


def parse_match(html: str, url: str, match_id: int) -> Match:
    """Parse a match overview page into a Match.

    Pure function: HTML string in, Match out. No side effects.

    Args:
        html: Raw HTML of a ``/{match_id}`` page.
        url: URL the page was fetched from (for error context).
        match_id: vlr.gg match id (for inclusion in result).

    Returns:
        Match with header, per-map games, streams and match history.

    Raises:
        VlrError: ELEMENT_NOT_FOUND if a required element (header, team
            name, date, map name, roster slot) is missing; INT_PARSE or
            DATE_PARSE for malformed values.
    """
    with error_context(url=url):
        doc = parse_document(html)
        column = required(doc, COLUMN)

        header_node = required(column, HEADER)
        with error_context("match header"):
            header = _parse_header(header_node, column)

        games = []
        for index, game in enumerate(column.select_all(GAMES), start=1):
            if game.select_one(GAME_HEADER) is None:
                logger.debug("Skipping game tab %d without a header on %s", index, url)
                continue
            with error_context(f"game {index}"):
                games.append(_parse_game(game, header))

        with error_context("head-to-head"):
            head_to_head = _parse_head_to_head(column)
        with error_context("past matches"):
            past_matches = _parse_past_matches(column, header)

        match = Match(
            id=match_id,
            header=header,
            streams=_parse_streams(column),
            vods=_parse_vods(column),
            games=tuple(games),
            head_to_head=head_to_head,
            past_matches=past_matches,
        )

    logger.debug(
        "Parsed match %d: %s vs %s, %d games",
        match_id, header.teams[0].name, header.teams[1].name, len(games),
    )
    return match


def _parse_header(header: Node, column: Node) -> MatchHeader:
    event_href = required(header, EVENT_LINK)
    event_ref = id_from_href(event_href, EVENT_HREF)
    event = MatchEvent(
        id=event_ref.id,
        slug=event_ref.slug,
        title=optional(header, EVENT_TITLE, ""),
        series=optional(header, EVENT_SERIES, ""),
        icon=optional(header, EVENT_ICON),
    )

    with error_context(MATCH_DATE.description):
        date = datetime_of(required(header, MATCH_DATE))

    patch = optional(header, PATCH, "")
    if patch.startswith("Patch "):
        patch = patch[len("Patch "):]

    notes = [n.first_text for n in header.select_all(HEADER_NOTES)]
    scores = [int_or_none(s.first_text) for s in header.select_all(HEADER_SCORES)]
    if len(scores) != 2:
        scores = [None, None]

    links = header.select_all(HEADER_TEAMS)
    if len(links) != 2:
        raise VlrError.not_found("team links", f"expected 2, found {len(links)}")

    rosters = _parse_rosters(column)
    teams = []
    for index, (link, score) in enumerate(zip(links, scores)):
        with error_context(f"team {index + 1}"):
            href = link.attr("href")
            ref = id_from_href(href, TEAM_HREF)
            teams.append(
                MatchHeaderTeam(
                    id=ref.id,
                    slug=ref.slug,
                    href=absolute_url(href),
                    name=required(link, TEAM_NAME),
                    score=score,
                    icon=optional(link, TEAM_ICON),
                    roster=rosters[index],
                )
            )

    return MatchHeader(
        event=event,
        date=date,
        patch=patch,
        format=notes[1] if len(notes) > 1 else "",
        status=notes[0] if notes else "",
        note=optional(header, NOTE, ""),
        teams=tuple(teams),
    )


def _parse_rosters(column: Node) -> tuple[tuple[MatchPlayerRef, ...], ...]:
    """Both teams' rosters from the all-maps tab, else from the first map."""
    source = column.select_one(ALL_GAME) or column.select_one(GAMES)
    if source is None:
        return ((), ())
    tables = source.select_all(STAT_TABLES)
    rosters = []
    for index in range(2):
        if index >= len(tables):
            rosters.append(())
            continue
        with error_context(f"roster {index + 1}"):
            rosters.append(
                tuple(_player_ref(row) for row in tables[index].select_all(STAT_ROWS))
            )
    return tuple(rosters)


def _player_ref(row: Node) -> MatchPlayerRef:
    cell = required(row, PLAYER_CELL)
    ref = id_from_href(required(cell, PLAYER_LINK), PLAYER_HREF)
    return MatchPlayerRef(
        id=ref.id,
        slug=ref.slug,
        name=required(cell, PLAYER_NAME),
        nation=optional(cell, PLAYER_NATION) or "",
    )


def _parse_streams(column: Node) -> tuple[MatchStream, ...]:
    streams = []
    for btn in column.select_all(
        "div.match-streams div.match-streams-container div.match-streams-btn"
    ):
        name_node = btn.select_one("div.match-streams-btn-embed span")
        link_node = btn.select_one("a.match-streams-btn-external")
        streams.append(
            MatchStream(
                name=name_node.first_text if name_node is not None else btn.first_text,
                link=(link_node.attr("href") or "") if link_node is not None else "",
            )
        )
    return tuple(streams)


def _parse_vods(column: Node) -> tuple[MatchStream, ...]:
    return tuple(
        MatchStream(name=a.first_text, link=a.attr("href") or "")
        for a in column.select_all("div.match-vods div.match-streams-container a")
    )


# ---------------------------------------------------------------------------
# Games, rounds, stat rows
# ---------------------------------------------------------------------------


def _parse_game(game: Node, header: MatchHeader) -> Game:
    map_name = required(game, MAP_NAME)

    picked_by = None
    pick = optional(game, MAP_PICK)
    if pick is not None:
        if pick.has_class("mod-1"):
            picked_by = header.teams[0].id
        elif pick.has_class("mod-2"):
            picked_by = header.teams[1].id

    blocks = game.select_all(GAME_TEAMS)
    if len(blocks) != 2:
        raise VlrError.not_found("game teams", f"expected 2, found {len(blocks)}")
    tables = game.select_all(STAT_TABLES)

    teams = []
    for index, block in enumerate(blocks):
        header_team = header.teams[index]
        with error_context(f"team {index + 1}"):
            rows = tables[index].select_all(STAT_ROWS) if index < len(tables) else []
            players = tuple(
                _parse_stat_row(row, position, header_team.roster)
                for position, row in enumerate(rows)
            )
            teams.append(_parse_game_team(block, header_team.id, players))

    with error_context("rounds"):
        rounds = _parse_rounds(game, header)

    scores = [t.score for t in teams]
    if rounds and None not in scores and len(rounds) != sum(scores):
        logger.warning(
            "Map %s: %d rounds listed but scores sum to %d",
            map_name, len(rounds), sum(scores),
        )

    return Game(
        map=map_name,
        picked_by=picked_by,
        duration=optional_text(game, DURATION),
        teams=tuple(teams),
        rounds=rounds,
    )


def _parse_game_team(block: Node, team_id: int, players: tuple) -> GameTeam:
    score = optional(block, GAME_SCORE)
    return GameTeam(
        team_id=team_id,
        name=optional(block, GAME_TEAM_NAME, ""),
        score=int_or_none(score.first_text) if score is not None else None,
        score_t=int_or_none(optional(block, SCORE_T, "")),
        score_ct=int_or_none(optional(block, SCORE_CT, "")),
        is_winner=score is not None and score.has_class("mod-win"),
        players=players,
    )


def _resolve_player(
    row: Node, position: int, roster: tuple[MatchPlayerRef, ...]
) -> MatchPlayerRef:
    """Roster entry for a stat row: by its own player link, else by position."""
    cell = row.select_one(PLAYER_CELL.selector)
    href = optional(cell, PLAYER_LINK) if cell is not None else None
    if href and PLAYER_HREF.match(href):
        player_id = id_from_href(href, PLAYER_HREF).id
        for ref in roster:
            if ref.id == player_id:
                return ref
    if position < len(roster):
        return roster[position]
    raise VlrError.not_found(
        "roster entry", f"row {position + 1} has no match among {len(roster)} roster players"
    )


def _parse_stat_row(
    row: Node, position: int, roster: tuple[MatchPlayerRef, ...]
) -> PlayerGameStats:
    with error_context(f"player row {position + 1}"):
        player = _resolve_player(row, position, roster)
        agents = tuple(
            img.attr("title")
            for img in row.select_all("td.mod-agents img")
            if img.attr("title")
        )
        cells = row.select_all("td.mod-stat")
        sides = {}
        for side, css in SIDES:
            with error_context(side):
                sides[side] = _stat_line(cells, css)
    return PlayerGameStats(
        player=player,
        agent=agents[0] if agents else "",
        agents=agents,
        **sides,
    )


def _stat_line(cells: list[Node], side_class: str) -> StatLine:
    values = {}
    for (name, parse), cell in zip(STAT_COLUMNS, cells):
        span = cell.select_one(f"span.side.{side_class}")
        if span is None:
            continue
        with error_context(name):
            values[name] = parse(span.text)
    return StatLine(**values)


def _parse_rounds(game: Node, header: MatchHeader) -> tuple[Round, ...]:
    rounds = []
    for column in game.select_all(ROUND_COLUMNS):
        squares = column.select_all("div.rnd-sq")
        winner = next(
            ((i, sq) for i, sq in enumerate(squares) if sq.has_class("mod-win")), None
        )
        # Columns for rounds that were not played carry no winner.
        if winner is None or winner[0] > 1:
            continue
        index, square = winner
        number_node = column.select_one("div.rnd-num")
        number = int_or_none(number_node.text) if number_node is not None else None
        rounds.append(
            Round(
                number=number or len(rounds) + 1,
                winning_team_id=header.teams[index].id,
                winning_side="t" if square.has_class("mod-t") else "ct",
                win_condition=_win_condition(square),
            )
        )
    return tuple(rounds)


def _win_condition(square: Node) -> str:
    img = square.select_one("img")
    src = img.attr("src") if img is not None else None
    if not src:
        return "unknown"
    stem = PurePosixPath(urlparse(src).path).stem
    return WIN_CONDITIONS.get(stem, "unknown")


# ---------------------------------------------------------------------------
# Head-to-head and recent results
# ---------------------------------------------------------------------------


def _scores(item: Node) -> Optional[tuple[Node, int, int]]:
    rf = item.select_one("span.rf")
    ra = item.select_one("span.ra")
    if rf is None or ra is None:
        return None
    score_for, score_against = int_or_none(rf.text), int_or_none(ra.text)
    if score_for is None or score_against is None:
        return None
    return rf, score_for, score_against


def _parse_head_to_head(column: Node) -> tuple[HeadToHeadMatch, ...]:
    matches = []
    for item in column.select_all("div.match-h2h a.wf-module-item.mod-h2h"):
        href = item.attr("href") or ""
        scores = _scores(item)
        if not MATCH_HREF.match(href) or scores is None:
            continue
        ref = id_from_href(href, MATCH_HREF)
        rf, team1_score, team2_score = scores
        icon = item.select_one("div.match-h2h-matches-event img")
        matches.append(
            HeadToHeadMatch(
                match_id=ref.id,
                match_slug=ref.slug,
                event_name=_text(item, "div.match-h2h-matches-event-name"),
                event_series=_text(item, "div.match-h2h-matches-event-series"),
                event_icon=image_of(icon) if icon is not None else None,
                team1_score=team1_score,
                team2_score=team2_score,
                winner_index=0 if rf.has_class("mod-win") else 1,
                date=_text(item, "div.match-h2h-matches-date"),
            )
        )
    return tuple(matches)


def _parse_past_matches(
    column: Node, header: MatchHeader
) -> tuple[TeamPastMatches, ...]:
    result = []
    for index, card in enumerate(column.select_all("div.match-histories")[:2]):
        matches = []
        for item in card.select_all("a.match-histories-item"):
            href = item.attr("href") or ""
            scores = _scores(item)
            if not MATCH_HREF.match(href) or scores is None:
                continue
            ref = id_from_href(href, MATCH_HREF)
            _, score_for, score_against = scores
            logo = item.select_one("img.match-histories-item-opponent-logo")
            matches.append(
                PastMatch(
                    match_id=ref.id,
                    match_slug=ref.slug,
                    score_for=score_for,
                    score_against=score_against,
                    is_win=item.has_class("mod-win"),
                    opponent_name=_text(item, "span.match-histories-item-opponent-name"),
                    opponent_logo=image_of(logo) if logo is not None else None,
                    date=_text(item, "div.match-histories-item-date"),
                )
            )
        result.append(
            TeamPastMatches(team_id=header.teams[index].id, matches=tuple(matches))
        )
    return tuple(result)


def _text(node: Node, selector: str) -> str:
    found = node.select_one(selector)
    return found.text if found is not None else ""


# ---------------------------------------------------------------------------
# Performance tab
# ---------------------------------------------------------------------------

KILL_MATRIX = FieldSpec("kill matrix table", "table.mod-normal", node_of)
ADV_STATS = FieldSpec("advanced stats table", "table.mod-adv-stats", node_of)
ALL_SECTION = FieldSpec("all-maps section", ALL_GAME, node_of)
PERF_NAME = "div.team > div"

# table.mod-adv-stats columns after [player, agent].
ADV_COLUMNS = (
    "multi_kills_2k",
    "multi_kills_3k",
    "multi_kills_4k",
    "multi_kills_5k",
    "clutch_1v1",
    "clutch_1v2",
    "clutch_1v3",
    "clutch_1v4",
    "clutch_1v5",
    "econ_rating",
    "plants",
    "defuses",
)


def roster_name_index(match: Match) -> dict[str, int]:
    """Player name -> id for every player on either header roster."""
    return {
        player.name: player.id
        for team in match.header.teams
        for player in team.roster
    }


def parse_match_performance(
    html: str, url: str, player_ids: Optional[Mapping[str, int]] = None
) -> MatchPerformance:
    """Parse the performance tab (kill matrix and multi-kill/clutch table).

    The tab names players but does not link them, so ids come from
    ``player_ids`` (see ``roster_name_index``) and stay ``None`` otherwise.
    """
    player_ids = player_ids or {}
    with error_context("performance tab", url=url):
        doc = parse_document(html)
        section = required(doc, ALL_SECTION)
        matrix_table = required(section, KILL_MATRIX)
        adv_table = required(section, ADV_STATS)
        with error_context(KILL_MATRIX.description):
            kill_matrix = _parse_kill_matrix(matrix_table, player_ids)
        with error_context(ADV_STATS.description):
            performances = _parse_adv_stats(adv_table, player_ids)

    logger.debug(
        "Parsed performance tab: %d matrix cells, %d players",
        len(kill_matrix), len(performances),
    )
    return MatchPerformance(kill_matrix=kill_matrix, player_performances=performances)


def _cell_name(cell: Node) -> str:
    found = cell.select_one(PERF_NAME)
    return found.first_text if found is not None else ""


def _parse_kill_matrix(
    table: Node, player_ids: Mapping[str, int]
) -> tuple[KillMatrixEntry, ...]:
    rows = table.select_all("tr")
    if not rows:
        return ()
    # First row: empty corner cell, then one column per victim.
    victims = [_cell_name(cell) for cell in rows[0].select_all("td")[1:]]

    entries = []
    for row in rows[1:]:
        cells = row.select_all("td")
        if not cells:
            continue
        killer = _cell_name(cells[0])
        for victim, cell in zip(victims, cells[1:]):
            squares = [sq.text for sq in cell.select_all("div.stats-sq")]
            entries.append(
                KillMatrixEntry(
                    killer_id=player_ids.get(killer),
                    killer_name=killer,
                    victim_id=player_ids.get(victim),
                    victim_name=victim,
                    kills=int_or_zero(squares[0]) if squares else 0,
                    deaths=int_or_zero(squares[1]) if len(squares) > 1 else 0,
                )
            )
    return tuple(entries)


def _parse_adv_stats(
    table: Node, player_ids: Mapping[str, int]
) -> tuple[PlayerPerformance, ...]:
    performances = []
    for row in table.select_all("tr"):
        cells = row.select_all("td")
        if len(cells) < 2 + len(ADV_COLUMNS):
            continue
        name = _cell_name(cells[0])
        if not name:
            continue
        with error_context(f"player {name}"):
            counts = {
                column: int_or_zero(cell.first_text)
                for column, cell in zip(ADV_COLUMNS, cells[2:])
            }
        performances.append(
            PlayerPerformance(player_id=player_ids.get(name), player_name=name, **counts)
        )
    return tuple(performances)


# ---------------------------------------------------------------------------
# Economy tab
# ---------------------------------------------------------------------------

ECON_TABLE = FieldSpec("economy table", "table.mod-econ", node_of)
ECON_COLUMNS = ("eco", "semi_eco", "semi_buy", "full_buy")


def parse_match_economy(html: str, url: str) -> MatchEconomy:
    """Parse the economy tab: per-team pistol wins and buy-type rounds."""
    with error_context("economy tab", url=url):
        doc = parse_document(html)
        section = required(doc, ALL_SECTION)
        table = required(section, ECON_TABLE)
        teams = []
        for row in table.select_all("tr"):
            cells = row.select_all("td")
            if len(cells) < 2 + len(ECON_COLUMNS):
                continue
            name = cells[0].text
            if not name:
                continue
            with error_context(f"economy row {name}"):
                teams.append(_parse_econ_row(name, cells))

    logger.debug("Parsed economy tab for %d teams", len(teams))
    return MatchEconomy(teams=tuple(teams))


def _square_text(cell: Node) -> str:
    square = cell.select_one("div.stats-sq")
    return square.text if square is not None else cell.text


def _rounds_won(text: str) -> tuple[int, int]:
    """``"9 (3)"`` -> (9, 3): rounds of that buy type and rounds won."""
    total, sep, won = text.partition("(")
    if not sep:
        return int_or_zero(total), 0
    return int_or_zero(total), int_or_zero(won.rstrip(")"))


def _parse_econ_row(name: str, cells: list[Node]) -> TeamEconomy:
    values = {"pistol_won": int_or_zero(_square_text(cells[1]))}
    for column, cell in zip(ECON_COLUMNS, cells[2:]):
        rounds, won = _rounds_won(_square_text(cell))
        values[f"{column}_rounds"] = rounds
        values[f"{column}_won"] = won
    return TeamEconomy(team_name=name, **values)
