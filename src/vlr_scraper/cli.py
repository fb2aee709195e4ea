"""CLI entry point for the vlr.gg scraper.

Provides ``main()`` as the sync entry point for the ``vlr-scraper``
console script, and ``async_main(args)`` which sets up logging, opens a
client, runs one operation and prints the result as JSON on stdout.

Usage::

    vlr-scraper events --type completed --region europe --page 2
    vlr-scraper event-matches 1921
    vlr-scraper match 295610 --tab economy
    vlr-scraper player 9 --timespan all
    vlr-scraper player-matches 9 --page 3
    vlr-scraper team 2
    vlr-scraper team-matches 2
    vlr-scraper team-transactions 2
"""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import BaseModel

from vlr_scraper.config import ScraperConfig
from vlr_scraper.exceptions import VlrError
from vlr_scraper.http_client import VlrClient
from vlr_scraper.logging_config import setup_logging
from vlr_scraper.models import AgentStatsTimespan, EventType, MatchTab, Region
from vlr_scraper.urls import validate_page

logger = logging.getLogger(__name__)


def _page(value: str) -> int:
    try:
        return validate_page(int(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _add_id(parser: argparse.ArgumentParser, name: str) -> None:
    parser.add_argument(name, type=int, help=f"vlr.gg {name.replace('_', ' ')}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the vlr-scraper CLI."""
    parser = argparse.ArgumentParser(
        prog="vlr-scraper",
        description="Scrape Valorant esports data from vlr.gg",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default="data",
        help="Directory for log files (default: data)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show DEBUG output on stderr (default: warnings only)",
    )
    parser.add_argument(
        "--min-delay",
        type=float,
        default=None,
        help="Minimum delay between requests in seconds (default: 0.25)",
    )
    parser.add_argument(
        "--proxy",
        type=str,
        default=None,
        help="Proxy URL (http://host:port or socks5://host:port)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    events = commands.add_parser("events", help="List events")
    events.add_argument(
        "--type",
        dest="event_type",
        choices=[t.value for t in EventType],
        default=EventType.UPCOMING.value,
    )
    events.add_argument(
        "--region",
        choices=[r.value or "all" for r in Region],
        default="all",
    )
    events.add_argument("--page", type=_page, default=1)

    _add_id(commands.add_parser("event-matches", help="Matches of an event"), "event_id")

    match = commands.add_parser("match", help="Match detail")
    _add_id(match, "match_id")
    match.add_argument(
        "--tab", choices=[t.value for t in MatchTab], default=MatchTab.OVERVIEW.value
    )

    player = commands.add_parser("player", help="Player profile")
    _add_id(player, "player_id")
    player.add_argument(
        "--timespan",
        choices=[t.value for t in AgentStatsTimespan],
        default=AgentStatsTimespan.DAYS_90.value,
    )

    player_matches = commands.add_parser("player-matches", help="Player match history")
    _add_id(player_matches, "player_id")
    player_matches.add_argument("--page", type=_page, default=1)

    _add_id(commands.add_parser("team", help="Team profile"), "team_id")

    team_matches = commands.add_parser("team-matches", help="Team match history")
    _add_id(team_matches, "team_id")
    team_matches.add_argument("--page", type=_page, default=1)

    _add_id(
        commands.add_parser("team-transactions", help="Team roster transactions"), "team_id"
    )
    return parser


def to_json(result) -> str:
    """Serialize a model or a list of models."""
    if isinstance(result, BaseModel):
        return result.model_dump_json(indent=2)
    return json.dumps([item.model_dump(mode="json") for item in result], indent=2)


async def run_command(client: VlrClient, args: argparse.Namespace):
    """Dispatch one parsed command to the matching client operation."""
    if args.command == "events":
        region = Region.ALL if args.region == "all" else Region(args.region)
        return await client.get_events(EventType(args.event_type), region, args.page)
    if args.command == "event-matches":
        return await client.get_event_matchlist(args.event_id)
    if args.command == "match":
        tab = MatchTab(args.tab)
        if tab is MatchTab.PERFORMANCE:
            match = await client.get_match(args.match_id)
            return await client.get_match_performance(args.match_id, match)
        if tab is MatchTab.ECONOMY:
            return await client.get_match_economy(args.match_id)
        return await client.get_match(args.match_id)
    if args.command == "player":
        return await client.get_player(args.player_id, AgentStatsTimespan(args.timespan))
    if args.command == "player-matches":
        return await client.get_player_matchlist(args.player_id, args.page)
    if args.command == "team":
        return await client.get_team(args.team_id)
    if args.command == "team-matches":
        return await client.get_team_matchlist(args.team_id, args.page)
    if args.command == "team-transactions":
        return await client.get_team_transactions(args.team_id)
    raise ValueError(f"unknown command {args.command!r}")


async def async_main(args: argparse.Namespace) -> int:
    """Run one command; returns the process exit status."""
    console_level = logging.DEBUG if args.verbose else logging.WARNING
    log_file = setup_logging(args.data_dir, console_level)
    logger.debug("Logging to %s", log_file)

    config = ScraperConfig(data_dir=args.data_dir, proxy_url=args.proxy)
    if args.min_delay is not None:
        config.min_delay = args.min_delay

    try:
        async with VlrClient(config) as client:
            result = await run_command(client, args)
            logger.debug("Client stats: %s", client.stats)
    except VlrError as exc:
        logger.error("%s", exc)
        if exc.cause is not None:
            logger.debug("Caused by: %r", exc.cause)
        return 1

    print(to_json(result))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Sync entry point for the vlr-scraper console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return asyncio.run(async_main(args))
    except KeyboardInterrupt:
        return 130
    finally:
        logging.shutdown()


if __name__ == "__main__":
    sys.exit(main())
