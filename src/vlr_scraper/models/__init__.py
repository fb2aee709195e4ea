"""Pydantic v2 result types for every vlr.gg page parser.

Re-exports all model classes for convenient import::

    from vlr_scraper.models import Match, Player, Team, ...
"""

from .common import EventPlacement, PaginatedResult, PlacementEntry, Social
from .enums import AgentStatsTimespan, EventStatus, EventType, MatchTab, Region
from .event import Event, EventMatchListItem, EventMatchListTeam
from .match import (
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
from .match_item import MatchItem, MatchItemTeam, PlayerMatchListItem, TeamMatchListItem
from .player import AgentStats, NewsItem, Player, PlayerInfo, PlayerTeam
from .team import Team, TeamInfo, TeamRosterMember, TeamTransaction

__all__ = [
    "AgentStats",
    "AgentStatsTimespan",
    "Event",
    "EventMatchListItem",
    "EventMatchListTeam",
    "EventPlacement",
    "EventStatus",
    "EventType",
    "Game",
    "GameTeam",
    "HeadToHeadMatch",
    "KillMatrixEntry",
    "Match",
    "MatchEconomy",
    "MatchEvent",
    "MatchHeader",
    "MatchHeaderTeam",
    "MatchItem",
    "MatchItemTeam",
    "MatchPerformance",
    "MatchPlayerRef",
    "MatchStream",
    "MatchTab",
    "NewsItem",
    "PaginatedResult",
    "PastMatch",
    "PlacementEntry",
    "Player",
    "PlayerGameStats",
    "PlayerInfo",
    "PlayerMatchListItem",
    "PlayerPerformance",
    "PlayerTeam",
    "Region",
    "Round",
    "Social",
    "StatLine",
    "Team",
    "TeamEconomy",
    "TeamInfo",
    "TeamMatchListItem",
    "TeamPastMatches",
    "TeamRosterMember",
    "TeamTransaction",
]
