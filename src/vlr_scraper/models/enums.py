"""Enumerations for listing filters and page states."""

import enum


class EventType(str, enum.Enum):
    """Which column of the events listing to read."""

    UPCOMING = "upcoming"
    COMPLETED = "completed"


class EventStatus(str, enum.Enum):
    """Status badge of an event."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    UNKNOWN = "unknown"

    @classmethod
    def from_text(cls, text: str) -> "EventStatus":
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class Region(str, enum.Enum):
    """Region filter; the value is the events URL path segment."""

    ALL = ""
    NORTH_AMERICA = "north-america"
    EUROPE = "europe"
    BRAZIL = "brazil"
    ASIA_PACIFIC = "asia-pacific"
    KOREA = "korea"
    JAPAN = "japan"
    LATIN_AMERICA = "latin-america"
    OCEANIA = "oceania"
    MIDDLE_EAST_NORTH_AFRICA = "mena"
    GAME_CHANGERS = "game-changers"
    COLLEGIATE = "collegiate"


class AgentStatsTimespan(str, enum.Enum):
    """Window for the per-agent table on a player profile."""

    DAYS_30 = "30d"
    DAYS_60 = "60d"
    DAYS_90 = "90d"
    ALL = "all"


class MatchTab(str, enum.Enum):
    """Tabs of a match page."""

    OVERVIEW = "overview"
    PERFORMANCE = "performance"
    ECONOMY = "economy"
