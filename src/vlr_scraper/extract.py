"""Field extraction utilities shared by every page parser.

Pure functions over ``Node`` values and text: no I/O, no state.

Numbers
    ``int_of`` / ``float_of`` return ``ABSENT`` for the site's placeholders
    (a lone dash or an empty cell) and raise ``INT_PARSE`` for anything
    else that is not a number. ``int_or_none`` / ``int_or_zero`` /
    ``float_or_none`` make the per-field absence policy explicit.

Dates
    ``date_of`` tries ``DATE_FORMATS`` in order and raises ``DATE_PARSE``
    only when none match.

Field descriptors
    Parsers declare their selectors as ``FieldSpec`` tables and read them
    through ``required`` (absent -> ELEMENT_NOT_FOUND naming the field) or
    ``optional`` (absent -> default).
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, NamedTuple, Optional
from urllib.parse import urlparse

from vlr_scraper.config import VLR_BASE_URL
from vlr_scraper.document import Node
from vlr_scraper.exceptions import ErrorKind, VlrError, error_context


class _Absent:
    """Sentinel for a numeric cell that shows a placeholder instead of a value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

_PLACEHOLDERS = {"", "-", "–", "—"}

# Priority order matters: numeric formats first, then weekday-prefixed
# day labels (full month before abbreviated), then bare month names.
DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y-%m-%d",
    "%a, %B %d, %Y",
    "%a, %b %d, %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)
TIME_FORMAT = "%I:%M %p"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# Text and attributes
# ---------------------------------------------------------------------------


def text_of(node: Node) -> str:
    """Concatenated text content with whitespace collapsed and trimmed."""
    return node.text


def first_text_of(node: Node) -> str:
    """First non-empty text fragment (ignores trailing badges and notes)."""
    return node.first_text


def last_text_of(node: Node) -> str:
    return node.last_text


def node_of(node: Node) -> Node:
    """Extractor returning the matched element itself (required containers)."""
    return node


def attr_of(node: Node, name: str) -> Optional[str]:
    value = node.attr(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def attr(name: str) -> Callable[[Node], Optional[str]]:
    """Extractor reading attribute ``name``; for use in ``FieldSpec``."""

    def extract(node: Node) -> Optional[str]:
        return attr_of(node, name)

    return extract


def required_attr(name: str) -> Callable[[Node], str]:
    """Extractor that treats a missing attribute as a missing element."""

    def extract(node: Node) -> str:
        value = attr_of(node, name)
        if value is None:
            raise VlrError.not_found(f"{name} attribute")
        return value

    return extract


def absolute_url(src: str) -> str:
    """Normalize protocol-relative and root-relative vlr.gg links."""
    src = src.strip()
    if src.startswith("//"):
        return f"https:{src}"
    if src.startswith("/"):
        return f"{VLR_BASE_URL}{src}"
    return src


def image_of(node: Node) -> Optional[str]:
    src = attr_of(node, "src")
    return absolute_url(src) if src else None


def country_code_of(node: Node) -> Optional[str]:
    """Country code from a flag icon's ``mod-xx`` class."""
    return node.class_suffix("mod-")


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def _clean_number(text: str) -> str:
    return text.replace(",", "").replace(" ", "").strip()


def int_of(text: str):
    """Parse an integer such as ``"1,234"`` or ``"+5"``.

    Returns ``ABSENT`` for a placeholder dash or an empty cell.

    Raises:
        VlrError: INT_PARSE when the text is not an integer.
    """
    cleaned = _clean_number(text)
    if cleaned in _PLACEHOLDERS:
        return ABSENT
    try:
        return int(cleaned)
    except ValueError as exc:
        raise VlrError(ErrorKind.INT_PARSE, repr(text), cause=exc) from exc


def float_of(text: str):
    """Parse a decimal such as ``"1.05"`` or ``"75%"`` (percent sign dropped)."""
    cleaned = _clean_number(text)
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1].strip()
    if cleaned in _PLACEHOLDERS:
        return ABSENT
    try:
        return float(cleaned)
    except ValueError as exc:
        raise VlrError(ErrorKind.INT_PARSE, repr(text), cause=exc) from exc


def int_or_none(text: str) -> Optional[int]:
    value = int_of(text)
    return None if value is ABSENT else value


def int_or_zero(text: str) -> int:
    value = int_of(text)
    return 0 if value is ABSENT else value


def float_or_none(text: str) -> Optional[float]:
    value = float_of(text)
    return None if value is ABSENT else value


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def date_of(text: str) -> date:
    """Parse a calendar date in any of ``DATE_FORMATS``.

    Raises:
        VlrError: DATE_PARSE when no format matches.
    """
    cleaned = " ".join(text.split())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise VlrError(ErrorKind.DATE_PARSE, f"{text!r} matches none of {DATE_FORMATS}")


def time_of(text: str) -> time:
    try:
        return datetime.strptime(text.strip(), TIME_FORMAT).time()
    except ValueError as exc:
        raise VlrError(ErrorKind.DATE_PARSE, repr(text), cause=exc) from exc


def datetime_of(text: str, fmt: str = TIMESTAMP_FORMAT) -> datetime:
    try:
        return datetime.strptime(text.strip(), fmt)
    except ValueError as exc:
        raise VlrError(ErrorKind.DATE_PARSE, repr(text), cause=exc) from exc


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


class EntityRef(NamedTuple):
    """Numeric id and URL slug of an entity referenced by an href."""

    id: int
    slug: str


TEAM_HREF = re.compile(r"^/team/(?P<id>\d+)(?:/(?P<slug>[^/?#]*))?")
PLAYER_HREF = re.compile(r"^/player/(?P<id>\d+)(?:/(?P<slug>[^/?#]*))?")
EVENT_HREF = re.compile(r"^/event/(?P<id>\d+)(?:/(?P<slug>[^/?#]*))?")
MATCH_HREF = re.compile(r"^/(?P<id>\d+)(?:/(?P<slug>[^/?#]*))?")


def id_from_href(href: Optional[str], pattern: re.Pattern) -> EntityRef:
    """Extract the entity id and slug from a site-relative href.

    Absolute vlr.gg URLs are reduced to their path first.

    Raises:
        VlrError: ELEMENT_NOT_FOUND when the href does not reference the
            expected kind of entity.
    """
    if not href:
        raise VlrError.not_found("href", "link has no href")
    path = href.strip()
    if path.startswith("http://") or path.startswith("https://") or path.startswith("//"):
        path = urlparse(path).path
    m = pattern.match(path)
    if not m:
        raise VlrError.not_found("href", f"{href!r} does not match {pattern.pattern}")
    return EntityRef(int(m.group("id")), m.group("slug") or "")


# ---------------------------------------------------------------------------
# Social links
# ---------------------------------------------------------------------------

_PLATFORMS = (
    ("twitter.com", "twitter"),
    ("x.com", "twitter"),
    ("twitch.tv", "twitch"),
    ("youtube.com", "youtube"),
    ("youtu.be", "youtube"),
    ("instagram.com", "instagram"),
    ("tiktok.com", "tiktok"),
    ("discord.gg", "discord"),
    ("discord.com", "discord"),
    ("facebook.com", "facebook"),
    ("liquipedia.net", "liquipedia"),
)


def infer_platform(href: str) -> str:
    host = urlparse(href if "//" in href else f"//{href}").netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    for domain, platform in _PLATFORMS:
        if host == domain or host.endswith("." + domain):
            return platform
    return "website"


# ---------------------------------------------------------------------------
# Field descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSpec:
    """Named field: where it lives on the page and how to read it."""

    description: str
    selector: str
    extract: Callable[[Node], Any] = text_of


def required(node: Node, spec: FieldSpec) -> Any:
    """Read a field whose absence is a page-structure error.

    Raises:
        VlrError: ELEMENT_NOT_FOUND naming ``spec.description`` when the
            selector matches nothing or the match yields no value (empty
            text, missing attribute); any extraction error is attributed
            to the same field.
    """
    found = node.select_one(spec.selector)
    if found is None:
        raise VlrError.not_found(spec.description, f"no match for {spec.selector!r}")
    with error_context(spec.description):
        value = spec.extract(found)
    if value is None or value == "":
        raise VlrError.not_found(spec.description, f"{spec.selector!r} matched an empty element")
    return value


def optional(node: Node, spec: FieldSpec, default: Any = None) -> Any:
    """Read a field that may legitimately be missing from the page."""
    found = node.select_one(spec.selector)
    if found is None:
        return default
    with error_context(spec.description):
        return spec.extract(found)


def optional_text(node: Node, spec: FieldSpec) -> Optional[str]:
    """Like ``optional`` but an empty string also counts as missing."""
    value = optional(node, spec)
    return value or None
