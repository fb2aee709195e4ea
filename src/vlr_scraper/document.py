"""Navigable document model over BeautifulSoup.

Provides:
- parse_document: raw markup in, Document out (never raises)
- Node: a thin wrapper around a bs4 Tag with scoped selector queries

Selectors are evaluated by soupsieve. A malformed selector is a programming
error and surfaces as ``VlrError(kind=SELECTOR)``; an element that is simply
not on the page is ``None`` / an empty list.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from vlr_scraper.exceptions import ErrorKind, VlrError

_WHITESPACE = re.compile(r"\s+")


def _normalize(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class Node:
    """One element of a parsed page."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"<Node {self.name} class={' '.join(self.classes)!r}>"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    @property
    def name(self) -> str:
        return self._tag.name or ""

    # -- queries ---------------------------------------------------------

    def select_one(self, selector: str) -> Optional["Node"]:
        try:
            found = self._tag.select_one(selector)
        except SelectorSyntaxError as exc:
            raise VlrError(ErrorKind.SELECTOR, f"{selector!r}: {exc}", cause=exc) from exc
        return Node(found) if found is not None else None

    def select_all(self, selector: str) -> list["Node"]:
        try:
            found = self._tag.select(selector)
        except SelectorSyntaxError as exc:
            raise VlrError(ErrorKind.SELECTOR, f"{selector!r}: {exc}", cause=exc) from exc
        return [Node(tag) for tag in found]

    # -- content ---------------------------------------------------------

    @property
    def text(self) -> str:
        """All descendant text, whitespace collapsed and trimmed."""
        return _normalize(self._tag.get_text(" "))

    @property
    def first_text(self) -> str:
        """First non-empty descendant text fragment, trimmed."""
        for fragment in self._tag.strings:
            stripped = _normalize(fragment)
            if stripped:
                return stripped
        return ""

    @property
    def last_text(self) -> str:
        """Last non-empty descendant text fragment, trimmed."""
        fragments = [_normalize(s) for s in self._tag.strings]
        fragments = [f for f in fragments if f]
        return fragments[-1] if fragments else ""

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    @property
    def classes(self) -> list[str]:
        return list(self._tag.get("class") or [])

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def class_suffix(self, prefix: str) -> Optional[str]:
        """Suffix of the first class starting with ``prefix`` (``mod-`` flags)."""
        for cls in self.classes:
            if cls.startswith(prefix) and len(cls) > len(prefix):
                return cls[len(prefix):]
        return None

    # -- navigation ------------------------------------------------------

    @property
    def element_children(self) -> list["Node"]:
        return [Node(child) for child in self._tag.children if isinstance(child, Tag)]

    @property
    def next_element_sibling(self) -> Optional["Node"]:
        sibling = self._tag.find_next_sibling()
        return Node(sibling) if isinstance(sibling, Tag) else None


class Document(Node):
    """Root of a parsed page."""

    __slots__ = ()


def parse_document(html: str) -> Document:
    """Parse raw markup into a best-effort tree using the lxml builder.

    lxml repairs unbalanced or truncated markup instead of failing, so this
    never raises for any string input.
    """
    return Document(BeautifulSoup(html, "lxml"))
