"""Error type for the vlr.gg scraper.

A single exception class carries a tagged payload instead of a class
hierarchy:

    VlrError
        kind         ErrorKind -- what went wrong
        url          page the failure is attributed to
        field        breadcrumb of what was being extracted
                     (e.g. "match header > team 1 > team name")
        status_code  HTTP status for UNEXPECTED_STATUS
        cause        underlying exception, if any

Fetch-side kinds (HTTP, UNEXPECTED_STATUS, RESPONSE_BODY) are raised by the
client. Extraction-side kinds (SELECTOR, INT_PARSE, DATE_PARSE,
ELEMENT_NOT_FOUND) are raised by the parsers and enriched on the way out
through ``error_context``, which also turns a pydantic ``ValidationError``
from building a result model into a VALIDATION error.
"""

import enum
from contextlib import contextmanager
from typing import Iterator, Optional

from pydantic import ValidationError


class ErrorKind(str, enum.Enum):
    """Discriminant for ``VlrError``."""

    HTTP = "http"
    UNEXPECTED_STATUS = "unexpected_status"
    RESPONSE_BODY = "response_body"
    SELECTOR = "selector"
    INT_PARSE = "int_parse"
    DATE_PARSE = "date_parse"
    ELEMENT_NOT_FOUND = "element_not_found"
    VALIDATION = "validation"


_SUMMARIES = {
    ErrorKind.HTTP: "http request failed",
    ErrorKind.UNEXPECTED_STATUS: "unexpected status",
    ErrorKind.RESPONSE_BODY: "failed to read response body",
    ErrorKind.SELECTOR: "invalid CSS selector",
    ErrorKind.INT_PARSE: "failed to parse number",
    ErrorKind.DATE_PARSE: "failed to parse date",
    ErrorKind.ELEMENT_NOT_FOUND: "expected element not found",
    ErrorKind.VALIDATION: "extracted values failed validation",
}


class VlrError(Exception):
    """Any failure while fetching or extracting a vlr.gg page."""

    def __init__(
        self,
        kind: ErrorKind,
        detail: str = "",
        *,
        url: Optional[str] = None,
        field: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.detail = detail
        self.url = url
        self.field = field
        self.status_code = status_code
        self.cause = cause
        super().__init__(self._render())

    def _render(self) -> str:
        parts = [_SUMMARIES[self.kind]]
        if self.status_code is not None:
            parts[0] += f" {self.status_code}"
        if self.field:
            parts.append(f"while extracting {self.field}")
        if self.url:
            parts.append(f"on {self.url}")
        message = " ".join(parts)
        if self.detail:
            message += f": {self.detail}"
        return message

    def enrich(
        self, *, field: Optional[str] = None, url: Optional[str] = None
    ) -> "VlrError":
        """Return a copy with an outer field prepended and url filled in.

        The kind, detail, status and cause are carried over unchanged.
        """
        if field and self.field:
            combined = f"{field} > {self.field}"
        else:
            combined = field or self.field
        return VlrError(
            self.kind,
            self.detail,
            url=self.url or url,
            field=combined,
            status_code=self.status_code,
            cause=self.cause,
        )

    @classmethod
    def not_found(cls, what: str, detail: str = "") -> "VlrError":
        return cls(ErrorKind.ELEMENT_NOT_FOUND, detail, field=what)


@contextmanager
def error_context(
    field: Optional[str] = None, *, url: Optional[str] = None
) -> Iterator[None]:
    """Attribute any ``VlrError`` raised inside the block to ``field``/``url``.

    A ``ValidationError`` from a result model built inside the block becomes
    a VALIDATION error attributed the same way.

    Usage::

        with error_context("match header", url=url):
            header = _parse_header(node)
    """
    try:
        yield
    except VlrError as exc:
        raise exc.enrich(field=field, url=url) from exc
    except ValidationError as exc:
        raise VlrError(
            ErrorKind.VALIDATION,
            _describe_validation(exc),
            field=field,
            url=url,
            cause=exc,
        ) from exc


def _describe_validation(exc: ValidationError) -> str:
    """One line per failed constraint, e.g. "MatchHeaderTeam.name: String should ..."."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        prefix = f"{exc.title}.{location}" if location else exc.title
        parts.append(f"{prefix}: {error['msg']}")
    return "; ".join(parts)
