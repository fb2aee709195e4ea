"""Tests for VlrError rendering and error_context enrichment."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from vlr_scraper.exceptions import ErrorKind, VlrError, error_context
from vlr_scraper.models import MatchHeader, TeamInfo


class TestVlrError:

    def test_message_includes_field_and_url(self):
        err = VlrError(
            ErrorKind.ELEMENT_NOT_FOUND,
            "no match",
            url="https://www.vlr.gg/1",
            field="match header > team name",
        )
        message = str(err)
        assert "expected element not found" in message
        assert "match header > team name" in message
        assert "https://www.vlr.gg/1" in message
        assert message.endswith(": no match")

    def test_status_code_in_message(self):
        err = VlrError(ErrorKind.UNEXPECTED_STATUS, url="https://www.vlr.gg/x", status_code=404)
        assert "unexpected status 404" in str(err)
        assert err.status_code == 404

    def test_not_found_sets_field(self):
        err = VlrError.not_found("team links", "expected 2")
        assert err.kind is ErrorKind.ELEMENT_NOT_FOUND
        assert err.field == "team links"
        assert err.detail == "expected 2"

    def test_enrich_prepends_outer_field(self):
        err = VlrError.not_found("team name").enrich(field="team 1")
        assert err.field == "team 1 > team name"

    def test_enrich_keeps_existing_url(self):
        err = VlrError(ErrorKind.HTTP, url="https://a").enrich(url="https://b")
        assert err.url == "https://a"

    def test_enrich_carries_kind_and_cause(self):
        cause = ValueError("boom")
        err = VlrError(ErrorKind.INT_PARSE, "x", cause=cause).enrich(field="acs")
        assert err.kind is ErrorKind.INT_PARSE
        assert err.cause is cause


class TestErrorContext:

    def test_nested_contexts_build_breadcrumb(self):
        with pytest.raises(VlrError) as exc_info:
            with error_context(url="https://www.vlr.gg/295610"):
                with error_context("match header"):
                    with error_context("team 1"):
                        raise VlrError.not_found("team name")
        err = exc_info.value
        assert err.field == "match header > team 1 > team name"
        assert err.url == "https://www.vlr.gg/295610"

    def test_other_exceptions_pass_through(self):
        with pytest.raises(KeyError):
            with error_context("anything"):
                raise KeyError("k")

    def test_no_error_no_effect(self):
        with error_context("field", url="u"):
            value = 1
        assert value == 1

    def test_original_error_is_chained(self):
        with pytest.raises(VlrError) as exc_info:
            with error_context("outer"):
                raise VlrError.not_found("inner")
        assert isinstance(exc_info.value.__cause__, VlrError)
        assert exc_info.value.__cause__.field == "inner"

    def test_model_validation_becomes_typed_error(self):
        with pytest.raises(VlrError) as exc_info:
            with error_context(url="https://www.vlr.gg/team/2"):
                with error_context("team info"):
                    TeamInfo(id=2, name="")
        err = exc_info.value
        assert err.kind is ErrorKind.VALIDATION
        assert err.field == "team info"
        assert err.url == "https://www.vlr.gg/team/2"
        assert isinstance(err.cause, ValidationError)
        assert err.detail.startswith("TeamInfo.name: ")
        assert "extracted values failed validation" in str(err)

    def test_model_level_validation_detail(self):
        team = {"id": 2, "slug": "sentinels", "href": "/team/2/sentinels", "name": "Sentinels"}
        with pytest.raises(VlrError) as exc_info:
            with error_context("match header"):
                MatchHeader(
                    event={"id": 1921, "slug": "madrid", "title": "Madrid"},
                    date=datetime(2024, 3, 24),
                    teams=(team, team),
                )
        assert exc_info.value.detail.startswith("MatchHeader: ")
        assert "both header teams have id 2" in exc_info.value.detail
