"""Tests for the document model: parsing, selector queries and text access."""

import pytest

from vlr_scraper.document import Document, Node, parse_document
from vlr_scraper.exceptions import ErrorKind, VlrError

HTML = """
<html><body>
  <div id="wrapper">
    <div class="card mod-first">
      <a href="/team/2/sentinels" class="link">
        Sentinels
        <span class="tag">SEN</span>
      </a>
      <i class="flag mod-us" title="United States"></i>
    </div>
    <div class="card">
      Loose   text
      <span>nested</span>
      tail
    </div>
  </div>
</body></html>
"""


class TestParseDocument:
    """parse_document never raises and returns a navigable root."""

    def test_returns_document(self):
        doc = parse_document(HTML)
        assert isinstance(doc, Document)
        assert isinstance(doc, Node)

    @pytest.mark.parametrize(
        "markup",
        ["", "not html at all", "<div><span>unclosed", "<<<>>>", "<table><tr><td>x"],
    )
    def test_malformed_markup_does_not_raise(self, markup):
        doc = parse_document(markup)
        assert doc.select_one("div.missing") is None

    def test_truncated_markup_is_repaired(self):
        doc = parse_document("<div class='a'><span class='b'>text")
        assert doc.select_one("div.a span.b").text == "text"


class TestQueries:
    """select_one / select_all and selector errors."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.doc = parse_document(HTML)

    def test_select_one_returns_first_match(self):
        card = self.doc.select_one("div.card")
        assert card.has_class("mod-first")

    def test_select_one_returns_none_when_absent(self):
        assert self.doc.select_one("div.nothing-here") is None

    def test_select_all_preserves_document_order(self):
        cards = self.doc.select_all("div#wrapper div.card")
        assert len(cards) == 2
        assert cards[0].has_class("mod-first")
        assert not cards[1].has_class("mod-first")

    def test_select_all_empty_list_when_absent(self):
        assert self.doc.select_all("table") == []

    def test_queries_are_scoped_to_the_node(self):
        second = self.doc.select_all("div.card")[1]
        assert second.select_one("a") is None
        assert second.select_one("span").text == "nested"

    def test_invalid_selector_raises_selector_error(self):
        with pytest.raises(VlrError) as exc_info:
            self.doc.select_one("div[")
        assert exc_info.value.kind is ErrorKind.SELECTOR

    def test_invalid_selector_in_select_all(self):
        with pytest.raises(VlrError) as exc_info:
            self.doc.select_all(":not(")
        assert exc_info.value.kind is ErrorKind.SELECTOR

    def test_pseudo_classes_supported(self):
        assert self.doc.select_one("div.card:has(i.flag)").has_class("mod-first")
        assert len(self.doc.select_all("div.card:not(.mod-first)")) == 1


class TestText:
    """Text and attribute accessors."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.doc = parse_document(HTML)
        self.link = self.doc.select_one("a.link")
        self.loose = self.doc.select_all("div.card")[1]

    def test_text_collapses_whitespace(self):
        assert self.link.text == "Sentinels SEN"
        assert self.loose.text == "Loose text nested tail"

    def test_first_text(self):
        assert self.link.first_text == "Sentinels"

    def test_last_text(self):
        assert self.link.last_text == "SEN"
        assert self.loose.last_text == "tail"

    def test_attr(self):
        assert self.link.attr("href") == "/team/2/sentinels"
        assert self.link.attr("data-missing") is None

    def test_class_attr_joined(self):
        assert self.link.attr("class") == "link"

    def test_classes_and_suffix(self):
        flag = self.doc.select_one("i.flag")
        assert flag.classes == ["flag", "mod-us"]
        assert flag.class_suffix("mod-") == "us"
        assert flag.class_suffix("nope-") is None

    def test_empty_text(self):
        flag = self.doc.select_one("i.flag")
        assert flag.text == ""
        assert flag.first_text == ""
        assert flag.last_text == ""


class TestNavigation:

    def test_element_children_skip_text(self):
        doc = parse_document(HTML)
        card = doc.select_one("div.card")
        assert [c.name for c in card.element_children] == ["a", "i"]

    def test_next_element_sibling(self):
        doc = parse_document(HTML)
        first = doc.select_one("div.card")
        assert first.next_element_sibling.text.startswith("Loose")
        assert first.next_element_sibling.next_element_sibling is None

    def test_nodes_compare_by_element(self):
        doc = parse_document(HTML)
        assert doc.select_one("a") == doc.select_one("a.link")
        assert doc.select_one("a") != doc.select_one("i")
