"""Tests for selector fallback chains."""

from job_scout.scrapers.selectors import extract_value, first_match, parse_html, select_cards

CARD_HTML = """
<ul>
  <li class="card">
    <h3 class="link">Senior Developer</h3>
    <a class="link" href="/jobs/1"></a>
    <span class="company">
        Acme
        Corp
    </span>
  </li>
  <li class="card">
    <h3 class="other">Second</h3>
  </li>
</ul>
"""


class TestExtractValue:
    """Test single selector extraction."""

    def test_text_is_whitespace_collapsed(self):
        soup = parse_html(CARD_HTML)

        assert extract_value(soup, ".company") == "Acme Corp"

    def test_attribute_skips_elements_without_it(self):
        soup = parse_html(CARD_HTML)

        # The <h3 class="link"> comes first but has no href
        assert extract_value(soup, ".link@href") == "/jobs/1"

    def test_attribute_of_root(self):
        card = parse_html('<a href="/x">Job</a>').select_one("a")

        assert extract_value(card, "@href") == "/x"

    def test_no_match(self):
        soup = parse_html(CARD_HTML)

        assert extract_value(soup, ".missing") == ""
        assert extract_value(soup, ".company@href") == ""


class TestFirstMatch:
    """Test fallback chain ordering."""

    def test_first_non_empty_wins(self):
        soup = parse_html(CARD_HTML)

        assert first_match(soup, [".missing", ".company", ".link"]) == "Acme Corp"

    def test_empty_chain_result(self):
        soup = parse_html(CARD_HTML)

        assert first_match(soup, [".missing", ".absent@href"]) == ""

    def test_scoped_to_card(self):
        cards = parse_html(CARD_HTML).select(".card")

        assert first_match(cards[1], [".link@href"]) == ""
        assert first_match(cards[1], ["h3"]) == "Second"


class TestSelectCards:
    """Test card selector resolution."""

    def test_first_selector_with_hits(self):
        soup = parse_html(CARD_HTML)

        cards = select_cards(soup, [".job-card", ".card", "li"])

        assert len(cards) == 2

    def test_no_cards(self):
        assert select_cards(parse_html("<div>Invalid HTML content</div>"), [".card"]) == []

    def test_empty_document(self):
        assert select_cards(parse_html(""), [".card"]) == []
        assert select_cards(parse_html(None), [".card"]) == []
