"""
Unit tests for shared extractor helpers
"""
import pytest
from bs4 import BeautifulSoup

from src.parcel_proxy.errors import ExtractionError
from src.parcel_proxy.extractors.base import (
    BaseExtractor,
    TableRule,
    find_labeled_value,
    neutralize_links,
    own_rows,
    parse_html,
    row_cells,
)

LINKED_TABLE = """
<table id="t">
  <tr><th>Year</th><th>Amount</th></tr>
  <tr><td><a href="Drilldown.aspx?y=2024" onclick="go(2024)">2024</a></td><td ondblclick="x()">$10</td></tr>
  <tr><td><a href="javascript:ShowHistory('2023')">2023</a></td><td>$20</td></tr>
  <tr><td><a href="https://example.com/doc">Doc</a></td><td>$30</td></tr>
</table>
"""


def _cell_grid(table):
    return [[cell.get_text() for cell in row.find_all(["td", "th"])] for row in own_rows(table)]


class TestParseHtml:
    """Tests for parse_html"""

    def test_parses_markup(self):
        """Test markup with elements is accepted"""
        soup = parse_html("<p>hello</p>")
        assert soup.p.get_text() == "hello"

    @pytest.mark.parametrize("body", ["", "  ", "plain text"])
    def test_rejects_empty_and_non_html(self, body):
        """Test empty and element-free bodies raise ExtractionError"""
        with pytest.raises(ExtractionError):
            parse_html(body)


class TestNeutralizeLinks:
    """Tests for neutralize_links"""

    def test_round_trip_preserves_table_shape_and_text(self):
        """Test stripping links keeps row count, column count and cell text"""
        original = BeautifulSoup(LINKED_TABLE, "html.parser").table
        before = _cell_grid(original)

        cleaned = neutralize_links(BeautifulSoup(LINKED_TABLE, "html.parser").table)

        assert _cell_grid(cleaned) == before
        assert cleaned.find("a") is None
        assert "onclick" not in str(cleaned)
        assert "ondblclick" not in str(cleaned)

    def test_patterns_limit_which_links_are_replaced(self):
        """Test only matching and javascript: links are replaced when patterns are given"""
        table = BeautifulSoup(LINKED_TABLE, "html.parser").table

        neutralize_links(table, ("Drilldown.aspx",))

        remaining = [a["href"] for a in table.find_all("a")]
        assert remaining == ["https://example.com/doc"]
        assert "onclick" not in str(table)


class TestFindLabeledValue:
    """Tests for find_labeled_value"""

    def test_table_row_layout(self):
        """Test label cell followed by value cell"""
        soup = BeautifulSoup("<table><tr><td><b>Owner Name:</b></td><td> SMITH </td></tr></table>", "html.parser")
        assert find_labeled_value(soup.table, "Owner Name:") == "SMITH"

    def test_label_without_colon_matches(self):
        """Test trailing colons are ignored when matching labels"""
        soup = BeautifulSoup("<div><span>Land Use:</span><span>RESIDENTIAL</span></div>", "html.parser")
        assert find_labeled_value(soup.div, "Land Use") == "RESIDENTIAL"

    def test_definition_list(self):
        """Test dt/dd pairs"""
        soup = BeautifulSoup("<dl><dt>Year Built</dt><dd>1948</dd></dl>", "html.parser")
        assert find_labeled_value(soup.dl, "Year Built") == "1948"

    def test_missing_label(self):
        """Test a missing label returns None"""
        soup = BeautifulSoup("<table><tr><td>Other</td><td>x</td></tr></table>", "html.parser")
        assert find_labeled_value(soup.table, "Owner Name") is None


class TestFindTable:
    """Tests for signature-based table lookup"""

    class _Extractor(BaseExtractor):
        source = "test"

    def test_matches_by_header_labels_not_position(self):
        """Test the table with the right header wins regardless of order"""
        html = (
            "<table><tr><th>Name</th></tr><tr><td>a</td></tr></table>"
            "<table><tr><th>Year</th><th>Amount</th></tr><tr><td>2024</td><td>$1</td></tr></table>"
        )
        rule = TableRule(name="years", placeholder="none", header_labels=("Year", "Amount"))

        table = self._Extractor().extract_table(parse_html(html), rule)

        assert table.found
        assert table.rows == [["2024", "$1"]]

    def test_no_match_gives_placeholder(self):
        """Test a missing signature gives an empty table with placeholder"""
        rule = TableRule(name="years", placeholder="Could not parse years.", header_labels=("Year",))

        table = self._Extractor().extract_table(parse_html("<table><tr><th>Name</th></tr></table>"), rule)

        assert not table.found
        assert table.rows == []
        assert table.placeholder == "Could not parse years."

    def test_rows_and_cells_are_direct_children(self):
        """Test nested table rows are not counted as the outer table's rows"""
        soup = BeautifulSoup("<table><tr><td>a</td><td><table><tr><td>b</td></tr></table></td></tr></table>", "html.parser")
        assert row_cells(soup.tr) == ["a", "b"]
        assert len(own_rows(soup.table)) == 1
