"""
Unit tests for the City of Memphis tax extractor
"""
import pytest

from src.parcel_proxy.errors import ExtractionError
from src.parcel_proxy.extractors.municipal import MUNICIPAL_TABLE_PLACEHOLDER, MunicipalTaxExtractor


class TestMunicipalTaxExtractor:
    """Tests for MunicipalTaxExtractor"""

    def test_extracts_owner_fields(self, municipal_html):
        """Test owner block spans are read by id"""
        record = MunicipalTaxExtractor().parse(municipal_html)

        assert record.get("parcel_number") == "063002  00025"
        assert record.get("owner_name") == "SMITH JOHN & MARY"
        assert record.get("property_address") == "123 MAIN ST"
        assert record.get("current_balance") == "$0.00"

    def test_parcel_number_keeps_internal_spacing(self):
        """Test the double space inside a parcel id survives extraction"""
        html = '<html><body><span id="MainBodyPlaceHolder_lblParcelNo">\n  063002  00025&nbsp;</span></body></html>'

        record = MunicipalTaxExtractor().parse(html)

        assert record.get("parcel_number") == "063002  00025"

    def test_extracts_tax_details(self, municipal_html):
        """Test the detail grid keeps its rows with history links neutralized"""
        table = MunicipalTaxExtractor().parse(municipal_html).tables["tax_details"]

        assert table.header == ["Year", "Billed", "Balance"]
        assert table.rows == [["2024", "$410.22", "$0.00"], ["2023", "$398.10", "$0.00"]]
        assert "ShowHistory" not in table.html

    def test_missing_field_does_not_cascade(self, municipal_html):
        """Test one missing span leaves the other fields and table intact"""
        html = municipal_html.replace('id="MainBodyPlaceHolder_lblOwnerName"', 'id="renamed"')

        record = MunicipalTaxExtractor().parse(html)

        assert record.get("owner_name") is None
        assert record.missing == ["owner_name"]
        assert record.get("current_balance") == "$0.00"
        assert record.tables["tax_details"].found

    def test_missing_table_placeholder(self):
        """Test a page without the grid gets the table placeholder"""
        record = MunicipalTaxExtractor().parse("<html><body><span>Parcel not found</span></body></html>")

        assert record.placeholders["tax_details"] == MUNICIPAL_TABLE_PLACEHOLDER
        assert record.tables["tax_details"].rows == []

    def test_non_html_raises(self):
        """Test plain text bodies raise ExtractionError"""
        with pytest.raises(ExtractionError):
            MunicipalTaxExtractor().parse("Service Unavailable")
