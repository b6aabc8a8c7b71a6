"""
Unit tests for the combined parcel report
"""
import asyncio

import pytest
from unittest.mock import Mock

from src.parcel_proxy.errors import FetchTimeout, InputError
from src.parcel_proxy.extractors.assessor import ASSESSOR_PLACEHOLDER
from src.parcel_proxy.models.records import ExtractedRecord
from src.parcel_proxy.services.parcel_report import REPORT_SOURCES, build_parcel_report


def make_lookup(failures=None):
    failures = failures or {}

    def lookup(source, parcel_id):
        if source in failures:
            raise failures[source]
        return ExtractedRecord(source=source, parcel_id=parcel_id, fields={"owner_name": "SMITH JOHN"})

    service = Mock()
    service.lookup.side_effect = lookup
    return service


class TestBuildParcelReport:
    """Tests for build_parcel_report"""

    def test_all_sections_ok(self):
        """Test every source is looked up and reported"""
        service = make_lookup()

        report = asyncio.run(build_parcel_report(" 063002  00025 ", lookup=service))

        assert report["parcel_id"] == "063002  00025"
        assert list(report["sections"]) == list(REPORT_SOURCES)
        assert all(section["status"] == "ok" for section in report["sections"].values())
        assert service.lookup.call_count == 3

    def test_assessor_section_has_combined_html(self):
        """Test the assessor section carries combined html, placeholder when empty"""
        report = asyncio.run(build_parcel_report("063002  00025", lookup=make_lookup()))

        assert report["sections"]["assessor"]["combined_html"] == ASSESSOR_PLACEHOLDER
        assert "combined_html" not in report["sections"]["trustee"]

    def test_failed_section_does_not_fail_report(self):
        """Test one failing source is reported as an error section"""
        service = make_lookup({"municipal": FetchTimeout(source="municipal")})

        report = asyncio.run(build_parcel_report("063002  00025", lookup=service))

        municipal = report["sections"]["municipal"]
        assert municipal["status"] == "error"
        assert municipal["error"]["error"] == "timeout"
        assert municipal["error"]["source"] == "municipal"
        assert report["sections"]["trustee"]["record"]["fields"]["owner_name"] == "SMITH JOHN"

    def test_missing_parcel_id(self):
        """Test a blank id raises InputError"""
        with pytest.raises(InputError):
            asyncio.run(build_parcel_report("", lookup=make_lookup()))
