"""
Trustee Tax Extractor

Pulls the owner block, tax-year summary and totals out of a Shelby County
Trustee ``Inquiry.aspx`` page.
"""
from bs4 import BeautifulSoup

from config.settings import settings
from src.parcel_proxy.extractors.base import BaseExtractor, FieldRule, LabelFieldRule, TableRule
from src.parcel_proxy.models.records import ExtractedRecord
from src.parcel_proxy.utils.parcel_id import encode_parcel_id, format_trustee_parcel_id

OWNER_TABLE = "table#ownerFormView"

OWNER_PLACEHOLDER = "Could not parse owner/property information from Trustee site."
SUMMARY_PLACEHOLDER = (
    "Could not parse summary tax information. "
    "The table structure on the Trustee site may have changed."
)
TOTALS_PLACEHOLDER = (
    "Could not parse tax totals. "
    "The table structure on the Trustee site may have changed."
)


class TrusteeExtractor(BaseExtractor):
    """
    Extractor for the Trustee tax inquiry page.

    The summary table is the one under ``#PanelMain`` whose
    ``tr.headerBackground`` row carries the Year, Assessment and Total Due
    columns; the totals table is recognized by its sum labels.
    """

    source = "trustee"

    field_rules = (
        FieldRule("total_tax", "span#LabelTaxSum"),
        FieldRule("total_due", "span#LabelDueSum"),
    )

    label_rules = (
        LabelFieldRule("owner_name", "Owner Name:", OWNER_TABLE),
        LabelFieldRule("property_location", "Property Location:", OWNER_TABLE),
        LabelFieldRule("mailing_address", "Mailing Address:", OWNER_TABLE),
        LabelFieldRule("trustee_parcel_id", "Parcel ID#:", OWNER_TABLE),
    )

    table_rules = (
        TableRule(
            name="tax_years",
            placeholder=SUMMARY_PLACEHOLDER,
            scope="#PanelMain",
            header_row="tr.headerBackground",
            header_labels=("Year", "Assessment", "Total Due"),
            link_patterns=("Drilldown.aspx",),
        ),
        TableRule(
            name="totals",
            placeholder=TOTALS_PLACEHOLDER,
            scope="#PanelMain",
            contains=("span#LabelTaxSum", "span#LabelDueSum"),
            link_patterns=("Drilldown.aspx",),
        ),
    )

    def extract_extra(self, soup: BeautifulSoup, record: ExtractedRecord) -> None:
        if soup.select_one(OWNER_TABLE) is None:
            record.placeholders["owner"] = OWNER_PLACEHOLDER

        # Per-year payment detail lives on Drilldown.aspx, which is not fetched
        trustee_id = format_trustee_parcel_id(record.parcel_id)
        if trustee_id:
            record.fields["payment_history_url"] = settings.trustee_url.replace(
                "{parcel_id}", encode_parcel_id(trustee_id)
            )
