"""
City of Memphis Tax Extractor

Reads the ePayments property page: owner block spans and the tax detail grid.
"""
from src.parcel_proxy.extractors.base import BaseExtractor, FieldRule, TableRule

MUNICIPAL_TABLE_PLACEHOLDER = (
    "Could not parse City of Memphis tax details table. Structure may have changed."
)


class MunicipalTaxExtractor(BaseExtractor):
    """Extractor for the City of Memphis property tax page."""

    source = "municipal"

    field_rules = (
        FieldRule("parcel_number", "#MainBodyPlaceHolder_lblParcelNo"),
        FieldRule("owner_name", "#MainBodyPlaceHolder_lblOwnerName"),
        FieldRule("property_address", "#MainBodyPlaceHolder_lblOwnerAddress"),
        FieldRule("current_balance", "#MainBodyPlaceHolder_lblCurrBalance"),
    )

    table_rules = (
        TableRule(
            name="tax_details",
            placeholder=MUNICIPAL_TABLE_PLACEHOLDER,
            selector="table#MainBodyPlaceHolder_gridDetail",
            link_patterns=("javascript:ShowHistory",),
        ),
    )
