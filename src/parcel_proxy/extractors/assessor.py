"""
Assessor Extractor

Extracts the collapsible content panels of an Assessor of Property
``propertyDetails`` page. Each panel is located and cleaned on its own, so
a page missing some panels still yields the rest.
"""
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Tag

from src.parcel_proxy.extractors.base import (
    BaseExtractor,
    LabelFieldRule,
    detached_copy,
    neutralize_links,
    table_from_element,
    text_of,
)
from src.parcel_proxy.models.records import ExtractedRecord, ExtractedTable

ASSESSOR_PLACEHOLDER = "Could not parse Assessor property details. The page structure may have changed."
SKETCH_PLACEHOLDER = "[Building Sketch Area - View on live site]"
GIS_PLACEHOLDER = "[GIS Map Area - View on live site]"

# Links whose whole container is dropped from a panel
REMOVED_LINK_PATTERNS = ("/gis?parcelid=", "/print?parcelid=", "/InformalReview?parcelid=")


@dataclass(frozen=True)
class PanelRule:
    """
    A content panel, located by the id of its header element.

    Attributes:
        name: Fragment name in the record
        header_id: id of the panel header; the panel is its parent card
        title: Title used when the page's own card title is missing
        table: Table name to extract from the panel, if any
    """

    name: str
    header_id: str
    title: str
    table: Optional[str] = None

    @property
    def container(self) -> str:
        return f"div:has(> #{self.header_id})"


PANELS = (
    PanelRule("owner", "headingOne", "Property Location and Owner Information"),
    PanelRule("appraisal", "headingNine", "Appraisal and Assessment Information"),
    PanelRule("improvements", "headingThree", "Improvement Details"),
    PanelRule("other_buildings", "headingFour", "Other Buildings", table="outbuildings"),
    PanelRule("permits", "headingFive", "Permits", table="permit_history"),
    PanelRule("sales", "headingSix", "Sales History", table="sales_history"),
)

_OWNER, _APPRAISAL, _IMPROVEMENTS = (p.container for p in PANELS[:3])


class AssessorExtractor(BaseExtractor):
    """Extractor for the Assessor of Property details page."""

    source = "assessor"
    panels = PANELS

    label_rules = (
        LabelFieldRule("owner_name", "Owner Name", _OWNER),
        LabelFieldRule("property_address", "Property Address", _OWNER),
        LabelFieldRule("owner_address", "Owner Address", _OWNER),
        LabelFieldRule("municipality", "Municipality", _OWNER),
        LabelFieldRule("land_use", "Land Use", _OWNER),
        LabelFieldRule("tax_year", "Tax Year", _APPRAISAL),
        LabelFieldRule("land_appraisal", "Land Appraisal", _APPRAISAL),
        LabelFieldRule("building_appraisal", "Building Appraisal", _APPRAISAL),
        LabelFieldRule("total_appraisal", "Total Appraisal", _APPRAISAL),
        LabelFieldRule("total_assessment", "Total Assessment", _APPRAISAL),
        LabelFieldRule("year_built", "Year Built", _IMPROVEMENTS),
        LabelFieldRule("stories", "Stories", _IMPROVEMENTS),
        LabelFieldRule("total_rooms", "Total Rooms", _IMPROVEMENTS),
        LabelFieldRule("bedrooms", "Bedrooms", _IMPROVEMENTS),
        LabelFieldRule("full_baths", "Full Baths", _IMPROVEMENTS),
        LabelFieldRule("half_baths", "Half Baths", _IMPROVEMENTS),
    )

    def extract_extra(self, soup: BeautifulSoup, record: ExtractedRecord) -> None:
        for panel in self.panels:
            header = soup.find(id=panel.header_id)
            card = header.parent if header is not None else None

            if panel.table:
                table = card.find("table") if card is not None else None
                if table is not None:
                    record.tables[panel.table] = table_from_element(panel.table, table)
                else:
                    missing = f"No {panel.title} table found on the Assessor page."
                    record.tables[panel.table] = ExtractedTable(name=panel.table, placeholder=missing)
                    record.placeholders[panel.table] = missing

            if card is None:
                record.placeholders[panel.name] = f"{panel.title} section not found on the Assessor page."
                continue

            record.fragments[panel.name] = clean_panel(card, panel.title)

        if not record.fragments:
            record.placeholders["panels"] = ASSESSOR_PLACEHOLDER


def clean_panel(card: Tag, title: str) -> str:
    """
    Return a static, print-friendly copy of one panel.

    Collapse toggles, buttons, links and the sketch/GIS widgets do not work
    outside the Assessor site and are removed or replaced.
    """
    panel = detached_copy(card)

    for toggle in panel.select('[data-toggle="collapse"], [data-bs-toggle="collapse"]'):
        toggle.attrs.pop("data-toggle", None)
        toggle.attrs.pop("data-bs-toggle", None)

    for section in panel.select(".collapse"):
        classes = section.get("class", [])
        if "show" not in classes:
            section["class"] = classes + ["show"]
        style = section.get("style", "").strip().rstrip(";")
        section["style"] = f"{style}; display: block" if style else "display: block"

    for pattern in REMOVED_LINK_PATTERNS:
        for link in panel.select(f'a[href*="{pattern}"]'):
            if link.decomposed:
                continue
            container = link.parent
            if container is not None and container is not panel:
                container.decompose()
            else:
                link.decompose()

    for button in panel.find_all("button"):
        if not button.decomposed:
            button.decompose()

    for widget_id, placeholder in (("sketchdiv", SKETCH_PLACEHOLDER), ("gisSection", GIS_PLACEHOLDER)):
        widget = panel.find(id=widget_id)
        if widget is not None:
            widget.clear()
            paragraph = BeautifulSoup("", "html.parser").new_tag("p")
            paragraph.string = placeholder
            widget.append(paragraph)

    for table in panel.find_all("table"):
        classes = [c for c in table.get("class", []) if c != "table-borderless"]
        if "data-table" not in classes:
            classes.append("data-table")
        table["class"] = classes
        table["style"] = "width: 100%"

    card_header = panel.select_one(".card-header")
    if card_header is not None:
        heading = text_of(card_header.select_one(".card-title")) or title
        card_header.clear()
        h5 = BeautifulSoup("", "html.parser").new_tag("h5")
        h5.string = heading
        card_header.append(h5)

    neutralize_links(panel)
    return str(panel)
