"""
Extractor Base

Shared HTML helpers and the declarative rule types every source extractor
is built from. Extractors never perform I/O; ``parse`` is a pure function
of the HTML it is given.
"""
import copy
import re
from abc import ABC
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from src.parcel_proxy.errors import ExtractionError
from src.parcel_proxy.models.records import ExtractedRecord, ExtractedTable
from src.parcel_proxy.utils.logger import get_logger

logger = get_logger(__name__)

_SPACE_RE = re.compile(r"\s+")
LABEL_TAGS = ["td", "th", "dt", "label", "strong", "b", "span"]
SCRIPT_ATTRIBUTES = ("onclick", "ondblclick", "onmousedown", "onmouseup", "onkeydown", "onchange")


@dataclass(frozen=True)
class FieldRule:
    """A scalar field located by CSS selector (usually an element id)."""

    name: str
    selector: str


@dataclass(frozen=True)
class LabelFieldRule:
    """A scalar field located by its label text inside a known container."""

    name: str
    label: str
    container: str


@dataclass(frozen=True)
class TableRule:
    """
    A table located by structural signature.

    Attributes:
        name: Table name in the record
        placeholder: Text produced when no table matches
        selector: Direct CSS selector for the table, when the site gives it an id
        scope: CSS selector limiting the candidate tables
        header_row: CSS selector of the header row inside a candidate table
        header_labels: Labels that must all appear in the header row
        contains: CSS selectors that must all match inside the table
        link_patterns: href substrings of links rewritten to plain text
    """

    name: str
    placeholder: str
    selector: Optional[str] = None
    scope: Optional[str] = None
    header_row: Optional[str] = None
    header_labels: Tuple[str, ...] = ()
    contains: Tuple[str, ...] = ()
    link_patterns: Tuple[str, ...] = ()


def parse_html(html: Optional[str]) -> BeautifulSoup:
    """
    Parse upstream HTML into a traversable tree.

    Raises:
        ExtractionError: for empty input or text containing no elements at all
    """
    if html is None or not str(html).strip():
        raise ExtractionError("The upstream page was empty.")

    soup = BeautifulSoup(html, "html.parser")
    if soup.find(True) is None:
        raise ExtractionError("The upstream response was not an HTML document.")
    return soup


def normalize_text(value: str) -> str:
    return _SPACE_RE.sub(" ", value.replace("\xa0", " ")).strip()


def text_of(element: Optional[Tag]) -> Optional[str]:
    """Whitespace-normalized text of an element, None when the element is missing."""
    if element is None:
        return None
    return normalize_text(element.get_text(" "))


def field_text(element: Optional[Tag]) -> Optional[str]:
    """
    Text of a scalar field, trimmed at the ends only.

    Internal spacing is kept: parcel ids such as ``"063002  00025"`` use
    runs of spaces as part of the identifier.
    """
    if element is None:
        return None
    return element.get_text().replace("\xa0", " ").strip()


def _label_key(text: str) -> str:
    return normalize_text(text).rstrip(":").strip().lower()


def find_labeled_value(container: Tag, label: str) -> Optional[str]:
    """
    Find the value printed next to ``label`` inside ``container``.

    Handles ``<td>Label:</td><td>value</td>`` rows (optionally with the label
    wrapped in ``<strong>``), ``<dt>/<dd>`` pairs and inline
    ``<span>Label</span><span>value</span>`` layouts.
    """
    wanted = _label_key(label)
    for element in container.find_all(LABEL_TAGS):
        if _label_key(element.get_text(" ")) != wanted:
            continue

        cell = element if element.name in ("td", "th", "dt") else element.find_parent(["td", "th", "dt"])
        if cell is not None and any(parent is container for parent in cell.parents):
            sibling = cell.find_next_sibling(["td", "th", "dd"])
            if sibling is not None:
                return field_text(sibling)

        sibling = element.find_next_sibling()
        if sibling is not None:
            return field_text(sibling)
    return None


def own_rows(table: Tag) -> List[Tag]:
    """Rows belonging to ``table`` itself, skipping rows of nested tables."""
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def row_cells(row: Tag) -> List[str]:
    return [text_of(cell) or "" for cell in row.find_all(["td", "th"], recursive=False)]


def header_labels(row: Tag) -> List[str]:
    cells = row.find_all("th", recursive=False) or row.find_all("td", recursive=False)
    return [text_of(cell) or "" for cell in cells]


def neutralize_links(element: Tag, link_patterns: Sequence[str] = ()) -> Tag:
    """
    Make markup inert for display outside its original page.

    Links whose href contains one of ``link_patterns`` (or uses the
    ``javascript:`` scheme) are replaced by their text, and inline script
    handlers are dropped. Rows, cells and cell text are left untouched.

    Args:
        element: Tag to clean in place
        link_patterns: href substrings to neutralize; empty means every link

    Returns:
        The same tag, for chaining
    """
    for link in element.find_all("a"):
        href = link.get("href") or ""
        scripted = href.strip().lower().startswith("javascript:")
        if scripted or not link_patterns or any(p in href for p in link_patterns):
            link.replace_with(link.get_text())

    for tag in [element, *element.find_all(True)]:
        for attribute in SCRIPT_ATTRIBUTES:
            if attribute in tag.attrs:
                del tag.attrs[attribute]
    return element


def _is_inside(element: Tag, ancestor: Tag) -> bool:
    return any(parent is ancestor for parent in element.parents)


def detached_copy(element: Tag) -> Tag:
    """Deep copy of ``element`` so cleaning never touches the parsed page."""
    return copy.copy(element)


class BaseExtractor(ABC):
    """
    Capability interface shared by every source extractor.

    Subclasses declare their rules as class attributes and may override
    ``extract_extra`` for source-specific assembly.
    """

    source: str = ""
    field_rules: Sequence[FieldRule] = ()
    label_rules: Sequence[LabelFieldRule] = ()
    table_rules: Sequence[TableRule] = ()

    def parse(self, html: str, parcel_id: Optional[str] = None) -> ExtractedRecord:
        """
        Extract a record from one upstream page.

        Args:
            html: Page markup as fetched
            parcel_id: Identifier the page was fetched for

        Returns:
            ExtractedRecord; missing items are absent fields or placeholders

        Raises:
            ExtractionError: if the markup cannot be parsed at all
        """
        soup = parse_html(html)
        record = ExtractedRecord(source=self.source, parcel_id=parcel_id)

        for rule in self.field_rules:
            record.fields[rule.name] = field_text(soup.select_one(rule.selector))

        for rule in self.label_rules:
            container = soup.select_one(rule.container)
            value = find_labeled_value(container, rule.label) if container is not None else None
            record.fields[rule.name] = value

        for rule in self.table_rules:
            table = self.extract_table(soup, rule)
            record.tables[rule.name] = table
            if not table.found:
                record.placeholders[rule.name] = table.placeholder

        self.extract_extra(soup, record)

        if record.is_partial:
            logger.info(
                "extraction_partial",
                source=self.source,
                missing_fields=record.missing,
                placeholders=sorted(record.placeholders),
            )
        return record

    def extract_extra(self, soup: BeautifulSoup, record: ExtractedRecord) -> None:
        """Hook for source-specific extraction; default does nothing."""

    def find_table(self, soup: BeautifulSoup, rule: TableRule) -> Optional[Tag]:
        """Locate the table matching ``rule``'s signature, or None."""
        if rule.selector:
            candidates = soup.select(rule.selector)
        elif rule.scope:
            candidates = [t for scope in soup.select(rule.scope) for t in scope.find_all("table")]
        else:
            candidates = soup.find_all("table")

        matches = [table for table in candidates if self._matches(table, rule)]

        # Layout tables wrapping the real one match too; keep the innermost
        for table in matches:
            if not any(other is not table and _is_inside(other, table) for other in matches):
                return table
        return None

    @staticmethod
    def _matches(table: Tag, rule: TableRule) -> bool:
        if table.name != "table":
            return False
        if rule.header_labels:
            header = table.select_one(rule.header_row or "tr")
            if header is None:
                return False
            labels = header_labels(header)
            if not all(label in labels for label in rule.header_labels):
                return False
        return all(table.select_one(selector) is not None for selector in rule.contains)

    def extract_table(self, soup: BeautifulSoup, rule: TableRule) -> ExtractedTable:
        table = self.find_table(soup, rule)
        if table is None:
            return ExtractedTable(name=rule.name, placeholder=rule.placeholder)
        return table_from_element(rule.name, table, rule.header_row, rule.link_patterns)


def table_from_element(
    name: str,
    table: Tag,
    header_row: Optional[str] = None,
    link_patterns: Sequence[str] = (),
) -> ExtractedTable:
    """
    Build an ExtractedTable from a table element.

    The header is the row matching ``header_row``, or the first row when it
    consists of ``<th>`` cells. The returned html is a cleaned copy.
    """
    header = table.select_one(header_row) if header_row else None
    rows = own_rows(table)
    if header is None and rows and rows[0].find("th", recursive=False) is not None:
        header = rows[0]

    cleaned = neutralize_links(detached_copy(table), link_patterns)
    return ExtractedTable(
        name=name,
        header=header_labels(header) if header is not None else None,
        rows=[row_cells(row) for row in rows if row is not header],
        html=str(cleaned),
    )
