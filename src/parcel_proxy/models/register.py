"""
Register of Deeds Data Models

Pydantic models for document (sale) records returned by the Register of
Deeds ``completedetails`` API.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

INSTRUMENT_TYPES = {
    "WD": "Warranty Deed",
    "QC": "Quit Claim Deed",
    "TD": "Trust Deed",
    "CD": "Correction Deed",
    "CH": "Change",
}


class RegisterSale(BaseModel):
    """
    One recorded document for a parcel.

    Field names follow the upstream payload (``PARID``, ``SALEDATE``, ...);
    unknown upstream keys are kept.

    Attributes:
        PARID: Parcel identifier
        PRICE: Sale price as formatted upstream (e.g. "$70,000")
        TRANSNO: Instrument / transaction number
        SALEDATE: Sale date, MM/DD/YYYY
        INSTRTYP: Instrument type code
        URL: Link to the scanned document
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    PARID: Optional[str] = None
    PRICE: Optional[str] = None
    TRANSNO: Optional[str] = None
    SALEDATE: Optional[str] = None
    INSTRTYP: Optional[str] = None
    URL: Optional[str] = None

    @property
    def sale_date(self) -> Optional[date]:
        """Parsed SALEDATE, or None when missing or malformed."""
        if not self.SALEDATE:
            return None
        try:
            return datetime.strptime(self.SALEDATE.strip(), "%m/%d/%Y").date()
        except ValueError:
            return None

    @property
    def instrument_label(self) -> Optional[str]:
        """Instrument code expanded with its description, e.g. "WD - Warranty Deed"."""
        code = (self.INSTRTYP or "").strip()
        if not code:
            return None
        description = INSTRUMENT_TYPES.get(code)
        return f"{code} - {description}" if description else code

    def to_display(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["instrument_label"] = self.instrument_label
        data["document_url"] = (self.URL or "").strip() or None
        return data


def sort_sales_newest_first(sales: List[RegisterSale]) -> List[RegisterSale]:
    """
    Order sales most recent first by SALEDATE.

    The sort is stable; undated sales keep their relative order at the end.
    """
    return sorted(sales, key=lambda s: s.sale_date or date.min, reverse=True)


class RegisterDocuments(BaseModel):
    """
    Register lookup result handed to the browser.

    Attributes:
        parcel_id: Parcel identifier that was looked up
        provenance: "live" for upstream data, "fallback" for known sample records
        notice: Text the viewer shows above the document table
        deeds_search_url: Register of Deeds search page for this parcel
        content: Parcel detail block from the upstream payload
        sales: Documents, most recent first
    """

    parcel_id: str
    provenance: Literal["live", "fallback"]
    notice: str
    deeds_search_url: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    sales: List[Dict[str, Any]] = Field(default_factory=list)
    last_sale_price: Optional[str] = None
