"""
Register Documents Service

Register of Deeds document history for a parcel, with a documented
fallback: when the live service cannot be reached, previously verified
sample records are returned and flagged as such.
"""
from typing import Dict, List, Optional

from pydantic import ValidationError

from config.settings import settings
from src.parcel_proxy.errors import ExtractionError, TransportError
from src.parcel_proxy.fetchers import REGISTER
from src.parcel_proxy.models.register import RegisterDocuments, RegisterSale, sort_sales_newest_first
from src.parcel_proxy.services.lookup import ParcelLookupService
from src.parcel_proxy.utils.logger import get_logger
from src.parcel_proxy.utils.parcel_id import encode_parcel_id, require_parcel_id

logger = get_logger(__name__)

LIVE_NOTICE = "Showing the latest property documents directly from the Register of Deeds database."
FALLBACK_NOTICE = (
    "The Register of Deeds service is unavailable. Showing previously retrieved sample "
    "documents for this parcel; visit the Register of Deeds website for full details."
)
FALLBACK_EMPTY_NOTICE = (
    "The Register of Deeds service is unavailable and no sample documents are on file "
    "for this parcel. Visit the Register of Deeds website for full details."
)


def _sample(parcel_id: str, price: str, transno: str, saledate: str, instrtyp: str) -> Dict[str, str]:
    return {
        "PARID": parcel_id,
        "PRICE": price,
        "TRANSNO": transno,
        "SALEDATE": saledate,
        "INSTRTYP": instrtyp,
        "URL": settings.register_document_url.replace("{doc_number}", transno),
    }


FALLBACK_SAMPLES: Dict[str, List[Dict[str, str]]] = {
    "063002  00025": [
        _sample("063002  00025", "$0", "24086365", "09/19/2024", "CH"),
        _sample("063002  00025", "$0", "14032581", "03/18/2014", "CD"),
        _sample("063002  00025", "$70,000", "14028941", "03/18/2014", "WD"),
        _sample("063002  00025", "$0", "14022309", "02/24/2014", "QC"),
    ],
}


def parse_sales(payload: dict) -> List[RegisterSale]:
    """
    Sale rows from a live Register payload.

    Raises:
        ExtractionError: ``sales`` is not a list of objects, or a row does
            not validate
    """
    rows = payload.get("sales")
    if rows is None:
        return []
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise ExtractionError("The Register of Deeds sales list had an unexpected shape.", source=REGISTER)
    try:
        return [RegisterSale.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.warning("register_sales_invalid", error_count=e.error_count())
        raise ExtractionError("The Register of Deeds sales list had an invalid entry.", source=REGISTER)


def deeds_search_url(parcel_id: str) -> str:
    return settings.register_deeds_search_url.replace("{parcel_id}", encode_parcel_id(parcel_id))


class RegisterDocumentsService:
    """
    Document lookup for the parcel viewer's sales history tab.

    Any transport failure (connection, TLS, timeout, HTTP error, oversize)
    triggers the fallback when it is enabled; input and parse errors do not.
    """

    def __init__(
        self,
        lookup: Optional[ParcelLookupService] = None,
        fallback_enabled: Optional[bool] = None,
        samples: Optional[Dict[str, List[Dict[str, str]]]] = None,
    ):
        self.lookup = lookup or ParcelLookupService()
        self.fallback_enabled = (
            settings.register_fallback_enabled if fallback_enabled is None else fallback_enabled
        )
        self.samples = FALLBACK_SAMPLES if samples is None else samples

    def get_documents(self, parcel_id: Optional[str]) -> RegisterDocuments:
        """
        Documents recorded against a parcel.

        Returns:
            RegisterDocuments with provenance "live", or "fallback" when the
            live service failed

        Raises:
            InputError: missing parcel id
            TransportError: live service failed and the fallback is disabled
            ExtractionError: the live payload was not JSON or had a malformed sales list
        """
        parcel_id = require_parcel_id(parcel_id)

        try:
            payload = self.lookup.fetch_register(parcel_id)
        except TransportError as e:
            if not self.fallback_enabled:
                raise
            logger.warning(
                "register_fallback_used",
                parcel_id=parcel_id,
                error_type=type(e).__name__,
                error=e.message,
            )
            return self.fallback(parcel_id)

        return self._build(parcel_id, "live", LIVE_NOTICE, payload.get("content") or {}, parse_sales(payload))

    def fallback(self, parcel_id: str) -> RegisterDocuments:
        """Known sample records for ``parcel_id``, clearly flagged as fallback data."""
        samples = [RegisterSale.model_validate(sale) for sale in self.samples.get(parcel_id, [])]
        notice = FALLBACK_NOTICE if samples else FALLBACK_EMPTY_NOTICE
        return self._build(parcel_id, "fallback", notice, {}, samples)

    def _build(
        self,
        parcel_id: str,
        provenance: str,
        notice: str,
        content: dict,
        sales: List[RegisterSale],
    ) -> RegisterDocuments:
        ordered = sort_sales_newest_first(sales)
        return RegisterDocuments(
            parcel_id=parcel_id,
            provenance=provenance,
            notice=notice,
            deeds_search_url=deeds_search_url(parcel_id),
            content=content if isinstance(content, dict) else {},
            sales=[sale.to_display() for sale in ordered],
            last_sale_price=ordered[0].PRICE if ordered else None,
        )
