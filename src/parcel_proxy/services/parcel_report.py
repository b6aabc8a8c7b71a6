"""
Parcel Report Service

Gathers the Trustee, Assessor and City of Memphis records for one parcel,
the data behind the viewer's printable report. Sources run concurrently and
fail independently.
"""
import asyncio
from typing import Any, Dict, Optional

from src.parcel_proxy.errors import ProxyError
from src.parcel_proxy.extractors.assessor import ASSESSOR_PLACEHOLDER
from src.parcel_proxy.fetchers import ASSESSOR, MUNICIPAL, TRUSTEE
from src.parcel_proxy.services.lookup import ParcelLookupService
from src.parcel_proxy.utils.logger import get_logger
from src.parcel_proxy.utils.parcel_id import require_parcel_id

logger = get_logger(__name__)

REPORT_SOURCES = (TRUSTEE, ASSESSOR, MUNICIPAL)


async def _section(lookup: ParcelLookupService, source: str, parcel_id: str) -> Dict[str, Any]:
    try:
        record = await asyncio.to_thread(lookup.lookup, source, parcel_id)
    except ProxyError as e:
        logger.warning("report_section_failed", source=source, error_type=type(e).__name__)
        return {"status": "error", "error": e.to_dict()}

    section = {"status": "ok", "record": record.model_dump()}
    if source == ASSESSOR:
        section["combined_html"] = record.combined_html(ASSESSOR_PLACEHOLDER)
    return section


async def build_parcel_report(
    parcel_id: Optional[str],
    lookup: Optional[ParcelLookupService] = None,
) -> Dict[str, Any]:
    """
    Build the combined report for a parcel.

    Args:
        parcel_id: GIS parcel identifier
        lookup: Lookup service (for testing)

    Returns:
        {"parcel_id": ..., "sections": {source: {"status", "record" | "error"}}}

    Raises:
        InputError: missing parcel id
    """
    parcel_id = require_parcel_id(parcel_id)
    lookup = lookup or ParcelLookupService()

    results = await asyncio.gather(*(_section(lookup, source, parcel_id) for source in REPORT_SOURCES))
    sections = dict(zip(REPORT_SOURCES, results))

    logger.info(
        "parcel_report_built",
        parcel_id=parcel_id,
        failed=[name for name, s in sections.items() if s["status"] != "ok"],
    )
    return {"parcel_id": parcel_id, "sections": sections}
