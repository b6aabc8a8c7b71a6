"""
Tax & Assessment Router

Raw HTML proxies for the Trustee, Assessor and City of Memphis pages, plus
structured variants that run the matching extractor server-side.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.parcel_proxy.api.dependencies import get_lookup_service
from src.parcel_proxy.api.responder import html_response
from src.parcel_proxy.api.schemas import ERROR_RESPONSES
from src.parcel_proxy.fetchers import ASSESSOR, MUNICIPAL, TRUSTEE
from src.parcel_proxy.models.records import ExtractedRecord
from src.parcel_proxy.services.lookup import ParcelLookupService
from src.parcel_proxy.utils.logger import bind_lookup_context

router = APIRouter(prefix="/api", tags=["tax"])


def _raw(source: str, parcel_id: Optional[str], lookup: ParcelLookupService):
    bind_lookup_context(source, parcel_id or "")
    return html_response(lookup.fetch_html(source, parcel_id))


def _record(source: str, parcel_id: Optional[str], lookup: ParcelLookupService) -> ExtractedRecord:
    bind_lookup_context(source, parcel_id or "")
    return lookup.lookup(source, parcel_id)


@router.get("/trustee-tax-proxy", responses=ERROR_RESPONSES)
def trustee_tax_proxy(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """Trustee tax inquiry page, re-served as text/html."""
    return _raw(TRUSTEE, parcelId, lookup)


@router.get("/assessor-proxy", responses=ERROR_RESPONSES)
def assessor_proxy(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """Assessor property details page, re-served as text/html."""
    return _raw(ASSESSOR, parcelId, lookup)


@router.get("/memphis-tax-proxy", responses=ERROR_RESPONSES)
def memphis_tax_proxy(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """City of Memphis property tax page, re-served as text/html."""
    return _raw(MUNICIPAL, parcelId, lookup)


@router.get("/trustee-tax", response_model=ExtractedRecord, responses=ERROR_RESPONSES)
def trustee_tax(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """
    Owner block, tax-year summary and totals from the Trustee.

    Missing sections come back as absent fields and placeholder text.
    """
    return _record(TRUSTEE, parcelId, lookup)


@router.get("/assessor", response_model=ExtractedRecord, responses=ERROR_RESPONSES)
def assessor(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """Cleaned Assessor panels plus the fields and tables found in them."""
    return _record(ASSESSOR, parcelId, lookup)


@router.get("/memphis-tax", response_model=ExtractedRecord, responses=ERROR_RESPONSES)
def memphis_tax(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """Owner block and tax detail grid from the City of Memphis."""
    return _record(MUNICIPAL, parcelId, lookup)
