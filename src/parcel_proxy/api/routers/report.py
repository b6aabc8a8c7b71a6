"""
Parcel Report Router

Combined Trustee/Assessor/City data for the printable parcel report.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.parcel_proxy.api.dependencies import get_lookup_service
from src.parcel_proxy.api.schemas import ERROR_RESPONSES
from src.parcel_proxy.services.lookup import ParcelLookupService
from src.parcel_proxy.services.parcel_report import build_parcel_report

router = APIRouter(prefix="/api", tags=["report"])


@router.get("/parcel-report", responses={400: ERROR_RESPONSES[400]})
async def parcel_report(
    parcelId: Optional[str] = Query(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """
    All scraped sources for one parcel.

    Each section succeeds or fails on its own; a failed section carries the
    same error body the single-source endpoint would return.
    """
    return await build_parcel_report(parcelId, lookup=lookup)
