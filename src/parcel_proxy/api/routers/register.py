"""
Register of Deeds Router

JSON-in/JSON-out proxy for the Register of Deeds ``completedetails`` API.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from src.parcel_proxy.api.dependencies import get_lookup_service, get_register_service
from src.parcel_proxy.api.schemas import ERROR_RESPONSES, RegisterLookupRequest
from src.parcel_proxy.fetchers import REGISTER
from src.parcel_proxy.models.register import RegisterDocuments
from src.parcel_proxy.services.lookup import ParcelLookupService
from src.parcel_proxy.services.register_documents import RegisterDocumentsService
from src.parcel_proxy.utils.logger import bind_lookup_context, get_logger
from src.parcel_proxy.utils.parcel_id import require_parcel_id

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["register"])


@router.post("/register-proxy", responses=ERROR_RESPONSES)
def register_proxy(
    request: Optional[RegisterLookupRequest] = Body(None),
    lookup: ParcelLookupService = Depends(get_lookup_service),
):
    """
    Forward a parcel lookup to the Register of Deeds and return its JSON.

    Args:
        request: Body carrying the parcel id
        lookup: Lookup service

    Returns:
        Upstream payload, unchanged
    """
    parcel_id = require_parcel_id(request.parcel_id if request else None)
    bind_lookup_context(REGISTER, parcel_id)
    logger.info("register_proxy_request")

    return JSONResponse(content=lookup.fetch_register(parcel_id))


@router.post("/register-documents", response_model=RegisterDocuments, responses=ERROR_RESPONSES)
def register_documents(
    request: Optional[RegisterLookupRequest] = Body(None),
    service: RegisterDocumentsService = Depends(get_register_service),
):
    """
    Document history for a parcel, with provenance.

    Falls back to known sample records (``provenance="fallback"``) when the
    Register of Deeds cannot be reached.
    """
    parcel_id = require_parcel_id(request.parcel_id if request else None)
    bind_lookup_context(REGISTER, parcel_id)

    return service.get_documents(parcel_id)
