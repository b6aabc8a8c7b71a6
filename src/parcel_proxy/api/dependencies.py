"""
FastAPI Dependencies

Provides dependency injection for the lookup services.
"""
from functools import lru_cache

from src.parcel_proxy.services.lookup import ParcelLookupService
from src.parcel_proxy.services.register_documents import RegisterDocumentsService


@lru_cache(maxsize=1)
def get_lookup_service() -> ParcelLookupService:
    """
    Lookup service dependency.

    The service only holds frozen source configuration, so one instance
    serves every request.

    Returns:
        ParcelLookupService built from settings
    """
    return ParcelLookupService()


def get_register_service() -> RegisterDocumentsService:
    """
    Register documents dependency.

    Returns:
        RegisterDocumentsService sharing the lookup service
    """
    return RegisterDocumentsService(lookup=get_lookup_service())
