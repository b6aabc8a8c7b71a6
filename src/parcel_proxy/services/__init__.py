"""
Services Package

Lookup pipelines composed from fetchers and extractors.
"""

from .lookup import ParcelLookupService
from .parcel_report import build_parcel_report
from .register_documents import RegisterDocumentsService

__all__ = [
    "ParcelLookupService",
    "RegisterDocumentsService",
    "build_parcel_report",
]
