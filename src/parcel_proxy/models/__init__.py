"""
Data models for fetch results, extracted records and Register documents.
"""
from .records import (
    ExtractedRecord,
    ExtractedTable,
    FetchOutcome,
    FetchResult,
    SourceEndpointConfig,
)
from .register import RegisterDocuments, RegisterSale

__all__ = [
    "ExtractedRecord",
    "ExtractedTable",
    "FetchOutcome",
    "FetchResult",
    "SourceEndpointConfig",
    "RegisterDocuments",
    "RegisterSale",
]
