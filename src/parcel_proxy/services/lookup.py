"""
Parcel Lookup Service

Composes fetcher and extractor for each upstream source. Every call is a
single attempt; failures are raised as ProxyError subclasses for the API
layer to turn into responses.
"""
import json
from typing import Dict, Optional

from src.parcel_proxy.errors import ExtractionError
from src.parcel_proxy.extractors import (
    AssessorExtractor,
    BaseExtractor,
    MunicipalTaxExtractor,
    TrusteeExtractor,
)
from src.parcel_proxy.fetchers import (
    ASSESSOR,
    MUNICIPAL,
    REGISTER,
    TRUSTEE,
    HttpFetcher,
    build_source_configs,
)
from src.parcel_proxy.models.records import ExtractedRecord, FetchResult, SourceEndpointConfig
from src.parcel_proxy.utils.logger import get_logger
from src.parcel_proxy.utils.parcel_id import require_parcel_id

logger = get_logger(__name__)


def default_extractors() -> Dict[str, BaseExtractor]:
    return {
        TRUSTEE: TrusteeExtractor(),
        ASSESSOR: AssessorExtractor(),
        MUNICIPAL: MunicipalTaxExtractor(),
    }


class ParcelLookupService:
    """
    Fetch-then-extract pipelines for the county records sources.

    Holds only immutable configuration; per-lookup state lives in local
    variables of each call.
    """

    def __init__(
        self,
        fetcher: Optional[HttpFetcher] = None,
        sources: Optional[Dict[str, SourceEndpointConfig]] = None,
        extractors: Optional[Dict[str, BaseExtractor]] = None,
    ):
        """
        Initialize the service.

        Args:
            fetcher: Fetcher to use (for testing)
            sources: Source configuration keyed by source name
            extractors: Extractors keyed by source name
        """
        self.fetcher = fetcher or HttpFetcher()
        self.sources = sources or build_source_configs()
        self.extractors = extractors or default_extractors()

    def source(self, name: str) -> SourceEndpointConfig:
        return self.sources[name]

    def fetch(self, source: str, parcel_id: Optional[str]) -> FetchResult:
        """
        Fetch the upstream response for a parcel.

        Raises:
            InputError: when the parcel id is missing
            TransportError: when the upstream could not be read
        """
        return self._fetch(source, require_parcel_id(parcel_id))

    def _fetch(self, source: str, parcel_id: str) -> FetchResult:
        result = self.fetcher.fetch(self.source(source), parcel_id)
        return result.raise_for_failure()

    def fetch_html(self, source: str, parcel_id: Optional[str]) -> str:
        """Raw page text for re-serving to the browser (may be empty)."""
        return self.fetch(source, parcel_id).text

    def lookup(self, source: str, parcel_id: Optional[str]) -> ExtractedRecord:
        """
        Fetch and extract a structured record from an HTML source.

        Raises:
            InputError, TransportError, ExtractionError
        """
        parcel_id = require_parcel_id(parcel_id)
        result = self._fetch(source, parcel_id)
        try:
            return self.extractors[source].parse(result.text, parcel_id=parcel_id)
        except ExtractionError as e:
            e.source = source
            logger.warning("extraction_failed", source=source, error=e.message)
            raise

    def fetch_register(self, parcel_id: Optional[str]) -> dict:
        """
        Register of Deeds ``completedetails`` payload for a parcel.

        An empty body is returned as an empty payload.

        Raises:
            InputError, TransportError, ExtractionError (body is not JSON)
        """
        result = self.fetch(REGISTER, parcel_id)
        if result.is_empty:
            return {}
        try:
            payload = json.loads(result.text)
        except ValueError as e:
            logger.warning("register_payload_invalid", error=str(e))
            raise ExtractionError("The Register of Deeds response was not valid JSON.", source=REGISTER)
        if not isinstance(payload, dict):
            raise ExtractionError("The Register of Deeds response had an unexpected shape.", source=REGISTER)
        return payload
