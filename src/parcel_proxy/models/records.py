"""
Record Data Models

Pydantic models for upstream source configuration, fetch outcomes and
extracted parcel records.
"""
from enum import Enum
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.parcel_proxy.errors import (
    ConnectionFailed,
    FetchTimeout,
    HttpStatusError,
    ResponseTooLarge,
    TlsFailed,
)
from src.parcel_proxy.utils.parcel_id import ParcelIdStyle


class SourceEndpointConfig(BaseModel):
    """
    Static configuration for one upstream source.

    Attributes:
        name: Source name used in logs and error bodies
        url_template: Upstream URL; ``{parcel_id}`` is replaced with the encoded id
        method: HTTP method used against the upstream
        parcel_param: JSON body key carrying the id (POST sources only)
        expected_content_type: Content type served back to the caller
        timeout: Request timeout in seconds
        legacy_tls: Allow legacy TLS renegotiation for this source's connection
        id_style: Source-specific parcel id spelling
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url_template: str
    method: Literal["GET", "POST"] = "GET"
    parcel_param: Optional[str] = None
    expected_content_type: str = "text/html"
    timeout: float = Field(20.0, gt=0)
    legacy_tls: bool = False
    id_style: ParcelIdStyle = ParcelIdStyle.AS_IS

    @field_validator("url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        """Only http(s) upstreams are allowed."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("url_template must be an http(s) URL")
        return v


class FetchOutcome(str, Enum):
    SUCCESS = "success"
    CONNECTION_FAILED = "connection_failed"
    TLS_FAILED = "tls_failed"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    RESPONSE_TOO_LARGE = "response_too_large"


class FetchResult(BaseModel):
    """
    Outcome of a single outbound request.

    Exactly one outcome is recorded; ``text`` is only populated on success.
    """

    source: str
    url: str
    outcome: FetchOutcome
    status_code: Optional[int] = None
    text: str = ""
    content_type: Optional[str] = None
    error: Optional[str] = None
    elapsed_ms: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.outcome == FetchOutcome.SUCCESS

    @property
    def is_empty(self) -> bool:
        """Connection succeeded but the upstream sent no content."""
        return self.ok and not self.text.strip()

    def raise_for_failure(self) -> "FetchResult":
        """
        Raise the TransportError matching this outcome.

        Returns:
            self, when the fetch succeeded
        """
        if self.outcome == FetchOutcome.SUCCESS:
            return self
        if self.outcome == FetchOutcome.HTTP_ERROR:
            raise HttpStatusError(self.status_code or 0, source=self.source)

        error_cls = {
            FetchOutcome.CONNECTION_FAILED: ConnectionFailed,
            FetchOutcome.TLS_FAILED: TlsFailed,
            FetchOutcome.TIMEOUT: FetchTimeout,
            FetchOutcome.RESPONSE_TOO_LARGE: ResponseTooLarge,
        }[self.outcome]
        raise error_cls(source=self.source)


class ExtractedTable(BaseModel):
    """
    A table pulled out of an upstream page.

    Attributes:
        name: Table name within its record (e.g. "tax_years")
        header: Header labels, when the table has a header row
        rows: Data rows as lists of cell text
        html: Cleaned, inert table markup for re-display
        placeholder: Human-readable note, set only when the table was not found
    """

    name: str
    header: Optional[List[str]] = None
    rows: List[List[str]] = Field(default_factory=list)
    html: Optional[str] = None
    placeholder: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.placeholder is None

    @property
    def row_count(self) -> int:
        return len(self.rows)


class ExtractedRecord(BaseModel):
    """
    Everything one extractor could locate on one page.

    Every field, table and fragment is independently optional; a missing
    item shows up in ``placeholders`` instead of failing the record.
    """

    source: str
    parcel_id: Optional[str] = None
    fields: Dict[str, Optional[str]] = Field(default_factory=dict)
    tables: Dict[str, ExtractedTable] = Field(default_factory=dict)
    fragments: Dict[str, str] = Field(default_factory=dict)
    placeholders: Dict[str, str] = Field(default_factory=dict)

    @property
    def missing(self) -> List[str]:
        """Names of fields that were not found."""
        return [name for name, value in self.fields.items() if value is None]

    @property
    def is_partial(self) -> bool:
        return bool(self.missing) or bool(self.placeholders)

    def get(self, name: str) -> Optional[str]:
        return self.fields.get(name)

    def combined_html(self, placeholder: str = "") -> str:
        """Fragments concatenated in extraction order, or ``placeholder`` if there are none."""
        if not self.fragments:
            return placeholder
        return "".join(self.fragments.values())
