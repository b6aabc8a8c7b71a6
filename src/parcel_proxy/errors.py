"""
Proxy Errors

Exception hierarchy shared by the fetch, extract and respond stages.

Transport and extraction errors are raised inside the pipelines and caught
at the API boundary, where they become structured JSON responses.
"""
from typing import Optional


class ProxyError(Exception):
    """
    Base class for every failure a lookup can surface to its caller.

    Attributes:
        status_code: HTTP status returned to the browser
        error_code: Stable machine-readable error name
        source: Upstream source name, when known
    """

    status_code: int = 500
    error_code: str = "proxy_error"
    default_message: str = "The lookup could not be completed."

    def __init__(self, message: Optional[str] = None, source: Optional[str] = None):
        self.message = message or self.default_message
        self.source = source
        super().__init__(self.message)

    @property
    def upstream_status(self) -> Optional[int]:
        return None

    def to_dict(self) -> dict:
        return {
            "error": self.error_code,
            "message": self.message,
            "source": self.source,
            "upstream_status": self.upstream_status,
        }


class InputError(ProxyError):
    """Missing or empty parcel identifier."""

    status_code = 400
    error_code = "missing_parcel_id"
    default_message = "Parcel ID is required."


class TransportError(ProxyError):
    """The upstream request did not produce a usable response."""

    status_code = 502
    error_code = "transport_error"
    default_message = "The upstream records service could not be reached."


class ConnectionFailed(TransportError):
    """DNS resolution failed or the connection was refused."""

    status_code = 503
    error_code = "connection_failed"
    default_message = "Could not connect to the upstream records service."


class TlsFailed(TransportError):
    """TLS handshake failed, even with the legacy compatibility option."""

    status_code = 502
    error_code = "tls_failed"
    default_message = "Secure connection to the upstream records service failed."


class FetchTimeout(TransportError):
    """The upstream did not answer within the configured timeout."""

    status_code = 504
    error_code = "timeout"
    default_message = "The request to the upstream records service timed out."


class HttpStatusError(TransportError):
    """The upstream answered with a non-2xx status."""

    status_code = 502
    error_code = "http_error"
    default_message = "The upstream records service returned an error."

    def __init__(self, status: int, message: Optional[str] = None, source: Optional[str] = None):
        self.status = status
        super().__init__(
            message or f"The upstream records service returned HTTP {status}.",
            source=source,
        )

    @property
    def upstream_status(self) -> Optional[int]:
        return self.status


class ResponseTooLarge(TransportError):
    """The upstream body exceeded the configured size limit."""

    status_code = 502
    error_code = "response_too_large"
    default_message = "The upstream response exceeded the maximum allowed size."


class ExtractionError(ProxyError):
    """The fetched body could not be parsed as HTML (or JSON) at all."""

    status_code = 500
    error_code = "extraction_failed"
    default_message = "Could not parse page structure."
