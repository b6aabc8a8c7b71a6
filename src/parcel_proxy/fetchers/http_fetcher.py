"""
HTTP Fetcher

Performs one outbound request per lookup against a county records site and
classifies the outcome. Never retries; a lookup is a single attempt.
"""
import re
import ssl
import time
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import urlsplit

import requests
from bs4 import UnicodeDammit
from requests.adapters import HTTPAdapter
from urllib3.exceptions import ReadTimeoutError

from config.settings import settings
from src.parcel_proxy.models.records import FetchOutcome, FetchResult, SourceEndpointConfig
from src.parcel_proxy.utils.logger import get_logger
from src.parcel_proxy.utils.parcel_id import encode_parcel_id, format_parcel_id

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024
_CHARSET_RE = re.compile(r"charset=[\"']?([\w.:-]+)", re.IGNORECASE)


def create_legacy_ssl_context() -> ssl.SSLContext:
    """
    Build a verifying SSL context that also accepts legacy renegotiation.

    Certificates and hostnames are still checked; only the
    OP_LEGACY_SERVER_CONNECT option is added.
    """
    context = ssl.create_default_context()
    context.options |= getattr(ssl, "OP_LEGACY_SERVER_CONNECT", 0x4)
    return context


class LegacyTLSAdapter(HTTPAdapter):
    """
    Transport adapter carrying its own SSL context.

    Mounted on a single session for a single origin, so the relaxed
    handshake never leaks to other connections.
    """

    def __init__(self, *args, **kwargs):
        self.ssl_context = create_legacy_ssl_context()
        super().__init__(*args, **kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["ssl_context"] = self.ssl_context
        return super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/"


def declared_charset(content_type: Optional[str]) -> Optional[str]:
    """Charset named in a Content-Type header, or None when none is declared."""
    match = _CHARSET_RE.search(content_type or "")
    return match.group(1) if match else None


def decode_body(body: bytes, content_type: Optional[str]) -> str:
    """
    Decode an upstream body.

    A charset in the Content-Type header wins; otherwise UTF-8 is tried
    before the page's own ``<meta charset>`` and byte sniffing. requests'
    ISO-8859-1 default for undeclared ``text/*`` is never used.
    """
    if not body:
        return ""
    charset = declared_charset(content_type)
    dammit = UnicodeDammit(
        body,
        known_definite_encodings=[charset] if charset else [],
        user_encodings=["utf-8"],
        is_html=True,
    )
    if dammit.unicode_markup is not None:
        return dammit.unicode_markup
    return body.decode("utf-8", errors="replace")


def _is_read_timeout(exc: requests.ConnectionError) -> bool:
    # requests re-raises body read timeouts as ConnectionError
    return any(isinstance(arg, ReadTimeoutError) for arg in exc.args)


class HttpFetcher:
    """
    Fetcher for county records sources.

    Each call opens its own ``requests.Session`` and closes it afterwards;
    nothing is shared between lookups.
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        max_response_bytes: Optional[int] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """
        Initialize the fetcher.

        Args:
            user_agent: Override the browser User-Agent (for testing)
            max_response_bytes: Override the response size limit
            session_factory: Session constructor (for testing)
        """
        self.user_agent = user_agent or settings.user_agent
        self.max_response_bytes = max_response_bytes or settings.max_response_bytes
        self.session_factory = session_factory

    def build_headers(self, config: SourceEndpointConfig) -> Dict[str, str]:
        """Browser-like request signature; some sources reject bare clients."""
        if config.expected_content_type == "application/json":
            accept = "application/json"
        else:
            accept = settings.accept_html
        return {
            "User-Agent": self.user_agent,
            "Accept": accept,
            "Accept-Language": settings.accept_language,
        }

    def build_request(self, config: SourceEndpointConfig, parcel_id: str) -> Tuple[str, Optional[dict]]:
        """
        Build the upstream URL and JSON body for a parcel.

        Returns:
            (url, json_body) where json_body is None for GET sources
        """
        formatted = format_parcel_id(parcel_id, config.id_style)
        url = config.url_template.replace("{parcel_id}", encode_parcel_id(formatted))

        body = None
        if config.method == "POST":
            body = {config.parcel_param or "parcelid": formatted}
        return url, body

    def fetch(self, config: SourceEndpointConfig, parcel_id: str) -> FetchResult:
        """
        Fetch the page or document for one parcel.

        Args:
            config: Upstream source configuration
            parcel_id: Parcel identifier as received from the caller

        Returns:
            FetchResult classified into exactly one outcome
        """
        url, body = self.build_request(config, parcel_id)
        logger.info(
            "fetch_started",
            source=config.name,
            url=url,
            method=config.method,
            legacy_tls=config.legacy_tls,
        )

        started = time.monotonic()
        session = self.session_factory()
        if config.legacy_tls:
            session.mount(_origin(url), LegacyTLSAdapter())

        try:
            result = self._send(session, config, url, body)
        except requests.exceptions.SSLError as e:
            result = self._failure(config, url, FetchOutcome.TLS_FAILED, e)
        except requests.Timeout as e:
            result = self._failure(config, url, FetchOutcome.TIMEOUT, e)
        except requests.ConnectionError as e:
            outcome = FetchOutcome.TIMEOUT if _is_read_timeout(e) else FetchOutcome.CONNECTION_FAILED
            result = self._failure(config, url, outcome, e)
        except requests.RequestException as e:
            result = self._failure(config, url, FetchOutcome.CONNECTION_FAILED, e)
        finally:
            session.close()

        result.elapsed_ms = round((time.monotonic() - started) * 1000, 1)

        if result.ok:
            logger.info(
                "fetch_completed",
                source=config.name,
                status_code=result.status_code,
                bytes=len(result.text),
                empty=result.is_empty,
                elapsed_ms=result.elapsed_ms,
            )
        else:
            logger.warning(
                "fetch_failed",
                source=config.name,
                outcome=result.outcome.value,
                status_code=result.status_code,
                error=result.error,
                elapsed_ms=result.elapsed_ms,
            )
        return result

    def _send(
        self,
        session: requests.Session,
        config: SourceEndpointConfig,
        url: str,
        body: Optional[dict],
    ) -> FetchResult:
        response = session.request(
            config.method,
            url,
            headers=self.build_headers(config),
            json=body,
            timeout=config.timeout,
            stream=True,
        )
        try:
            content_type = response.headers.get("Content-Type")

            if not 200 <= response.status_code < 300:
                return FetchResult(
                    source=config.name,
                    url=url,
                    outcome=FetchOutcome.HTTP_ERROR,
                    status_code=response.status_code,
                    content_type=content_type,
                    error=f"HTTP {response.status_code}",
                )

            declared = response.headers.get("Content-Length")
            if declared and declared.isdigit() and int(declared) > self.max_response_bytes:
                return self._too_large(config, url, response.status_code, int(declared))

            buffer = bytearray()
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                buffer.extend(chunk)
                if len(buffer) > self.max_response_bytes:
                    return self._too_large(config, url, response.status_code, len(buffer))

            text = decode_body(bytes(buffer), content_type)
            return FetchResult(
                source=config.name,
                url=url,
                outcome=FetchOutcome.SUCCESS,
                status_code=response.status_code,
                text=text,
                content_type=content_type,
            )
        finally:
            response.close()

    def _too_large(self, config: SourceEndpointConfig, url: str, status_code: int, size: int) -> FetchResult:
        return FetchResult(
            source=config.name,
            url=url,
            outcome=FetchOutcome.RESPONSE_TOO_LARGE,
            status_code=status_code,
            error=f"response exceeded {self.max_response_bytes} bytes (read {size})",
        )

    def _failure(
        self,
        config: SourceEndpointConfig,
        url: str,
        outcome: FetchOutcome,
        exc: Exception,
    ) -> FetchResult:
        return FetchResult(
            source=config.name,
            url=url,
            outcome=outcome,
            error=f"{type(exc).__name__}: {exc}",
        )
