"""
Responder

Maps pipeline outcomes to HTTP responses. ProxyError subclasses raised
anywhere in a lookup end here and become structured JSON bodies with a
status per failure class.
"""
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from src.parcel_proxy.errors import ProxyError
from src.parcel_proxy.utils.logger import get_logger

logger = get_logger(__name__)


def html_response(text: str) -> HTMLResponse:
    """Re-serve upstream markup for the browser's own parser (empty body allowed)."""
    return HTMLResponse(content=text, status_code=200)


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """
    Turn a ProxyError into its structured response.

    Args:
        request: Incoming request
        exc: Error raised by the lookup

    Returns:
        JSON error body with the status for the error's class
    """
    logger.warning(
        "lookup_failed",
        path=request.url.path,
        error=exc.error_code,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
        source=exc.source,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProxyError, proxy_error_handler)
