"""
FastAPI Main Application

Parcel records proxy: relays Shelby County records lookups for the
browser-based parcel viewer.
"""
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from src import __version__
from src.parcel_proxy.api.responder import register_exception_handlers
from src.parcel_proxy.api.routers import register, report, tax
from src.parcel_proxy.api.schemas import HealthCheck
from src.parcel_proxy.utils.logger import setup_logging

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Parcel Records Proxy",
    description="Server-side relay for Register of Deeds, Trustee, Assessor and City of Memphis lookups",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Viewer origins; any localhost port is allowed for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?" if settings.cors_allow_localhost else None,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(register.router)
app.include_router(tax.router)
app.include_router(report.router)


@app.get("/health", response_model=HealthCheck, tags=["health"])
def health_check():
    """
    Health check endpoint.

    Does not contact any upstream; the proxy is healthy when it can answer.
    """
    return HealthCheck(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint.

    Returns:
        API information
    """
    return {
        "name": "Parcel Records Proxy",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "endpoints": [
            "POST /api/register-proxy",
            "POST /api/register-documents",
            "GET /api/trustee-tax-proxy",
            "GET /api/assessor-proxy",
            "GET /api/memphis-tax-proxy",
            "GET /api/trustee-tax",
            "GET /api/assessor",
            "GET /api/memphis-tax",
            "GET /api/parcel-report",
        ],
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.parcel_proxy.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
