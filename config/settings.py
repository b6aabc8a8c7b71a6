"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Upstream URLs are templates; ``{parcel_id}`` is replaced with the
    percent-encoded parcel identifier at request time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Register of Deeds (JSON API, POST)
    register_url: str = "https://gis.register.shelby.tn.us/completedetails"
    register_deeds_search_url: str = "https://search.register.shelby.tn.us/search/?start=0&q={parcel_id}&f.tab=Properties"
    register_document_url: str = "https://search.register.shelby.tn.us/search/?instnum={doc_number}"
    register_fallback_enabled: bool = True

    # Scraped HTML sources
    trustee_url: str = "https://apps.shelbycountytrustee.com/TaxQuery/Inquiry.aspx?ParcelID={parcel_id}"
    assessor_url: str = "https://www.assessormelvinburgess.com/propertyDetails?IR=true&parcelid={parcel_id}"
    municipal_tax_url: str = "https://epayments.memphistn.gov/Property/Detail.aspx?ParcelNo={parcel_id}"

    # Legacy TLS renegotiation, per source
    trustee_legacy_tls: bool = True
    assessor_legacy_tls: bool = False
    municipal_legacy_tls: bool = False

    # Outbound request settings
    fetch_timeout_seconds: float = 20.0
    max_response_bytes: int = 5 * 1024 * 1024
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    )
    accept_html: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    accept_language: str = "en-US,en;q=0.9"

    # API settings
    cors_allowed_origins: List[str] = ["https://records.suify.com", "http://localhost:901"]
    cors_allow_localhost: bool = True
    host: str = "0.0.0.0"
    port: int = 901

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False


# Singleton instance
settings = Settings()
