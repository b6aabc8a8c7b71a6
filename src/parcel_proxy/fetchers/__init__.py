"""
Fetchers Package

Outbound HTTP access to the county records sites.
"""

from .http_fetcher import HttpFetcher, LegacyTLSAdapter
from .sources import ASSESSOR, MUNICIPAL, REGISTER, TRUSTEE, build_source_configs

__all__ = [
    "HttpFetcher",
    "LegacyTLSAdapter",
    "build_source_configs",
    "REGISTER",
    "TRUSTEE",
    "ASSESSOR",
    "MUNICIPAL",
]
