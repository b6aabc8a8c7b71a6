"""
Parcel Proxy

Fetchers, extractors and API routes for the Shelby County parcel viewer.
"""
from src import __version__

__all__ = ["__version__"]
