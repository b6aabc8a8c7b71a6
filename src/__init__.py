"""
Parcel Records Proxy - Core Package

Server-side proxies that fetch county property records (Register of Deeds,
Trustee, Assessor and City of Memphis tax pages) for the parcel viewer.
"""

__version__ = "0.2.0"
