"""
Extractors Package

One extractor per scraped source, each exposing ``parse(html) -> ExtractedRecord``.
"""

from .assessor import AssessorExtractor
from .base import BaseExtractor
from .municipal import MunicipalTaxExtractor
from .trustee import TrusteeExtractor

__all__ = [
    "BaseExtractor",
    "TrusteeExtractor",
    "AssessorExtractor",
    "MunicipalTaxExtractor",
]
