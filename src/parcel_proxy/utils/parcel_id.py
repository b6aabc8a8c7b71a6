"""
Parcel identifier helpers.

Shelby County parcel ids come out of the GIS layers as space-delimited
segments (e.g. ``"063002  00025"``, ``"G0219A D00101"``). Each upstream site
wants its own spelling of that id.
"""
import re
from enum import Enum
from typing import Optional
from urllib.parse import quote

from src.parcel_proxy.errors import InputError

_WHITESPACE_RE = re.compile(r"\s+")


class ParcelIdStyle(str, Enum):
    AS_IS = "as_is"
    TRUSTEE = "trustee"


def clean_parcel_id(parcel_id: Optional[str]) -> str:
    """Return the trimmed id, or '' for None/blank input."""
    if parcel_id is None:
        return ""
    return str(parcel_id).strip()


def format_trustee_parcel_id(parcel_id: Optional[str]) -> str:
    """
    Convert a GIS parcel id to the Trustee's contiguous form.

    The first two segments are joined with ``"0"`` when the second starts
    with a letter, otherwise with ``"00"``; later segments are appended
    directly and a trailing ``"0"`` is added.

    Examples:
        >>> format_trustee_parcel_id("063002  00025")
        '06300200000250'
        >>> format_trustee_parcel_id("G0219A D00101")
        'G0219A0D001010'

    Returns:
        Formatted id, or '' for blank input
    """
    pid = clean_parcel_id(parcel_id).upper()
    if not pid:
        return ""

    parts = _WHITESPACE_RE.split(pid)
    if len(parts) >= 2:
        first, second, rest = parts[0], parts[1], "".join(parts[2:])
        separator = "0" if second[:1].isalpha() else "00"
        pid = f"{first}{separator}{second}{rest}"

    return pid + "0"


def format_parcel_id(parcel_id: str, style: ParcelIdStyle) -> str:
    """Apply the source-specific spelling for ``style``."""
    if style == ParcelIdStyle.TRUSTEE:
        return format_trustee_parcel_id(parcel_id)
    return clean_parcel_id(parcel_id)


def encode_parcel_id(parcel_id: str) -> str:
    """Percent-encode an id for safe insertion into a URL (spaces, slashes and all)."""
    return quote(parcel_id, safe="")


def require_parcel_id(parcel_id: Optional[str]) -> str:
    """
    Return the trimmed id or raise InputError when it is missing or blank.
    """
    cleaned = clean_parcel_id(parcel_id)
    if not cleaned:
        raise InputError()
    return cleaned
