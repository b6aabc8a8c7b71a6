"""
Upstream source definitions.

Built once from settings at process start; the resulting configs are frozen.
"""
from typing import Dict, Optional

from config.settings import Settings, settings as default_settings
from src.parcel_proxy.models.records import SourceEndpointConfig
from src.parcel_proxy.utils.parcel_id import ParcelIdStyle

REGISTER = "register"
TRUSTEE = "trustee"
ASSESSOR = "assessor"
MUNICIPAL = "municipal"


def build_source_configs(config: Optional[Settings] = None) -> Dict[str, SourceEndpointConfig]:
    """
    Build the endpoint configuration for every upstream source.

    Args:
        config: Settings to read from (defaults to the process settings)

    Returns:
        Mapping of source name to its frozen SourceEndpointConfig
    """
    config = config or default_settings
    timeout = config.fetch_timeout_seconds

    return {
        REGISTER: SourceEndpointConfig(
            name=REGISTER,
            url_template=config.register_url,
            method="POST",
            parcel_param="parcelid",
            expected_content_type="application/json",
            timeout=timeout,
        ),
        TRUSTEE: SourceEndpointConfig(
            name=TRUSTEE,
            url_template=config.trustee_url,
            timeout=timeout,
            legacy_tls=config.trustee_legacy_tls,
            id_style=ParcelIdStyle.TRUSTEE,
        ),
        ASSESSOR: SourceEndpointConfig(
            name=ASSESSOR,
            url_template=config.assessor_url,
            timeout=timeout,
            legacy_tls=config.assessor_legacy_tls,
        ),
        MUNICIPAL: SourceEndpointConfig(
            name=MUNICIPAL,
            url_template=config.municipal_tax_url,
            timeout=timeout,
            legacy_tls=config.municipal_legacy_tls,
        ),
    }
