"""boto3 client construction for Amazon DataZone."""

import logging
from typing import Any

import boto3

from .config import DataZoneConfig

logger = logging.getLogger(__name__)


def build_datazone_client(config: DataZoneConfig, session: Any = None) -> Any:
    """Create a DataZone client for the configured region and profile.

    Args:
        config: DataZone configuration
        session: Optional pre-built boto3 session

    Returns:
        boto3 DataZone client
    """
    if session is None:
        session_kwargs = {}
        if config.aws_profile:
            session_kwargs["profile_name"] = config.aws_profile
        session = boto3.session.Session(**session_kwargs)

    client_kwargs = {}
    if config.aws_region:
        client_kwargs["region_name"] = config.aws_region
    if config.endpoint_url:
        client_kwargs["endpoint_url"] = config.endpoint_url

    client = session.client("datazone", **client_kwargs)
    logger.info(
        f"Created DataZone client (region={client.meta.region_name})",
        extra={"event_type": "client_created"},
    )
    return client
