"""Temporal client factory.

Connects to a local Temporal server, or to Temporal Cloud when an API key
is configured.
"""

import ssl
from typing import Optional

from temporalio.client import Client

from core.config import Settings, get_settings


async def get_temporal_client(settings: Optional[Settings] = None) -> Client:
    """Create and return a Temporal client.

    Reads configuration from settings (environment):
    - TEMPORAL_ENDPOINT: frontend host:port (default "localhost:7233")
    - TEMPORAL_NAMESPACE: Namespace (default "default")
    - TEMPORAL_API_KEY: API key for Temporal Cloud; enables TLS

    Returns:
        Connected Temporal client
    """
    settings = settings or get_settings()

    if not settings.temporal_api_key:
        return await Client.connect(
            target_host=settings.temporal_endpoint,
            namespace=settings.temporal_namespace,
        )

    # Temporal Cloud: system certificates plus API key
    tls_config = ssl.create_default_context()

    return await Client.connect(
        target_host=settings.temporal_endpoint,
        namespace=settings.temporal_namespace,
        tls=tls_config,
        api_key=settings.temporal_api_key,
    )
