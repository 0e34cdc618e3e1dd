"""Exchange client initialization from settings."""

from __future__ import annotations

import logging
from typing import Dict

from ..settings import Settings
from .base import BaseExchangeClient
from .factory import create_exchange_client

logger = logging.getLogger(__name__)


def create_exchange_clients_from_settings(settings: Settings) -> Dict[str, BaseExchangeClient]:
    """Create exchange clients from settings configuration."""
    clients: Dict[str, BaseExchangeClient] = {}

    for exchange_name, exchange_config in settings.exchanges.items():
        if not exchange_config.enabled:
            logger.debug("Exchange %s is disabled, skipping", exchange_name)
            continue

        api_key = api_secret = None
        if exchange_config.credentials:
            api_key = exchange_config.credentials.api_key.get_secret_value()
            api_secret = exchange_config.credentials.api_secret.get_secret_value()
        else:
            logger.info("Exchange %s has no credentials configured, public endpoints only", exchange_name)

        clients[exchange_name] = create_exchange_client(
            exchange_name,
            api_key,
            api_secret,
            sandbox=exchange_config.sandbox,
            base_url=exchange_config.base_url,
            blocking=settings.http.blocking,
            timeout=settings.http.timeout,
            proxy=settings.proxy.as_dict(),
        )
        logger.info("Initialized exchange client for %s", exchange_name)

    return clients
