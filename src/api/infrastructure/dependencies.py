"""Shared infrastructure dependencies.

Provides the gateway clients as application-scoped singletons.
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from infrastructure.settings import (
    get_google_settings,
    get_slack_settings,
    get_woocommerce_settings,
)
from shared_kernel.integrations.google import DirectoryService, GoogleDirectoryClient
from shared_kernel.integrations.slack import ChatPlatform, SlackClient
from shared_kernel.integrations.woocommerce import CommerceSource, WooCommerceClient


@lru_cache
def get_chat_platform() -> ChatPlatform:
    """Get the Slack client (singleton).

    The underlying httpx.AsyncClient pools connections and is shared by
    request handlers and the reactor worker.
    """
    settings = get_slack_settings()
    return SlackClient(
        bot_token=settings.bot_token.get_secret_value(),
        admin_token=settings.admin_token.get_secret_value() or None,
        team_id=settings.team_id or None,
        base_url=settings.base_url,
    )


@lru_cache
def get_directory_service() -> DirectoryService:
    """Get the Google directory client (singleton)."""
    settings = get_google_settings()
    return GoogleDirectoryClient(
        access_token=settings.access_token.get_secret_value(),
        base_url=settings.base_url,
    )


@lru_cache
def get_commerce_source() -> CommerceSource:
    """Get the WooCommerce client (singleton)."""
    settings = get_woocommerce_settings()
    return WooCommerceClient(
        base_url=settings.base_url,
        consumer_key=settings.consumer_key.get_secret_value(),
        consumer_secret=settings.consumer_secret.get_secret_value(),
        per_page=settings.per_page,
    )
