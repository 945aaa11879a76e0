"""WooCommerce REST API integration."""

from shared_kernel.integrations.woocommerce.client import WooCommerceClient
from shared_kernel.integrations.woocommerce.meta import (
    CAPABILITIES_META_KEY,
    CARD_NUMBER_META_KEY,
    SLACK_ID_META_KEY,
    capabilities,
    meta_value,
)
from shared_kernel.integrations.woocommerce.protocols import CommerceSource

__all__ = [
    "CAPABILITIES_META_KEY",
    "CARD_NUMBER_META_KEY",
    "CommerceSource",
    "SLACK_ID_META_KEY",
    "WooCommerceClient",
    "capabilities",
    "meta_value",
]
