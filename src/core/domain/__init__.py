"""
Domain models and value objects.

Contains fundamental marketplace entities: Order, OrderKey, lifecycle and
administrative events, and token-unit / fee conversions.
"""

from src.core.domain.events import (
    ChangedOwnerCut,
    ChangedPublicationFee,
    MarketplaceEvent,
    OrderCancelled,
    OrderCreated,
    OrderSuccessful,
    OwnershipTransferred,
    Pause,
    Unpause,
)
from src.core.domain.order import Order, OrderKey
from src.core.domain.units import (
    BASE_UNITS_PER_TOKEN,
    OWNER_CUT_PERCENT_MAX,
    TOKEN_DECIMALS,
    from_base_units,
    owner_cut_amount,
    seller_proceeds,
    to_base_units,
    validate_owner_cut_percent,
    validate_price,
    validate_publication_fee,
)

__all__ = [
    # Units module
    "TOKEN_DECIMALS",
    "BASE_UNITS_PER_TOKEN",
    "OWNER_CUT_PERCENT_MAX",
    "to_base_units",
    "from_base_units",
    "owner_cut_amount",
    "seller_proceeds",
    "validate_price",
    "validate_publication_fee",
    "validate_owner_cut_percent",
    # Order model
    "Order",
    "OrderKey",
    # Events
    "MarketplaceEvent",
    "OrderCreated",
    "OrderCancelled",
    "OrderSuccessful",
    "ChangedPublicationFee",
    "ChangedOwnerCut",
    "Pause",
    "Unpause",
    "OwnershipTransferred",
]
