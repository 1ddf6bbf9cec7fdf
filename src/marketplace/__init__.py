"""Marketplace — Order Store, административные controls и Order Lifecycle Engine.

- Не больше одного активного ордера на (asset_contract, asset_id)
- Атомарный обмен актива на payment token
- Опциональная проверка fingerprint для composite-активов (estates)
"""

from .admin import AdminControls, MarketplaceConfig
from .atomic import AtomicScope
from .clock import ManualClock, SystemClock
from .engine import Marketplace
from .event_log import EventLog
from .settlement import Settlement, compute_settlement
from .store import OrderStore

__all__ = [
    "Marketplace",
    "AdminControls",
    "MarketplaceConfig",
    "OrderStore",
    "AtomicScope",
    "EventLog",
    "Settlement",
    "compute_settlement",
    "SystemClock",
    "ManualClock",
]
