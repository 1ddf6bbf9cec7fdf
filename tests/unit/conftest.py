"""
Общие fixtures marketplace тестов.

world         — реестры, токен, admin и engine; parcels (0,1), (0,2), (5,5), (5,6)
                принадлежат seller, approvals и балансов нет.
trading_world — world + approval-for-all marketplace на оба реестра для seller и buyer,
                балансы 10 токенов у seller и buyer, неограниченный allowance.
"""

from dataclasses import dataclass

import pytest

from src.core.domain.units import to_base_units
from src.marketplace import AdminControls, EventLog, ManualClock, Marketplace
from src.registries import EstateRegistry, InMemoryPaymentToken, LandRegistry

UNLIMITED_ALLOWANCE = 10**30


@dataclass
class World:
    clock: ManualClock
    token: InMemoryPaymentToken
    land: LandRegistry
    estate: EstateRegistry
    admin: AdminControls
    event_log: EventLog
    market: Marketplace

    owner: str = "owner"
    seller: str = "seller"
    buyer: str = "buyer"
    other: str = "other"

    item_price: int = to_base_units("1.0")

    def end_time(self, minutes_ahead: int = 15) -> int:
        return self.clock.now() + minutes_ahead * 60

    def parcel(self, x: int, y: int) -> int:
        return self.land.encode_token_id(x, y)

    def fund(self, holder: str, tokens: str = "10") -> None:
        self.token.set_balance(holder, to_base_units(tokens))
        self.token.approve(holder, self.market.address, UNLIMITED_ALLOWANCE)


@pytest.fixture
def world():
    """Marketplace с parcels у seller, без approvals и балансов."""
    clock = ManualClock(start=1_700_000_000)
    token = InMemoryPaymentToken(address="mana-token")
    land = LandRegistry(address="land-registry")
    estate = EstateRegistry(land, address="estate-registry")
    land.set_estate_registry(estate)

    event_log = EventLog()
    admin = AdminControls(event_log=event_log)
    admin.initialize("owner")

    market = Marketplace(
        address="marketplace",
        accepted_token=token,
        admin=admin,
        asset_providers=[land, estate],
        clock=clock,
    )

    for x, y in [(0, 1), (0, 2), (5, 5), (5, 6)]:
        land.assign_new_parcel(x, y, "seller")

    return World(
        clock=clock,
        token=token,
        land=land,
        estate=estate,
        admin=admin,
        event_log=event_log,
        market=market,
    )


@pytest.fixture
def trading_world(world):
    """World с approvals и балансами для seller и buyer."""
    for registry in (world.land, world.estate):
        registry.set_approval_for_all(world.seller, world.market.address, True)
        registry.set_approval_for_all(world.buyer, world.market.address, True)
    world.fund(world.seller)
    world.fund(world.buyer)
    return world
