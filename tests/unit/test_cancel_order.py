"""Тесты cancel_order.

Coverage:
- Отмена seller и владельцем marketplace
- OrderCancelled событие, средства не двигаются
- Отказы: чужой caller, пауза, нет ордера
"""

import pytest

from src.core.domain import OrderCancelled
from src.core.errors import OrderNotFound, SystemPaused, Unauthorized


@pytest.fixture
def listed(trading_world):
    """trading_world с ордером на parcel (5, 5)."""
    w = trading_world
    w.asset_id = w.parcel(5, 5)
    w.order = w.market.create_order(w.land.address, w.asset_id, w.item_price, w.end_time(), w.seller)
    return w


def test_seller_can_cancel(listed):
    w = listed
    balances_before = {p: w.token.balance_of(p) for p in (w.owner, w.seller, w.buyer)}

    cancelled = w.market.cancel_order(w.land.address, w.asset_id, caller=w.seller)

    assert cancelled.id == w.order.id
    assert w.market.order_by_asset(w.land.address, w.asset_id) is None
    assert {p: w.token.balance_of(p) for p in balances_before} == balances_before

    events = w.event_log.of_type(OrderCancelled)
    assert len(events) == 1
    assert events[0].order_id == w.order.id
    assert events[0].asset_id == w.asset_id
    assert events[0].asset_contract == w.land.address
    assert events[0].seller == w.seller


def test_marketplace_owner_can_cancel(listed):
    w = listed
    w.market.cancel_order(w.land.address, w.asset_id, caller=w.owner)
    assert w.market.order_by_asset(w.land.address, w.asset_id) is None


def test_new_owner_after_ownership_transfer_can_cancel(listed):
    w = listed
    w.admin.transfer_ownership(w.owner, "new-owner")

    with pytest.raises(Unauthorized):
        w.market.cancel_order(w.land.address, w.asset_id, caller=w.owner)
    w.market.cancel_order(w.land.address, w.asset_id, caller="new-owner")


def test_other_caller_rejected(listed):
    w = listed
    with pytest.raises(Unauthorized):
        w.market.cancel_order(w.land.address, w.asset_id, caller=w.other)
    assert w.market.order_by_asset(w.land.address, w.asset_id) == w.order


def test_paused(listed):
    w = listed
    w.admin.pause(w.owner)
    with pytest.raises(SystemPaused):
        w.market.cancel_order(w.land.address, w.asset_id, caller=w.other)
    with pytest.raises(SystemPaused):
        w.market.cancel_order(w.land.address, w.asset_id, caller=w.seller)
    assert w.market.order_by_asset(w.land.address, w.asset_id) == w.order


def test_no_order(trading_world):
    w = trading_world
    with pytest.raises(OrderNotFound):
        w.market.cancel_order(w.land.address, w.parcel(0, 1), caller=w.seller)


def test_cancel_twice(listed):
    w = listed
    w.market.cancel_order(w.land.address, w.asset_id, caller=w.seller)
    with pytest.raises(OrderNotFound):
        w.market.cancel_order(w.land.address, w.asset_id, caller=w.seller)


def test_execute_after_cancel_fails_with_not_found(listed):
    w = listed
    w.market.cancel_order(w.land.address, w.asset_id, caller=w.seller)
    with pytest.raises(OrderNotFound):
        w.market.execute_order(w.land.address, w.asset_id, w.item_price, caller=w.buyer)
    assert w.land.owner_of(w.asset_id) == w.seller


def test_cancel_negative_asset_id(trading_world):
    w = trading_world
    with pytest.raises(OrderNotFound):
        w.market.cancel_order(w.land.address, -7, caller=w.seller)
