"""Тесты AdminControls: инициализация, пауза, fee/cut, ownership.

Coverage:
- Однократная инициализация
- Owner-only операции
- События ChangedPublicationFee / ChangedOwnerCut / Pause / Unpause
- Пауза блокирует все state-changing операции engine и снимается без следов
"""

import pytest

from src.core.domain import (
    ChangedOwnerCut,
    ChangedPublicationFee,
    OwnershipTransferred,
    Pause,
    Unpause,
)
from src.core.errors import AlreadyInitialized, SystemPaused, Unauthorized
from src.marketplace import AdminControls, Marketplace, MarketplaceConfig


class TestInitialization:
    def test_initialize_sets_owner(self):
        admin = AdminControls()
        admin.initialize("owner")
        assert admin.admin_identity() == "owner"
        assert admin.is_initialized
        assert admin.event_log.of_type(OwnershipTransferred)[0].new_owner == "owner"

    def test_initialize_twice_rejected(self):
        admin = AdminControls()
        admin.initialize("owner")
        with pytest.raises(AlreadyInitialized):
            admin.initialize("owner")
        with pytest.raises(AlreadyInitialized):
            admin.initialize("intruder")
        assert admin.admin_identity() == "owner"

    def test_admin_calls_before_initialize_rejected(self):
        admin = AdminControls()
        with pytest.raises(Unauthorized):
            admin.pause("owner")

    def test_engine_requires_initialized_admin(self, world):
        with pytest.raises(ValueError):
            Marketplace("market-2", world.token, AdminControls(), [world.land])

    def test_engine_rejects_non_provider(self, world):
        with pytest.raises(TypeError):
            Marketplace("market-2", world.token, world.admin, [object()])


class TestConfig:
    def test_defaults(self):
        admin = AdminControls()
        assert admin.publication_fee() == 0
        assert admin.owner_cut_percent() == 0
        assert not admin.is_paused()

    def test_config_values_used(self):
        admin = AdminControls(MarketplaceConfig(publication_fee=5, owner_cut_percent=3))
        assert admin.publication_fee() == 5
        assert admin.owner_cut_percent() == 3

    @pytest.mark.parametrize("kwargs", [{"publication_fee": -1}, {"owner_cut_percent": 100}])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            MarketplaceConfig(**kwargs)


class TestOwnerOnlyOperations:
    def test_set_publication_fee(self, world):
        world.admin.set_publication_fee(world.owner, 42)
        assert world.admin.publication_fee() == 42
        assert world.event_log.of_type(ChangedPublicationFee)[-1].publication_fee == 42

    def test_set_owner_cut(self, world):
        world.admin.set_owner_cut(world.owner, 10)
        assert world.admin.owner_cut_percent() == 10
        assert world.event_log.of_type(ChangedOwnerCut)[-1].owner_cut_percent == 10

    def test_owner_cut_must_be_below_100(self, world):
        with pytest.raises(ValueError):
            world.admin.set_owner_cut(world.owner, 100)
        assert world.admin.owner_cut_percent() == 0

    @pytest.mark.parametrize(
        "operation,args",
        [
            ("pause", ()),
            ("unpause", ()),
            ("set_publication_fee", (1,)),
            ("set_owner_cut", (1,)),
            ("transfer_ownership", ("other",)),
        ],
    )
    def test_non_owner_rejected(self, world, operation, args):
        with pytest.raises(Unauthorized):
            getattr(world.admin, operation)(world.seller, *args)

    def test_transfer_ownership(self, world):
        world.admin.transfer_ownership(world.owner, "new-owner")
        assert world.admin.admin_identity() == "new-owner"
        with pytest.raises(Unauthorized):
            world.admin.pause(world.owner)
        world.admin.pause("new-owner")
        assert world.admin.is_paused()


class TestPause:
    def test_pause_and_unpause_events(self, world):
        world.admin.pause(world.owner)
        world.admin.pause(world.owner)
        world.admin.unpause(world.owner)
        assert len(world.event_log.of_type(Pause)) == 1
        assert len(world.event_log.of_type(Unpause)) == 1
        assert not world.admin.is_paused()

    def test_pause_blocks_every_operation_then_resume(self, trading_world):
        w = trading_world
        parcel = w.parcel(5, 5)
        w.land.create_estate(w.seller, [(0, 1), (0, 2)], w.seller)
        estate_id = w.estate.get_land_estate_id(w.parcel(0, 1))
        fingerprint = w.estate.fingerprint_of(estate_id)
        w.market.create_order(w.land.address, parcel, w.item_price, w.end_time(), w.seller)
        w.market.create_order(w.estate.address, estate_id, w.item_price, w.end_time(), w.seller)
        store_before = w.market.store.checkpoint()

        w.admin.pause(w.owner)
        with pytest.raises(SystemPaused):
            w.market.create_order(w.land.address, w.parcel(5, 6), w.item_price, w.end_time(), w.seller)
        with pytest.raises(SystemPaused):
            w.market.cancel_order(w.land.address, parcel, w.seller)
        with pytest.raises(SystemPaused):
            w.market.execute_order(w.land.address, parcel, w.item_price, w.buyer)
        with pytest.raises(SystemPaused):
            w.market.safe_execute_order(w.estate.address, estate_id, w.item_price, fingerprint, w.buyer)
        assert w.market.store.checkpoint() == store_before

        w.admin.unpause(w.owner)
        w.market.execute_order(w.land.address, parcel, w.item_price, w.buyer)
        w.market.safe_execute_order(w.estate.address, estate_id, w.item_price, fingerprint, w.buyer)
        assert w.land.owner_of(parcel) == w.buyer
        assert w.estate.owner_of(estate_id) == w.buyer
        assert len(w.market.store) == 0
