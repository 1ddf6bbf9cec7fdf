"""
Tests for JSON Schema Event Contract Validators

- Валидность самих схем
- Валидация событий, созданных engine
- Детекция нарушений required полей, типов и паттернов
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    ChangedOwnerCutValidator,
    ChangedPublicationFeeValidator,
    OrderCancelledValidator,
    OrderCreatedValidator,
    OrderSuccessfulValidator,
    SchemaLoader,
    validate_event,
    validate_order_created,
    validate_order_successful,
)
from src.core.domain import ChangedOwnerCut, OrderCreated, OrderSuccessful, Pause

ORDER_ID = "0x" + "0f" * 32


@pytest.fixture
def valid_order_created():
    return {
        "event": "OrderCreated",
        "order_id": ORDER_ID,
        "asset_id": str(2**200 + 5),
        "seller": "seller",
        "asset_contract": "land-registry",
        "price": str(10**18),
        "expires_at": 1_700_000_900,
    }


class TestSchemas:
    @pytest.mark.parametrize(
        "name",
        ["order_created", "order_cancelled", "order_successful",
         "changed_publication_fee", "changed_owner_cut"],
    )
    def test_schema_loads(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"].endswith("2020-12/schema")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("order_matched")

    def test_validators_construct(self):
        for cls in (
            OrderCreatedValidator,
            OrderCancelledValidator,
            OrderSuccessfulValidator,
            ChangedPublicationFeeValidator,
            ChangedOwnerCutValidator,
        ):
            assert cls().schema


class TestOrderCreatedContract:
    def test_valid(self, valid_order_created):
        validate_order_created(valid_order_created)

    @pytest.mark.parametrize("field", ["order_id", "asset_id", "seller", "price", "expires_at"])
    def test_missing_required(self, valid_order_created, field):
        del valid_order_created[field]
        with pytest.raises(ValidationError):
            validate_order_created(valid_order_created)

    def test_price_must_be_decimal_string(self, valid_order_created):
        valid_order_created["price"] = 10**18
        assert not OrderCreatedValidator().is_valid(valid_order_created)

    def test_leading_zero_rejected(self, valid_order_created):
        valid_order_created["price"] = "01"
        errors = list(OrderCreatedValidator().iter_errors(valid_order_created))
        assert len(errors) == 1

    def test_additional_properties_rejected(self, valid_order_created):
        valid_order_created["buyer"] = "buyer"
        with pytest.raises(ValidationError):
            validate_order_created(valid_order_created)


class TestEventModelsAgainstContracts:
    def test_order_created_model(self):
        event = OrderCreated(
            order_id=ORDER_ID, asset_id=2**130, seller="seller",
            asset_contract="land-registry", price=10**18, expires_at=1_700_000_900,
        )
        payload = event.to_contract()
        assert payload["event"] == "OrderCreated"
        assert payload["asset_id"] == str(2**130)
        assert payload["price"] == str(10**18)
        validate_event(event)

    def test_order_successful_model(self):
        event = OrderSuccessful(
            order_id=ORDER_ID, asset_id=1, seller="seller",
            asset_contract="estate-registry", price=0, buyer="buyer",
        )
        validate_order_successful(event.to_contract())

    def test_malformed_order_id_rejected(self):
        event = OrderSuccessful(
            order_id="not-an-id", asset_id=1, seller="seller",
            asset_contract="estate-registry", price=0, buyer="buyer",
        )
        with pytest.raises(ValidationError):
            validate_event(event)

    def test_event_without_contract_skipped(self):
        validate_event(Pause())

    def test_owner_cut_contract(self):
        validate_event(ChangedOwnerCut(owner_cut_percent=99))


def test_engine_events_satisfy_contracts(trading_world):
    """Все события полного цикла проходят свои контракты."""
    w = trading_world
    w.admin.set_owner_cut(w.owner, 5)
    asset_id = w.parcel(5, 5)
    w.market.create_order(w.land.address, asset_id, w.item_price, w.end_time(), w.seller)
    w.market.execute_order(w.land.address, asset_id, w.item_price, w.buyer)
    other = w.parcel(0, 1)
    w.market.create_order(w.land.address, other, w.item_price, w.end_time(), w.seller)
    w.market.cancel_order(w.land.address, other, w.seller)

    names = [e.name for e in w.event_log.events]
    assert names[-4:] == ["OrderCreated", "OrderSuccessful", "OrderCreated", "OrderCancelled"]
    for event in w.event_log.events:
        validate_event(event)
