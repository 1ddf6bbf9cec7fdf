"""
Events — Наблюдаемые события marketplace

Одно событие на каждый успешный state-changing вызов. События с
contract_name сериализуются через to_contract() и валидируются против
JSON Schema из src/core/contracts/schema/.

Суммы и asset_id в контракте — десятичные строки: они выходят за
safe-integer диапазон JSON.
"""

from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, Field


class MarketplaceEvent(BaseModel):
    """Базовый класс событий."""

    # Имя JSON Schema контракта (None — контракта нет)
    contract_name: ClassVar[Optional[str]] = None

    # Поля, которые в контракте сериализуются строкой
    decimal_fields: ClassVar[tuple[str, ...]] = ()

    model_config = {"frozen": True}

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_contract(self) -> Dict[str, Any]:
        """
        Сериализация события в форму JSON контракта.

        Returns:
            dict с полем "event" и полями события
        """
        payload: Dict[str, Any] = {"event": self.name}
        for field_name, value in self.model_dump().items():
            if field_name in self.decimal_fields:
                value = str(value)
            payload[field_name] = value
        return payload


# =============================================================================
# ORDER LIFECYCLE
# =============================================================================


class OrderCreated(MarketplaceEvent):
    contract_name: ClassVar[Optional[str]] = "order_created"
    decimal_fields: ClassVar[tuple[str, ...]] = ("asset_id", "price")

    order_id: str = Field(..., min_length=1)
    asset_id: int = Field(..., ge=0)
    seller: str = Field(..., min_length=1)
    asset_contract: str = Field(..., min_length=1)
    price: int = Field(..., ge=0)
    expires_at: int = Field(..., gt=0)


class OrderCancelled(MarketplaceEvent):
    contract_name: ClassVar[Optional[str]] = "order_cancelled"
    decimal_fields: ClassVar[tuple[str, ...]] = ("asset_id",)

    order_id: str = Field(..., min_length=1)
    asset_id: int = Field(..., ge=0)
    seller: str = Field(..., min_length=1)
    asset_contract: str = Field(..., min_length=1)


class OrderSuccessful(MarketplaceEvent):
    contract_name: ClassVar[Optional[str]] = "order_successful"
    decimal_fields: ClassVar[tuple[str, ...]] = ("asset_id", "price")

    order_id: str = Field(..., min_length=1)
    asset_id: int = Field(..., ge=0)
    seller: str = Field(..., min_length=1)
    asset_contract: str = Field(..., min_length=1)
    price: int = Field(..., ge=0)
    buyer: str = Field(..., min_length=1)


# =============================================================================
# ADMINISTRATIVE
# =============================================================================


class ChangedPublicationFee(MarketplaceEvent):
    contract_name: ClassVar[Optional[str]] = "changed_publication_fee"
    decimal_fields: ClassVar[tuple[str, ...]] = ("publication_fee",)

    publication_fee: int = Field(..., ge=0)


class ChangedOwnerCut(MarketplaceEvent):
    contract_name: ClassVar[Optional[str]] = "changed_owner_cut"

    owner_cut_percent: int = Field(..., ge=0, lt=100)


class Pause(MarketplaceEvent):
    pass


class Unpause(MarketplaceEvent):
    pass


class OwnershipTransferred(MarketplaceEvent):
    previous_owner: Optional[str] = None
    new_owner: str = Field(..., min_length=1)
